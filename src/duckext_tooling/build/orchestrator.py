"""Run the dispatcher over every requested target, one at a time, isolating failures per target."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from duckext_tooling.build.context import BuildContext
from duckext_tooling.build.dispatch import dispatch
from duckext_tooling.build.result import BuildError, BuildResult
from duckext_tooling.platforms.identifier import PlatformIdentifier

log = logging.getLogger(__name__)

Dispatcher = Callable[
    [PlatformIdentifier, PlatformIdentifier | None, BuildContext], BuildResult
]
SuccessHook = Callable[[BuildResult], object]


def run_all(
    targets: Iterable[PlatformIdentifier],
    host: PlatformIdentifier | None,
    ctx: BuildContext,
    *,
    dispatcher: Dispatcher | None = None,
    on_success: SuccessHook | None = None,
) -> dict[PlatformIdentifier, BuildResult]:
    """Build each target once, in order. Returns target -> BuildResult covering every target.

    on_success runs right after each successful build, before the next build clears
    the build-output directory; a BuildError from it (e.g. IOFailure when packaging)
    marks that target failed. No target is retried.
    """
    dispatcher = dispatcher or dispatch
    results: dict[PlatformIdentifier, BuildResult] = {}
    for target in targets:
        if target in results:
            log.debug("Skipping duplicate target %s", target.tag)
            continue
        result = dispatcher(target, host, ctx)
        if result.ok and on_success is not None:
            try:
                on_success(result)
            except BuildError as e:
                print(f"❌ {target.tag}: {e}", flush=True)
                result = BuildResult.failure(target, result.strategy, e)
        if result.ok:
            print(f"✅ {target.tag} built ({result.strategy.value})")
        else:
            print(f"❌ {target.tag} failed: {result.kind}: {result.diagnostic}")
        results[target] = result
        print()
    return results


def summarize(
    results: dict[PlatformIdentifier, BuildResult],
) -> tuple[list[BuildResult], list[BuildResult]]:
    """Split results into (succeeded, failed), keeping request order."""
    succeeded = [r for r in results.values() if r.ok]
    failed = [r for r in results.values() if not r.ok]
    return succeeded, failed


def print_summary(results: dict[PlatformIdentifier, BuildResult]) -> None:
    print("📋 Build summary:")
    for r in results.values():
        mark = "✅" if r.ok else "❌"
        print(f"  {mark} {r.describe()}")
    _, failed = summarize(results)
    if failed:
        print()
        print(f"⚠️  Failed platforms: {' '.join(r.target.tag for r in failed)}")
