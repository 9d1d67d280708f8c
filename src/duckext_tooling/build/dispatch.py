"""Route one target to the native builder, the container builder, or an Unsupported failure."""

from __future__ import annotations

import logging
from collections.abc import Callable

from duckext_tooling.build.container import build_container
from duckext_tooling.build.context import BuildContext
from duckext_tooling.build.native import build_native
from duckext_tooling.build.result import (
    BuildError,
    BuildFailure,
    BuildResult,
    MissingDependency,
    Unsupported,
)
from duckext_tooling.platforms.host import host_tag
from duckext_tooling.platforms.identifier import PlatformIdentifier
from duckext_tooling.platforms.registry import BuildStrategy, capability_of

log = logging.getLogger(__name__)

NativeBuilder = Callable[
    [PlatformIdentifier, PlatformIdentifier | None, BuildContext], BuildResult
]
ContainerBuilder = Callable[[PlatformIdentifier, BuildContext], BuildResult]


def dispatch(
    target: PlatformIdentifier,
    host: PlatformIdentifier | None,
    ctx: BuildContext,
    *,
    native: NativeBuilder | None = None,
    container: ContainerBuilder | None = None,
) -> BuildResult:
    """Build target with the strategy capability_of picks. Never raises for per-target failures."""
    native = native or build_native
    container = container or build_container
    strategy = capability_of(target, host)
    log.debug("%s on %s host: %s", target.tag, host_tag(host), strategy.value)
    if strategy is BuildStrategy.UNSUPPORTED:
        msg = f"{target.tag} cannot be built on a {host_tag(host)} host"
        print(f"❌ {msg}. Skipping.", flush=True)
        return BuildResult.failure(target, strategy, Unsupported(msg))
    try:
        if strategy is BuildStrategy.NATIVE:
            return native(target, host, ctx)
        return container(target, ctx)
    except BuildError as e:
        return BuildResult.failure(target, strategy, e)
    except FileNotFoundError as e:
        return BuildResult.failure(target, strategy, MissingDependency(str(e)))
    except OSError as e:
        return BuildResult.failure(target, strategy, BuildFailure(str(e)))
    except RuntimeError as e:
        # Build-output directory already claimed.
        return BuildResult.failure(target, strategy, BuildError(str(e)))
