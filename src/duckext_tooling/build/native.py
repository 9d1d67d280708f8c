"""Native build: run make directly on the host, cross-compiling within the osx family when needed."""

from __future__ import annotations

import logging

from duckext_tooling.build.command import CommandRunner, run_command
from duckext_tooling.build.context import BuildContext, cross_compile_env
from duckext_tooling.build.result import (
    BuildError,
    BuildFailure,
    BuildResult,
    MissingDependency,
)
from duckext_tooling.platforms.identifier import PlatformIdentifier
from duckext_tooling.platforms.registry import BuildStrategy

log = logging.getLogger(__name__)

BUILD_COMMAND = "make"


def _build(
    target: PlatformIdentifier,
    host: PlatformIdentifier | None,
    ctx: BuildContext,
    runner: CommandRunner,
) -> BuildResult:
    with ctx.fresh_build_dir():
        env = ctx.native_env()
        cross = cross_compile_env(target, host)
        if cross:
            print(f"🔀 Cross-compiling: {host.arch} host -> {cross['OSX_BUILD_ARCH']} target")
            env.update(cross)
        cmd = [BUILD_COMMAND, f"-j{ctx.jobs}"]
        try:
            r = runner(cmd, cwd=ctx.project_root, env=env, expected=ctx.binary_path)
        except FileNotFoundError as e:
            msg = f"{BUILD_COMMAND} not found on PATH"
            raise MissingDependency(msg) from e
        if r.returncode != 0:
            msg = f"{BUILD_COMMAND} exited with {r.returncode}"
            raise BuildFailure(msg)
        if r.artifact is None or not ctx.binary_path.is_file():
            msg = f"Extension not found: {ctx.binary_relpath}"
            raise BuildFailure(msg)
        return BuildResult.success(target, BuildStrategy.NATIVE, ctx.binary_path)


def build_native(
    target: PlatformIdentifier,
    host: PlatformIdentifier | None,
    ctx: BuildContext,
    runner: CommandRunner = run_command,
) -> BuildResult:
    """Build target on the host. Returns a failed BuildResult (MissingDependency, BuildFailure) instead of raising."""
    print(f"🔨 Building {target.tag} (native)...")
    try:
        return _build(target, host, ctx, runner)
    except BuildError as e:
        log.debug("Native build of %s failed: %s", target.tag, e)
        return BuildResult.failure(target, BuildStrategy.NATIVE, e)
