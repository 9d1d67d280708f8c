"""Container build: run the same make build inside an architecture-pinned linux container.

The project root is mounted at /workspace, so the binary the container produces
appears at the same relative path on the host.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable

from duckext_tooling.build.command import CommandRunner, run_command
from duckext_tooling.build.context import VCPKG_TOOLCHAIN_SUFFIX, BuildContext
from duckext_tooling.build.result import (
    BuildError,
    BuildFailure,
    BuildResult,
    MissingDependency,
    Unsupported,
)
from duckext_tooling.platforms.identifier import LINUX, PlatformIdentifier
from duckext_tooling.platforms.registry import BuildStrategy

log = logging.getLogger(__name__)

WORKSPACE = "/workspace"
CONTAINER_VCPKG_ROOT = "/opt/vcpkg"
TOOLCHAIN_PACKAGES = (
    "build-essential cmake git curl zip unzip tar pkg-config ninja-build python3"
)


def container_platform(target: PlatformIdentifier) -> str:
    """docker --platform value (linux/amd64, linux/arm64). Raises Unsupported for non-linux targets."""
    if target.os != LINUX:
        msg = f"Container builds only support linux targets, got: {target.tag}"
        raise Unsupported(msg)
    return f"{LINUX}/{target.arch}"


def container_script(ctx: BuildContext) -> str:
    """Script run inside the container: provision toolchain and vcpkg, clean, build."""
    return "\n".join(
        [
            "set -e",
            'echo "=== Installing build dependencies ==="',
            "apt-get update -qq",
            f"apt-get install -y -qq {TOOLCHAIN_PACKAGES} > /dev/null 2>&1",
            'echo "=== Setting up vcpkg ==="',
            f"if [ ! -d {CONTAINER_VCPKG_ROOT} ]; then",
            f"    git clone --depth 1 https://github.com/microsoft/vcpkg.git {CONTAINER_VCPKG_ROOT}",
            f"    {CONTAINER_VCPKG_ROOT}/bootstrap-vcpkg.sh -disableMetrics > /dev/null 2>&1",
            "fi",
            'echo "=== Cleaning build directory ==="',
            f"rm -rf {ctx.build_dir_name}",
            'echo "=== Building ==="',
            "make -j$(nproc)",
            'echo "=== Done ==="',
        ]
    )


def container_command(target: PlatformIdentifier, ctx: BuildContext) -> list[str]:
    return [
        ctx.container_executor,
        "run",
        "--rm",
        "--platform",
        container_platform(target),
        "-v",
        f"{ctx.project_root}:{WORKSPACE}",
        "-w",
        WORKSPACE,
        "-e",
        f"VCPKG_ROOT={CONTAINER_VCPKG_ROOT}",
        "-e",
        f"VCPKG_TOOLCHAIN_PATH={CONTAINER_VCPKG_ROOT}/{VCPKG_TOOLCHAIN_SUFFIX}",
        ctx.docker_image,
        "bash",
        "-c",
        container_script(ctx),
    ]


def _build(
    target: PlatformIdentifier,
    ctx: BuildContext,
    runner: CommandRunner,
    which: Callable[[str], str | None],
) -> BuildResult:
    cmd = container_command(target, ctx)
    if not which(ctx.container_executor):
        msg = f"{ctx.container_executor} is required for {target.tag} builds"
        raise MissingDependency(msg)
    with ctx.fresh_build_dir():
        try:
            r = runner(cmd, cwd=ctx.project_root, expected=ctx.binary_path)
        except FileNotFoundError as e:
            msg = f"{ctx.container_executor} is required for {target.tag} builds"
            raise MissingDependency(msg) from e
        if r.returncode != 0:
            msg = f"{ctx.container_executor} run exited with {r.returncode}"
            raise BuildFailure(msg)
        if r.artifact is None or not ctx.binary_path.is_file():
            msg = f"Extension not found: {ctx.binary_relpath}"
            raise BuildFailure(msg)
        return BuildResult.success(target, BuildStrategy.CONTAINER, ctx.binary_path)


def build_container(
    target: PlatformIdentifier,
    ctx: BuildContext,
    runner: CommandRunner = run_command,
    which: Callable[[str], str | None] = shutil.which,
) -> BuildResult:
    """Build a linux target in a container. Returns a failed BuildResult instead of raising."""
    try:
        print(f"🐳 Building {target.tag} ({ctx.container_executor} {container_platform(target)})...")
        return _build(target, ctx, runner, which)
    except BuildError as e:
        log.debug("Container build of %s failed: %s", target.tag, e)
        return BuildResult.failure(target, BuildStrategy.CONTAINER, e)
