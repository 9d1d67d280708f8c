"""Build context: project paths, parallelism, and toolchain environment for one build run.

A single build-output directory (build/release) is shared by every build in a run.
fresh_build_dir() claims it exclusively and clears it; callers read the produced
binary only between the end of one build and the start of the next.
"""

from __future__ import annotations

import logging
import os
import shutil
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from duckext_tooling.build.result import BuildFailure, MissingDependency
from duckext_tooling.helpers import portable_jobs
from duckext_tooling.platforms.identifier import AMD64, ARM64, OSX, PlatformIdentifier

log = logging.getLogger(__name__)

VCPKG_TOOLCHAIN_SUFFIX = "scripts/buildsystems/vcpkg.cmake"

# arch -> (OSX_BUILD_ARCH value, vcpkg triplet) for osx cross-compiles.
OSX_CROSS_ARCH: dict[str, tuple[str, str]] = {
    AMD64: ("x86_64", "x64-osx-release"),
    ARM64: ("arm64", "arm64-osx-release"),
}

# OS family -> arch table. Only families listed here cross-compile natively.
CROSS_COMPILE_TABLES: dict[str, dict[str, tuple[str, str]]] = {
    OSX: OSX_CROSS_ARCH,
}


def cross_compile_env(
    target: PlatformIdentifier, host: PlatformIdentifier | None
) -> dict[str, str]:
    """Toolchain overrides for a same-OS, different-arch native build; empty otherwise."""
    if host is None or target.os != host.os or target.arch == host.arch:
        return {}
    table = CROSS_COMPILE_TABLES.get(target.os)
    if table is None or target.arch not in table or host.arch not in table:
        return {}
    build_arch, target_triplet = table[target.arch]
    _, host_triplet = table[host.arch]
    return {
        "OSX_BUILD_ARCH": build_arch,
        "VCPKG_TARGET_TRIPLET": target_triplet,
        "VCPKG_HOST_TRIPLET": host_triplet,
    }


def vcpkg_env(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """VCPKG_TOOLCHAIN_PATH for native builds, derived from VCPKG_ROOT when not set directly."""
    env = os.environ if environ is None else environ
    toolchain = env.get("VCPKG_TOOLCHAIN_PATH")
    if toolchain:
        return {"VCPKG_TOOLCHAIN_PATH": toolchain}
    root = env.get("VCPKG_ROOT")
    if root:
        return {"VCPKG_TOOLCHAIN_PATH": f"{root.rstrip('/')}/{VCPKG_TOOLCHAIN_SUFFIX}"}
    msg = "VCPKG_ROOT or VCPKG_TOOLCHAIN_PATH must be set for native builds"
    raise MissingDependency(msg)


@dataclass
class BuildContext:
    project_root: Path
    extension_name: str = "gcs"
    build_dir_name: str = "build/release"
    jobs: int = field(default_factory=portable_jobs)
    docker_image: str = "ubuntu:22.04"
    container_executor: str = "docker"
    environ: Mapping[str, str] | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def from_config(
        cls,
        project_root: Path,
        config: Mapping[str, str],
        environ: Mapping[str, str] | None = None,
    ) -> BuildContext:
        return cls(
            project_root=project_root,
            extension_name=config["extension_name"],
            build_dir_name=config["build_dir"],
            jobs=portable_jobs(environ),
            docker_image=config["docker_image"],
            container_executor=config["container_executor"],
            environ=environ,
        )

    @property
    def build_dir(self) -> Path:
        return self.project_root / self.build_dir_name

    @property
    def binary_relpath(self) -> str:
        """Binary path relative to project root (POSIX, so it is valid inside the container too)."""
        name = self.extension_name
        return f"{self.build_dir_name}/extension/{name}/{name}.duckdb_extension"

    @property
    def binary_path(self) -> Path:
        return self.project_root / self.binary_relpath

    @property
    def artifact_name(self) -> str:
        return f"{self.extension_name}.duckdb_extension"

    def native_env(self) -> dict[str, str]:
        return vcpkg_env(self.environ)

    @contextmanager
    def fresh_build_dir(self) -> Iterator[Path]:
        """Claim the build-output directory for one build and clear it.

        Raises RuntimeError if already claimed, BuildFailure if the old output cannot be removed.
        """
        if not self._lock.acquire(blocking=False):
            msg = f"{self.build_dir} is in use by another build"
            raise RuntimeError(msg)
        try:
            if self.build_dir.exists():
                log.debug("Clearing %s", self.build_dir)
                try:
                    shutil.rmtree(self.build_dir)
                except OSError as e:
                    msg = f"Could not clear {self.build_dir}: {e}"
                    raise BuildFailure(msg) from e
            yield self.build_dir
        finally:
            self._lock.release()
