"""Tests for duckext_tooling.build.context (cross-compile env, vcpkg env, build dir claim)."""

from pathlib import Path

import pytest

from duckext_tooling.build.context import BuildContext, cross_compile_env, vcpkg_env
from duckext_tooling.build.result import MissingDependency
from duckext_tooling.config import resolve_config
from duckext_tooling.platforms import LINUX_AMD64, LINUX_ARM64, OSX_AMD64, OSX_ARM64


class TestCrossCompileEnv:
    def test_arm64_host_to_x86_64_target(self) -> None:
        assert cross_compile_env(OSX_AMD64, OSX_ARM64) == {
            "OSX_BUILD_ARCH": "x86_64",
            "VCPKG_TARGET_TRIPLET": "x64-osx-release",
            "VCPKG_HOST_TRIPLET": "arm64-osx-release",
        }

    def test_x86_64_host_to_arm64_target_swaps_triplets(self) -> None:
        assert cross_compile_env(OSX_ARM64, OSX_AMD64) == {
            "OSX_BUILD_ARCH": "arm64",
            "VCPKG_TARGET_TRIPLET": "arm64-osx-release",
            "VCPKG_HOST_TRIPLET": "x64-osx-release",
        }

    def test_empty_for_same_platform(self) -> None:
        assert cross_compile_env(OSX_ARM64, OSX_ARM64) == {}
        assert cross_compile_env(LINUX_AMD64, LINUX_AMD64) == {}

    def test_empty_across_os_families_or_unknown_host(self) -> None:
        assert cross_compile_env(LINUX_AMD64, OSX_ARM64) == {}
        assert cross_compile_env(OSX_AMD64, None) == {}

    def test_empty_for_os_without_override_table(self) -> None:
        assert cross_compile_env(LINUX_ARM64, LINUX_AMD64) == {}


class TestVcpkgEnv:
    def test_toolchain_path_wins(self) -> None:
        env = {"VCPKG_TOOLCHAIN_PATH": "/x/vcpkg.cmake", "VCPKG_ROOT": "/opt/vcpkg"}
        assert vcpkg_env(env) == {"VCPKG_TOOLCHAIN_PATH": "/x/vcpkg.cmake"}

    def test_derived_from_root(self) -> None:
        assert vcpkg_env({"VCPKG_ROOT": "/opt/vcpkg/"}) == {
            "VCPKG_TOOLCHAIN_PATH": "/opt/vcpkg/scripts/buildsystems/vcpkg.cmake"
        }

    def test_missing_raises(self) -> None:
        with pytest.raises(MissingDependency, match="VCPKG_ROOT"):
            vcpkg_env({})


class TestBuildContext:
    def test_paths(self, tmp_path: Path) -> None:
        ctx = BuildContext(project_root=tmp_path, jobs=2)
        assert ctx.build_dir == tmp_path / "build" / "release"
        assert ctx.binary_relpath == "build/release/extension/gcs/gcs.duckdb_extension"
        assert ctx.binary_path == tmp_path / ctx.binary_relpath
        assert ctx.artifact_name == "gcs.duckdb_extension"

    def test_from_config_reads_jobs_from_environ(self, tmp_path: Path) -> None:
        config = resolve_config({"extension_name": "httpfs", "docker_image": "debian:12"})
        ctx = BuildContext.from_config(tmp_path, config, environ={"JOBS": "3"})
        assert ctx.jobs == 3
        assert ctx.extension_name == "httpfs"
        assert ctx.docker_image == "debian:12"

    def test_fresh_build_dir_clears_previous_output(self, tmp_path: Path) -> None:
        ctx = BuildContext(project_root=tmp_path, jobs=1)
        stale = ctx.build_dir / "extension" / "gcs" / "stale.o"
        stale.parent.mkdir(parents=True)
        stale.write_text("old")
        with ctx.fresh_build_dir() as d:
            assert d == ctx.build_dir
            assert not stale.exists()

    def test_fresh_build_dir_is_exclusive(self, tmp_path: Path) -> None:
        ctx = BuildContext(project_root=tmp_path, jobs=1)
        with ctx.fresh_build_dir():
            with pytest.raises(RuntimeError, match="in use"):
                with ctx.fresh_build_dir():
                    pass
        with ctx.fresh_build_dir():
            pass

    def test_fresh_build_dir_unremovable_output_is_build_failure(self, tmp_path: Path) -> None:
        from unittest.mock import patch

        from duckext_tooling.build.result import BuildFailure

        ctx = BuildContext(project_root=tmp_path, jobs=1)
        ctx.build_dir.mkdir(parents=True)
        with patch(
            "duckext_tooling.build.context.shutil.rmtree",
            side_effect=PermissionError("root-owned"),
        ):
            with pytest.raises(BuildFailure, match="Could not clear"):
                with ctx.fresh_build_dir():
                    pass
        with ctx.fresh_build_dir():
            pass
