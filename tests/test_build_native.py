"""Tests for duckext_tooling.build.native."""

import os
import sys
from pathlib import Path

import pytest

from duckext_tooling.build.context import BuildContext
from duckext_tooling.build.native import build_native
from duckext_tooling.platforms import BuildStrategy, LINUX_AMD64, LINUX_ARM64, OSX_AMD64, OSX_ARM64


class TestBuildNative:
    def test_success_returns_binary(self, ctx: BuildContext, runner) -> None:
        result = build_native(LINUX_AMD64, LINUX_AMD64, ctx, runner=runner)
        assert result.ok
        assert result.strategy is BuildStrategy.NATIVE
        assert result.binary == ctx.binary_path
        assert result.binary.is_file()

    def test_runs_make_with_jobs_in_project_root(self, ctx: BuildContext, runner) -> None:
        build_native(LINUX_AMD64, LINUX_AMD64, ctx, runner=runner)
        (call,) = runner.calls
        assert call["cmd"] == ["make", "-j8"]
        assert call["cwd"] == ctx.project_root
        assert call["env"]["VCPKG_TOOLCHAIN_PATH"] == "/opt/vcpkg/scripts/buildsystems/vcpkg.cmake"
        assert "OSX_BUILD_ARCH" not in call["env"]

    def test_cross_compile_params_injected(self, ctx: BuildContext, runner) -> None:
        result = build_native(OSX_AMD64, OSX_ARM64, ctx, runner=runner)
        assert result.ok
        env = runner.calls[0]["env"]
        assert env["OSX_BUILD_ARCH"] == "x86_64"
        assert env["VCPKG_TARGET_TRIPLET"] == "x64-osx-release"
        assert env["VCPKG_HOST_TRIPLET"] == "arm64-osx-release"

    def test_nonzero_exit_is_build_failure(self, ctx: BuildContext, make_runner) -> None:
        runner = make_runner(returncode=2)
        result = build_native(OSX_AMD64, OSX_ARM64, ctx, runner=runner)
        assert not result.ok
        assert result.kind == "BuildFailure"
        assert "exited with 2" in result.diagnostic

    def test_missing_binary_is_build_failure(self, ctx: BuildContext, make_runner) -> None:
        result = build_native(LINUX_AMD64, LINUX_AMD64, ctx, runner=make_runner(produce=False))
        assert not result.ok
        assert result.kind == "BuildFailure"
        assert "Extension not found" in result.diagnostic

    def test_clears_stale_binary_before_build(self, ctx: BuildContext, make_runner) -> None:
        ctx.binary_path.parent.mkdir(parents=True)
        ctx.binary_path.write_bytes(b"stale")
        result = build_native(LINUX_AMD64, LINUX_AMD64, ctx, runner=make_runner(produce=False))
        assert not result.ok
        assert not ctx.binary_path.exists()

    def test_missing_vcpkg_is_missing_dependency(self, tmp_path: Path, runner) -> None:
        ctx = BuildContext(project_root=tmp_path, jobs=1, environ={})
        result = build_native(LINUX_AMD64, LINUX_AMD64, ctx, runner=runner)
        assert result.kind == "MissingDependency"
        assert runner.calls == []

    def test_make_not_found_is_missing_dependency(self, ctx: BuildContext) -> None:
        def runner(cmd, **kwargs):
            raise FileNotFoundError(cmd[0])

        result = build_native(LINUX_AMD64, LINUX_AMD64, ctx, runner=runner)
        assert result.kind == "MissingDependency"

    def test_default_runner_uses_subprocess(self, ctx: BuildContext) -> None:
        from unittest.mock import patch

        with patch("duckext_tooling.build.command.subprocess.run") as m_run:
            m_run.return_value = type("R", (), {"returncode": 1, "stdout": "", "stderr": "boom"})()
            result = build_native(LINUX_AMD64, LINUX_AMD64, ctx)
        assert result.kind == "BuildFailure"
        (cmd,) = m_run.call_args[0]
        assert cmd == ["make", "-j8"]
        assert m_run.call_args[1]["env"]["VCPKG_TOOLCHAIN_PATH"].endswith("vcpkg.cmake")

    def test_unclearable_build_dir_is_build_failure(self, ctx: BuildContext, runner) -> None:
        from unittest.mock import patch

        ctx.build_dir.mkdir(parents=True)
        with patch(
            "duckext_tooling.build.context.shutil.rmtree",
            side_effect=PermissionError("root-owned"),
        ):
            result = build_native(LINUX_AMD64, LINUX_AMD64, ctx, runner=runner)
        assert result.kind == "BuildFailure"
        assert "Could not clear" in result.diagnostic
        assert runner.calls == []


@pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell script as make")
class TestBuildNativeUndecodableOutput:
    def test_non_utf8_output_is_build_failure_and_batch_continues(
        self, ctx: BuildContext, tmp_path: Path, monkeypatch
    ) -> None:
        from duckext_tooling.build.orchestrator import run_all

        bin_dir = tmp_path / "bin"
        bin_dir.mkdir()
        make = bin_dir / "make"
        make.write_text("#!/bin/sh\nprintf 'garbage: \\377\\376\\n'\nexit 1\n")
        make.chmod(0o755)
        monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
        built = []

        def dispatcher(target, host, c):
            built.append(target)
            return build_native(target, target, c)

        results = run_all([LINUX_AMD64, LINUX_ARM64], LINUX_AMD64, ctx, dispatcher=dispatcher)
        assert built == [LINUX_AMD64, LINUX_ARM64]
        assert results[LINUX_AMD64].kind == "BuildFailure"
        assert results[LINUX_ARM64].kind == "BuildFailure"

    def test_run_command_replaces_undecodable_bytes(self, tmp_path: Path) -> None:
        from duckext_tooling.build.command import run_command

        r = run_command(["sh", "-c", "printf 'a\\377b'; exit 3"], cwd=tmp_path)
        assert r.returncode == 3
        assert r.output == "a\ufffdb"
