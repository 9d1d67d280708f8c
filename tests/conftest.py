"""Pytest fixtures for duckext tooling tests."""

from collections.abc import Mapping, Sequence
from pathlib import Path

import pytest

from duckext_tooling.build.command import CommandResult
from duckext_tooling.build.context import BuildContext

VCPKG_ENV = {"VCPKG_ROOT": "/opt/vcpkg"}


class FakeRunner:
    """Records each command; optionally writes the expected binary like a real build would."""

    def __init__(self, returncode: int = 0, produce: bool = True) -> None:
        self.returncode = returncode
        self.produce = produce
        self.calls: list[dict] = []

    def __call__(
        self,
        cmd: Sequence[str],
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
        expected: Path | None = None,
    ) -> CommandResult:
        self.calls.append(
            {"cmd": list(cmd), "cwd": cwd, "env": dict(env or {}), "expected": expected}
        )
        if expected is not None and self.produce:
            expected.parent.mkdir(parents=True, exist_ok=True)
            expected.write_bytes(b"\x00asm" + cmd[0].encode())
        artifact = expected if expected is not None and expected.exists() else None
        return CommandResult(returncode=self.returncode, output="", artifact=artifact)


@pytest.fixture
def ctx(tmp_path: Path) -> BuildContext:
    """Build context over an empty project tree with vcpkg configured and jobs pinned."""
    return BuildContext(project_root=tmp_path, jobs=8, environ=dict(VCPKG_ENV))


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_runner():
    """Factory for FakeRunner with a given exit code / whether the binary is produced."""
    return FakeRunner
