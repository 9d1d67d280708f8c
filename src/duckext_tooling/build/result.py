"""Per-target build results and the error kinds a build, package, or publish step can fail with."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from duckext_tooling.platforms.identifier import PlatformIdentifier
from duckext_tooling.platforms.registry import BuildStrategy


class BuildError(RuntimeError):
    """Base for per-target failures. kind names the failure in summaries."""

    kind = "BuildError"


class Unsupported(BuildError):
    """Target has no viable build strategy on this host."""

    kind = "Unsupported"


class MissingDependency(BuildError):
    """A required external tool (container executor, toolchain) is absent."""

    kind = "MissingDependency"


class BuildFailure(BuildError):
    """Build command exited non-zero or did not produce the expected binary."""

    kind = "BuildFailure"


class IOFailure(BuildError):
    """Expected binary missing at packaging time despite a successful build."""

    kind = "IOFailure"


class PublishFailure(BuildError):
    """Remote sync or permission grant failed. Fatal to the publish step as a whole."""

    kind = "PublishFailure"


@dataclass(frozen=True)
class BuildResult:
    target: PlatformIdentifier
    ok: bool
    strategy: BuildStrategy
    kind: str | None = None
    diagnostic: str | None = None
    binary: Path | None = None

    @classmethod
    def success(
        cls, target: PlatformIdentifier, strategy: BuildStrategy, binary: Path
    ) -> BuildResult:
        return cls(target=target, ok=True, strategy=strategy, binary=binary)

    @classmethod
    def failure(
        cls, target: PlatformIdentifier, strategy: BuildStrategy, error: BuildError
    ) -> BuildResult:
        return cls(
            target=target, ok=False, strategy=strategy, kind=error.kind, diagnostic=str(error)
        )

    def describe(self) -> str:
        """One summary line: tag, and the failure kind and diagnostic when failed."""
        if self.ok:
            return f"{self.target.tag} ({self.strategy.value})"
        detail = f": {self.diagnostic}" if self.diagnostic else ""
        return f"{self.target.tag} (FAILED, {self.kind}{detail})"
