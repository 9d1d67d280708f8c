"""Resolve which platforms to build from the caller's request and the host."""

from __future__ import annotations

from collections.abc import Sequence

from duckext_tooling.platforms.identifier import (
    ALL_PLATFORMS,
    LINUX_AMD64,
    LINUX_ARM64,
    OSX,
    PlatformIdentifier,
)

LINUX_PLATFORMS: tuple[PlatformIdentifier, ...] = (LINUX_AMD64, LINUX_ARM64)


def default_targets(host: PlatformIdentifier | None) -> list[PlatformIdentifier]:
    """Everything on an osx host; only the linux pair on linux or unknown hosts."""
    if host is not None and host.os == OSX:
        return list(ALL_PLATFORMS)
    return list(LINUX_PLATFORMS)


def select_targets(
    requested: Sequence[PlatformIdentifier] | None,
    host: PlatformIdentifier | None,
) -> list[PlatformIdentifier]:
    """Explicit requests pass through as given; supportability is checked per target at dispatch."""
    if requested:
        return list(requested)
    return default_targets(host)
