"""Build strategy policy: which way (native, container, or not at all) a target builds on a host.

osx targets need the Apple SDK, so they only build natively on an osx host (either
architecture, cross-compiling when they differ) and are never built in a container.
linux targets build natively on a matching linux host and in an architecture-pinned
container everywhere else.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

from duckext_tooling.platforms.identifier import (
    ALL_PLATFORMS,
    LINUX,
    OSX,
    PlatformIdentifier,
)


class BuildStrategy(str, Enum):
    NATIVE = "native"
    CONTAINER = "container"
    UNSUPPORTED = "unsupported"


Host = PlatformIdentifier | None


def _osx_policy(target: PlatformIdentifier, host: Host) -> BuildStrategy:
    if host is not None and host.os == OSX:
        return BuildStrategy.NATIVE
    return BuildStrategy.UNSUPPORTED


def _linux_policy(target: PlatformIdentifier, host: Host) -> BuildStrategy:
    if host is not None and host.os == LINUX and host.arch == target.arch:
        return BuildStrategy.NATIVE
    return BuildStrategy.CONTAINER


# Target OS family -> policy. Adding a platform family means adding an entry here.
POLICIES: dict[str, Callable[[PlatformIdentifier, Host], BuildStrategy]] = {
    OSX: _osx_policy,
    LINUX: _linux_policy,
}


def capability_of(target: PlatformIdentifier, host: Host) -> BuildStrategy:
    """Strategy for building target on host. Pure and total over every (target, host) pair."""
    if target == host:
        return BuildStrategy.NATIVE
    policy = POLICIES.get(target.os)
    if policy is None:
        return BuildStrategy.UNSUPPORTED
    return policy(target, host)


def capability_table(host: Host) -> dict[PlatformIdentifier, BuildStrategy]:
    """Strategy for every supported platform on host, in canonical order."""
    return {p: capability_of(p, host) for p in ALL_PLATFORMS}
