"""Detect the host platform from the OS name and machine architecture."""

from __future__ import annotations

import logging
import platform

from duckext_tooling.platforms.identifier import (
    AMD64,
    ARM64,
    LINUX,
    OSX,
    PlatformIdentifier,
)

log = logging.getLogger(__name__)

SYSTEM_TO_OS: dict[str, str] = {
    "darwin": OSX,
    "linux": LINUX,
}

# uname -m spellings differ between Darwin (arm64) and Linux (aarch64).
MACHINE_TO_ARCH: dict[str, str] = {
    "arm64": ARM64,
    "aarch64": ARM64,
    "x86_64": AMD64,
    "amd64": AMD64,
}


def describe_host(
    system: str | None = None, machine: str | None = None
) -> PlatformIdentifier | None:
    """Return the host PlatformIdentifier, or None when the OS/arch pair is not recognized."""
    system = platform.system() if system is None else system
    machine = platform.machine() if machine is None else machine
    os_name = SYSTEM_TO_OS.get(system.lower())
    arch = MACHINE_TO_ARCH.get(machine.lower())
    if os_name is None or arch is None:
        log.debug("Unrecognized host %s/%s", system, machine)
        return None
    return PlatformIdentifier(os_name, arch)


def host_tag(host: PlatformIdentifier | None) -> str:
    return host.tag if host is not None else "unknown"
