"""Platform identifiers: closed set of {osx, linux} x {amd64, arm64}, tagged os_arch."""

from __future__ import annotations

from dataclasses import dataclass

OSX = "osx"
LINUX = "linux"
AMD64 = "amd64"
ARM64 = "arm64"

OS_FAMILIES = (OSX, LINUX)
ARCHITECTURES = (AMD64, ARM64)


@dataclass(frozen=True)
class PlatformIdentifier:
    os: str
    arch: str

    def __post_init__(self) -> None:
        if self.os not in OS_FAMILIES or self.arch not in ARCHITECTURES:
            msg = f"Unsupported platform: {self.os}_{self.arch}"
            raise ValueError(msg)

    @property
    def tag(self) -> str:
        """Canonical os_arch tag used in the output layout (e.g. osx_arm64)."""
        return f"{self.os}_{self.arch}"

    def __str__(self) -> str:
        return self.tag


OSX_ARM64 = PlatformIdentifier(OSX, ARM64)
OSX_AMD64 = PlatformIdentifier(OSX, AMD64)
LINUX_AMD64 = PlatformIdentifier(LINUX, AMD64)
LINUX_ARM64 = PlatformIdentifier(LINUX, ARM64)

# Canonical order: the order platforms are built and summarized in by default.
ALL_PLATFORMS: tuple[PlatformIdentifier, ...] = (OSX_ARM64, OSX_AMD64, LINUX_AMD64, LINUX_ARM64)

_BY_TAG = {p.tag: p for p in ALL_PLATFORMS}


def parse_platform(token: str) -> PlatformIdentifier:
    """Parse an os_arch tag (osx_arm64, linux_amd64, ...). Raises ValueError if not supported."""
    p = _BY_TAG.get(token.strip().lower())
    if p is None:
        msg = f"Unknown platform: {token}. Use {', '.join(_BY_TAG)}."
        raise ValueError(msg)
    return p
