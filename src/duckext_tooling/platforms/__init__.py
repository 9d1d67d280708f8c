"""Platforms: identifiers, host detection, build strategy policy, target selection."""

from .host import describe_host, host_tag
from .identifier import (
    ALL_PLATFORMS,
    LINUX_AMD64,
    LINUX_ARM64,
    OSX_AMD64,
    OSX_ARM64,
    PlatformIdentifier,
    parse_platform,
)
from .registry import BuildStrategy, capability_of, capability_table
from .selector import default_targets, select_targets

__all__ = [
    "ALL_PLATFORMS",
    "LINUX_AMD64",
    "LINUX_ARM64",
    "OSX_AMD64",
    "OSX_ARM64",
    "BuildStrategy",
    "PlatformIdentifier",
    "capability_of",
    "capability_table",
    "default_targets",
    "describe_host",
    "host_tag",
    "parse_platform",
    "select_targets",
]
