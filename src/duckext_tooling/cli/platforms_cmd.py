"""`duckext host` and `duckext platforms` — show what this host can build and how."""

from __future__ import annotations

from duckext_tooling.platforms.host import describe_host, host_tag
from duckext_tooling.platforms.identifier import PlatformIdentifier
from duckext_tooling.platforms.registry import capability_table
from duckext_tooling.platforms.selector import default_targets


def run_host(host: PlatformIdentifier | None = None) -> int:
    """Print the host tag (unknown when unrecognized). Returns 0."""
    print(host_tag(host if host is not None else describe_host()))
    return 0


def run_platforms(host: PlatformIdentifier | None = None, *, detect_host: bool = True) -> int:
    """Print each supported platform with its strategy on this host; * marks the default set. Returns 0."""
    if host is None and detect_host:
        host = describe_host()
    defaults = set(default_targets(host))
    print(f"Host: {host_tag(host)}")
    for platform, strategy in capability_table(host).items():
        mark = "*" if platform in defaults else " "
        print(f"  {mark} {platform.tag:<12} {strategy.value}")
    return 0
