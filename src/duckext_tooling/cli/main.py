"""Main CLI entry point for duckext tooling."""

import logging
import sys

from duckext_tooling.cli import build as build_cli
from duckext_tooling.cli import platforms_cmd


def _usage() -> None:
    print("Usage: duckext [-v] <command> [args...]", file=sys.stderr)
    print("Commands:", file=sys.stderr)
    print(
        "  build [--no-upload] [platform ...]  - Build per platform (native or container), upload to GCS",
        file=sys.stderr,
    )
    print("  host                                - Print the detected host platform", file=sys.stderr)
    print(
        "  platforms                           - List platforms and how this host builds each",
        file=sys.stderr,
    )


def main() -> None:
    """Main CLI entry point."""
    argv = sys.argv[1:]
    verbose = any(a in ("-v", "--verbose") for a in argv)
    argv = [a for a in argv if a not in ("-v", "--verbose")]
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if not argv:
        _usage()
        sys.exit(1)

    command, rest = argv[0], argv[1:]

    if command == "build":
        build_cli.run_build_argv(rest)
    elif command == "host":
        sys.exit(platforms_cmd.run_host())
    elif command == "platforms":
        sys.exit(platforms_cmd.run_platforms())
    elif command in ("-h", "--help", "help"):
        _usage()
        sys.exit(0)
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
