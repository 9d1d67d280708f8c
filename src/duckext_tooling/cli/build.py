"""`duckext build` — build the extension for each platform, package, and publish to GCS."""

from __future__ import annotations

import sys
from pathlib import Path

from duckext_tooling.artifacts.packager import OutputArtifact, package_artifact
from duckext_tooling.build.context import BuildContext
from duckext_tooling.build.orchestrator import print_summary, run_all, summarize
from duckext_tooling.build.result import BuildResult, PublishFailure
from duckext_tooling.config import load_config
from duckext_tooling.platforms.host import describe_host, host_tag
from duckext_tooling.platforms.identifier import ALL_PLATFORMS, PlatformIdentifier, parse_platform
from duckext_tooling.platforms.selector import select_targets
from duckext_tooling.publish.gcs import install_instructions, publish


def _parse_tokens(tokens: list[str]) -> tuple[list[PlatformIdentifier], list[str]]:
    """Split platform tokens into (known platforms, unknown tokens)."""
    known: list[PlatformIdentifier] = []
    unknown: list[str] = []
    for tok in tokens:
        try:
            known.append(parse_platform(tok))
        except ValueError:
            unknown.append(tok)
    return known, unknown


def run(
    project_root: Path,
    platforms: list[str] | None = None,
    *,
    upload: bool = True,
    config_path: Path | None = None,
    version: str | None = None,
    bucket: str | None = None,
    host: PlatformIdentifier | None = None,
    detect_host: bool = True,
) -> int:
    """Build requested (or default) platforms, print summary, publish unless upload is False. Returns 0 or 1."""
    try:
        config = load_config(project_root, config_path)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    version = version or config["duckdb_version"]
    bucket = bucket or config["gcs_bucket"]
    if host is None and detect_host:
        host = describe_host()

    tokens = platforms or []
    known, unknown = _parse_tokens(tokens)
    if tokens:
        targets = select_targets(known, host) if known else []
    else:
        targets = select_targets(None, host)
        print(f"🔍 Auto-selected platforms for {host_tag(host)} host")

    try:
        ctx = BuildContext.from_config(project_root, config)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print()
    print("🦆 DuckDB extension builder")
    print(f"   Extension:      {ctx.extension_name}")
    print(f"   DuckDB version: {version}")
    print(f"   Host platform:  {host_tag(host)}")
    print(f"   Platforms:      {' '.join([t.tag for t in targets] + unknown)}")
    print(f"   Upload:         {'yes' if upload else 'no'}")
    print()

    output_root = project_root / config["output_dir"]
    (output_root / version).mkdir(parents=True, exist_ok=True)
    artifacts: list[OutputArtifact] = []

    def _package(result: BuildResult) -> None:
        artifact = package_artifact(result, output_root, version, ctx.artifact_name)
        if artifact is not None:
            artifacts.append(artifact)

    results = run_all(targets, host, ctx, on_success=_package)
    print_summary(results)
    for tok in unknown:
        print(f"  ❌ {tok} (FAILED, Unsupported: unknown platform)")
    _, failed = summarize(results)

    published = True
    if upload:
        print()
        try:
            publish(output_root, bucket, executor=config["publisher"])
        except PublishFailure as e:
            print(f"❌ {e}", file=sys.stderr)
            published = False
        else:
            print()
            print("🦆 Install in DuckDB with:")
            for line in install_instructions(bucket, ctx.extension_name):
                print(f"  {line}")

    if failed or unknown or not published:
        return 1
    return 0


def run_build_argv(argv: list[str] | None = None) -> None:
    """Parse argv and run build (platforms, --no-upload, --config, --version, --bucket)."""
    import argparse

    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []  # skip 'duckext build'
    tags = "  ".join(p.tag for p in ALL_PLATFORMS)
    ap = argparse.ArgumentParser(
        prog="duckext build",
        description="Build the extension for multiple platforms and upload to GCS",
        epilog=(
            f"Platforms: {tags}. If no platform is given, all platforms buildable "
            f"from this host are built. Host detected: {host_tag(describe_host())}"
        ),
    )
    ap.add_argument("platforms", nargs="*", help="os_arch tags to build (default: per host)")
    ap.add_argument("--no-upload", action="store_true", help="Build only; skip GCS upload")
    ap.add_argument("--config", type=Path, default=None, help="Config file (default: duckext.yaml)")
    ap.add_argument("--version", default=None, help="Version directory (default: duckdb_version)")
    ap.add_argument("--bucket", default=None, help="GCS bucket (default: gcs_bucket)")
    ap.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Project root (default: cwd)",
    )
    args = ap.parse_args(argv)
    rc = run(
        args.project_root.resolve(),
        args.platforms,
        upload=not args.no_upload,
        config_path=args.config,
        version=args.version,
        bucket=args.bucket,
    )
    sys.exit(rc)
