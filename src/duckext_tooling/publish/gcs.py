"""Publish the output tree to a GCS bucket with gsutil: rsync, then grant public read."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from duckext_tooling.artifacts.packager import list_artifacts
from duckext_tooling.build.command import CommandRunner, run_command
from duckext_tooling.build.result import PublishFailure
from duckext_tooling.helpers import display_path, human_size

log = logging.getLogger(__name__)

PUBLIC_BASE_URL = "https://storage.googleapis.com"


def bucket_url(bucket: str) -> str:
    return f"gs://{bucket.removeprefix('gs://').strip('/')}/"


def install_instructions(bucket: str, extension_name: str) -> list[str]:
    """DuckDB statements that install the published extension from the bucket."""
    name = bucket.removeprefix("gs://").strip("/")
    return [
        f"SET custom_extension_repository='{PUBLIC_BASE_URL}/{name}';",
        f"INSTALL {extension_name};",
        f"LOAD {extension_name};",
    ]


def publish(
    output_root: Path,
    bucket: str,
    *,
    executor: str = "gsutil",
    runner: CommandRunner = run_command,
    which: Callable[[str], str | None] = shutil.which,
) -> None:
    """Sync output_root to the bucket and make it public-read. All or nothing: raises PublishFailure."""
    dest = bucket_url(bucket)
    print(f"📤 Uploading to {dest}...")
    if not which(executor):
        msg = f"{executor} is required for upload. Install Google Cloud SDK."
        raise PublishFailure(msg)
    if not output_root.is_dir():
        msg = f"Output directory not found: {output_root}"
        raise PublishFailure(msg)

    print()
    print("📁 Repository structure:")
    for f in list_artifacts(output_root):
        print(f"  {display_path(f, output_root)} ({human_size(f.stat().st_size)})")
    print()

    steps = [
        ("rsync", [executor, "-m", "rsync", "-r", f"{output_root}/", dest]),
        ("acl", [executor, "-m", "acl", "ch", "-r", "-u", "AllUsers:R", dest]),
    ]
    for label, cmd in steps:
        try:
            r = runner(cmd, cwd=output_root)
        except OSError as e:
            msg = f"{executor} {label} could not run: {e}"
            raise PublishFailure(msg) from e
        if r.returncode != 0:
            msg = f"{executor} {label} failed (exit {r.returncode})"
            raise PublishFailure(msg)
        log.debug("%s %s ok", executor, label)
    print("✅ Upload complete!")
