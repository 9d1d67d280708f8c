"""Compress built extensions into the versioned output layout: {output_root}/{version}/{tag}/{name}.gz."""

from __future__ import annotations

import gzip
import shutil
from dataclasses import dataclass
from pathlib import Path

from duckext_tooling.build.result import BuildResult, IOFailure
from duckext_tooling.helpers import human_size
from duckext_tooling.platforms.identifier import PlatformIdentifier


@dataclass(frozen=True)
class OutputArtifact:
    target: PlatformIdentifier
    version: str
    path: Path
    size: int


def artifact_path(output_root: Path, version: str, target: PlatformIdentifier, name: str) -> Path:
    return output_root / version / target.tag / f"{name}.gz"


def compress_file(src: Path, dst: Path) -> None:
    """gzip src into dst with mtime 0 and no stored file name, so equal input gives equal bytes."""
    dst.parent.mkdir(parents=True, exist_ok=True)
    with src.open("rb") as fin, dst.open("wb") as raw:
        with gzip.GzipFile(filename="", mode="wb", fileobj=raw, mtime=0) as fout:
            shutil.copyfileobj(fin, fout)


def package_artifact(
    result: BuildResult,
    output_root: Path,
    version: str,
    artifact_name: str,
) -> OutputArtifact | None:
    """Compress a successful build into the output layout. None for failed results; IOFailure if the binary is gone."""
    if not result.ok:
        return None
    src = result.binary
    if src is None or not src.is_file():
        msg = f"Extension not found: {src} (reported built for {result.target.tag})"
        raise IOFailure(msg)
    dst = artifact_path(output_root, version, result.target, artifact_name)
    try:
        compress_file(src, dst)
        size = dst.stat().st_size
    except OSError as e:
        msg = f"Could not write {dst}: {e}"
        raise IOFailure(msg) from e
    print(f"📦 Compressed: {dst} ({human_size(size)})")
    return OutputArtifact(target=result.target, version=version, path=dst, size=size)


def list_artifacts(output_root: Path) -> list[Path]:
    """Every *.gz under output_root, sorted."""
    if not output_root.is_dir():
        return []
    return sorted(p for p in output_root.rglob("*.gz") if p.is_file())
