"""Release configuration: duckext.yaml at the project root, merged over DEFAULT_CONFIG.

duckext.yaml format (all keys optional):
- duckdb_version: DuckDB release tag the extension is built against; names the version directory
- gcs_bucket: destination bucket for publish
- extension_name: extension name (build/release/extension/{name}/{name}.duckdb_extension)
- docker_image: base image for container builds
- output_dir: output root, relative to project root
- build_dir: build-output directory, relative to project root
- container_executor / publisher: executables for container builds and upload
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

CONFIG_FILE_NAME = "duckext.yaml"

DEFAULT_CONFIG: dict[str, str] = {
    "duckdb_version": "v1.4.4",
    "gcs_bucket": "def-duckdb-extensions",
    "extension_name": "gcs",
    "docker_image": "ubuntu:22.04",
    "output_dir": "dist",
    "build_dir": "build/release",
    "container_executor": "docker",
    "publisher": "gsutil",
}


def resolve_config(data: dict[str, Any] | None) -> dict[str, str]:
    """Return config dict with defaults filled. Unknown keys and empty values are ignored."""
    out = dict(DEFAULT_CONFIG)
    if data is None:
        return out
    out.update({k: str(v) for k, v in data.items() if k in out and v not in (None, "")})
    return out


def load_config(project_root: Path, config_path: Path | None = None) -> dict[str, str]:
    """Load config_path (default: project_root/duckext.yaml) if present. Raises ValueError if malformed."""
    path = config_path if config_path is not None else project_root / CONFIG_FILE_NAME
    if not path.exists():
        if config_path is not None:
            msg = f"Config not found: {path}"
            raise ValueError(msg)
        return resolve_config(None)
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        msg = f"Could not read {path}: {e}"
        raise ValueError(msg) from e
    if not isinstance(data, dict):
        msg = f"{path}: expected a mapping at top level"
        raise ValueError(msg)
    return resolve_config(data)
