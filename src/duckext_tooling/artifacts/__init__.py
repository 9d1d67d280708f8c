"""Artifacts: compress built extensions into the {version}/{platform}/ output layout."""

from .packager import OutputArtifact, artifact_path, list_artifacts, package_artifact

__all__ = ["OutputArtifact", "artifact_path", "list_artifacts", "package_artifact"]
