"""Publish: sync the output tree to GCS and grant public read."""

from .gcs import bucket_url, install_instructions, publish

__all__ = ["bucket_url", "install_instructions", "publish"]
