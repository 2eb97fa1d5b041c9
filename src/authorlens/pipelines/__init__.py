"""Signature ingestion from the commit database."""

from __future__ import annotations

from authorlens.pipelines.commit_signatures import (
    fetch_raw_signatures,
    fetch_signatures,
    read_hash_file,
)

__all__ = [
    "fetch_raw_signatures",
    "fetch_signatures",
    "read_hash_file",
]
