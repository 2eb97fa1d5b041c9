"""Commit signature ingestion from the commit database.

Reads author (name, email) pairs for commits stored in a PostgreSQL
``commits`` table, optionally restricted to the hashes listed in a text
file (one hash per line).
"""

from __future__ import annotations

from datetime import timezone
from pathlib import Path

import psycopg
import structlog
from psycopg.conninfo import conninfo_to_dict

from authorlens.db import execute_query, get_connection
from authorlens.errors import DataAccessError
from authorlens.identity.models import Signature
from authorlens.identity.normalize import normalize_signature

logger = structlog.get_logger(__name__)

_SELECT_SIGNATURES = """
    SELECT DISTINCT
        repository_id AS repo,
        commit_author_name AS name,
        commit_author_email AS email,
        commit_hash AS hash,
        committer_when AS time
    FROM commits
"""

_ORDER_BY = " ORDER BY repository_id, committer_when, commit_hash"


def describe_endpoint(conninfo: str) -> str:
    """Return ``host:port/dbname`` for *conninfo* without credentials."""
    try:
        params = conninfo_to_dict(conninfo)
    except psycopg.ProgrammingError:
        return "<invalid conninfo>"
    host = params.get("host") or "localhost"
    port = params.get("port") or "5432"
    dbname = params.get("dbname") or ""
    return f"{host}:{port}/{dbname}"


def read_hash_file(path: Path) -> list[str]:
    """Read commit hashes from *path*, one per line, skipping blank lines."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read commit hash file {path}: {exc}"
        raise DataAccessError(msg) from exc
    return [line.strip() for line in text.splitlines() if line.strip()]


def _row_to_signature(row: dict) -> Signature:
    ts = row["time"]
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return Signature(
        repo=row["repo"],
        name=row["name"],
        email=row["email"],
        hash=row["hash"],
        time=ts,
    )


def fetch_raw_signatures(
    conninfo: str,
    hash_file: Path | None = None,
    *,
    timeout: float | None = None,
) -> list[Signature]:
    """Query commit signatures as stored, without normalisation.

    When *hash_file* is given only commits whose hash is listed are returned.
    *timeout* (seconds) bounds the connection attempt and the query.

    Raises:
        DataAccessError: The hash file or the database cannot be read.
    """
    endpoint = describe_endpoint(conninfo)
    query = _SELECT_SIGNATURES
    params: tuple = ()
    if hash_file is not None:
        hashes = read_hash_file(hash_file)
        logger.info("commit_hashes_loaded", path=str(hash_file), count=len(hashes))
        if not hashes:
            return []
        query += " WHERE commit_hash = ANY(%s)"
        params = (hashes,)
    query += _ORDER_BY

    try:
        with get_connection(conninfo=conninfo, timeout=timeout) as conn:
            rows = execute_query(conn, query, params)
    except psycopg.Error as exc:
        msg = f"Cannot fetch signatures from {endpoint}: {exc}"
        raise DataAccessError(msg) from exc

    signatures = [_row_to_signature(row) for row in rows]
    logger.info("signatures_fetched", endpoint=endpoint, count=len(signatures))
    return signatures


def fetch_signatures(
    conninfo: str,
    hash_file: Path | None = None,
    *,
    timeout: float | None = None,
) -> list[Signature]:
    """Query commit signatures and normalise their names and emails.

    Raises:
        DataAccessError: The hash file or the database cannot be read.
        ValidationError: A commit author name is unusable after normalisation.
    """
    raw = fetch_raw_signatures(conninfo, hash_file, timeout=timeout)
    return [normalize_signature(sig) for sig in raw]
