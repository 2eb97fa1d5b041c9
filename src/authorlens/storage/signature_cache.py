"""On-disk CSV cache of raw commit signatures.

The cache keeps names and emails exactly as they were committed so that it
can be re-read under different normalisation rules.  Columns are
``repo,name,email,hash,time`` with ``time`` as an RFC 3339 timestamp.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd
import structlog

from authorlens.errors import DataAccessError
from authorlens.identity.models import Signature
from authorlens.identity.normalize import normalize_signature

logger = structlog.get_logger(__name__)

CACHE_COLUMNS: list[str] = ["repo", "name", "email", "hash", "time"]


def format_rfc3339(ts: datetime) -> str:
    """Format *ts* as RFC 3339, using ``Z`` for UTC.  Naive values are taken as UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    text = ts.isoformat()
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def parse_rfc3339(text: str) -> datetime:
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    ts = datetime.fromisoformat(text)
    if ts.tzinfo is None:
        msg = f"Timestamp {text!r} has no UTC offset"
        raise ValueError(msg)
    return ts


def store_signatures_on_disk(path: Path, signatures: Iterable[Signature]) -> None:
    """Write *signatures* to *path* in order, names and emails verbatim."""
    path = Path(path)
    df = pd.DataFrame(
        [
            (sig.repo, sig.name, sig.email, sig.hash, format_rfc3339(sig.time))
            for sig in signatures
        ],
        columns=CACHE_COLUMNS,
    )
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False, lineterminator="\n")
    except OSError as exc:
        msg = f"Cannot write signature cache {path}: {exc}"
        raise DataAccessError(msg) from exc
    logger.info("signatures_cached", path=str(path), count=len(df))


def read_raw_signatures_from_disk(path: Path) -> list[Signature]:
    """Read the cache at *path*, keeping names and emails as committed.

    Raises:
        DataAccessError: The file cannot be read or is not a signature cache.
    """
    path = Path(path)
    try:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        msg = f"Cannot read signature cache {path}: {exc}"
        raise DataAccessError(msg) from exc

    if list(df.columns) != CACHE_COLUMNS:
        msg = f"Signature cache {path} has columns {list(df.columns)}, expected {CACHE_COLUMNS}"
        raise DataAccessError(msg)

    signatures: list[Signature] = []
    for row in df.itertuples(index=False):
        try:
            ts = parse_rfc3339(row.time)
        except ValueError as exc:
            msg = f"Bad timestamp {row.time!r} in signature cache {path}"
            raise DataAccessError(msg) from exc
        signatures.append(
            Signature(repo=row.repo, name=row.name, email=row.email, hash=row.hash, time=ts)
        )

    logger.info("signatures_read_from_cache", path=str(path), count=len(signatures))
    return signatures


def read_signatures_from_disk(path: Path) -> list[Signature]:
    """Read the cache at *path*, normalising names and emails.

    Raises:
        DataAccessError: The file cannot be read or is not a signature cache.
        ValidationError: A cached name is unusable after normalisation.
    """
    return [normalize_signature(sig) for sig in read_raw_signatures_from_disk(path)]
