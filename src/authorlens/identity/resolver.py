"""Identity resolution orchestrator.

Loads commit signatures (from the on-disk cache when present, otherwise from
the commit database), builds the people registry and computes the name and
email frequency statistics a matching policy needs.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import structlog

from authorlens.identity.blacklist import Blacklist
from authorlens.identity.frequency import get_stats, recent_cutoff
from authorlens.identity.models import Frequency, Signature
from authorlens.identity.normalize import normalize_signature
from authorlens.identity.people import People, new_people
from authorlens.pipelines.commit_signatures import fetch_raw_signatures
from authorlens.storage.signature_cache import (
    read_raw_signatures_from_disk,
    store_signatures_on_disk,
)

logger = structlog.get_logger(__name__)


def find_raw_signatures(
    conninfo: str,
    cache_path: Path,
    *,
    hash_file: Path | None = None,
    timeout: float | None = None,
) -> list[Signature]:
    """Return signatures as committed, reading *cache_path* if it exists.

    On a cache miss the signatures are fetched from the database and written
    to *cache_path* before being returned.
    """
    cache_path = Path(cache_path)
    if cache_path.exists():
        logger.info("signature_cache_hit", path=str(cache_path))
        return read_raw_signatures_from_disk(cache_path)

    logger.info("signature_cache_miss", path=str(cache_path))
    raw = fetch_raw_signatures(conninfo, hash_file, timeout=timeout)
    store_signatures_on_disk(cache_path, raw)
    return raw


def find_signatures(
    conninfo: str,
    cache_path: Path,
    *,
    hash_file: Path | None = None,
    timeout: float | None = None,
) -> list[Signature]:
    """Like :func:`find_raw_signatures`, with names and emails normalised."""
    raw = find_raw_signatures(conninfo, cache_path, hash_file=hash_file, timeout=timeout)
    return [normalize_signature(sig) for sig in raw]


def resolve_people(
    conninfo: str,
    cache_path: Path,
    blacklist: Blacklist,
    recent_months: int,
    *,
    hash_file: Path | None = None,
    timeout: float | None = None,
    now: datetime | None = None,
) -> tuple[People, dict[str, Frequency], dict[str, Frequency]]:
    """Build the people registry and frequency statistics for all signatures.

    Signatures at or after ``now - recent_months`` count as recent.

    Returns
    -------
    tuple
        ``(people, name_freqs, email_freqs)``
    """
    # Raw values: new_people and get_stats each normalise exactly once.
    signatures = find_raw_signatures(
        conninfo, cache_path, hash_file=hash_file, timeout=timeout
    )
    people = new_people(signatures, blacklist)
    cutoff = recent_cutoff(recent_months, now)
    name_freqs, email_freqs = get_stats(signatures, cutoff)
    logger.info(
        "people_resolved",
        signatures=len(signatures),
        people=len(people),
        names=len(name_freqs),
        emails=len(email_freqs),
        cutoff=cutoff.isoformat(),
    )
    return people, name_freqs, email_freqs
