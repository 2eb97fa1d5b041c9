"""Recent vs. all-time usage counts of normalised names and emails.

These counts are the confidence signals a matching policy uses to decide
whether two persons sharing a name or an email are really the same person.
A rare name is better evidence than a common one, and a name that is still
in active use is better evidence than one last seen years ago.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from datetime import datetime, timezone

import pandas as pd

from authorlens.identity.models import Frequency, Signature
from authorlens.identity.normalize import clean_name, normalize_email


def _as_utc(ts: datetime) -> datetime:
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts


def recent_cutoff(months: int, now: datetime | None = None) -> datetime:
    """Return the timezone-aware start of the recent window, *months* before *now*."""
    now = datetime.now(timezone.utc) if now is None else _as_utc(now)
    return (pd.Timestamp(now) - pd.DateOffset(months=months)).to_pydatetime()


def count_freqs(
    signatures: Iterable[Signature],
    key: Callable[[Signature], str],
    normalize: Callable[[str], str],
    cutoff: datetime,
) -> dict[str, Frequency]:
    """Count how often each normalised key occurs, overall and since *cutoff*.

    Naive timestamps are taken as UTC.

    Raises:
        ValidationError: Propagated from *normalize*.
    """
    cutoff = _as_utc(cutoff)
    freqs: dict[str, Frequency] = {}
    for sig in signatures:
        value = normalize(key(sig))
        freq = freqs.get(value)
        if freq is None:
            freq = freqs[value] = Frequency()
        freq.total += 1
        if _as_utc(sig.time) >= cutoff:
            freq.recent += 1
    return freqs


def get_stats(
    signatures: Iterable[Signature],
    cutoff: datetime,
) -> tuple[dict[str, Frequency], dict[str, Frequency]]:
    """Return ``(name_freqs, email_freqs)`` over all *signatures*.

    Blacklisted signatures are counted too: the statistics describe raw
    usage, not accepted evidence.
    """
    signatures = list(signatures)
    name_freqs = count_freqs(signatures, lambda s: s.name, clean_name, cutoff)
    email_freqs = count_freqs(signatures, lambda s: s.email, normalize_email, cutoff)
    return name_freqs, email_freqs
