"""Resolution of commit author signatures into canonical person identities."""

from __future__ import annotations

from authorlens.identity.blacklist import Blacklist, is_valid_email
from authorlens.identity.frequency import count_freqs, get_stats, recent_cutoff
from authorlens.identity.matching import MatchingPolicy, apply_matching_policy
from authorlens.identity.models import Commit, Frequency, NameWithRepo, Person, Signature
from authorlens.identity.normalize import (
    clean_name,
    normalize_email,
    normalize_signature,
    normalize_spaces,
    remove_parens,
)
from authorlens.identity.people import People, new_people

__all__ = [
    "Blacklist",
    "Commit",
    "Frequency",
    "MatchingPolicy",
    "NameWithRepo",
    "People",
    "Person",
    "Signature",
    "apply_matching_policy",
    "clean_name",
    "count_freqs",
    "get_stats",
    "is_valid_email",
    "new_people",
    "normalize_email",
    "normalize_signature",
    "normalize_spaces",
    "recent_cutoff",
    "remove_parens",
]
