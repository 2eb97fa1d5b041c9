"""Seam for plugging a matching policy into the people registry.

A policy looks at the registry and both frequency maps and proposes groups
of person IDs that belong to the same human.  This module only applies the
proposals; deciding them is left to the policy.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

import structlog

from authorlens.errors import ConflictingExternalIdentityError
from authorlens.identity.models import Frequency
from authorlens.identity.people import People

logger = structlog.get_logger(__name__)


class MatchingPolicy(Protocol):
    def propose_merges(
        self,
        people: People,
        name_freqs: dict[str, Frequency],
        email_freqs: dict[str, Frequency],
    ) -> Iterable[Sequence[int]]: ...


def apply_matching_policy(
    people: People,
    name_freqs: dict[str, Frequency],
    email_freqs: dict[str, Frequency],
    policy: MatchingPolicy,
) -> dict[str, int]:
    """Merge every group of person IDs proposed by *policy*.

    Groups may name persons that an earlier group already merged away; such
    IDs are followed to their surviving person.  Groups that end up naming a
    single person are skipped, and groups whose persons carry different
    external IDs are left unmerged.

    Returns
    -------
    dict
        ``{"proposed": int, "merged": int, "conflicts": int, "skipped": int}``
    """
    survivors: dict[int, int] = {}

    def resolve(person_id: int) -> int:
        while person_id in survivors:
            person_id = survivors[person_id]
        return person_id

    proposed = 0
    merged = 0
    conflicts = 0
    skipped = 0

    for group in policy.propose_merges(people, name_freqs, email_freqs):
        proposed += 1
        ids = sorted({resolve(person_id) for person_id in group})
        if len(ids) < 2:
            skipped += 1
            continue
        try:
            survivor = people.merge(*ids)
        except ConflictingExternalIdentityError as exc:
            logger.warning(
                "merge_rejected",
                person_ids=exc.person_ids,
                external_ids=exc.external_ids,
            )
            conflicts += 1
            continue
        for person_id in ids:
            if person_id != survivor:
                survivors[person_id] = survivor
        merged += 1

    stats = {"proposed": proposed, "merged": merged, "conflicts": conflicts, "skipped": skipped}
    logger.info("matching_policy_applied", people=len(people), **stats)
    return stats
