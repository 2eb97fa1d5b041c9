"""People registry: one canonical Person per accepted signature, plus merging.

Building the registry never deduplicates.  Signatures sharing an identical
normalised name and email still become separate persons, and a matching
policy decides afterwards which of them to fuse with :meth:`People.merge`.
"""

from __future__ import annotations

import copy
import threading
from collections.abc import Callable, Iterable, Iterator, Mapping

import structlog

from authorlens.errors import ConflictingExternalIdentityError, PersonNotFoundError
from authorlens.identity.blacklist import Blacklist
from authorlens.identity.models import Commit, NameWithRepo, Person, Signature
from authorlens.identity.normalize import clean_name, normalize_email

logger = structlog.get_logger(__name__)


class People(Mapping[int, Person]):
    """Live persons keyed by ID, iterated in ascending ID order.

    Mutations (:meth:`merge`, :meth:`set_external_id`) hold a per-registry
    lock, so concurrent callers are serialised.
    """

    def __init__(self, persons: Iterable[Person] = ()) -> None:
        self._persons: dict[int, Person] = {}
        self._lock = threading.Lock()
        for person in persons:
            if person.id in self._persons:
                msg = f"Duplicate person ID: {person.id}"
                raise ValueError(msg)
            self._persons[person.id] = person

    # ------------------------------------------------------------------
    # Mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, person_id: int) -> Person:
        return self._persons[person_id]

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._persons))

    def __len__(self) -> int:
        return len(self._persons)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, People):
            return self._persons == other._persons
        if isinstance(other, Mapping):
            return self._persons == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"People({[self._persons[k] for k in self]!r})"

    def __deepcopy__(self, memo: dict) -> People:
        return People(copy.deepcopy(list(self._persons.values()), memo))

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def for_each(self, visit: Callable[[int, Person], bool | None]) -> None:
        """Call ``visit(id, person)`` for every live person in ascending ID order.

        The set of persons is snapshotted before the first call, so merges made
        from inside *visit* do not change which persons are visited.  A truthy
        return value from *visit* stops the traversal.
        """
        snapshot = [(person_id, self._persons[person_id]) for person_id in self]
        for person_id, person in snapshot:
            if visit(person_id, person):
                break

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def merge(self, *ids: int) -> int:
        """Fuse two or more live persons into the one with the smallest ID.

        Names and emails become the sorted, duplicate-free union of all
        inputs.  The survivor keeps the external ID if exactly one distinct
        non-empty ID is present, and loses its sample commit.  The other
        persons are removed.

        Returns
        -------
        int
            The surviving person ID.

        Raises
        ------
        PersonNotFoundError
            Any ID is not live.  The registry is left unchanged.
        ValueError
            Fewer than two distinct live IDs were given.
        ConflictingExternalIdentityError
            The persons are bound to different external IDs.  The registry
            is left unchanged.
        """
        unique_ids = sorted(set(ids))
        with self._lock:
            for person_id in unique_ids:
                if person_id not in self._persons:
                    raise PersonNotFoundError(person_id)
            if len(unique_ids) < 2:
                msg = f"Merge needs at least two distinct person IDs, got {list(ids)}"
                raise ValueError(msg)

            persons = [self._persons[person_id] for person_id in unique_ids]
            external_ids = sorted({p.external_id for p in persons if p.external_id})
            if len(external_ids) > 1:
                raise ConflictingExternalIdentityError(unique_ids, external_ids)

            names: set[NameWithRepo] = set()
            emails: set[str] = set()
            for person in persons:
                names.update(person.names_with_repos)
                emails.update(person.emails)

            survivor_id = unique_ids[0]
            self._persons[survivor_id] = Person(
                id=survivor_id,
                names_with_repos=sorted(names),
                emails=sorted(emails),
                sample_commit=None,
                external_id=external_ids[0] if external_ids else "",
            )
            for person_id in unique_ids[1:]:
                del self._persons[person_id]

        logger.debug("people_merged", survivor=survivor_id, merged=unique_ids[1:])
        return survivor_id

    def set_external_id(self, person_id: int, external_id: str) -> None:
        """Bind an identity-provider ID, issued elsewhere, to a live person."""
        with self._lock:
            if person_id not in self._persons:
                raise PersonNotFoundError(person_id)
            self._persons[person_id].external_id = external_id


def new_people(signatures: Iterable[Signature], blacklist: Blacklist) -> People:
    """Create one person per signature accepted by *blacklist*.

    IDs are assigned 1, 2, 3, ... in signature order, counting accepted
    signatures only.

    Raises:
        ValidationError: If an accepted signature's name is unusable.  No
            registry is returned in that case.
    """
    persons: list[Person] = []
    rejected = 0
    next_id = 0
    for sig in signatures:
        email = normalize_email(sig.email)
        if not blacklist.accepts_email(email):
            rejected += 1
            continue
        name = clean_name(sig.name)
        if not blacklist.accepts_name(name):
            rejected += 1
            continue
        next_id += 1
        persons.append(
            Person(
                id=next_id,
                names_with_repos=[NameWithRepo(name, "")],
                emails=[email],
                sample_commit=Commit(sig.hash, sig.repo),
            )
        )

    logger.info("people_created", people=len(persons), rejected=rejected)
    return People(persons)
