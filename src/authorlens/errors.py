"""Exception hierarchy for identity resolution."""

from __future__ import annotations


class IdentityMatchingError(Exception):
    """Base class for all identity resolution failures."""


class ValidationError(IdentityMatchingError, ValueError):
    """A raw name cannot be turned into a usable identity key."""


class PersonNotFoundError(IdentityMatchingError, KeyError):
    """An operation referenced a person ID that is not live in the registry."""

    def __init__(self, person_id: int) -> None:
        super().__init__(person_id)
        self.person_id = person_id

    def __str__(self) -> str:
        return f"person {self.person_id} does not exist"


class ConflictingExternalIdentityError(IdentityMatchingError):
    """A merge would fuse persons bound to different external identities."""

    def __init__(self, person_ids: list[int], external_ids: list[str]) -> None:
        self.person_ids = person_ids
        self.external_ids = external_ids
        super().__init__(
            f"cannot merge persons {person_ids}: "
            f"distinct external IDs {external_ids}"
        )


class DataAccessError(IdentityMatchingError, OSError):
    """A cache file, people file or the commit database could not be accessed."""


class SchemaError(IdentityMatchingError, ValueError):
    """A stored people table does not have the expected columns or types."""
