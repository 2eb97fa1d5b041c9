"""Value types shared by ingestion, the people registry and persistence."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import NamedTuple


@dataclass(frozen=True)
class Signature:
    """A single (name, email) observation taken from one commit."""

    repo: str
    name: str
    email: str
    hash: str
    time: datetime


class NameWithRepo(NamedTuple):
    """A normalized name, optionally scoped to the repository it was seen in."""

    name: str
    repo: str = ""


class Commit(NamedTuple):
    hash: str
    repo: str


@dataclass
class Frequency:
    """Usage counts of a normalized name or email.

    ``recent`` counts only the occurrences at or after the recency cutoff, so
    it never exceeds ``total``.
    """

    recent: int = 0
    total: int = 0


@dataclass
class Person:
    """A canonical identity aggregating one or more signatures."""

    id: int
    names_with_repos: list[NameWithRepo] = field(default_factory=list)
    emails: list[str] = field(default_factory=list)
    sample_commit: Commit | None = None
    external_id: str = ""
