"""Shared fixtures for identity resolution tests."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from authorlens.identity.blacklist import Blacklist
from authorlens.identity.models import Signature

NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)


def _months_ago(year: int, month: int) -> datetime:
    return datetime(year, month, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def signatures() -> list[Signature]:
    """Six raw signatures spanning 2 to 20 months before ``NOW``.

    Four are usable: three by Bob (two from repo1, one from repo2) and one by
    Alice.  ``eee`` has a malformed email and ``fff`` a blacklisted name.
    """
    return [
        Signature("repo1", "Bob", "Bob@google.com", "aaa", _months_ago(2023, 12)),
        Signature("repo2", "Bob", "Bob@google.com", "bbb", _months_ago(2022, 12)),
        Signature("repo1", "Alice", "alice@google.com", "ccc", _months_ago(2023, 3)),
        Signature("repo1", "Bob", "Bob@google.com", "ddd", _months_ago(2024, 4)),
        Signature("repo1", "Bob", "bad-email@domen", "eee", _months_ago(2022, 10)),
        Signature("repo1", "admin", "someone@google.com", "fff", _months_ago(2024, 2)),
    ]


@pytest.fixture()
def blacklist() -> Blacklist:
    return Blacklist.from_entries(names=["admin"])
