"""Exclusion rules for signatures that carry no usable identity signal.

Two independent checks decide whether a signature may serve as identity
evidence: membership in the configured exclusion lists (generic, bot and
shared accounts) and structural validity of the email address.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path

import structlog

from authorlens.identity.normalize import clean_name, normalize_email

logger = structlog.get_logger(__name__)

_NAMES_FILE = "names.txt"
_EMAILS_FILE = "emails.txt"
_DOMAINS_FILE = "domains.txt"


def is_valid_email(email: str) -> bool:
    """Return True when *email* looks like ``local@domain.tld``.

    Addresses without an ``@``, with an empty local part, or whose domain has
    no dot-separated labels are rejected.
    """
    local, sep, domain = email.rpartition("@")
    if not sep or not local:
        return False
    labels = domain.split(".")
    return len(labels) >= 2 and all(labels)


def _parse_entries(text: str) -> list[str]:
    entries = []
    for line in text.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            entries.append(line)
    return entries


def _normalize_names(entries: list[str]) -> frozenset[str]:
    return frozenset(clean_name(e) for e in entries)


def _normalize_emails(entries: list[str]) -> frozenset[str]:
    return frozenset(normalize_email(e) for e in entries)


@dataclass(frozen=True)
class Blacklist:
    """Names, emails and email domains excluded from identity matching.

    All entries are stored normalised, so lookups compare against the
    output of :func:`clean_name` / :func:`normalize_email`.
    """

    names: frozenset[str] = field(default_factory=frozenset)
    emails: frozenset[str] = field(default_factory=frozenset)
    domains: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def from_entries(
        cls,
        names: list[str] | None = None,
        emails: list[str] | None = None,
        domains: list[str] | None = None,
    ) -> Blacklist:
        return cls(
            names=_normalize_names(names or []),
            emails=_normalize_emails(emails or []),
            domains=_normalize_emails(domains or []),
        )

    @classmethod
    def from_directory(cls, path: Path) -> Blacklist:
        """Load ``names.txt``, ``emails.txt`` and ``domains.txt`` from *path*.

        Each file holds one entry per line; blank lines and ``#`` comments
        are ignored.  A missing file yields an empty list.
        """
        path = Path(path)

        def read(filename: str) -> list[str]:
            file = path / filename
            if not file.exists():
                return []
            return _parse_entries(file.read_text(encoding="utf-8"))

        blacklist = cls.from_entries(
            names=read(_NAMES_FILE),
            emails=read(_EMAILS_FILE),
            domains=read(_DOMAINS_FILE),
        )
        logger.info(
            "blacklist_loaded",
            path=str(path),
            names=len(blacklist.names),
            emails=len(blacklist.emails),
            domains=len(blacklist.domains),
        )
        return blacklist

    @classmethod
    def default(cls) -> Blacklist:
        """Return the exclusion lists bundled with the package."""
        package = resources.files("authorlens.identity") / "blacklists"

        def read(filename: str) -> list[str]:
            return _parse_entries((package / filename).read_text(encoding="utf-8"))

        return cls.from_entries(
            names=read(_NAMES_FILE),
            emails=read(_EMAILS_FILE),
            domains=read(_DOMAINS_FILE),
        )

    def is_name_blacklisted(self, name: str) -> bool:
        return name in self.names

    def is_email_blacklisted(self, email: str) -> bool:
        """Check the address itself, then its domain and every parent domain."""
        if email in self.emails:
            return True
        domain = email.rpartition("@")[2]
        labels = domain.split(".")
        return any(".".join(labels[i:]) in self.domains for i in range(len(labels)))

    def accepts_name(self, name: str) -> bool:
        if self.is_name_blacklisted(name):
            logger.debug("signature_rejected", reason="blacklisted_name", name=name)
            return False
        return True

    def accepts_email(self, email: str) -> bool:
        # Malformed addresses are rejected whether or not they are listed.
        if not is_valid_email(email):
            logger.debug("signature_rejected", reason="invalid_email", email=email)
            return False
        if self.is_email_blacklisted(email):
            logger.debug("signature_rejected", reason="blacklisted_email", email=email)
            return False
        return True

    def accepts(self, name: str, email: str) -> bool:
        """Return True if a signature with this normalised name and email is usable."""
        return self.accepts_name(name) and self.accepts_email(email)
