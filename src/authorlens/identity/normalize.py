"""Canonicalisation of raw commit author names and emails.

Names are lower-cased, whitespace is collapsed (any Unicode space counts),
and standalone parenthesised remarks such as ``"John Doe (work)"`` are
dropped.  Emails are only lower-cased.
"""

from __future__ import annotations

import re
from dataclasses import replace

from authorlens.errors import ValidationError
from authorlens.identity.models import Signature

# A non-empty (...) group with whitespace or a string edge on both sides.
# The trailing whitespace is consumed so matches never overlap.
_PARENS_PATTERN = re.compile(r"(?:^|\s+)\([^()]+\)(?:\s+|$)")


def normalize_spaces(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim both ends."""
    return " ".join(text.split())


def remove_parens(text: str) -> str:
    """Remove parenthesised groups that stand apart from the surrounding words.

    ``"something (delete it) something2"`` becomes ``"something something2"``;
    empty parens and parens glued to a word are kept as they are.
    """
    return _PARENS_PATTERN.sub(" ", text).strip()


def clean_name(name: str) -> str:
    """Normalise a commit author name for identity matching.

    Raises:
        ValidationError: If nothing usable remains after normalisation.
    """
    text = normalize_spaces(name)
    text = remove_parens(text)
    text = normalize_spaces(text).lower()
    if not text:
        msg = f"Name {name!r} is empty after normalization"
        raise ValidationError(msg)
    return text


def normalize_email(email: str) -> str:
    return email.lower()


def normalize_signature(sig: Signature) -> Signature:
    """Return a copy of *sig* with its name and email normalised."""
    return replace(sig, name=clean_name(sig.name), email=normalize_email(sig.email))
