"""Tests for name and email normalisation."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from authorlens.errors import ValidationError
from authorlens.identity.models import Signature
from authorlens.identity.normalize import (
    clean_name,
    normalize_email,
    normalize_signature,
    normalize_spaces,
    remove_parens,
)

# =========================================================================
# normalize_spaces
# =========================================================================


class TestNormalizeSpaces:
    def test_single_space_untouched(self):
        assert normalize_spaces("1 2") == "1 2"

    def test_collapses_mixed_whitespace(self):
        assert normalize_spaces("1  \t  2 \n\n") == "1 2"

    def test_no_whitespace(self):
        assert normalize_spaces("12") == "12"


# =========================================================================
# remove_parens
# =========================================================================


class TestRemoveParens:
    def test_removes_standalone_group(self):
        assert remove_parens("something (delete it) something2") == "something something2"

    def test_keeps_empty_parens(self):
        assert remove_parens("something () something2") == "something () something2"

    def test_adjacent_groups_do_not_overlap(self):
        assert remove_parens("something (1) (2) something2") == "something (2) something2"

    def test_keeps_glued_parens(self):
        assert remove_parens("something(nospace)something2") == "something(nospace)something2"

    def test_group_at_string_edges(self):
        assert remove_parens("(work) John Doe") == "John Doe"
        assert remove_parens("John Doe (work)") == "John Doe"


# =========================================================================
# clean_name
# =========================================================================


class TestCleanName:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("  name", "name"),
            ("name  \tname  ", "name name"),
            ("name  \tname\nsurname", "name name surname"),
            ("name\u3000name", "name name"),
            ("John DOE (Work)", "john doe"),
        ],
    )
    def test_normalises(self, raw, expected):
        assert clean_name(raw) == expected

    def test_empty_name_raises(self):
        with pytest.raises(ValidationError):
            clean_name("   \t ")

    def test_name_of_only_a_remark_raises(self):
        with pytest.raises(ValidationError):
            clean_name(" (bot) ")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            clean_name("")


# =========================================================================
# normalize_email / normalize_signature
# =========================================================================


class TestNormalizeEmail:
    def test_lowercases(self):
        assert normalize_email("Bob@Google.COM") == "bob@google.com"

    def test_does_not_strip(self):
        assert normalize_email(" bob@x.com") == " bob@x.com"


class TestNormalizeSignature:
    def test_normalises_name_and_email_only(self):
        ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
        sig = Signature("repo1", " Bob  Bob ", "Bob@x.com", "h1", ts)
        assert normalize_signature(sig) == Signature("repo1", "bob bob", "bob@x.com", "h1", ts)
