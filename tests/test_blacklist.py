"""Tests for the blacklist and email validity checks."""

from __future__ import annotations

import pytest

from authorlens.identity.blacklist import Blacklist, is_valid_email

# =========================================================================
# is_valid_email
# =========================================================================


class TestIsValidEmail:
    @pytest.mark.parametrize(
        "email",
        ["bob@google.com", "a.b+tag@mail.example.co.uk", "123+bob@users.noreply.github.com"],
    )
    def test_valid(self, email):
        assert is_valid_email(email)

    @pytest.mark.parametrize(
        "email",
        ["bad-email@domen", "no-at-sign.com", "@google.com", "bob@", "bob@.com", "bob@google."],
    )
    def test_invalid(self, email):
        assert not is_valid_email(email)


# =========================================================================
# Blacklist checks
# =========================================================================


class TestBlacklist:
    def test_name_membership(self):
        bl = Blacklist.from_entries(names=["Admin", "  Build  Bot "])
        assert bl.is_name_blacklisted("admin")
        assert bl.is_name_blacklisted("build bot")
        assert not bl.is_name_blacklisted("bob")

    def test_email_membership(self):
        bl = Blacklist.from_entries(emails=["NoReply@GitHub.com"])
        assert bl.is_email_blacklisted("noreply@github.com")
        assert not bl.is_email_blacklisted("bob@github.com")

    def test_domain_and_subdomain_membership(self):
        bl = Blacklist.from_entries(domains=["example.com"])
        assert bl.is_email_blacklisted("bob@example.com")
        assert bl.is_email_blacklisted("bob@mail.example.com")
        assert not bl.is_email_blacklisted("bob@notexample.com")

    def test_accepts_clean_signature(self, blacklist):
        assert blacklist.accepts("bob", "bob@google.com")

    def test_rejects_blacklisted_name_with_good_email(self, blacklist):
        assert not blacklist.accepts("admin", "someone@google.com")

    def test_rejects_invalid_email_without_blacklist_entry(self):
        assert not Blacklist().accepts("bob", "bad-email@domen")

    def test_capabilities_are_independent(self, blacklist):
        assert not blacklist.accepts_name("admin")
        assert blacklist.accepts_email("someone@google.com")
        assert blacklist.accepts_name("bob")
        assert not blacklist.accepts_email("bad-email@domen")


# =========================================================================
# Loading
# =========================================================================


class TestBlacklistLoading:
    def test_from_directory(self, tmp_path):
        (tmp_path / "names.txt").write_text("# bots\nJenkins\n\nroot  # shared\n")
        (tmp_path / "domains.txt").write_text("localhost.localdomain\n")

        bl = Blacklist.from_directory(tmp_path)

        assert bl.names == frozenset({"jenkins", "root"})
        assert bl.emails == frozenset()
        assert bl.domains == frozenset({"localhost.localdomain"})

    def test_default_lists(self):
        bl = Blacklist.default()
        assert bl.is_name_blacklisted("admin")
        assert bl.is_email_blacklisted("noreply@github.com")
        assert bl.accepts("alice", "alice@google.com")
