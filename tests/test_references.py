"""Tests for the secret reference syntax."""

import pytest
from pydantic import ValidationError

from secretref.errors import SecretFormatError
from secretref.references import (
    SecretReference,
    find_references,
    is_secret_reference,
    parse_reference,
)


class TestReferenceDetection:
    """Test reference detection functions."""

    def test_is_secret_reference(self):
        assert is_secret_reference("secret:acme/db-pass")
        assert is_secret_reference("secret:")
        assert is_secret_reference("secret:not valid at all")

        assert not is_secret_reference("plain string")
        assert not is_secret_reference("Secret:acme/db-pass")
        assert not is_secret_reference(" secret:acme/db-pass")
        assert not is_secret_reference(123)
        assert not is_secret_reference(None)
        assert not is_secret_reference(["secret:acme/db-pass"])

    @pytest.mark.parametrize(
        "text",
        ["", "plain", "db.internal:5432", "SECRET:acme/db-pass", "vault://secret/db#password"],
    )
    def test_text_without_prefix_is_not_a_reference(self, text):
        assert parse_reference(text) is None


class TestParseReference:
    """Test parsing of well-formed references."""

    def test_parse_simple_reference(self):
        reference = parse_reference("secret:acme/db-pass")

        assert reference == SecretReference(vault="acme", key="db-pass")
        assert reference.vault == "acme"
        assert reference.key == "db-pass"

    def test_text_round_trips(self):
        reference = parse_reference("secret:Team-1/Api-Key-2")

        assert reference.text == "secret:Team-1/Api-Key-2"
        assert str(reference) == "secret:Team-1/Api-Key-2"

    def test_maximum_lengths_are_accepted(self):
        vault = "v" * 24
        key = "k" * 127

        reference = parse_reference(f"secret:{vault}/{key}")

        assert reference.vault == vault
        assert reference.key == key

    def test_reference_is_immutable(self):
        reference = parse_reference("secret:acme/db-pass")

        with pytest.raises(ValidationError):
            reference.vault = "other"


class TestMalformedReferences:
    """Test that malformed references are rejected without echoing them."""

    @pytest.mark.parametrize(
        "text, reason",
        [
            ("secret:", "exactly one '/'"),
            ("secret:acme", "exactly one '/'"),
            ("secret:acme/db/pass", "exactly one '/'"),
            ("secret:/db-pass", "vault segment is empty"),
            ("secret:acme/", "key segment is empty"),
            ("secret:" + "v" * 25 + "/db-pass", "vault segment exceeds 24 characters"),
            ("secret:acme/" + "k" * 128, "key segment exceeds 127 characters"),
            ("secret:ac_me/db-pass", "vault segment may only contain"),
            ("secret:acme/db_pass", "key segment may only contain"),
            ("secret:acme/db pass", "key segment may only contain"),
            ("secret:acme/db.pass", "key segment may only contain"),
            ("secret:acme/db-pass\n", "key segment may only contain"),
            ("secret:acme/dé-pass", "key segment may only contain"),
        ],
    )
    def test_malformed_reference_raises(self, text, reason):
        with pytest.raises(SecretFormatError) as exc_info:
            parse_reference(text)

        assert reason in exc_info.value.reason
        assert "proper 'vault/key' format" in str(exc_info.value)

    def test_error_does_not_contain_the_text(self):
        leaked = "secret:hunter2-my-actual-password"

        with pytest.raises(SecretFormatError) as exc_info:
            parse_reference(leaked)

        assert "hunter2" not in str(exc_info.value)
        assert "hunter2" not in repr(exc_info.value)

    def test_error_does_not_reveal_segment_length(self):
        with pytest.raises(SecretFormatError) as exc_info:
            parse_reference("secret:acme/" + "k" * 200)

        assert "200" not in str(exc_info.value)
        assert exc_info.value.reason == "key segment exceeds 127 characters"

    def test_format_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_reference("secret:nope")


class TestFindReferences:
    """Test locating references in configuration trees."""

    def test_find_references_in_nested_config(self):
        config = {
            "database": {
                "host": "db.internal",
                "password": "secret:acme/db-pass",
            },
            "apis": [
                {"name": "billing", "token": "secret:acme/billing-token"},
                "secret:broken",
            ],
            "port": 5432,
            "debug": None,
        }

        refs = find_references(config)

        assert refs == [
            (["database", "password"], "secret:acme/db-pass"),
            (["apis", 0, "token"], "secret:acme/billing-token"),
            (["apis", 1], "secret:broken"),
        ]

    def test_find_references_without_any(self):
        assert find_references({"a": "b", "c": [1, 2, "d"]}) == []

    def test_find_references_on_a_scalar(self):
        assert find_references("secret:acme/db-pass") == [([], "secret:acme/db-pass")]
