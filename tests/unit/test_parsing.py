"""Tests for CLI input parsing."""

import pytest

from relmap.cli.parsing import parse_assignment, parse_assignments, parse_entity_id


class TestParseAssignment:
    """Test key=value parsing."""

    def test_json_values_keep_their_type(self):
        """Numbers, booleans, null and lists are decoded."""
        assert parse_assignment("clientId=2") == ("clientId", 2)
        assert parse_assignment("active=true") == ("active", True)
        assert parse_assignment("notes=null") == ("notes", None)
        assert parse_assignment('tags=["a","b"]') == ("tags", ["a", "b"])

    def test_plain_strings(self):
        """Values that are not JSON stay strings."""
        assert parse_assignment("status=paid") == ("status", "paid")
        assert parse_assignment("name=") == ("name", "")

    def test_value_may_contain_equals(self):
        """Only the first '=' separates key and value."""
        assert parse_assignment("filter=a=b") == ("filter", "a=b")

    def test_key_is_stripped(self):
        """Whitespace around the key is ignored."""
        assert parse_assignment(" amount =10") == ("amount", 10)

    def test_missing_equals(self):
        """Assignments need a separator."""
        with pytest.raises(ValueError, match="Expected format"):
            parse_assignment("clientId")

    def test_empty_key(self):
        """Assignments need a key."""
        with pytest.raises(ValueError, match="Key must not be empty"):
            parse_assignment("=5")


class TestParseAssignments:
    """Test repeated assignment options."""

    def test_builds_updates_dict(self):
        """Each option becomes one entry; later keys win."""
        assert parse_assignments(["id=2", "status=paid", "id=3"]) == {"id": 3, "status": "paid"}

    def test_none_is_empty(self):
        """No options gives no updates."""
        assert parse_assignments(None) == {}


class TestParseEntityId:
    """Test entity ID parsing."""

    def test_numeric(self):
        """Digits become integers."""
        assert parse_entity_id("42") == 42

    def test_non_numeric(self):
        """Anything else is kept as a string."""
        assert parse_entity_id("u-42") == "u-42"

    def test_non_canonical_digits_stay_strings(self):
        """Leading zeros, underscores, signs and spaces are kept verbatim."""
        assert parse_entity_id("007") == "007"
        assert parse_entity_id("1_000") == "1_000"
        assert parse_entity_id("-3") == "-3"
        assert parse_entity_id(" 5") == " 5"
        assert parse_entity_id("²") == "²"

    def test_zero(self):
        """A lone zero is canonical."""
        assert parse_entity_id("0") == 0
