import pytest

from ingestion.errors import FormatError
from ingestion.ids import CounterAllocator
from ingestion.rules import import_csv, import_json, ingest, item_to_rule, mappings_to_rules


class TestItemToRule:
    """Tests for item_to_rule function."""

    def test_full_item(self):
        """Test converting a complete rule mapping."""
        item = {
            "id": "r1",
            "pattern": "NETFLIX",
            "category": "Entertainment",
            "matchType": "startsWith",
            "caseSensitive": "true",
            "priority": "3",
        }

        rule = item_to_rule(item, 1, CounterAllocator())

        assert rule.id == "r1"
        assert rule.match_type == "startsWith"
        assert rule.case_sensitive is True
        assert rule.priority == 3

    def test_defaults(self):
        """Test defaults for a minimal rule."""
        rule = item_to_rule({"pattern": "uber", "category": "Transportation"}, 4, CounterAllocator())

        assert rule.id == "1"
        assert rule.match_type == "contains"
        assert rule.case_sensitive is False
        assert rule.priority == 4

    def test_legacy_match_type_aliases(self):
        """Test that 'starts' and 'ends' map to the current names."""
        assert item_to_rule({"matchType": "starts"}, 1).match_type == "startsWith"
        assert item_to_rule({"matchType": "ends"}, 1).match_type == "endsWith"

    def test_match_type_ignores_case(self):
        """Test that match types are recognised in any letter case."""
        assert item_to_rule({"matchType": "StartsWith"}, 1).match_type == "startsWith"
        assert item_to_rule({"matchType": "EXACT"}, 1).match_type == "exact"
        assert item_to_rule({"matchType": " endswith "}, 1).match_type == "endsWith"
        assert item_to_rule({"matchType": "Starts"}, 1).match_type == "startsWith"

    def test_unknown_match_type_is_contains(self):
        """Test that an unknown match type falls back to contains."""
        assert item_to_rule({"matchType": "regex"}, 1).match_type == "contains"

    def test_unparsable_priority_uses_position(self):
        """Test that a bad priority falls back to the 1-based position."""
        skipped = []

        rule = item_to_rule({"pattern": "x", "priority": "high"}, 7, CounterAllocator(), skipped)

        assert rule.priority == 7
        assert skipped[0].field == "priority"

    def test_non_positive_priority_uses_position(self):
        """Test that zero or negative priorities are rejected."""
        assert item_to_rule({"priority": "0"}, 2).priority == 2
        assert item_to_rule({"priority": -5}, 3).priority == 3

    def test_bad_case_sensitive_flag(self):
        """Test that an unrecognised flag defaults to case-insensitive."""
        skipped = []

        rule = item_to_rule({"caseSensitive": "maybe"}, 1, CounterAllocator(), skipped)

        assert rule.case_sensitive is False
        assert skipped[0].field == "caseSensitive"


class TestImportCsv:
    """Tests for CSV rule imports."""

    def test_import_csv(self):
        """Test importing rules with positional default priorities."""
        text = (
            "pattern,category,matchType,priority\n"
            "AMZN,Shopping,contains,\n"
            "Rent Payment,Housing,exact,1\n"
            "SHELL,Transportation,startsWith,\n"
        )

        rules = import_csv(text, CounterAllocator())

        assert [r.priority for r in rules] == [1, 1, 3]
        assert rules[1].match_type == "exact"
        assert [r.id for r in rules] == ["1", "2", "3"]

    def test_missing_header_raises(self):
        """Test that matchType is a required header."""
        with pytest.raises(FormatError, match="matchType"):
            import_csv("pattern,category\nA,B\n")


class TestImportJson:
    """Tests for JSON rule imports."""

    def test_import_json_array(self):
        """Test importing rules from a JSON array."""
        text = '[{"pattern": "spotify", "category": "Entertainment"}, {"pattern": "gym", "category": "Personal Care", "priority": 10}]'

        rules = import_json(text, CounterAllocator())

        assert [r.priority for r in rules] == [1, 10]

    def test_category_mappings_object(self):
        """Test the older description -> category mapping export."""
        text = '{"categoryMappings": {"Corner Deli": "Food & Dining", "City Power": "Housing"}}'

        rules = import_json(text, CounterAllocator())

        assert [(r.pattern, r.category) for r in rules] == [
            ("Corner Deli", "Food & Dining"),
            ("City Power", "Housing"),
        ]
        assert all(r.match_type == "exact" and r.case_sensitive for r in rules)
        assert [r.priority for r in rules] == [1, 2]

    def test_other_object_root_raises(self):
        """Test that an object without categoryMappings is rejected."""
        with pytest.raises(FormatError, match="expected an array of rules"):
            import_json('{"rules": []}')

    def test_ingest_detects_json_object(self):
        """Test that ingest routes an object root to the JSON importer."""
        rules = ingest('{"categoryMappings": {"A": "B"}}', allocate_id=CounterAllocator())

        assert len(rules) == 1

    def test_mappings_to_rules_empty(self):
        """Test converting an empty mapping."""
        assert mappings_to_rules({}) == []
