"""
Test redirect rule decoding.

Tests cover:
- Decoding valid rule objects
- Rejection of invalid fields and unknown queryFlag values
- Dropping invalid entries from a rule list while keeping order
- Rule immutability
"""
import pytest
import sys
import os
import logging

# Add parent directory to path to import modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from errors import MalformedRuleData, UnrecognizedQueryFlag
from redirect_rule import QueryFlag, RedirectRule, parse_redirect_rule, parse_redirect_rules


def rule_data(**overrides):
    """Build a valid rule object, with overrides."""
    data = {
        "source": "/old",
        "target": "/new",
        "statusCode": 301,
        "queryFlag": "pass",
    }
    data.update(overrides)
    return data


class TestParseRedirectRule:
    """Test decoding a single rule."""

    def test_parse_valid_rule(self):
        """Test decoding all fields."""
        rule = parse_redirect_rule(rule_data(search="?a=1", queryFlag="exact", statusCode=308))

        assert rule.source == "/old"
        assert rule.target == "/new"
        assert rule.search == "?a=1"
        assert rule.status_code == 308
        assert rule.query_flag is QueryFlag.EXACT

    @pytest.mark.parametrize("flag,expected", [
        ("pass", QueryFlag.PASS),
        ("ignore", QueryFlag.IGNORE),
        ("exact", QueryFlag.EXACT),
        ("exactorder", QueryFlag.EXACT_ORDER),
    ])
    def test_all_query_flags(self, flag, expected):
        """Test that each known match mode is decoded."""
        assert parse_redirect_rule(rule_data(queryFlag=flag)).query_flag is expected

    @pytest.mark.parametrize("search", [None, ""])
    def test_missing_search_means_no_constraint(self, search):
        """Test that null and empty search mean no query constraint."""
        assert parse_redirect_rule(rule_data(search=search)).search is None

    def test_search_key_absent(self):
        """Test that a rule without a search key has no constraint."""
        assert parse_redirect_rule(rule_data()).search is None

    @pytest.mark.parametrize("status_code", [301, 302, 303, 304, 307, 308])
    def test_redirect_status_codes_accepted(self, status_code):
        """Test all canonical redirect status codes."""
        assert parse_redirect_rule(rule_data(statusCode=status_code)).status_code == status_code

    @pytest.mark.parametrize("status_code", [200, 300, 305, 404, "301", None, True, 301.0])
    def test_invalid_status_codes_rejected(self, status_code):
        """Test that non-redirect status codes are malformed."""
        with pytest.raises(MalformedRuleData, match="statusCode"):
            parse_redirect_rule(rule_data(statusCode=status_code))

    @pytest.mark.parametrize("flag", ["regex", "PASS", "", None, 1])
    def test_unrecognized_query_flag(self, flag):
        """Test that unknown match modes raise UnrecognizedQueryFlag."""
        with pytest.raises(UnrecognizedQueryFlag) as exc_info:
            parse_redirect_rule(rule_data(queryFlag=flag))

        assert exc_info.value.query_flag == flag

    def test_unrecognized_query_flag_is_malformed_data(self):
        """Test that UnrecognizedQueryFlag is part of the malformed data family."""
        assert issubclass(UnrecognizedQueryFlag, MalformedRuleData)

    @pytest.mark.parametrize("source", ["", None, 5])
    def test_invalid_source_rejected(self, source):
        """Test that the source must be a non-empty string."""
        with pytest.raises(MalformedRuleData, match="source"):
            parse_redirect_rule(rule_data(source=source))

    def test_invalid_target_rejected(self):
        """Test that the target must be a string."""
        with pytest.raises(MalformedRuleData, match="target"):
            parse_redirect_rule(rule_data(target=None))

    def test_invalid_search_rejected(self):
        """Test that a non-string search is malformed."""
        with pytest.raises(MalformedRuleData, match="search"):
            parse_redirect_rule(rule_data(search=["a=1"]))

    def test_non_object_rejected(self):
        """Test that a rule must be a JSON object."""
        with pytest.raises(MalformedRuleData):
            parse_redirect_rule(["/old", "/new"])


class TestParseRedirectRules:
    """Test decoding the full rule list."""

    def test_parse_rule_list_keeps_order(self):
        """Test that valid rules keep their served order."""
        rules = parse_redirect_rules([
            rule_data(target="/first"),
            rule_data(target="/second"),
        ])

        assert [r.target for r in rules] == ["/first", "/second"]

    def test_invalid_entries_dropped_and_logged(self, caplog):
        """Test that invalid entries are dropped with a warning."""
        payload = [
            rule_data(source="/a"),
            rule_data(source="/b", queryFlag="bogus"),
            rule_data(source="/c", statusCode=200),
            "not an object",
            rule_data(source="/d"),
        ]

        with caplog.at_level(logging.WARNING, logger="redirect_rule"):
            rules = parse_redirect_rules(payload)

        assert [r.source for r in rules] == ["/a", "/d"]
        assert len([r for r in caplog.records if r.levelno == logging.WARNING]) == 3

    def test_empty_list(self):
        """Test that an empty array yields no rules."""
        assert parse_redirect_rules([]) == []

    @pytest.mark.parametrize("payload", [{"source": "/old"}, "rules", None, 42])
    def test_non_array_payload_rejected(self, payload):
        """Test that the payload must be an array."""
        with pytest.raises(MalformedRuleData, match="array"):
            parse_redirect_rules(payload)


class TestRedirectRule:
    """Test the RedirectRule model."""

    def test_rule_is_immutable(self):
        """Test that rule attributes cannot be reassigned."""
        rule = RedirectRule("/old", "/new", 301, QueryFlag.PASS)

        with pytest.raises(AttributeError):
            rule.target = "/elsewhere"

    def test_query_flag_accepts_string(self):
        """Test that the constructor coerces string flags."""
        rule = RedirectRule("/old", "/new", 301, "exactorder", search="?a=1")

        assert rule.query_flag is QueryFlag.EXACT_ORDER

    def test_equality(self):
        """Test that rules with the same fields are equal."""
        assert RedirectRule("/old", "/new", 301, "pass") == RedirectRule("/old", "/new", 301, QueryFlag.PASS)
        assert RedirectRule("/old", "/new", 301, "pass") != RedirectRule("/old", "/new", 302, "pass")
