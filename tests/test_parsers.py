"""Tests for the Action input parsers."""

from unittest.mock import patch

import pytest

from cmdcraft.parsers import (
    MAX_INPUT_SIZE,
    parse_boolean,
    parse_comma_separated,
    parse_formatted_string,
    parse_json_object,
)


class TestParseCommaSeparated:
    """Tests for parse_comma_separated()."""

    def test_drops_blanks(self):
        """Test that empty items are removed."""
        assert parse_comma_separated("a,,b,") == ["a", "b"]

    def test_trims_items(self):
        """Test that items are trimmed."""
        assert parse_comma_separated(" a , b ") == ["a", "b"]

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_input(self, text):
        """Test that empty input yields an empty list."""
        assert parse_comma_separated(text) == []


class TestParseJsonObject:
    """Tests for parse_json_object()."""

    def test_parses_object(self):
        """Test a plain JSON object with non-string values."""
        assert parse_json_object('{"env": "prod", "count": 3, "debug": true}') == {
            "env": "prod",
            "count": "3",
            "debug": "true",
        }

    def test_null_values_dropped(self):
        """Test that JSON null values are treated as unset."""
        assert parse_json_object('{"env": "prod", "region": null}') == {"env": "prod"}

    def test_blank_input(self):
        """Test that blank input yields an empty dict."""
        assert parse_json_object("  ") == {}

    def test_malformed_json_warns(self):
        """Test that malformed JSON is logged and ignored."""
        with patch("cmdcraft.parsers.logger") as mock_logger:
            assert parse_json_object("{not json") == {}
        mock_logger.warning.assert_called_once()

    def test_non_object_warns(self):
        """Test that a JSON array is not accepted as an object."""
        with patch("cmdcraft.parsers.logger") as mock_logger:
            assert parse_json_object('["a"]') == {}
        mock_logger.warning.assert_called_once()


class TestParseFormattedString:
    """Tests for parse_formatted_string()."""

    def test_json_array(self):
        """Test a JSON array input."""
        assert parse_formatted_string('["a", "b"]') == ["a", "b"]

    def test_multi_line_json_array(self):
        """Test a JSON array spread over several lines."""
        assert parse_formatted_string('[\n  "a",\n  "b"\n]') == ["a", "b"]

    def test_escaped_json_array(self):
        """Test a JSON array with escaped quotes."""
        assert parse_formatted_string('[\\"a\\", \\"b\\"]') == ["a", "b"]

    def test_newline_separated(self):
        """Test one item per line."""
        assert parse_formatted_string("a\n b \n\n'c'") == ["a", "b", "c"]

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("aws_instance.web[0]\nmodule.vpc", ["aws_instance.web[0]", "module.vpc"]),
            ("aws_instance.web[0]\naws_instance.web[1]", ["aws_instance.web[0]", "aws_instance.web[1]"]),
            ("[\nmodule.vpc\n]", ["module.vpc"]),
        ],
    )
    def test_newline_separated_indexed_addresses(self, text, expected):
        """Test that indexed addresses are kept and bare bracket lines skipped."""
        assert parse_formatted_string(text) == expected

    def test_comma_separated_fallback(self):
        """Test the comma fallback with quote removal."""
        assert parse_formatted_string('"a", b,,') == ["a", "b"]

    def test_list_passthrough(self):
        """Test that lists pass through with items stringified."""
        assert parse_formatted_string(["a", 1]) == ["a", "1"]

    @pytest.mark.parametrize("value", [None, "", "   ", 42])
    def test_empty_or_unsupported(self, value):
        """Test inputs that yield nothing."""
        assert parse_formatted_string(value) == []

    def test_backticks_stripped(self):
        """Test that surrounding backticks are removed."""
        assert parse_formatted_string("`a,b`") == ["a", "b"]

    def test_input_size_limited(self):
        """Test that oversized input is truncated before parsing."""
        items = parse_formatted_string("a" * (MAX_INPUT_SIZE + 50))
        assert len(items[0]) == MAX_INPUT_SIZE


class TestParseBoolean:
    """Tests for parse_boolean()."""

    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "Y", " y ", True, 5])
    def test_true_values(self, value):
        """Test the accepted true spellings."""
        assert parse_boolean(value) is True

    @pytest.mark.parametrize("value", ["false", "0", "no", "", None, False, 0, "maybe"])
    def test_false_values(self, value):
        """Test that everything else is false."""
        assert parse_boolean(value) is False
