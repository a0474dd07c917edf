import pytest

from ingestion.errors import FormatError
from ingestion.tokenizer import DelimitedRows, parse_delimited, tokenize_line


class TestTokenizeLine:
    """Tests for tokenize_line function."""

    def test_simple_fields_are_trimmed(self):
        """Test splitting on commas and trimming whitespace."""
        assert tokenize_line(" a , b,c ") == ["a", "b", "c"]

    def test_quoted_delimiter_is_literal(self):
        """Test that a comma inside quotes does not split the field."""
        row = tokenize_line('2024-01-05,"COFFEE, INC",-4.50')

        assert row == ["2024-01-05", "COFFEE, INC", "-4.50"]

    def test_quote_characters_are_dropped(self):
        """Test that quotes are removed from the field value."""
        assert tokenize_line('"a","b"') == ["a", "b"]

    def test_doubled_quotes_vanish(self):
        """Test that "" inside a quoted field is not an escape."""
        assert tokenize_line('"say ""hi"", ok",x') == ["say hi, ok", "x"]

    def test_empty_fields_are_kept(self):
        """Test that consecutive delimiters produce empty fields."""
        assert tokenize_line("a,,c,") == ["a", "", "c", ""]

    def test_custom_delimiter(self):
        """Test splitting on a non-comma delimiter."""
        assert tokenize_line("a;b,c;d", delimiter=";") == ["a", "b,c", "d"]


class TestParseDelimited:
    """Tests for parse_delimited function."""

    def test_skips_blank_lines(self):
        """Test that whitespace-only lines are ignored."""
        rows = parse_delimited("h1,h2\n\n  \na,b\n")

        assert list(rows) == [["h1", "h2"], ["a", "b"]]
        assert len(rows) == 2

    def test_rows_are_restartable(self):
        """Test that iterating twice yields the same rows."""
        rows = parse_delimited("a,b\nc,d")

        assert isinstance(rows, DelimitedRows)
        assert list(rows) == list(rows)

    def test_empty_text_raises(self):
        """Test that empty input is a format error."""
        with pytest.raises(FormatError, match="File is empty"):
            parse_delimited("   \n \n")
