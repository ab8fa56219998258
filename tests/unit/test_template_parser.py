"""
Unit tests for the template parser.

Covers:
- Line classification (blank, comment, assignment, malformed)
- 'export' prefix handling and key validation
- Value parsing used for reading generated files back
- Reading template files from disk
"""

import inspect

import pytest

from envgen.domain.base_enums import LineKind
from envgen.domain.errors import ConfigurationError, TemplateNotFoundError
from envgen.domain.models import TemplateLine
from envgen.parsing.template_parser import (
    classify_line,
    extract_key,
    is_valid_key,
    iter_candidate_keys,
    parse_lines,
    parse_value,
    read_template,
)


class TestClassifyLine:
    """Test cases for classify_line."""

    @pytest.mark.parametrize("line", ["", "   ", "\t"])
    def test_blank_lines(self, line):
        assert classify_line(line).kind == LineKind.BLANK

    @pytest.mark.parametrize("line", ["# comment", "   # indented", "; ini style", "#KEY=value"])
    def test_comment_lines(self, line):
        assert classify_line(line).kind == LineKind.COMMENT

    def test_simple_assignment(self):
        parsed = classify_line("APP_NAME=demo")
        assert parsed.kind == LineKind.ASSIGNMENT
        assert parsed.key == "APP_NAME"
        assert parsed.value == "demo"

    def test_empty_value_assignment(self):
        parsed = classify_line("DB_HOST=")
        assert parsed.key == "DB_HOST"
        assert parsed.value == ""

    def test_whitespace_around_key_is_trimmed(self):
        assert classify_line("   DB_PORT   =  5432 ").key == "DB_PORT"

    @pytest.mark.parametrize("line", ["export DEBUG=", "export   DEBUG=1", "export\tDEBUG=true"])
    def test_export_prefix_is_stripped(self, line):
        assert classify_line(line).key == "DEBUG"

    def test_export_without_whitespace_is_part_of_key(self):
        """'exportFOO' is a key of its own, not an export of FOO."""
        assert classify_line("exportFOO=1").key == "exportFOO"

    def test_bare_export_key(self):
        assert classify_line("export=1").key == "export"

    def test_splits_at_first_equals(self):
        parsed = classify_line("URL=postgres://host/db?opt=1")
        assert parsed.key == "URL"
        assert parsed.value == "postgres://host/db?opt=1"

    @pytest.mark.parametrize("line", [
        "NO_EQUALS_SIGN",
        "export ONLY_KEY",
        "=value",
        "export =value",
        "1STARTS_WITH_DIGIT=x",
        "HAS-DASH=x",
        "HAS SPACE=x",
        "DOTTED.KEY=x",
    ])
    def test_malformed_lines(self, line):
        parsed = classify_line(line)
        assert parsed.kind == LineKind.MALFORMED
        assert parsed.key is None

    def test_template_line_keeps_its_line_number(self):
        parsed = classify_line(TemplateLine(line_number=7, raw="  KEY=1  "))
        assert parsed.line_number == 7
        assert parsed.key == "KEY"


class TestKeyHelpers:
    """Test cases for extract_key and is_valid_key."""

    def test_extract_key(self):
        assert extract_key("export APP_NAME=\"Demo\"") == "APP_NAME"
        assert extract_key("# APP_NAME=") is None
        assert extract_key("garbage") is None

    @pytest.mark.parametrize("key", ["A", "_", "_PRIVATE", "key_2", "MixedCase"])
    def test_valid_keys(self, key):
        assert is_valid_key(key)

    @pytest.mark.parametrize("key", ["", "9LIVES", "A-B", "A B", "ÄPFEL"])
    def test_invalid_keys(self, key):
        assert not is_valid_key(key)


class TestParseValue:
    """Test cases for parse_value."""

    def test_bare_value_is_trimmed(self):
        assert parse_value("  plain  ") == "plain"

    def test_double_quoted_value_is_unescaped(self):
        assert parse_value('"My \\"App\\""') == 'My "App"'
        assert parse_value('"C:\\\\dir"') == "C:\\dir"
        assert parse_value('"line1\\nline2"') == "line1\nline2"
        assert parse_value('"a\\tb"') == "a\tb"

    def test_unknown_escape_is_kept(self):
        assert parse_value('"\\x41"') == "\\x41"

    def test_single_quoted_value_is_literal(self):
        assert parse_value("'no \\n escapes'") == "no \\n escapes"

    def test_lone_quote_is_not_unquoted(self):
        assert parse_value('"') == '"'

    def test_empty_quotes(self):
        assert parse_value('""') == ""


class TestCandidateKeys:
    """Test cases for iter_candidate_keys and parse_lines."""

    TEMPLATE = [
        "APP_NAME=",
        "DB_HOST=",
        "# comment",
        "",
        "not an assignment",
        "export DEBUG=",
        "APP_NAME=again",
    ]

    def test_keys_in_template_order_with_duplicates(self):
        keys = list(iter_candidate_keys(self.TEMPLATE))
        assert keys == ["APP_NAME", "DB_HOST", "DEBUG", "APP_NAME"]

    def test_is_lazy(self):
        assert inspect.isgenerator(iter_candidate_keys(self.TEMPLATE))

    def test_restartable(self):
        assert list(iter_candidate_keys(self.TEMPLATE)) == list(iter_candidate_keys(self.TEMPLATE))

    def test_parse_lines_numbers_plain_strings(self):
        parsed = list(parse_lines(self.TEMPLATE))
        assert [p.line_number for p in parsed] == list(range(1, len(self.TEMPLATE) + 1))
        assert parsed[4].kind == LineKind.MALFORMED

    def test_empty_input(self):
        assert list(iter_candidate_keys([])) == []


class TestReadTemplate:
    """Test cases for read_template."""

    def test_reads_numbered_lines(self, tmp_path):
        template = tmp_path / ".env.example"
        template.write_text("A=\r\n\nexport B=1\n", encoding="utf-8")

        lines = read_template(template)

        assert [line.line_number for line in lines] == [1, 2, 3]
        assert [line.raw for line in lines] == ["A=", "", "export B=1"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(TemplateNotFoundError) as exc_info:
            read_template(tmp_path / "missing.env")

        assert exc_info.value.error_code == "TEMPLATE_NOT_FOUND"
        assert exc_info.value.details["path"].endswith("missing.env")
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_directory(self, tmp_path):
        with pytest.raises(TemplateNotFoundError):
            read_template(tmp_path)

    def test_undecodable_file(self, tmp_path):
        template = tmp_path / "latin1.env"
        template.write_bytes(b"NAME=caf\xe9\n")

        with pytest.raises(TemplateNotFoundError):
            read_template(template)

        assert read_template(template, encoding="latin-1")[0].raw == "NAME=caf\u00e9"

    def test_empty_file(self, tmp_path):
        template = tmp_path / "empty.env"
        template.write_text("")
        assert read_template(template) == []

    def test_byte_order_mark_is_dropped(self, tmp_path):
        template = tmp_path / "bom.env"
        template.write_bytes(b"\xef\xbb\xbfAPP_NAME=\nB=\n")

        lines = read_template(template)

        assert lines[0].raw == "APP_NAME="
        assert list(iter_candidate_keys(lines)) == ["APP_NAME", "B"]

    def test_byte_order_mark_with_utf8_alias(self, tmp_path):
        template = tmp_path / "bom.env"
        template.write_bytes(b"\xef\xbb\xbfAPP_NAME=\n")

        assert read_template(template, encoding="UTF8")[0].raw == "APP_NAME="

    def test_unknown_encoding(self, tmp_path):
        template = tmp_path / ".env.example"
        template.write_text("A=\n")

        with pytest.raises(ConfigurationError):
            read_template(template, encoding="bogus")
