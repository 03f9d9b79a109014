"""Tests for Go literal decoding and Go literal spelling."""
from fractions import Fraction

import pytest

from constenum.backend.literals import byte_element, bytes_literal, go_quote, value_literal
from constenum.semantics.ast_builder import InvalidLiteralError
from constenum.semantics.ast_builder.comments import comment_text, is_directive
from constenum.semantics.ast_builder.literals import (
    decode_raw_string, decode_rune, decode_string, parse_float, parse_int,
)


class TestIntLiterals:

    @pytest.mark.parametrize("literal, value", [
        ("0", 0),
        ("42", 42),
        ("1_000_000", 1000000),
        ("0x1F", 31),
        ("0X_ff", 255),
        ("0b101", 5),
        ("0o17", 15),
        ("017", 15),
    ])
    def test_valid(self, literal, value):
        assert parse_int(literal) == value

    def test_invalid_octal_digit(self):
        with pytest.raises(InvalidLiteralError):
            parse_int("08")


class TestFloatLiterals:

    @pytest.mark.parametrize("literal, value", [
        ("1.5", Fraction(3, 2)),
        ("1e3", Fraction(1000)),
        (".25", Fraction(1, 4)),
        ("1_0.5", Fraction(21, 2)),
        ("0x1p-2", Fraction(1, 4)),
        ("0x1.8p1", Fraction(3)),
    ])
    def test_exact(self, literal, value):
        assert parse_float(literal) == value

    def test_hex_mantissa_needs_digits(self):
        with pytest.raises(InvalidLiteralError):
            parse_float("0x.p1")


class TestStringLiterals:

    def test_escapes(self):
        assert decode_string(r'"a\tb\n\\\""') == b'a\tb\n\\"'

    def test_byte_and_unicode_escapes(self):
        assert decode_string(r'"\x41\101é\U0001F600"') == "AAé😀".encode("utf-8")

    def test_byte_escape_may_be_invalid_utf8(self):
        assert decode_string(r'"\xff"') == b"\xff"

    def test_single_quote_escape_not_allowed_in_string(self):
        with pytest.raises(InvalidLiteralError):
            decode_string(r'"\'"')

    def test_surrogate_rejected(self):
        with pytest.raises(InvalidLiteralError):
            decode_string(r'"\ud800"')

    def test_raw_string_drops_carriage_returns(self):
        assert decode_raw_string("`a\\n\r\nb`") == b"a\\n\nb"


class TestRuneLiterals:

    @pytest.mark.parametrize("literal, value", [
        ("'a'", 97),
        ("'é'", 0xE9),
        (r"'\n'", 10),
        (r"'\''", 39),
        (r"'\x7f'", 127),
    ])
    def test_valid(self, literal, value):
        assert decode_rune(literal) == value

    def test_multiple_characters(self):
        with pytest.raises(InvalidLiteralError):
            decode_rune("'ab'")


class TestComments:

    def test_line_comment_text(self):
        assert comment_text("//   Kind3  ") == "Kind3"

    def test_block_comment_text(self):
        assert comment_text("/* Override */") == "Override"

    @pytest.mark.parametrize("raw", ["//go:generate constenum", "//line foo.go:10", "//export F"])
    def test_directives_have_no_text(self, raw):
        assert is_directive(raw)
        assert comment_text(raw) == ""

    def test_spaced_directive_is_text(self):
        assert not is_directive("// go:generate")


class TestGoSpelling:

    def test_quote_escapes(self):
        assert go_quote('a"b\\c\n') == '"a\\"b\\\\c\\n"'

    def test_quote_keeps_printable_unicode(self):
        assert go_quote("café") == '"café"'

    def test_quote_control_characters(self):
        assert go_quote("\x00\x7f") == '"\\x00\\x7f"'

    def test_byte_elements(self):
        assert byte_element(ord("K")) == "'K'"
        assert byte_element(ord("'")) == "'\\''"
        assert byte_element(ord("\\")) == "'\\\\'"
        assert byte_element(0x0A) == "0x0a"

    def test_bytes_literal_is_utf8(self):
        assert bytes_literal("é!") == "[]byte{0xc3, 0xa9, '!'}"

    def test_value_literal(self):
        assert value_literal(-3) == "-3"
        assert value_literal("Hello") == '"Hello"'
