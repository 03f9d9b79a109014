"""Tests for exact Go constant evaluation."""
from fractions import Fraction

import pytest

from constenum.internals import errors as er
from constenum.semantics.typesys import INT, UNTYPED_FLOAT, UNTYPED_INT, UNTYPED_RUNE, NamedType
from tests.conftest import IOTA_GROUPS_GO, go, make_model


def const(model, name):
    return model.constant_value(model.const_site(name))


def eval_src(body: str, name: str = "X"):
    model = make_model("p", "package p\n\n" + go(body))
    return const(model, name)


class TestIota:

    def test_shifted_iota_with_blank_first(self):
        model = make_model("sizes", IOTA_GROUPS_GO)
        assert const(model, "KB").value == 1 << 10
        assert const(model, "MB").value == 1 << 20
        assert const(model, "GB").value == 1 << 30
        assert isinstance(const(model, "GB").type, NamedType)
        assert const(model, "GB").type.name == "ByteSize"

    def test_multiple_names_per_spec(self):
        model = make_model("sizes", IOTA_GROUPS_GO)
        assert [const(model, n).value for n in "ABCD"] == [0, 0, 1, 10]

    def test_iota_restarts_per_group(self):
        cv = eval_src("""
            const (
            	A = iota
            	B
            )
            const X = iota
        """)
        assert cv.value == 0

    def test_implicit_repetition_keeps_declared_type(self):
        model = make_model("p", go("""
            package p

            type Kind int

            const (
            	A Kind = iota * 2
            	B
            	C
            )
        """))
        assert [const(model, n).value for n in "ABC"] == [0, 2, 4]
        assert const(model, "C").type.name == "Kind"


class TestArithmetic:

    @pytest.mark.parametrize("expr, value", [
        ("7 / 2", 3),
        ("-7 / 2", -3),
        ("-7 % 2", -1),
        ("7 % -2", 1),
        ("1 << 62 >> 60", 4),
        ("6 &^ 3", 4),
        ("^0", -1),
        ("0x0F | 0xF0 ^ 0x01", 0xFE),
    ])
    def test_integer(self, expr, value):
        cv = eval_src(f"const X = {expr}")
        assert cv.value == value
        assert cv.type == UNTYPED_INT

    def test_untyped_float_is_exact(self):
        cv = eval_src("const X = 10 / 4.0")
        assert cv.value == Fraction(5, 2)
        assert cv.type == UNTYPED_FLOAT

    def test_float_with_integral_value_converts_to_int(self):
        model = make_model("p", "package p\n\nconst F = 2.0\nconst X int = F * 3\n")
        assert const(model, "X").value == 6
        assert const(model, "X").type == INT

    def test_rune_arithmetic(self):
        cv = eval_src("const X = 'a' + 1")
        assert cv.value == 98
        assert cv.type == UNTYPED_RUNE

    def test_unsigned_complement(self):
        cv = eval_src("const X = ^uint8(1)")
        assert cv.value == 254

    def test_comparisons_and_logic(self):
        assert eval_src('const X = "a" < "b" && 2 >= 2').value is True
        assert eval_src("const X = !(1 == 1) || false").value is False

    def test_string_concatenation(self):
        assert eval_src('const X = "con" + `cat`').value == b"concat"

    def test_len_of_string_is_int(self):
        cv = eval_src('const X = len("héllo")')
        assert cv.value == 6
        assert cv.type == INT


class TestConversions:

    def test_int_to_string_is_code_point(self):
        assert eval_src("const X = string(rune(233))").value == "é".encode("utf-8")

    def test_invalid_code_point_becomes_replacement(self):
        assert eval_src("const X = string(-1)").value == "\ufffd".encode("utf-8")

    def test_named_conversion(self):
        model = make_model("p", "package p\n\ntype Kind int\n\nconst X = Kind(3) + 1\n")
        cv = const(model, "X")
        assert cv.value == 4
        assert cv.type.name == "Kind"

    def test_string_type_conversion(self):
        model = make_model("p", 'package p\n\ntype S string\n\nconst X = S("a") + "b"\n')
        assert const(model, "X").value == b"ab"
        assert const(model, "X").type.name == "S"

    def test_alias_of_basic_type(self):
        model = make_model("p", "package p\n\ntype B = byte\n\nconst X B = 255\n")
        assert const(model, "X").value == 255


class TestErrors:

    def error_of(self, body: str, name: str = "X") -> er.SourceLoadError:
        with pytest.raises(er.SourceLoadError) as info:
            eval_src(body, name)
        return info.value

    def test_overflow(self):
        e = self.error_of("const X uint8 = 256")
        assert e.code == "CE1008"
        assert "256" in e.text and "uint8" in e.text

    def test_negative_unsigned(self):
        assert self.error_of("const X = uint(0) - 1").code == "CE1008"

    def test_division_by_zero(self):
        assert self.error_of("const X = 1 / (2 - 2)").code == "CE1009"

    def test_undefined(self):
        e = self.error_of("const X = Y + 1")
        assert e.code == "CE1005"
        assert "Y" in e.text

    def test_cycle(self):
        e = self.error_of("const (\n\tX = Y\n\tY = X\n)")
        assert e.code == "CE1006"
        assert e.text == "initialization cycle: X -> Y -> X"

    def test_mismatched_types(self):
        e = self.error_of("type T int\ntype U int\n\nconst X = T(1) + U(2)")
        assert e.code == "CE1010"

    def test_truncated_float(self):
        e = self.error_of("const X int = 2.5")
        assert e.code == "CE1007"
        assert "truncated" in e.text

    def test_string_plus_int(self):
        assert self.error_of('const X = "a" + 1').code == "CE1010"

    def test_variable_is_not_constant(self):
        e = self.error_of("var v = 1\n\nconst X = v")
        assert e.code == "CE1007"
        assert "not constant" in e.text

    def test_function_call(self):
        assert self.error_of("func f() int { return 1 }\n\nconst X = f()").code == "CE1007"

    def test_shift_count_too_large(self):
        assert self.error_of("const X = 1 << 2000").code == "CE1007"

    def test_imported_constant(self):
        e = self.error_of('import "time"\n\nconst X = time.Second')
        assert e.code == "CE1007"
        assert "time.Second" in e.text

    def test_complex_constant(self):
        assert self.error_of("const X = 2i").code == "CE1007"

    def test_composite_literal(self):
        e = self.error_of("type T struct{}\n\nconst X = T{}")
        assert e.code == "CE1007"
        assert "composite literal" in e.text
