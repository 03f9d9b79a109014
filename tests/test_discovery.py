"""Tests for constant discovery."""
import pytest

from constenum.internals import errors as er
from constenum.semantics.discovery import discover
from constenum.semantics.locate import locate_by_name
from constenum.semantics.typesys import ValueKind
from tests.conftest import COLOR_GO, go, make_model


def found(model, type_name):
    bindings, kind = discover(model, locate_by_name(model, type_name))
    return [(b.name, b.value) for b in bindings], kind


class TestDiscover:

    def test_example_kinds(self, example_model):
        assert found(example_model, "Kind") == ([("Kind1", 0), ("Kind2", 1), ("KindX", 2)], ValueKind.INTEGRAL)

    def test_example_text(self, example_model):
        assert found(example_model, "StrKind") == (
            [("Hello", "Hello"), ("World", "World"), ("Bang", "Bang")],
            ValueKind.TEXT,
        )

    def test_blank_identifiers_skipped(self):
        model = make_model("color", COLOR_GO)
        names, _ = found(model, "Color")
        assert names == [("Red", 1), ("Green", 2), ("Blue", 3), ("Alpha", 5)]

    def test_group_position_is_const_keyword(self, example_model):
        bindings, _ = discover(example_model, locate_by_name(example_model, "Kind"))
        assert {b.group_position.line for b in bindings} == {8}
        assert [b.position.line for b in bindings] == [9, 10, 11]

    def test_untyped_and_other_types_excluded(self):
        model = make_model("p", go("""
            package p

            type Kind int
            type Other int

            const Untyped = 7

            const (
            	A Kind  = 1
            	B Other = 2
            	C       = A + 1
            	D       = Kind(Untyped)
            	E       = int(A)
            )
        """))
        assert found(model, "Kind") == ([("A", 1), ("C", 2), ("D", 7)], ValueKind.INTEGRAL)

    def test_order_across_files(self):
        first = "package p\n\nconst Z Kind = 26\n"
        second = "package p\n\ntype Kind int\n\nconst A Kind = 1\n"
        model = make_model("p", first, second)
        names, _ = found(model, "Kind")
        assert names == [("Z", 26), ("A", 1)]

    def test_other_package_files_excluded(self):
        model = make_model("p", "package q\n\nconst Q Kind = 9\n", "package p\n\ntype Kind int\n\nconst A Kind = 1\n")
        names, _ = found(model, "Kind")
        assert names == [("A", 1)]

    def test_no_constants(self):
        model = make_model("p", "package p\n\ntype Empty string\n")
        assert found(model, "Empty") == ([], ValueKind.TEXT)

    def test_kind_from_values_when_underlying_is_foreign(self):
        model = make_model("p", go("""
            package p

            import "example.com/other"

            type K other.T

            const (
            	A K = 1
            	B K = 2
            )
        """))
        assert found(model, "K") == ([("A", 1), ("B", 2)], ValueKind.INTEGRAL)

    def test_kind_mismatch(self):
        model = make_model("p", go("""
            package p

            import "example.com/other"

            type K other.T

            const (
            	A K = 1
            	B K = "b"
            )
        """))
        with pytest.raises(er.ConsistencyError) as info:
            discover(model, locate_by_name(model, "K"))
        assert info.value.code == "CE3001"
        assert "'A'" in info.value.text and "'B'" in info.value.text

    def test_invalid_utf8_text(self):
        model = make_model("p", 'package p\n\ntype S string\n\nconst Bad S = "\\xff"\n')
        with pytest.raises(er.SourceLoadError) as info:
            discover(model, locate_by_name(model, "S"))
        assert info.value.code == "CE1011"

    def test_sibling_composite_literal_does_not_block(self):
        model = make_model(
            "p",
            'package p\n\ntype K int\n\nconst A K = 1\n',
            go("""
                package p

                import "unsafe"

                type header struct{ n, cap int }

                const headerSize = unsafe.Sizeof(header{})
            """),
        )
        assert found(model, "K") == ([("A", 1)], ValueKind.INTEGRAL)
