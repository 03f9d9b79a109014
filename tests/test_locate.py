"""Tests for the type locator and the package model's bindings."""
import pytest

from constenum.internals import errors as er
from constenum.semantics.locate import locate, locate_by_name, locate_by_position
from constenum.semantics.source_model import BindingKind
from constenum.semantics.typesys import ValueKind
from tests.conftest import go, make_model

FILE = "/src/p/file0.go"

SOURCE = go("""
    package p

    //go:generate constenum
    type Kind int

    const A Kind = 1

    //go:generate constenum
    var v int; type Late string

    type (
    	Alias = Kind
    	Str = string
    )
""")


@pytest.fixture
def model():
    return make_model("p", SOURCE)


class TestBindings:

    def test_sorted_by_position(self, model):
        assert [(b.name, b.kind) for b in model.bindings] == [
            ("Kind", BindingKind.TYPE),
            ("A", BindingKind.CONST),
            ("v", BindingKind.VAR),
            ("Late", BindingKind.TYPE),
            ("Alias", BindingKind.TYPE),
            ("Str", BindingKind.TYPE),
        ]

    def test_positions_are_one_based(self, model):
        kind = model.bindings[0]
        assert (kind.position.line, kind.position.column) == (4, 6)
        assert kind.position.filename == FILE


class TestLocateByName:

    def test_found(self, model):
        target = locate_by_name(model, "Kind")
        assert target.name == "Kind"
        assert target.kind == ValueKind.INTEGRAL
        assert target.position.line == 4

    def test_not_found(self, model):
        with pytest.raises(er.ResolutionError) as info:
            locate_by_name(model, "Missing")
        assert info.value.code == "CE2001"
        assert "'Missing'" in info.value.text and "'p'" in info.value.text

    def test_alias_of_local_type_resolves_to_it(self, model):
        assert locate_by_name(model, "Alias").name == "Kind"

    def test_alias_of_basic_type_is_rejected(self, model):
        with pytest.raises(er.ResolutionError) as info:
            locate_by_name(model, "Str")
        assert info.value.code == "CE2004"

    def test_name_wins_over_line(self, model):
        assert locate(model, "Late", FILE, 3).name == "Late"


class TestLocateByPosition:

    def test_next_declaration_is_type(self, model):
        assert locate_by_position(model, FILE, 3).name == "Kind"

    def test_same_line_as_type(self, model):
        assert locate_by_position(model, FILE, 4).name == "Kind"

    def test_line_zero_takes_first_declaration(self, model):
        assert locate_by_position(model, FILE, 0).name == "Kind"

    def test_next_declaration_is_not_a_type(self, model):
        with pytest.raises(er.ResolutionError) as info:
            locate_by_position(model, FILE, 5)
        assert info.value.code == "CE2003"
        assert info.value.text == f"declaration following {FILE}:5 is 'A', which is not a type"
        assert info.value.span.line == 6

    def test_type_preferred_on_shared_line(self, model):
        target = locate_by_position(model, FILE, 8)
        assert target.name == "Late"
        assert target.kind == ValueKind.TEXT

    def test_nothing_after_line(self, model):
        with pytest.raises(er.ResolutionError) as info:
            locate_by_position(model, FILE, 100)
        assert info.value.code == "CE2002"
        assert info.value.text == f"no declaration found at or after {FILE}:100"
        assert info.value.filename == FILE

    def test_other_files_ignored(self):
        model = make_model("p", "package p\n\ntype Other int\n", SOURCE)
        assert locate_by_position(model, "/src/p/file0.go", 1).name == "Other"
        assert locate_by_position(model, "/src/p/file1.go", 1).name == "Kind"
