"""Unit tests for the declaration IR."""

import pytest

from ffisymbols.ir import (
    Declaration, DeclarationKind, DeclarationStore, Parameter, MarkerKind,
    OverrideMarker, LogMarker, BlockingMarker, DeprecatedMarker, ResolvedSymbol,
    marker_from_dict
)


class TestMarkers:
    def test_kinds(self):
        assert OverrideMarker("x").kind == MarkerKind.OVERRIDE_NAME
        assert LogMarker().kind == MarkerKind.LOG
        assert BlockingMarker().kind == MarkerKind.BLOCKING
        assert DeprecatedMarker("m").kind == MarkerKind.DEPRECATED

    def test_payloads(self):
        assert OverrideMarker("native_add").payload == "native_add"
        assert LogMarker().payload is None
        assert DeprecatedMarker("").payload is None

    def test_markers_are_immutable(self):
        marker = OverrideMarker("native_add")
        with pytest.raises(AttributeError):
            marker.name = "other"

    def test_marker_from_dict(self):
        assert marker_from_dict({"kind": "override_name", "value": "c_mul"}) == OverrideMarker("c_mul")
        assert marker_from_dict({"kind": "log"}) == LogMarker()
        assert marker_from_dict({"kind": "deprecated", "value": "old"}) == DeprecatedMarker("old")

    def test_unknown_marker_kind(self):
        with pytest.raises(ValueError):
            marker_from_dict({"kind": "inline"})


class TestDeclaration:
    def test_markers_stored_as_tuple(self):
        declaration = Declaration(name="add", markers=[LogMarker()])
        assert declaration.markers == (LogMarker(),)

    def test_first_marker(self):
        declaration = Declaration(
            name="multiply",
            markers=(LogMarker(), OverrideMarker("c_mul"), OverrideMarker("other"))
        )
        assert declaration.first_marker(MarkerKind.OVERRIDE_NAME) == OverrideMarker("c_mul")
        assert declaration.first_marker(MarkerKind.BLOCKING) is None
        assert declaration.has_marker(MarkerKind.LOG)
        assert not declaration.is_blocking

    def test_dict_round_trip(self):
        declaration = Declaration(
            name="cef_post_task",
            markers=(OverrideMarker("post"), BlockingMarker()),
            parameters=[Parameter("task", "cef_task_t*", description=["the task to run"])],
            return_type="int",
            description=["Post a task."],
            return_description=["1 on success"],
            source_file="cef.h",
            line_number=12
        )
        assert Declaration.from_dict(declaration.to_dict()) == declaration


class TestDeclarationStore:
    def setup_method(self):
        self.store = DeclarationStore()
        self.store.add_declarations([
            Declaration(name="add", markers=(OverrideMarker("native_add"),), source_file="a.h"),
            Declaration(name="wait", markers=(BlockingMarker(),), source_file="a.h"),
            Declaration(name="cb", kind=DeclarationKind.CALLBACK, source_file="b.h"),
            Declaration(name="VERSION", kind=DeclarationKind.CONSTANT, value="3", source_file="b.h"),
        ])

    def test_keeps_insertion_order(self):
        assert [d.name for d in self.store.declarations] == ["add", "wait", "cb", "VERSION"]

    def test_indexes(self):
        assert [d.name for d in self.store.get_declarations_by_file("a.h")] == ["add", "wait"]
        assert [d.name for d in self.store.get_functions()] == ["add", "wait"]
        assert self.store.get_declarations_by_file("missing.h") == []
        assert self.store.get_unique_files() == {"a.h", "b.h"}

    def test_stats(self):
        stats = self.store.get_stats()
        assert stats["total_declarations"] == 4
        assert stats["functions"] == 2
        assert stats["callbacks"] == 1
        assert stats["constants"] == 1
        assert stats["overridden"] == 1
        assert stats["blocking"] == 1

    def test_json_round_trip(self, tmp_path):
        path = tmp_path / "declarations.json"
        self.store.to_json(path)

        loaded = DeclarationStore()
        loaded.from_json(path)

        assert loaded.declarations == self.store.declarations
        assert loaded.get_stats() == self.store.get_stats()

    def test_clear(self):
        self.store.clear()
        assert self.store.get_stats()["total_declarations"] == 0


class TestResolvedSymbol:
    def test_is_overridden(self):
        declaration = Declaration(name="add", markers=(OverrideMarker("native_add"),))
        assert ResolvedSymbol(declaration, "native_add").is_overridden
        assert not ResolvedSymbol(declaration, "add").is_overridden

    def test_to_dict(self):
        declaration = Declaration(name="add", markers=(OverrideMarker("native_add"),), source_file="calc.py", line_number=4)
        data = ResolvedSymbol(declaration, "native_add").to_dict()
        assert data == {
            "name": "add",
            "symbol": "native_add",
            "kind": "FUNCTION",
            "markers": [{"kind": "override_name", "value": "native_add"}],
            "source_file": "calc.py",
            "line_number": 4
        }
