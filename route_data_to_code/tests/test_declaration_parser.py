#!/usr/bin/env python3

import pytest

from route_data_to_code.pipeline.declarations import (
    GO_ROUTE_ANNOTATION,
    SHELL_ROUTE_ANNOTATION,
    BatchTypeInfo,
    DeclarationParser,
    TypeDescriptor,
    TypeStringParser,
)
from route_data_to_code.pipeline.diagnostics import MalformedDeclarationError

DOCUMENT = {
    "library": "app.dart",
    "types": {
        "FamilyRoute": {
            "kind": "class",
            "location": "lib/app.dart:40",
            "constructor": {
                "const": True,
                "parameters": [
                    {"name": "fid", "type": "String"},
                    {"name": "sort", "type": "SortOrder", "role": "named", "default": "SortOrder.asc"},
                    {"name": "tags", "type": "List<String>?", "role": "named", "initializing_formal": False},
                ],
            },
            "fields": [{"name": "$parentNavigatorKey", "type": "GlobalKey<NavigatorState>", "static": True}],
        },
        "HomeRoute": {"kind": "class"},
        "AbstractRoute": {"kind": "class", "constructor": None},
        "SortOrder": {"kind": "enum", "members": ["asc", "desc"]},
    },
    "declarations": [
        {
            "element": "HomeRoute",
            "location": "lib/app.dart:10",
            "annotation": {
                "kind": GO_ROUTE_ANNOTATION,
                "type": "HomeRoute",
                "path": "/",
                "routes": [{"kind": SHELL_ROUTE_ANNOTATION, "type": "FamilyRoute"}],
            },
        }
    ],
}


class TestTypeStringParser:
    """Dart type string parsing"""

    def setup_method(self):
        self.parser = TypeStringParser({"Color"})

    def test_simple(self):
        assert self.parser.parse("int") == TypeDescriptor(name="int")

    def test_nullable(self):
        assert self.parser.parse("String?").is_nullable

    def test_enum_resolution(self):
        assert self.parser.parse("Color").is_enum
        assert not self.parser.parse("int").is_enum

    def test_nested_type_arguments(self):
        descriptor = self.parser.parse("Map<String, List<Color?>>?")
        assert descriptor.name == "Map"
        assert descriptor.is_nullable
        assert descriptor.type_args[1].type_args[0] == TypeDescriptor(name="Color", is_nullable=True, is_enum=True)
        assert descriptor.display() == "Map<String, List<Color?>>?"
        assert descriptor.display(with_nullability=False) == "Map<String, List<Color?>>"

    @pytest.mark.parametrize("text", ["", "List<int", "List<>", "int??", "Map<String int>", "a-b"])
    def test_malformed(self, text):
        with pytest.raises(MalformedDeclarationError):
            self.parser.parse(text)


class TestDeclarationParser:
    """Host document parsing"""

    def setup_method(self):
        self.batch = DeclarationParser().parse(DOCUMENT)

    def test_library_and_declarations(self):
        assert self.batch.library == "app.dart"
        assert [d.name for d in self.batch.declarations] == ["HomeRoute"]
        annotation = self.batch.declarations[0].annotation
        assert annotation.path == "/"
        assert annotation.routes[0].is_shell_route
        assert annotation.routes[0].path is None
        assert annotation.routes[0].location == "lib/app.dart:10"

    def test_constructor_roles_and_defaults(self):
        ctor = self.batch.classes["FamilyRoute"].unnamed_constructor
        assert ctor.is_const
        fid, sort, tags = ctor.parameters
        assert fid.is_positional and fid.is_required
        assert sort.is_named and not sort.is_required
        assert sort.default_value_code == "SortOrder.asc"
        assert sort.type.is_enum
        assert tags.type.is_nullable
        assert fid.location == "lib/app.dart:40"

    def test_initializing_formals_declare_getters(self):
        family = self.batch.classes["FamilyRoute"]
        assert family.get_getter("fid").type == TypeDescriptor(name="String")
        assert family.get_getter("sort") is not None
        assert family.get_getter("tags") is None
        # Static fields are not instance getters
        assert family.get_getter("$parentNavigatorKey") is None
        assert [f.name for f in family.static_fields] == ["$parentNavigatorKey"]

    def test_implicit_and_missing_constructors(self):
        home = self.batch.classes["HomeRoute"].unnamed_constructor
        assert home is not None
        assert not home.is_const
        assert home.parameters == []
        assert self.batch.classes["AbstractRoute"].unnamed_constructor is None

    def test_enums(self):
        type_info = BatchTypeInfo(self.batch)
        assert type_info.get_enum("SortOrder").members == ["asc", "desc"]
        assert type_info.get_enum("Unknown") is None
        assert type_info.get_class("SortOrder") is None
        assert type_info.get_enum("HomeRoute") is None

    def test_unknown_role_is_neither_positional_nor_named(self):
        document = {
            "types": {"R": {"constructor": {"parameters": [{"name": "x", "type": "int", "role": "optional"}]}}},
            "declarations": [],
        }
        (x,) = DeclarationParser().parse(document).classes["R"].unnamed_constructor.parameters
        assert not x.is_positional
        assert not x.is_named

    def test_unknown_type_kind_raises(self):
        with pytest.raises(MalformedDeclarationError, match="mixin"):
            DeclarationParser().parse({"types": {"M": {"kind": "mixin"}}})

    def test_unknown_annotation_raises(self):
        document = {"types": {}, "declarations": [{"element": "A", "annotation": {"kind": "TypedRoute", "type": "A"}}]}
        with pytest.raises(MalformedDeclarationError, match="TypedRoute"):
            DeclarationParser().parse(document)

    def test_missing_key_raises(self):
        document = {"types": {}, "declarations": [{"annotation": {"type": "A", "path": "/"}}]}
        with pytest.raises(MalformedDeclarationError, match="'element'"):
            DeclarationParser().parse(document)


if __name__ == "__main__":
    pytest.main([__file__])
