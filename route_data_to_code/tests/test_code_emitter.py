#!/usr/bin/env python3

import pytest

from route_data_to_code.pipeline.analyzer import ConfigTreeBuilder
from route_data_to_code.pipeline.declarations import BatchTypeInfo, DeclarationParser, EnumElement, TypeDescriptor
from route_data_to_code.pipeline.diagnostics import (
    EnumCodecCollisionError,
    MalformedParameterRoleError,
    UnresolvedFieldError,
    UnsupportedTypeError,
)
from route_data_to_code.pipeline.emitter import BlockKind, CodeEmitter, build_enum_codec

TYPES = {
    "HomeRoute": {"constructor": {"const": True, "parameters": []}},
    "FamilyRoute": {"constructor": {"parameters": [{"name": "fid", "type": "String"}]}},
    "PersonRoute": {"constructor": {"parameters": [{"name": "fid", "type": "String"}, {"name": "pid", "type": "int"}]}},
    "SearchRoute": {
        "constructor": {
            "parameters": [
                {"name": "query", "type": "String", "role": "named", "required": True},
                {"name": "page", "type": "int", "role": "named", "default": "1"},
                {"name": "sortOrder", "type": "SortOrder?", "role": "named"},
                {"name": "showAll", "type": "bool?", "role": "named"},
                {"name": "tags", "type": "List<String>", "role": "named", "required": True},
                {"name": "ids", "type": "List<int>?", "role": "named"},
            ]
        }
    },
    "ColorRoute": {"constructor": {"parameters": [{"name": "color", "type": "Color"}]}},
    "ProfileRoute": {"constructor": {"parameters": [{"name": "$extra", "type": "Profile", "role": "named", "required": True}]}},
    "MyShellRoute": {
        "constructor": {"const": True, "parameters": []},
        "fields": [{"name": "$navigatorKey", "type": "GlobalKey<NavigatorState>", "static": True}],
    },
    "SortOrder": {"kind": "enum", "members": ["asc", "desc", "mostRecent"]},
    "Color": {"kind": "enum", "members": ["red", "green", "blue"]},
}


def emit(annotation, types=None):
    """Helper emitting the declarations of one annotated class"""
    document = {"types": types or TYPES, "declarations": [{"element": annotation["type"], "annotation": annotation}]}
    batch = DeclarationParser().parse(document)
    type_info = BatchTypeInfo(batch)
    root = ConfigTreeBuilder(type_info).build(batch.declarations[0])
    return CodeEmitter(type_info).emit(root)


class TestRouteTree:
    """Root route getter"""

    def setup_method(self):
        self.emitted = emit(
            {
                "type": "HomeRoute",
                "path": "/",
                "name": "home",
                "routes": [
                    {
                        "type": "FamilyRoute",
                        "path": "family/:fid",
                        "routes": [{"type": "PersonRoute", "path": "person/:pid"}],
                    }
                ],
            }
        )

    def test_block_order(self):
        assert [(b.kind, b.owner) for b in self.emitted.blocks] == [
            (BlockKind.ROOT, "HomeRoute"),
            (BlockKind.EXTENSION, "HomeRoute"),
            (BlockKind.EXTENSION, "FamilyRoute"),
            (BlockKind.EXTENSION, "PersonRoute"),
        ]
        assert self.emitted.route_getter_name == "$homeRoute"

    def test_root_getter(self):
        root = self.emitted.blocks_of(BlockKind.ROOT)[0].text
        assert root.startswith("RouteBase get $homeRoute => GoRouteData.$route(\n  path: '/',\n  name: 'home',\n")
        assert "  factory: $HomeRouteExtension._fromState,\n  routes: [\n    GoRouteData.$route(\n      path: 'family/:fid',\n" in root
        assert "        GoRouteData.$route(\n          path: 'person/:pid',\n          factory: $PersonRouteExtension._fromState,\n        ),\n" in root
        assert root.endswith(");")

    def test_const_constructor_without_parameters(self):
        text = self.emitted.render()
        assert "static HomeRoute _fromState(GoRouterState state) => const HomeRoute();" in text

    def test_path_parameters_decode_and_location(self):
        text = self.emitted.render()
        assert "static PersonRoute _fromState(GoRouterState state) => PersonRoute(\n        state.pathParameters['fid']!,\n        int.parse(state.pathParameters['pid']!),\n      );" in text
        assert "'/family/${Uri.encodeComponent(fid)}/person/${Uri.encodeComponent(pid.toString())}'," in text

    def test_navigation_methods(self):
        text = self.emitted.render()
        assert "void go(BuildContext context) =>\n      context.go(location);" in text
        assert "Future<T?> push<T>(BuildContext context) =>\n      context.push<T>(location);" in text
        assert "context.pushReplacement(location);" in text
        assert "context.replace(location);" in text

    def test_no_helpers_without_references(self):
        assert self.emitted.blocks_of(BlockKind.HELPER) == []
        assert self.emitted.render().endswith("}\n")


class TestQueryParameters:
    """Query parameter decode and location lines"""

    def setup_method(self):
        self.emitted = emit({"type": "SearchRoute", "path": "/search"})
        self.extension = self.emitted.blocks_of(BlockKind.EXTENSION)[0].text

    def test_required_parameter_is_unconditional(self):
        assert "query: state.queryParameters['query']!," in self.extension
        assert "\n          'query': query,\n" in self.extension

    def test_defaulted_parameter_compares_to_default(self):
        assert "page: _$convertMapValue('page', state.queryParameters, int.parse) ?? 1," in self.extension
        assert "if (page != 1) 'page': page.toString()," in self.extension

    def test_nullable_parameters_compare_to_null(self):
        assert "sortOrder: _$convertMapValue('sort-order', state.queryParameters, _$SortOrderEnumMap._$fromName)," in self.extension
        assert "if (sortOrder != null) 'sort-order': _$SortOrderEnumMap[sortOrder!]," in self.extension
        assert "showAll: _$convertMapValue('show-all', state.queryParameters, _$boolConverter)," in self.extension
        assert "if (showAll != null) 'show-all': showAll!.toString()," in self.extension

    def test_iterables(self):
        assert "tags: (state.queryParametersAll['tags'] ?? const <String>[]).map((e) => e).toList()," in self.extension
        assert "'tags': tags.map((e) => e).toList()," in self.extension
        assert "ids: state.queryParametersAll['ids']?.map(int.parse).cast<int>().toList()," in self.extension
        assert "if (ids != null) 'ids': ids?.map((e) => e.toString()).toList()," in self.extension

    def test_location_with_query_params(self):
        assert "String get location => GoRouteData.$location(\n        '/search',\n        queryParams: {\n" in self.extension

    def test_enum_map_follows_extension(self):
        kinds = [b.kind for b in self.emitted.blocks]
        assert kinds[:3] == [BlockKind.ROOT, BlockKind.EXTENSION, BlockKind.ENUM_MAP]
        enum_map = self.emitted.blocks_of(BlockKind.ENUM_MAP)[0].text
        assert enum_map == (
            "const _$SortOrderEnumMap = {\n"
            "  SortOrder.asc: 'asc',\n"
            "  SortOrder.desc: 'desc',\n"
            "  SortOrder.mostRecent: 'most-recent',\n"
            "};"
        )

    def test_helpers_are_appended_once(self):
        helpers = self.emitted.blocks_of(BlockKind.HELPER)
        assert [h.owner for h in helpers] == ["_$convertMapValue", "_$fromName", "_$boolConverter"]
        assert self.emitted.blocks[-3:] == helpers
        assert self.emitted.render().count("T? _$convertMapValue<T>(") == 1


class TestSpecialParameters:
    """Enum path parameters, payloads and shell routes"""

    def test_enum_path_parameter(self):
        emitted = emit({"type": "ColorRoute", "path": "/color/:color"})
        text = emitted.render()
        assert "_$ColorEnumMap._$fromName(state.pathParameters['color']!)," in text
        assert "'/color/${Uri.encodeComponent(_$ColorEnumMap[color]!)}'," in text
        assert "  Color.red: 'red',\n  Color.green: 'green',\n  Color.blue: 'blue',\n" in text
        assert [h.owner for h in emitted.blocks_of(BlockKind.HELPER)] == ["_$fromName"]

    def test_enum_map_shared_by_nested_routes_is_emitted_once(self):
        types = dict(
            TYPES,
            PaletteRoute={"constructor": {"parameters": [{"name": "tint", "type": "Color?", "role": "named"}]}},
            SwatchRoute={"constructor": {"parameters": [{"name": "shade", "type": "List<Color>?", "role": "named"}]}},
        )
        emitted = emit({"type": "PaletteRoute", "path": "/palette", "routes": [{"type": "SwatchRoute", "path": "swatch"}]}, types=types)

        assert [(b.kind, b.owner) for b in emitted.blocks_of(BlockKind.ENUM_MAP)] == [(BlockKind.ENUM_MAP, "Color")]
        assert emitted.render().count("const _$ColorEnumMap") == 1
        # The first referencing route owns the table
        kinds = [(b.kind, b.owner) for b in emitted.blocks]
        assert kinds.index((BlockKind.ENUM_MAP, "Color")) == kinds.index((BlockKind.EXTENSION, "PaletteRoute")) + 1

    def test_payload_parameter(self):
        text = emit({"type": "ProfileRoute", "path": "/profile"}).render()
        assert "$extra: state.extra as Profile," in text
        assert "context.go(location, extra: $extra);" in text
        assert "context.push<T>(location, extra: $extra);" in text
        assert "queryParams" not in text

    def test_shell_route(self):
        emitted = emit({"kind": "TypedShellRoute", "type": "MyShellRoute", "routes": [{"type": "HomeRoute", "path": "/"}]})
        root = emitted.blocks_of(BlockKind.ROOT)[0].text
        assert root.startswith("RouteBase get $myShellRoute => ShellRouteData.$route(\n  navigatorKey: MyShellRoute.$navigatorKey,\n  factory: $MyShellRouteExtension._fromState,\n")
        assert "    GoRouteData.$route(\n      path: '/',\n      factory: $HomeRouteExtension._fromState,\n    ),\n" in root
        shell_extension = emitted.blocks_of(BlockKind.EXTENSION)[0].text
        assert shell_extension == (
            "extension $MyShellRouteExtension on MyShellRoute {\n"
            "  static MyShellRoute _fromState(GoRouterState state) => const MyShellRoute();\n"
            "}"
        )

    def test_parent_navigator_key(self):
        types = dict(
            TYPES,
            ModalRoute={"fields": [{"name": "$parentNavigatorKey", "type": "GlobalKey<NavigatorState>", "static": True}]},
        )
        root = emit({"type": "ModalRoute", "path": "/modal"}, types=types).blocks[0].text
        assert "  factory: $ModalRouteExtension._fromState,\n  parentNavigatorKey: ModalRoute.$parentNavigatorKey,\n" in root

    def test_implicit_constructor(self):
        types = dict(TYPES, PlainRoute={})
        text = emit({"type": "PlainRoute", "path": "/plain"}, types=types).render()
        assert "static PlainRoute _fromState(GoRouterState state) => PlainRoute();" in text


class TestEmitterErrors:
    """Failures surfacing while emitting"""

    def test_unsupported_type(self):
        types = dict(TYPES, MapRoute={"constructor": {"parameters": [{"name": "m", "type": "Map<String, String>", "role": "named", "required": True}]}})
        with pytest.raises(UnsupportedTypeError, match="Map"):
            emit({"type": "MapRoute", "path": "/map"}, types=types)

    def test_unsupported_iterable_item_type(self):
        types = dict(TYPES, NestedRoute={"constructor": {"parameters": [{"name": "n", "type": "List<List<int>>", "role": "named", "required": True}]}})
        with pytest.raises(UnsupportedTypeError):
            emit({"type": "NestedRoute", "path": "/nested"}, types=types)

    def test_missing_getter_for_path_parameter(self):
        types = dict(TYPES, HiddenRoute={"constructor": {"parameters": [{"name": "id", "type": "String", "initializing_formal": False}]}})
        with pytest.raises(UnresolvedFieldError, match='"id"'):
            emit({"type": "HiddenRoute", "path": "/hidden/:id"}, types=types)

    def test_malformed_parameter_role(self):
        types = dict(TYPES, OddRoute={"constructor": {"parameters": [{"name": "x", "type": "int", "role": "optional", "default": "0"}]}})
        with pytest.raises(MalformedParameterRoleError):
            emit({"type": "OddRoute", "path": "/odd"}, types=types)


class TestEnumCodec:
    """Enum codec tables"""

    def test_three_members(self):
        enum = EnumElement(name="Color", members=["Red", "Green", "Blue"])
        spec = build_enum_codec(TypeDescriptor(name="Color", is_enum=True), enum)

        assert spec.map_name == "_$ColorEnumMap"
        assert spec.entries == [("Red", "red"), ("Green", "green"), ("Blue", "blue")]
        for member in enum.members:
            assert spec.from_external(spec.to_external(member)) == member

    def test_kebab_collision_raises(self):
        enum = EnumElement(name="Case", members=["fooBar", "foo-bar"])
        with pytest.raises(EnumCodecCollisionError, match="foo-bar"):
            build_enum_codec(TypeDescriptor(name="Case", is_enum=True), enum)


class TestDeterminism:
    """Identical input gives identical output"""

    def test_identical_declarations_have_identical_helpers(self):
        first = emit({"type": "SearchRoute", "path": "/search"})
        second = emit({"type": "SearchRoute", "path": "/search"})
        assert first.blocks_of(BlockKind.HELPER) == second.blocks_of(BlockKind.HELPER)
        assert first.render() == second.render()

    def test_structurally_identical_classes_share_helper_text(self):
        types = dict(
            TYPES,
            FlagRoute={"constructor": {"parameters": [{"name": "on", "type": "bool?", "role": "named"}]}},
            OtherFlagRoute={"constructor": {"parameters": [{"name": "on", "type": "bool?", "role": "named"}]}},
        )
        first = emit({"type": "FlagRoute", "path": "/a"}, types=types)
        second = emit({"type": "OtherFlagRoute", "path": "/b"}, types=types)
        assert [h.text for h in first.blocks_of(BlockKind.HELPER)] == [h.text for h in second.blocks_of(BlockKind.HELPER)]


if __name__ == "__main__":
    pytest.main([__file__])
