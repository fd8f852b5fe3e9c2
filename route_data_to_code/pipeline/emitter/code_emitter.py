"""
Dart code emitter for route configuration trees.

Walks a validated RouteConfig tree and renders, in order: the root route
getter, then for every node (pre-order) its extension block followed by the
enum codec tables it needs, and finally the shared helpers referenced by any
of those blocks.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import assert_never

import jinja2

from ...utils import escape_dart_string, kebab_case
from ..analyzer.parameters import EXTRA_FIELD_NAME, ParameterInfo
from ..analyzer.route_config import GoRouteConfig, RouteConfig, ShellRouteConfig
from ..declarations.nodes import FieldElement
from ..declarations.type_info import TypeInfoProvider
from ..diagnostics import MalformedParameterRoleError, UnresolvedFieldError, UnresolvedTypeError
from .blocks import BlockKind, EmittedDeclaration, TextBlock
from .helper_registry import HelperRegistry
from .type_helpers import EnumCodecSpec, build_enum_codec, decode_parameter, encode_field

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent.parent / "templates" / "dart"


def create_environment() -> jinja2.Environment:
    """Jinja2 environment for the Dart templates."""
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        lstrip_blocks=True,
        trim_blocks=True,
    )
    env.filters["dart_string"] = escape_dart_string
    return env


class CodeEmitter:
    """Renders RouteConfig trees to Dart source blocks."""

    def __init__(self, type_info: TypeInfoProvider, helper_registry: HelperRegistry | None = None):
        """
        Initialize the emitter.

        Args:
            type_info: Lookup used to resolve enum members
            helper_registry: Registry of shared helpers (defaults to the standard catalog)
        """
        self.type_info = type_info
        self.helper_registry = helper_registry or HelperRegistry()
        self._setup_templates()

    def _setup_templates(self) -> None:
        self.jinja_env = create_environment()
        self.root_template = self.jinja_env.get_template("root.dart.jinja2")
        self.route_constructor_template = self.jinja_env.get_template("route_constructor.dart.jinja2")
        self.go_route_template = self.jinja_env.get_template("go_route_extension.dart.jinja2")
        self.shell_route_template = self.jinja_env.get_template("shell_route_extension.dart.jinja2")
        self.enum_map_template = self.jinja_env.get_template("enum_map.dart.jinja2")

    def emit(self, root: RouteConfig) -> EmittedDeclaration:
        """
        Emit all declarations for a tree.

        Args:
            root: Root of a tree built by ConfigTreeBuilder

        Returns:
            EmittedDeclaration with root, per-node and helper blocks in order

        Raises:
            InvalidGenerationSourceError: If a field or type cannot be encoded
        """
        blocks = [TextBlock(kind=BlockKind.ROOT, owner=root.class_name, text=self.render_root(root))]
        emitted_enums: set[str] = set()
        for config in root.flatten():
            blocks.extend(self.class_declarations(config, emitted_enums))
        blocks.extend(self.helper_registry.collect(blocks))

        logger.debug("Emitted %d block(s) for %s", len(blocks), root.class_name)
        return EmittedDeclaration(route_getter_name=root.route_getter_name, blocks=blocks)

    def render_root(self, root: RouteConfig) -> str:
        return self.root_template.render(
            route_getter_name=root.route_getter_name,
            route_constructor=self.render_route_constructor(root),
        ).strip()

    def render_route_constructor(self, config: RouteConfig) -> str:
        """The ``GoRouteData.$route(...)`` / ``ShellRouteData.$route(...)`` expression for config and its children."""
        match config:
            case GoRouteConfig():
                route_data_class_name = "GoRouteData"
                arguments = [f"path: {escape_dart_string(config.path)},"]
                if config.name is not None:
                    arguments.append(f"name: {escape_dart_string(config.name)},")
            case ShellRouteConfig():
                route_data_class_name = "ShellRouteData"
                arguments = []
                if config.navigator_key is not None:
                    arguments.append(f"navigatorKey: {config.navigator_key},")
            case _:
                assert_never(config)

        arguments.append(f"factory: {config.extension_name}._fromState,")
        if config.parent_navigator_key is not None:
            arguments.append(f"parentNavigatorKey: {config.parent_navigator_key},")

        return self.route_constructor_template.render(
            route_data_class_name=route_data_class_name,
            arguments=arguments,
            routes=[self.render_route_constructor(child) for child in config.children],
        ).strip()

    def class_declarations(self, config: RouteConfig, emitted_enums: set[str] | None = None) -> list[TextBlock]:
        """
        Extension block of config followed by its enum codec tables.

        Enums named in emitted_enums are skipped; the ones emitted here are added to it.
        """
        if emitted_enums is None:
            emitted_enums = set()
        match config:
            case GoRouteConfig():
                blocks = [TextBlock(kind=BlockKind.EXTENSION, owner=config.class_name, text=self._go_route_extension(config))]
                for spec in self.enum_codecs(config):
                    if spec.enum_name in emitted_enums:
                        continue
                    emitted_enums.add(spec.enum_name)
                    blocks.append(TextBlock(kind=BlockKind.ENUM_MAP, owner=spec.enum_name, text=self._enum_map(spec)))
                return blocks
            case ShellRouteConfig():
                text = self.shell_route_template.render(
                    extension_name=config.extension_name,
                    class_name=config.class_name,
                ).strip()
                return [TextBlock(kind=BlockKind.EXTENSION, owner=config.class_name, text=text)]
            case _:
                assert_never(config)

    def _go_route_extension(self, config: GoRouteConfig) -> str:
        parameters = config.parameters
        ctor = config.route_data_class.unnamed_constructor
        decoded = [*parameters.path, *parameters.query]
        if parameters.payload is not None:
            decoded.append(parameters.payload)

        return self.go_route_template.render(
            extension_name=config.extension_name,
            class_name=config.class_name,
            const_constructor=ctor is not None and ctor.is_const and parameters.is_empty,
            decode_arguments=[self._decode_for(param) for param in decoded],
            location=self._location_literal(config),
            query_lines=[self._query_line(config, param) for param in parameters.query],
            extra_argument=f", extra: {EXTRA_FIELD_NAME}" if parameters.payload is not None else "",
        ).strip()

    def _decode_for(self, param: ParameterInfo) -> str:
        expression = decode_parameter(param)
        if param.element.is_positional:
            return f"{expression},"
        if param.element.is_named:
            return f"{param.name}: {expression},"
        raise MalformedParameterRoleError(param.element)

    def _location_literal(self, config: GoRouteConfig) -> str:
        values = {}
        for name in config.path_pattern.parameters:
            field_element = self._field(config, name)
            # Enum codec maps return a nullable String
            null_check = "!" if field_element.type.is_enum else ""
            values[name] = f"${{Uri.encodeComponent({encode_field(field_element)}{null_check})}}"
        return f"'{config.path_pattern.substitute(values)}'"

    def _query_line(self, config: GoRouteConfig, param: ParameterInfo) -> str:
        condition = ""
        if param.has_default:
            condition = f"if ({param.name} != {param.default_value}) "
        elif param.is_nullable:
            condition = f"if ({param.name} != null) "
        key = escape_dart_string(kebab_case(param.name))
        return f"{condition}{key}: {encode_field(self._field(config, param.name))},"

    def _field(self, config: GoRouteConfig, name: str) -> FieldElement:
        field_element = config.route_data_class.get_getter(name)
        if field_element is None:
            raise UnresolvedFieldError(
                f'Could not find a field for the path parameter "{name}".',
                element=config.route_data_class,
            )
        return field_element

    def enum_codecs(self, config: GoRouteConfig) -> list[EnumCodecSpec]:
        """Codec specs for every enum referenced by a path or query parameter, first reference first."""
        specs: dict[str, EnumCodecSpec] = {}
        for param in [*config.parameters.path, *config.parameters.query]:
            type_ref = param.type
            if type_ref.is_parameterized:
                type_ref = type_ref.type_args[0]
            if not type_ref.is_enum or type_ref.name in specs:
                continue

            enum_element = self.type_info.get_enum(type_ref.name)
            if enum_element is None:
                raise UnresolvedTypeError(f"Unknown enum type `{type_ref.name}`.", element=param.element)
            specs[type_ref.name] = build_enum_codec(type_ref, enum_element)
        return list(specs.values())

    def _enum_map(self, spec: EnumCodecSpec) -> str:
        return self.enum_map_template.render(
            map_name=spec.map_name,
            enum_name=spec.enum_name,
            entries=spec.entries,
        ).strip()
