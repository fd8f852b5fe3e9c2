"""
Type helpers producing Dart decode and encode expressions.

Each helper recognizes one family of parameter types and knows how to read a
value of that type from a ``GoRouterState`` and how to turn a field of that
type back into a string for a location.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from ...utils import escape_dart_string, kebab_case
from ..analyzer.parameters import ParameterInfo, ParameterKind
from ..declarations.nodes import EnumElement, FieldElement, TypeDescriptor
from ..diagnostics import EnumCodecCollisionError, UnsupportedTypeError
from .helper_registry import (
    BOOL_CONVERTER_HELPER_NAME,
    CONVERT_MAP_VALUE_HELPER_NAME,
    ENUM_EXTENSION_HELPER_NAME,
)

ITERABLE_TYPES = ("Iterable", "List", "Set")


def enum_map_name(type_ref: TypeDescriptor) -> str:
    return f"_${type_ref.name}EnumMap"


def ensure_not_null(type_ref: TypeDescriptor) -> str:
    return "!" if type_ref.is_nullable else ""


def _query_key(param: ParameterInfo) -> str:
    return escape_dart_string(kebab_case(param.name))


def _state_value_access(param: ParameterInfo) -> str:
    """Expression reading param from ``state`` (without the ``state.`` prefix)."""
    if param.kind is ParameterKind.PAYLOAD:
        return f"extra as {param.type.display()}"

    if param.kind is ParameterKind.PATH:
        access = f"pathParameters[{escape_dart_string(param.name)}]"
    else:
        access = f"queryParameters[{_query_key(param)}]"

    if param.kind is ParameterKind.PATH or (not param.is_nullable and not param.has_default):
        access += "!"
    return access


class TypeHelper(ABC):
    """Decode/encode support for one family of types."""

    @abstractmethod
    def matches(self, type_ref: TypeDescriptor) -> bool:
        """Whether this helper handles type_ref."""

    @abstractmethod
    def decode(self, param: ParameterInfo) -> str:
        """Expression building the value of param from ``state``."""

    @abstractmethod
    def encode(self, field_name: str, type_ref: TypeDescriptor) -> str:
        """Expression turning field_name (of type_ref) into its string form."""


class TypeHelperWithHelper(TypeHelper):
    """Helper for types decoded by calling a single ``String -> T`` function."""

    @abstractmethod
    def helper_name(self, type_ref: TypeDescriptor) -> str:
        """Name of the ``String -> T`` function."""

    def decode(self, param: ParameterInfo) -> str:
        if param.kind is not ParameterKind.PATH and (param.is_nullable or param.has_default):
            return f"{CONVERT_MAP_VALUE_HELPER_NAME}({_query_key(param)}, state.queryParameters, {self.helper_name(param.type)})"
        return f"{self.helper_name(param.type)}(state.{_state_value_access(param)})"


class ParseTypeHelper(TypeHelperWithHelper):
    """Types with a static parse function and a ``toString`` encoding."""

    def __init__(self, type_name: str, parse_function: str, null_check_on_encode: bool = True):
        self.type_name = type_name
        self.parse_function = parse_function
        self.null_check_on_encode = null_check_on_encode

    def matches(self, type_ref: TypeDescriptor) -> bool:
        return type_ref.name == self.type_name

    def helper_name(self, type_ref: TypeDescriptor) -> str:
        return self.parse_function

    def encode(self, field_name: str, type_ref: TypeDescriptor) -> str:
        suffix = ensure_not_null(type_ref) if self.null_check_on_encode else ""
        return f"{field_name}{suffix}.toString()"


class EnumTypeHelper(TypeHelperWithHelper):
    def matches(self, type_ref: TypeDescriptor) -> bool:
        return type_ref.is_enum

    def helper_name(self, type_ref: TypeDescriptor) -> str:
        return f"{enum_map_name(type_ref)}.{ENUM_EXTENSION_HELPER_NAME}"

    def encode(self, field_name: str, type_ref: TypeDescriptor) -> str:
        return f"{enum_map_name(type_ref)}[{field_name}{ensure_not_null(type_ref)}]"


class StringTypeHelper(TypeHelper):
    def matches(self, type_ref: TypeDescriptor) -> bool:
        return type_ref.name == "String"

    def decode(self, param: ParameterInfo) -> str:
        return f"state.{_state_value_access(param)}"

    def encode(self, field_name: str, type_ref: TypeDescriptor) -> str:
        return field_name


class IterableTypeHelper(TypeHelper):
    """``Iterable``, ``List`` and ``Set`` query parameters (repeated query keys)."""

    def matches(self, type_ref: TypeDescriptor) -> bool:
        return type_ref.name in ITERABLE_TYPES

    def decode(self, param: ParameterInfo) -> str:
        type_ref = param.type
        access = f"state.queryParametersAll[{_query_key(param)}]"
        if not type_ref.type_args:
            return access

        item_type = type_ref.type_args[0]
        item_helper = _item_helper(item_type, param.element)
        entries_decoder = "(e) => e"
        convert_to_not_null = ""
        if isinstance(item_helper, TypeHelperWithHelper):
            entries_decoder = item_helper.helper_name(item_type)
            if not item_type.is_nullable:
                convert_to_not_null = f".cast<{item_type.display(with_nullability=False)}>()"

        caster = ""
        if type_ref.name == "List":
            caster = ".toList()"
        elif type_ref.name == "Set":
            caster = ".toSet()"

        if not type_ref.is_nullable and not param.has_default:
            # A missing key decodes to an empty collection
            access = f"({access} ?? const <String>[])"
            return f"{access}.map({entries_decoder}){convert_to_not_null}{caster}"
        return f"{access}?.map({entries_decoder}){convert_to_not_null}{caster}"

    def encode(self, field_name: str, type_ref: TypeDescriptor) -> str:
        null_aware = "?" if type_ref.is_nullable else ""
        if not type_ref.type_args:
            return f"{field_name}{null_aware}.map((e) => e.toString()).toList()"
        item_type = type_ref.type_args[0]
        item_helper = _item_helper(item_type, None)
        return f"{field_name}{null_aware}.map((e) => {item_helper.encode('e', item_type)}).toList()"


# Ordered: the first matching helper wins
TYPE_HELPERS: tuple[TypeHelper, ...] = (
    ParseTypeHelper("BigInt", "BigInt.parse"),
    ParseTypeHelper("bool", BOOL_CONVERTER_HELPER_NAME),
    ParseTypeHelper("DateTime", "DateTime.parse"),
    ParseTypeHelper("double", "double.parse"),
    EnumTypeHelper(),
    ParseTypeHelper("int", "int.parse"),
    ParseTypeHelper("num", "num.parse"),
    StringTypeHelper(),
    ParseTypeHelper("Uri", "Uri.parse", null_check_on_encode=False),
    IterableTypeHelper(),
)


def helper_for(type_ref: TypeDescriptor) -> TypeHelper | None:
    for helper in TYPE_HELPERS:
        if helper.matches(type_ref):
            return helper
    return None


def _item_helper(item_type: TypeDescriptor, element: Any) -> TypeHelper:
    helper = helper_for(item_type)
    if helper is None or isinstance(helper, IterableTypeHelper):
        raise UnsupportedTypeError(f"The element type `{item_type.display()}` is not supported.", element=element)
    return helper


def decode_parameter(param: ParameterInfo) -> str:
    """
    Dart expression decoding param from a ``GoRouterState`` named ``state``.

    Raises:
        UnsupportedTypeError: If no helper handles the parameter type
    """
    if param.kind is ParameterKind.PAYLOAD:
        return f"state.{_state_value_access(param)}"

    helper = helper_for(param.type)
    if helper is None:
        raise UnsupportedTypeError(
            f"The parameter type `{param.type.display(with_nullability=False)}` is not supported.",
            element=param.element,
        )

    decoded = helper.decode(param)
    if not param.is_required and param.has_default:
        decoded += f" ?? {param.default_value}"
    return decoded


def encode_field(field_element: FieldElement) -> str:
    """
    Dart expression encoding a field of the route data class to a string.

    Raises:
        UnsupportedTypeError: If no helper handles the field type
    """
    helper = helper_for(field_element.type)
    if helper is None:
        raise UnsupportedTypeError(
            f"The return type `{field_element.type.display(with_nullability=False)}` is not supported.",
            element=field_element,
        )
    try:
        return helper.encode(field_element.name, field_element.type)
    except UnsupportedTypeError as e:
        raise UnsupportedTypeError(e.message, element=field_element) from e


@dataclass
class EnumCodecSpec:
    """Mapping between the members of an enum and their external strings."""

    enum_name: str = ""
    map_name: str = ""
    entries: list[tuple[str, str]] = field(default_factory=list)  # (member, kebab string)

    def to_external(self, member: str) -> str:
        for name, value in self.entries:
            if name == member:
                return value
        raise KeyError(member)

    def from_external(self, value: str) -> str:
        """Reverse lookup, mirroring the generated ``_$fromName`` helper."""
        matches = [name for name, external in self.entries if external == value]
        if len(matches) != 1:
            raise KeyError(value)
        return matches[0]


def build_enum_codec(type_ref: TypeDescriptor, enum_element: EnumElement) -> EnumCodecSpec:
    """
    Build the codec table for an enum.

    Raises:
        EnumCodecCollisionError: If two members share the same kebab-case string
    """
    spec = EnumCodecSpec(enum_name=enum_element.name, map_name=enum_map_name(type_ref))
    owners: dict[str, str] = {}
    for member in enum_element.members:
        value = kebab_case(member)
        if value in owners:
            raise EnumCodecCollisionError(
                f'Enum members "{owners[value]}" and "{member}" of {enum_element.name} both encode to "{value}".',
                element=enum_element,
            )
        owners[value] = member
        spec.entries.append((member, value))
    return spec
