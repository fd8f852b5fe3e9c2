"""
Host document parser that builds the declaration model.

Turns the JSON-compatible host document (types + declarations) into
DeclarationBatch nodes without validating any routing semantics; those checks
belong to the tree builder.
"""

from __future__ import annotations

import re
from typing import Any

from ..diagnostics import MalformedDeclarationError
from .nodes import (
    ROUTE_ANNOTATIONS,
    ClassElement,
    ConstructorElement,
    Declaration,
    DeclarationBatch,
    EnumElement,
    FieldElement,
    ParameterElement,
    RouteAnnotation,
    TypeDescriptor,
)

_TYPE_TOKEN_PATTERN = re.compile(r"\s*(?:([A-Za-z_$][\w$.]*)|(.))")


def _require(definition: dict[str, Any], key: str, what: str) -> Any:
    if key not in definition:
        raise MalformedDeclarationError(f"Missing '{key}' in {what} definition.")
    return definition[key]


class TypeStringParser:
    """Parses Dart type strings such as ``Map<String, List<int>?>?``."""

    def __init__(self, enum_names: set[str]):
        self.enum_names = enum_names

    def parse(self, text: str) -> TypeDescriptor:
        tokens = self._tokenize(text)
        descriptor, position = self._parse_type(tokens, 0, text)
        if position != len(tokens):
            raise MalformedDeclarationError(f"Unexpected '{tokens[position]}' in type `{text}`.")
        return descriptor

    def _tokenize(self, text: str) -> list[str]:
        tokens = []
        for match in _TYPE_TOKEN_PATTERN.finditer(text):
            identifier, symbol = match.groups()
            if identifier:
                tokens.append(identifier)
            elif symbol and not symbol.isspace():
                if symbol not in "<>,?":
                    raise MalformedDeclarationError(f"Unexpected character '{symbol}' in type `{text}`.")
                tokens.append(symbol)
        if not tokens:
            raise MalformedDeclarationError("Empty type string.")
        return tokens

    def _parse_type(self, tokens: list[str], position: int, text: str) -> tuple[TypeDescriptor, int]:
        if position >= len(tokens) or tokens[position] in "<>,?":
            raise MalformedDeclarationError(f"Expected a type name in `{text}`.")
        name = tokens[position]
        position += 1

        type_args: list[TypeDescriptor] = []
        if position < len(tokens) and tokens[position] == "<":
            position += 1
            while True:
                arg, position = self._parse_type(tokens, position, text)
                type_args.append(arg)
                if position >= len(tokens):
                    raise MalformedDeclarationError(f"Unclosed type arguments in `{text}`.")
                if tokens[position] == ",":
                    position += 1
                    continue
                if tokens[position] == ">":
                    position += 1
                    break
                raise MalformedDeclarationError(f"Unexpected '{tokens[position]}' in type `{text}`.")

        is_nullable = False
        if position < len(tokens) and tokens[position] == "?":
            is_nullable = True
            position += 1

        return (
            TypeDescriptor(
                name=name,
                type_args=tuple(type_args),
                is_nullable=is_nullable,
                is_enum=name in self.enum_names,
            ),
            position,
        )


class DeclarationParser:
    """Parses a host document into a DeclarationBatch."""

    def __init__(self):
        self.type_parser = TypeStringParser(set())

    def parse(self, document: dict[str, Any]) -> DeclarationBatch:
        """
        Parse a host document.

        Args:
            document: Dictionary with "types", "declarations" and optional "library"

        Returns:
            DeclarationBatch with classes, enums and declarations

        Raises:
            MalformedDeclarationError: If the document is structurally invalid
        """
        types = document.get("types") or {}
        batch = DeclarationBatch(library=document.get("library") or "")

        # First pass: enum names are needed to resolve type strings
        enum_names = set()
        for name, type_def in types.items():
            kind = type_def.get("kind", "class")
            if kind == "enum":
                enum_names.add(name)
            elif kind != "class":
                raise MalformedDeclarationError(f"Unknown type kind '{kind}' for `{name}`.")
        self.type_parser = TypeStringParser(enum_names)

        for name, type_def in types.items():
            if name in enum_names:
                batch.enums[name] = EnumElement(
                    name=name,
                    members=list(type_def.get("members") or []),
                    location=type_def.get("location", ""),
                )
            else:
                batch.classes[name] = self._parse_class(name, type_def)

        for declaration in document.get("declarations") or []:
            batch.declarations.append(self._parse_declaration(declaration))

        return batch

    def parse_type(self, text: str) -> TypeDescriptor:
        return self.type_parser.parse(text)

    def _parse_class(self, name: str, type_def: dict[str, Any]) -> ClassElement:
        location = type_def.get("location", "")
        class_element = ClassElement(name=name, location=location)

        if "constructor" not in type_def:
            # Implicit default constructor
            class_element.unnamed_constructor = ConstructorElement()
        elif type_def["constructor"] is not None:
            ctor_def = type_def["constructor"]
            class_element.unnamed_constructor = self._parse_constructor(ctor_def, location)

            # Initializing formals (this.x) declare a getter of the same name
            for param_def, param in zip(ctor_def.get("parameters") or [], class_element.unnamed_constructor.parameters):
                if param_def.get("initializing_formal", True):
                    class_element.fields.append(FieldElement(name=param.name, type=param.type, location=param.location))

        for field_def in type_def.get("fields") or []:
            class_element.fields.append(
                FieldElement(
                    name=_require(field_def, "name", "field"),
                    type=self.parse_type(_require(field_def, "type", "field")),
                    is_static=field_def.get("static", False),
                    location=field_def.get("location", location),
                )
            )

        return class_element

    def _parse_constructor(self, ctor_def: dict[str, Any], location: str) -> ConstructorElement:
        constructor = ConstructorElement(is_const=ctor_def.get("const", False))
        for param_def in ctor_def.get("parameters") or []:
            role = param_def.get("role", "positional")
            is_positional = role == "positional"
            is_named = role == "named"
            constructor.parameters.append(
                ParameterElement(
                    name=_require(param_def, "name", "parameter"),
                    type=self.parse_type(_require(param_def, "type", "parameter")),
                    is_positional=is_positional,
                    is_named=is_named,
                    is_required=param_def.get("required", is_positional),
                    default_value_code=param_def.get("default"),
                    location=param_def.get("location", location),
                )
            )
        return constructor

    def _parse_declaration(self, declaration: dict[str, Any]) -> Declaration:
        location = declaration.get("location", "")
        return Declaration(
            element=_require(declaration, "element", "declaration"),
            annotation=self._parse_annotation(_require(declaration, "annotation", "declaration"), location),
            location=location,
        )

    def _parse_annotation(self, annotation: dict[str, Any], location: str) -> RouteAnnotation:
        kind = annotation.get("kind", ROUTE_ANNOTATIONS[0])
        if kind not in ROUTE_ANNOTATIONS:
            raise MalformedDeclarationError(f"Unknown route annotation '{kind}'. Expected one of {', '.join(ROUTE_ANNOTATIONS)}.")
        location = annotation.get("location", location)
        return RouteAnnotation(
            kind=kind,
            type_argument=annotation.get("type"),
            path=annotation.get("path"),
            name=annotation.get("name"),
            routes=[self._parse_annotation(child, location) for child in annotation.get("routes") or []],
            location=location,
        )
