"""
Node definitions for the host-supplied declaration metadata.

These nodes mirror what the host build pipeline already resolved about the
annotated Dart declarations: types, constructors, fields and the nested route
annotations. They carry no generation logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Annotation kinds understood by the tree builder
GO_ROUTE_ANNOTATION = "TypedGoRoute"
SHELL_ROUTE_ANNOTATION = "TypedShellRoute"
ROUTE_ANNOTATIONS = (GO_ROUTE_ANNOTATION, SHELL_ROUTE_ANNOTATION)


@dataclass(frozen=True)
class TypeDescriptor:
    """A resolved Dart type reference."""

    name: str = ""  # e.g. "int", "List", "Color"
    type_args: tuple[TypeDescriptor, ...] = ()
    is_nullable: bool = False
    is_enum: bool = False

    def display(self, with_nullability: bool = True) -> str:
        """Dart display string, e.g. ``List<int>?``."""
        result = self.name
        if self.type_args:
            args = ", ".join(arg.display() for arg in self.type_args)
            result = f"{result}<{args}>"
        if with_nullability and self.is_nullable:
            result += "?"
        return result

    @property
    def is_parameterized(self) -> bool:
        return bool(self.type_args)

    def __str__(self) -> str:
        return self.display()


@dataclass
class ParameterElement:
    """A constructor parameter."""

    name: str = ""
    type: TypeDescriptor = field(default_factory=TypeDescriptor)
    is_positional: bool = True
    is_named: bool = False
    is_required: bool = True
    default_value_code: str | None = None  # Dart literal as written in the source
    location: str = ""

    @property
    def has_default_value(self) -> bool:
        return self.default_value_code is not None


@dataclass
class FieldElement:
    """A field or getter declared on a class."""

    name: str = ""
    type: TypeDescriptor = field(default_factory=TypeDescriptor)
    is_static: bool = False
    location: str = ""


@dataclass
class ConstructorElement:
    """The unnamed (default) constructor of a class."""

    is_const: bool = False
    parameters: list[ParameterElement] = field(default_factory=list)


@dataclass
class ClassElement:
    """A class the host exposes for introspection."""

    name: str = ""
    unnamed_constructor: ConstructorElement | None = None
    fields: list[FieldElement] = field(default_factory=list)
    location: str = ""

    def get_getter(self, name: str) -> FieldElement | None:
        """Instance getter called name, if any."""
        for field_element in self.fields:
            if field_element.name == name and not field_element.is_static:
                return field_element
        return None

    @property
    def static_fields(self) -> list[FieldElement]:
        return [f for f in self.fields if f.is_static]


@dataclass
class EnumElement:
    """An enum type and its members in declaration order."""

    name: str = ""
    members: list[str] = field(default_factory=list)
    location: str = ""


@dataclass
class RouteAnnotation:
    """A ``@TypedGoRoute`` / ``@TypedShellRoute`` annotation value (possibly nested)."""

    kind: str = GO_ROUTE_ANNOTATION
    type_argument: str | None = None  # Name of the route data class
    path: str | None = None
    name: str | None = None
    routes: list[RouteAnnotation] = field(default_factory=list)
    location: str = ""

    @property
    def is_shell_route(self) -> bool:
        return self.kind == SHELL_ROUTE_ANNOTATION


@dataclass
class Declaration:
    """One top-level annotated declaration handed over by the host."""

    element: str = ""  # Name of the annotated element
    annotation: RouteAnnotation = field(default_factory=RouteAnnotation)
    location: str = ""

    @property
    def name(self) -> str:
        return self.element


@dataclass
class DeclarationBatch:
    """Everything the host supplies for one library."""

    library: str = ""
    classes: dict[str, ClassElement] = field(default_factory=dict)
    enums: dict[str, EnumElement] = field(default_factory=dict)
    declarations: list[Declaration] = field(default_factory=list)
