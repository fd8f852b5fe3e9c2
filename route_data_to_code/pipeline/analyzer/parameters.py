"""
Constructor parameter classification.

Splits the parameters of a route data constructor into path, query and
payload parameters and enforces the nullability rules for each kind.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field
from enum import Enum

from ..declarations.nodes import ParameterElement, TypeDescriptor
from ..diagnostics import NullableDefaultValueError, NullablePathParameterError

# Reserved name of the parameter carrying the opaque navigation payload
EXTRA_FIELD_NAME = "$extra"


class ParameterKind(Enum):
    """Where a parameter value travels."""

    PATH = "path"
    QUERY = "query"
    PAYLOAD = "payload"


@dataclass
class ParameterInfo:
    """A classified constructor parameter."""

    name: str = ""
    kind: ParameterKind = ParameterKind.QUERY
    is_required: bool = False
    is_nullable: bool = False
    has_default: bool = False
    default_value: str | None = None  # Dart literal exactly as declared
    element: ParameterElement | None = None

    @property
    def type(self) -> TypeDescriptor:
        return self.element.type if self.element else TypeDescriptor()

    @classmethod
    def from_element(cls, element: ParameterElement, kind: ParameterKind) -> ParameterInfo:
        return cls(
            name=element.name,
            kind=kind,
            is_required=element.is_required,
            is_nullable=element.type.is_nullable,
            has_default=element.has_default_value,
            default_value=element.default_value_code,
            element=element,
        )


@dataclass
class ClassifiedParameters:
    """Parameters of one constructor, split by kind."""

    path: list[ParameterInfo] = field(default_factory=list)
    query: list[ParameterInfo] = field(default_factory=list)
    payload: ParameterInfo | None = None

    # All parameters in constructor declaration order
    ordered: list[ParameterInfo] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.path and not self.query and self.payload is None


class ParameterClassifier:
    """Classifies constructor parameters against a set of path parameter names."""

    def __init__(self, extra_field_name: str = EXTRA_FIELD_NAME):
        self.extra_field_name = extra_field_name

    def classify(self, parameters: list[ParameterElement], path_parameters: Collection[str]) -> ClassifiedParameters:
        """
        Classify constructor parameters.

        Args:
            parameters: Constructor parameters in declaration order
            path_parameters: Names of the parameters of the joined path pattern

        Returns:
            ClassifiedParameters preserving declaration order per kind

        Raises:
            NullablePathParameterError: A required path parameter is nullable
            NullableDefaultValueError: A parameter has both a default and a nullable type
        """
        result = ClassifiedParameters()
        for element in parameters:
            kind = self.kind_of(element, path_parameters)
            info = ParameterInfo.from_element(element, kind)
            self._validate(info)

            match kind:
                case ParameterKind.PATH:
                    result.path.append(info)
                case ParameterKind.QUERY:
                    result.query.append(info)
                case ParameterKind.PAYLOAD:
                    # Parameter names are unique, so the reserved name occurs at most once
                    result.payload = info
            result.ordered.append(info)
        return result

    def kind_of(self, element: ParameterElement, path_parameters: Collection[str]) -> ParameterKind:
        if element.name in path_parameters:
            return ParameterKind.PATH
        if element.name == self.extra_field_name:
            return ParameterKind.PAYLOAD
        return ParameterKind.QUERY

    def _validate(self, info: ParameterInfo) -> None:
        if info.kind is ParameterKind.PAYLOAD:
            return
        if info.kind is ParameterKind.PATH and info.is_required and info.is_nullable:
            raise NullablePathParameterError(info.element)
        if info.has_default and info.is_nullable:
            raise NullableDefaultValueError(info.element)
