"""
Diagnostics raised while building or emitting route configurations.

Every failure is a subclass of InvalidGenerationSourceError. It carries an
error kind, a human readable message, and the offending element so the host
can attribute it to a source location. Raising one aborts generation for the
top-level declaration being processed.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kind of a generation failure."""

    INVALID_SOURCE = "invalid_source"
    PATTERN = "pattern"
    MISSING_PARAMETER = "missing_parameter"
    MISSING_PATH = "missing_path"
    ANNOTATION_TYPE_MISMATCH = "annotation_type_mismatch"
    NULLABLE_PATH_PARAMETER = "nullable_path_parameter"
    NULLABLE_DEFAULT_VALUE = "nullable_default_value"
    UNRESOLVED_FIELD = "unresolved_field"
    MALFORMED_PARAMETER_ROLE = "malformed_parameter_role"
    UNRESOLVED_TYPE = "unresolved_type"
    INVALID_ANNOTATION_TARGET = "invalid_annotation_target"
    MISSING_CONSTRUCTOR = "missing_constructor"
    UNSUPPORTED_TYPE = "unsupported_type"
    ENUM_CODEC_COLLISION = "enum_codec_collision"
    MALFORMED_DECLARATION = "malformed_declaration"


# Message used for states well-formed host input can never produce
LIKELY_ISSUE_MESSAGE = "Should never get here! File an issue!"


class InvalidGenerationSourceError(Exception):
    """Raised when a declaration cannot be turned into generated code.

    Attributes:
        kind: The error kind
        message: Human readable description
        element: The offending declaration, class, field or parameter (if any)
        todo: Optional hint on how to fix the source
    """

    kind: ErrorKind = ErrorKind.INVALID_SOURCE

    def __init__(self, message: str, element: Any = None, todo: str = ""):
        super().__init__(message)
        self.message = message
        self.element = element
        self.todo = todo

    @property
    def element_name(self) -> str | None:
        return getattr(self.element, "name", None)

    @property
    def location(self) -> str | None:
        return getattr(self.element, "location", None) or None

    def format(self) -> str:
        """Render the error the way the CLI reports it."""
        lines = [self.message]
        if self.element_name:
            where = f"at {self.location}" if self.location else "(unknown location)"
            lines.append(f"  `{self.element_name}` {where}")
        if self.todo:
            lines.append(f"  {self.todo}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.format()


class PatternError(InvalidGenerationSourceError):
    """A path template holds malformed or duplicated parameter syntax."""

    kind = ErrorKind.PATTERN


class MissingParameterError(InvalidGenerationSourceError):
    """A path substitution is missing a binding for one of the template parameters."""

    kind = ErrorKind.MISSING_PARAMETER


class MissingPathError(InvalidGenerationSourceError):
    kind = ErrorKind.MISSING_PATH


class AnnotationTypeMismatchError(InvalidGenerationSourceError):
    kind = ErrorKind.ANNOTATION_TYPE_MISMATCH


class NullablePathParameterError(InvalidGenerationSourceError):
    kind = ErrorKind.NULLABLE_PATH_PARAMETER

    def __init__(self, element: Any):
        super().__init__("Required parameters in the path cannot be nullable.", element=element)


class NullableDefaultValueError(InvalidGenerationSourceError):
    kind = ErrorKind.NULLABLE_DEFAULT_VALUE

    def __init__(self, element: Any):
        super().__init__(
            "Default value used with a nullable type. Only non-nullable type can have a default value.",
            element=element,
            todo="Remove the default value or make the type non-nullable.",
        )


class UnresolvedFieldError(InvalidGenerationSourceError):
    kind = ErrorKind.UNRESOLVED_FIELD


class MalformedParameterRoleError(InvalidGenerationSourceError):
    kind = ErrorKind.MALFORMED_PARAMETER_ROLE

    def __init__(self, element: Any):
        super().__init__(f"{LIKELY_ISSUE_MESSAGE} (param not named or positional)", element=element)


class UnresolvedTypeError(InvalidGenerationSourceError):
    kind = ErrorKind.UNRESOLVED_TYPE


class InvalidAnnotationTargetError(InvalidGenerationSourceError):
    kind = ErrorKind.INVALID_ANNOTATION_TARGET


class MissingConstructorError(InvalidGenerationSourceError):
    kind = ErrorKind.MISSING_CONSTRUCTOR


class UnsupportedTypeError(InvalidGenerationSourceError):
    kind = ErrorKind.UNSUPPORTED_TYPE


class EnumCodecCollisionError(InvalidGenerationSourceError):
    kind = ErrorKind.ENUM_CODEC_COLLISION


class MalformedDeclarationError(InvalidGenerationSourceError):
    """The host document itself is structurally invalid (unknown kinds, bad type strings)."""

    kind = ErrorKind.MALFORMED_DECLARATION
