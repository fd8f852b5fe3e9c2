"""
Declarations module.

Contains the host declaration model, its parser and the type info provider.
"""

from __future__ import annotations

from .nodes import (
    GO_ROUTE_ANNOTATION,
    SHELL_ROUTE_ANNOTATION,
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
from .parser import DeclarationParser, TypeStringParser
from .type_info import BatchTypeInfo, TypeInfoProvider

__all__ = [
    "GO_ROUTE_ANNOTATION",
    "SHELL_ROUTE_ANNOTATION",
    "TypeDescriptor",
    "ParameterElement",
    "FieldElement",
    "ConstructorElement",
    "ClassElement",
    "EnumElement",
    "RouteAnnotation",
    "Declaration",
    "DeclarationBatch",
    "DeclarationParser",
    "TypeStringParser",
    "TypeInfoProvider",
    "BatchTypeInfo",
]
