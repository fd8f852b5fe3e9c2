"""
Route configuration tree builder.

Turns one top-level route annotation (with its nested child annotations) into
a RouteConfig tree. Path patterns are parsed and constructor parameters are
classified while the tree is built, so every validation failure surfaces
before any text is emitted.
"""

from __future__ import annotations

import logging

from ..declarations.nodes import ClassElement, Declaration, RouteAnnotation
from ..declarations.type_info import TypeInfoProvider
from ..diagnostics import (
    AnnotationTypeMismatchError,
    InvalidAnnotationTargetError,
    MissingConstructorError,
    MissingPathError,
    UnresolvedTypeError,
)
from .parameters import ParameterClassifier
from .path_pattern import parse_pattern
from .route_config import GoRouteConfig, RouteConfig, ShellRouteConfig

logger = logging.getLogger(__name__)

# Reserved static field names looked up for navigator keys
NAVIGATOR_KEY_NAME = "$navigatorKey"
PARENT_NAVIGATOR_KEY_NAME = "$parentNavigatorKey"

# Type argument a navigator key field must carry
NAVIGATOR_STATE_TYPE = "NavigatorState"


class ConfigTreeBuilder:
    """Builds RouteConfig trees from route annotations."""

    def __init__(self, type_info: TypeInfoProvider, classifier: ParameterClassifier | None = None):
        """
        Initialize the builder.

        Args:
            type_info: Lookup of the classes and enums the annotations refer to
            classifier: Parameter classifier (defaults to the standard one)
        """
        self.type_info = type_info
        self.classifier = classifier or ParameterClassifier()

    def build(self, declaration: Declaration) -> RouteConfig:
        """
        Build the tree for a top-level declaration.

        Args:
            declaration: The annotated declaration

        Returns:
            Root RouteConfig of the tree

        Raises:
            InvalidGenerationSourceError: On the first validation failure
        """
        element = self.type_info.get_class(declaration.element)
        if element is None:
            target = self.type_info.get_enum(declaration.element) or declaration
            raise InvalidAnnotationTargetError(
                f"The @{declaration.annotation.kind} annotation can only be applied to classes.",
                element=target,
            )

        # Root type must match before any node of the tree is validated
        type_argument = declaration.annotation.type_argument
        if type_argument is not None and type_argument != element.name:
            raise AnnotationTypeMismatchError(
                f"The @{declaration.annotation.kind} annotation must have a type parameter that matches the annotated element.",
                element=element,
            )

        root = self._build_node(declaration.annotation, element, parent=None)

        logger.debug("Built route tree for %s with %d node(s)", element.name, sum(1 for _ in root.flatten()))
        return root

    def _build_node(self, annotation: RouteAnnotation, element: ClassElement, parent: RouteConfig | None) -> RouteConfig:
        class_element = self._resolve_type_argument(annotation, element)
        parent_navigator_key = self._navigator_key_getter(class_element, PARENT_NAVIGATOR_KEY_NAME)

        node: RouteConfig
        if annotation.is_shell_route:
            node = ShellRouteConfig(
                route_data_class=class_element,
                parent=parent,
                parent_navigator_key=parent_navigator_key,
                navigator_key=self._navigator_key_getter(class_element, NAVIGATOR_KEY_NAME),
            )
        else:
            if annotation.path is None:
                raise MissingPathError("Missing `path` value on annotation.", element=element)
            node = GoRouteConfig(
                route_data_class=class_element,
                parent=parent,
                parent_navigator_key=parent_navigator_key,
                path=annotation.path,
                name=annotation.name,
            )
            self._analyze_go_route(node)

        logger.debug("Route node %s (%s)", class_element.name, type(node).__name__)

        for child in annotation.routes:
            node.children.append(self._build_node(child, element, parent=node))

        return node

    def _resolve_type_argument(self, annotation: RouteAnnotation, element: ClassElement) -> ClassElement:
        class_element = self.type_info.get_class(annotation.type_argument) if annotation.type_argument else None
        if class_element is None:
            raise UnresolvedTypeError(
                f"The type parameter on one of the @{annotation.kind} declarations could not be parsed.",
                element=element,
            )
        return class_element

    def _analyze_go_route(self, node: GoRouteConfig) -> None:
        """Parse the joined path and classify the constructor parameters of node."""
        ctor = node.route_data_class.unnamed_constructor
        if ctor is None:
            raise MissingConstructorError("Missing default constructor", element=node.route_data_class)

        node.path_pattern = parse_pattern(node.raw_joined_path, element=node.route_data_class)
        node.parameters = self.classifier.classify(ctor.parameters, node.path_parameters)

    @staticmethod
    def _navigator_key_getter(class_element: ClassElement, key_name: str) -> str | None:
        """
        Getter expression for a navigator key field, if the class declares one.

        The field must be static, named key_name, and typed with exactly one
        type argument whose name is NavigatorState (e.g. GlobalKey<NavigatorState>).
        """
        for field_element in class_element.static_fields:
            if field_element.name != key_name:
                continue
            type_args = field_element.type.type_args
            if len(type_args) == 1 and type_args[0].display(with_nullability=False) == NAVIGATOR_STATE_TYPE:
                return f"{class_element.name}.{field_element.name}"
        return None
