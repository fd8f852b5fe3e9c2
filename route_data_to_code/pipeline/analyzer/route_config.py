"""
Route configuration tree nodes.

A RouteConfig is either a GoRouteConfig (a leaf route contributing a path)
or a ShellRouteConfig (a layout route grouping its children under its own
navigator). Consumers match on the two variants exhaustively.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TypeAlias

from ...utils import route_getter_name
from ..declarations.nodes import ClassElement
from .parameters import ClassifiedParameters
from .path_pattern import PathPattern, join_paths


@dataclass
class RouteBaseConfig:
    """Fields shared by both route kinds."""

    route_data_class: ClassElement = field(default_factory=ClassElement)

    # Set once by the builder; excluded from equality to keep comparisons acyclic
    parent: RouteConfig | None = field(default=None, compare=False, repr=False)

    # Getter expression for the parent navigator key, e.g. "MyRoute.$parentNavigatorKey"
    parent_navigator_key: str | None = None

    children: list[RouteConfig] = field(default_factory=list)

    @property
    def class_name(self) -> str:
        return self.route_data_class.name

    @property
    def extension_name(self) -> str:
        return f"${self.class_name}Extension"

    @property
    def route_getter_name(self) -> str:
        return route_getter_name(self.class_name)

    def flatten(self) -> Iterator[RouteConfig]:
        """This config and all descendants, pre-order, children in declaration order."""
        yield self
        for child in self.children:
            yield from child.flatten()


@dataclass
class GoRouteConfig(RouteBaseConfig):
    """Configuration of a ``GoRouteData`` route."""

    path: str = ""
    name: str | None = None

    # Pattern of the path joined with every ancestor GoRouteConfig path
    path_pattern: PathPattern = field(default_factory=PathPattern)
    parameters: ClassifiedParameters = field(default_factory=ClassifiedParameters)

    @property
    def raw_joined_path(self) -> str:
        segments = []
        config: RouteConfig | None = self
        while config is not None:
            if isinstance(config, GoRouteConfig):
                segments.append(config.path)
            config = config.parent
        return join_paths(reversed(segments))

    @property
    def path_parameters(self) -> set[str]:
        return set(self.path_pattern.parameters)


@dataclass
class ShellRouteConfig(RouteBaseConfig):
    """Configuration of a ``ShellRouteData`` route."""

    # Getter expression for the shell's own navigator key
    navigator_key: str | None = None


RouteConfig: TypeAlias = GoRouteConfig | ShellRouteConfig
