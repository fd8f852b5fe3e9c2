"""
Analyzer module.

Contains path pattern analysis, parameter classification and the route
configuration tree builder.
"""

from __future__ import annotations

from .parameters import (
    EXTRA_FIELD_NAME,
    ClassifiedParameters,
    ParameterClassifier,
    ParameterInfo,
    ParameterKind,
)
from .path_pattern import (
    LiteralSegment,
    ParameterSegment,
    PathPattern,
    join_paths,
    parse_pattern,
    path_parameters_from_pattern,
    pattern_to_path,
)
from .route_config import GoRouteConfig, RouteBaseConfig, RouteConfig, ShellRouteConfig
from .tree_builder import ConfigTreeBuilder

__all__ = [
    "EXTRA_FIELD_NAME",
    "ParameterKind",
    "ParameterInfo",
    "ClassifiedParameters",
    "ParameterClassifier",
    "LiteralSegment",
    "ParameterSegment",
    "PathPattern",
    "parse_pattern",
    "path_parameters_from_pattern",
    "pattern_to_path",
    "join_paths",
    "RouteBaseConfig",
    "RouteConfig",
    "GoRouteConfig",
    "ShellRouteConfig",
    "ConfigTreeBuilder",
]
