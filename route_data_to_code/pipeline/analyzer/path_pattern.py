"""
Path template analysis.

A path template is a slash delimited string where ``:name`` marks a
parameter, optionally followed by a parenthesized regex constraint
(``:id(\\d+)``). This module extracts the parameters of a template, joins
ancestor templates, and substitutes concrete values back into a template.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ..diagnostics import MissingParameterError, PatternError

_PARAMETER_PATTERN = re.compile(r":([A-Za-z_]\w*)(\((?:\\.|[^\\()])+\))?")


@dataclass(frozen=True)
class LiteralSegment:
    """Verbatim text between parameters."""

    text: str = ""


@dataclass(frozen=True)
class ParameterSegment:
    """A ``:name`` parameter and its optional regex constraint."""

    name: str = ""
    constraint: str | None = None  # Constraint including the parentheses


@dataclass(frozen=True)
class PathPattern:
    """A parsed path template."""

    template: str = ""
    segments: tuple[LiteralSegment | ParameterSegment, ...] = ()

    @property
    def parameters(self) -> list[str]:
        """Parameter names in template order."""
        return [s.name for s in self.segments if isinstance(s, ParameterSegment)]

    def substitute(self, values: Mapping[str, str]) -> str:
        """
        Replace every parameter with its value.

        Args:
            values: Mapping from parameter name to the already encoded value

        Returns:
            The concrete path

        Raises:
            MissingParameterError: If a parameter of the template has no value
        """
        parts = []
        for segment in self.segments:
            if isinstance(segment, LiteralSegment):
                parts.append(segment.text)
            elif segment.name in values:
                parts.append(values[segment.name])
            else:
                raise MissingParameterError(f'Missing value for path parameter "{segment.name}" in "{self.template}".')
        return "".join(parts)


def parse_pattern(template: str, element: Any = None) -> PathPattern:
    """
    Parse a path template into segments.

    Args:
        template: The path template
        element: Declaration to attribute errors to

    Returns:
        The parsed PathPattern

    Raises:
        PatternError: If a ``:`` does not start a valid parameter, a
            constraint is left open, or a parameter name is repeated
    """
    segments: list[LiteralSegment | ParameterSegment] = []
    seen: set[str] = set()
    start = 0

    for match in _PARAMETER_PATTERN.finditer(template):
        literal = template[start : match.start()]
        _check_literal(template, literal, start, element)
        if literal:
            segments.append(LiteralSegment(literal))

        name, constraint = match.group(1), match.group(2)
        if constraint is None and template.startswith("(", match.end()):
            raise PatternError(f'Unclosed constraint for parameter "{name}" in "{template}".', element=element)
        if name in seen:
            raise PatternError(f'Path parameter "{name}" appears more than once in "{template}".', element=element)
        seen.add(name)
        segments.append(ParameterSegment(name, constraint))
        start = match.end()

    literal = template[start:]
    _check_literal(template, literal, start, element)
    if literal:
        segments.append(LiteralSegment(literal))

    return PathPattern(template=template, segments=tuple(segments))


def _check_literal(template: str, literal: str, offset: int, element: Any) -> None:
    index = literal.find(":")
    if index >= 0:
        raise PatternError(
            f'Malformed path parameter at position {offset + index} in "{template}". Parameter names must be valid identifiers.',
            element=element,
        )


def path_parameters_from_pattern(template: str) -> list[str]:
    """Ordered, unique parameter names of template."""
    return parse_pattern(template).parameters


def pattern_to_path(template: str, values: Mapping[str, str]) -> str:
    """Substitute values into template (see PathPattern.substitute)."""
    return parse_pattern(template).substitute(values)


def join_paths(parts: Iterable[str]) -> str:
    """
    Join path templates, nearest-root first.

    At each join point the trailing slashes of the left side and the leading
    slashes of the right side collapse to exactly one ``/``. Empty parts are
    skipped.

    Examples:
        ["/", "family", ":fid"] -> "/family/:fid"
        ["/a/", "/b"] -> "/a/b"
    """
    joined = ""
    for part in parts:
        if not part:
            continue
        if not joined:
            joined = part
        else:
            joined = joined.rstrip("/") + "/" + part.lstrip("/")
    return joined
