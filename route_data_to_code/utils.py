"""
Utility functions for the route data code generator.
"""

import re

# Regex pattern matching the characters that start a new kebab/snake word
_UPPER_CASE_PATTERN = re.compile(r"[A-Z]")

# Characters that need escaping (or change the quoting) in a Dart string literal
_DART_ESCAPE_PATTERN = re.compile(r"['$\\\x00-\x1f\x7f]")

_DART_ESCAPE_MAP = {
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
}


def _fix_case(text: str, separator: str) -> str:
    """Lower-case every capital letter, prefixing it with separator unless it starts the text."""

    def replace(match: re.Match) -> str:
        lower = match.group(0).lower()
        if match.start() > 0:
            return f"{separator}{lower}"
        return lower

    return _UPPER_CASE_PATTERN.sub(replace, text)


def kebab_case(text: str) -> str:
    """Convert camelCase or PascalCase text to kebab-case.

    Examples:
        "darkBlue" -> "dark-blue"
        "Red" -> "red"
        "sortOrder" -> "sort-order"
        "snake_case" -> "snake_case"
        "URL" -> "u-r-l"

    Args:
        text: The identifier to convert

    Returns:
        kebab-case string
    """
    return _fix_case(text, "-")


def lower_first(text: str) -> str:
    """Lower-case the first character of text."""
    if not text:
        return ""
    return text[0].lower() + text[1:]


def route_getter_name(class_name: str) -> str:
    """Name of the top-level getter holding the route tree of class_name."""
    return "$" + lower_first(class_name)


def escape_dart_string(value: str) -> str:
    """Render value as a Dart string literal.

    Single quotes are preferred. Double quotes are used when the value holds a
    single quote but no double quote. Raw strings are used for values holding
    `$` and nothing that needs a backslash escape.

    Examples:
        "/family/:fid" -> "'/family/:fid'"
        "it's" -> '"it\'s"'
        "$extra" -> "r'$extra'"
    """
    has_single_quote = False
    has_double_quote = '"' in value
    has_dollar = False
    can_be_raw = True

    def replace(match: re.Match) -> str:
        nonlocal has_single_quote, has_dollar, can_be_raw
        char = match.group(0)
        if char == "'":
            has_single_quote = True
            return char
        if char == "$":
            has_dollar = True
            return char
        can_be_raw = False
        return _DART_ESCAPE_MAP.get(char, f"\\x{ord(char):02X}")

    escaped = _DART_ESCAPE_PATTERN.sub(replace, value)

    if not has_dollar:
        if not has_single_quote:
            return f"'{escaped}'"
        if not has_double_quote:
            return f'"{escaped}"'
    elif can_be_raw:
        if not has_single_quote:
            return f"r'{escaped}'"
        if not has_double_quote:
            return f'r"{escaped}"'

    escaped = re.sub(r"(?=[$'])", lambda _: "\\", escaped)
    return f"'{escaped}'"
