"""
Shared helper functions referenced by generated code.

The catalog is immutable module state. A registry scans emitted blocks for
helper names and returns each referenced helper definition once, in the order
the references were first seen.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from .blocks import BlockKind, TextBlock

CONVERT_MAP_VALUE_HELPER_NAME = "_$convertMapValue"
BOOL_CONVERTER_HELPER_NAME = "_$boolConverter"
ENUM_EXTENSION_HELPER_NAME = "_$fromName"

_CONVERT_MAP_VALUE_HELPER = """\
T? _$convertMapValue<T>(
  String key,
  Map<String, String> map,
  T Function(String) converter,
) {
  final value = map[key];
  return value == null ? null : converter(value);
}"""

_BOOL_CONVERTER_HELPER = """\
bool _$boolConverter(String value) {
  switch (value) {
    case 'true':
      return true;
    case 'false':
      return false;
    default:
      throw UnsupportedError('Cannot convert "$value" into a bool.');
  }
}"""

_ENUM_CONVERTER_HELPER = """\
extension<T extends Enum> on Map<T, String> {
  T _$fromName(String value) =>
      entries.singleWhere((element) => element.value == value).key;
}"""

HELPER_CATALOG: Mapping[str, str] = MappingProxyType(
    {
        CONVERT_MAP_VALUE_HELPER_NAME: _CONVERT_MAP_VALUE_HELPER,
        BOOL_CONVERTER_HELPER_NAME: _BOOL_CONVERTER_HELPER,
        ENUM_EXTENSION_HELPER_NAME: _ENUM_CONVERTER_HELPER,
    }
)


class HelperRegistry:
    """Selects the helper definitions a set of emitted blocks refers to."""

    def __init__(self, catalog: Mapping[str, str] = HELPER_CATALOG):
        self.catalog = catalog

    def referenced(self, texts: Iterable[str]) -> list[str]:
        """Names of the catalog helpers appearing in texts, in order of first occurrence."""
        names: list[str] = []
        for text in texts:
            positions = sorted((text.find(name), name) for name in self.catalog if name in text)
            for _, name in positions:
                if name not in names:
                    names.append(name)
        return names

    def collect(self, blocks: Iterable[TextBlock]) -> list[TextBlock]:
        """
        Helper blocks for everything blocks reference.

        Args:
            blocks: Emitted blocks to scan

        Returns:
            One HELPER block per referenced helper, each exactly once
        """
        return [
            TextBlock(kind=BlockKind.HELPER, owner=name, text=self.catalog[name])
            for name in self.referenced(block.text for block in blocks)
        ]
