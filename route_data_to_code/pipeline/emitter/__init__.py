"""
Emitter module.

Contains the Dart code emitter, the type helpers it uses for decode/encode
expressions, and the shared helper registry.
"""

from __future__ import annotations

from .blocks import BlockKind, EmittedDeclaration, TextBlock
from .code_emitter import CodeEmitter, create_environment
from .helper_registry import (
    BOOL_CONVERTER_HELPER_NAME,
    CONVERT_MAP_VALUE_HELPER_NAME,
    ENUM_EXTENSION_HELPER_NAME,
    HELPER_CATALOG,
    HelperRegistry,
)
from .type_helpers import EnumCodecSpec, build_enum_codec, decode_parameter, encode_field, enum_map_name

__all__ = [
    "BlockKind",
    "TextBlock",
    "EmittedDeclaration",
    "CodeEmitter",
    "create_environment",
    "HELPER_CATALOG",
    "HelperRegistry",
    "CONVERT_MAP_VALUE_HELPER_NAME",
    "BOOL_CONVERTER_HELPER_NAME",
    "ENUM_EXTENSION_HELPER_NAME",
    "EnumCodecSpec",
    "build_enum_codec",
    "decode_parameter",
    "encode_field",
    "enum_map_name",
]
