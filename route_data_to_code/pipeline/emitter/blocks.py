"""
Structured output of the code emitter.

Generated code is kept as an ordered list of typed text blocks until the
library is assembled, so ordering and helper deduplication can be checked
without parsing the final text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class BlockKind(Enum):
    """What a text block declares."""

    ROOT = "root"  # Top-level route getter
    EXTENSION = "extension"  # Per-route extension (decode, location, navigation)
    ENUM_MAP = "enum_map"  # Enum codec table
    HELPER = "helper"  # Shared helper definition


@dataclass(frozen=True)
class TextBlock:
    """One emitted declaration."""

    kind: BlockKind = BlockKind.ROOT
    owner: str = ""  # Route data class, enum or helper the block belongs to
    text: str = ""


@dataclass
class EmittedDeclaration:
    """Everything generated for one top-level declaration."""

    route_getter_name: str = ""
    blocks: list[TextBlock] = field(default_factory=list)

    @property
    def members(self) -> list[str]:
        return [block.text for block in self.blocks]

    def blocks_of(self, kind: BlockKind) -> list[TextBlock]:
        return [block for block in self.blocks if block.kind is kind]

    def render(self) -> str:
        """Single text blob for this declaration."""
        return "\n\n".join(self.members) + "\n"
