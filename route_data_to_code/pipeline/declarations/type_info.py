"""
Read-only access to the host's type metadata.

The tree builder and the emitter never look at a native reflection API. They
query a TypeInfoProvider, which the host (or the declaration parser) fills
with already resolved constructor and field information.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from .nodes import ClassElement, DeclarationBatch, EnumElement


class TypeInfoProvider(ABC):
    """Abstract lookup of classes and enums by name."""

    @abstractmethod
    def get_class(self, name: str) -> ClassElement | None:
        """
        Look up a class.

        Args:
            name: The class name

        Returns:
            The class element, or None if the name is unknown or not a class
        """

    @abstractmethod
    def get_enum(self, name: str) -> EnumElement | None:
        """
        Look up an enum.

        Args:
            name: The enum name

        Returns:
            The enum element, or None if the name is unknown or not an enum
        """


class BatchTypeInfo(TypeInfoProvider):
    """TypeInfoProvider backed by a parsed DeclarationBatch."""

    def __init__(self, batch: DeclarationBatch):
        self._classes = dict(batch.classes)
        self._enums = dict(batch.enums)

    def get_class(self, name: str) -> ClassElement | None:
        return self._classes.get(name)

    def get_enum(self, name: str) -> EnumElement | None:
        return self._enums.get(name)
