"""
Configuration for the route code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to sanity check the code before writing
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Library the generated file is a part of (empty = no part directive)
    part_of: str = ""

    # Emit the getter listing every root route of the library
    generate_app_routes: bool = True

    # Name of that getter
    app_routes_getter_name: str = "$appRoutes"

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "add_generation_comment": self.add_generation_comment,
            "part_of": self.part_of,
            "generate_app_routes": self.generate_app_routes,
            "app_routes_getter_name": self.app_routes_getter_name,
        }
