"""Route Data to Code Generator

A Python package for generating typed go_router route code from annotated
route data declarations. Builds route configuration trees, validates them
and emits Dart route getters, extensions, enum codecs and shared helpers.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    CodeWriteError,
    GenerationReport,
    InvalidGenerationSourceError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "GenerationReport",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "InvalidGenerationSourceError",
    "AtomicWriter",
    "CodeWriteError",
]
