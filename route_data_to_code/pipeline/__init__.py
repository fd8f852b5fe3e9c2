"""
Pipeline - typed route data to go_router code generator.

This module provides a multi-phase architecture for generating Dart route
code from annotated route data declarations:

1. Phase 1 (Declarations): Parse the host document into declarations and types
2. Phase 2 (Analyzer): Analyze path patterns and build RouteConfig trees
3. Phase 3 (Emitter): Render trees to Dart blocks and shared helpers
4. Phase 4 (Writer): Atomically write the assembled library
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .diagnostics import ErrorKind, InvalidGenerationSourceError
from .generator import DeclarationResult, GenerationReport, PipelineGenerator
from .writer import AtomicWriter, CodeWriteError

__all__ = [
    "PipelineGenerator",
    "GenerationReport",
    "DeclarationResult",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "ErrorKind",
    "InvalidGenerationSourceError",
    "AtomicWriter",
    "CodeWriteError",
]
