"""
Pipeline generator for a library of route declarations.

1. Phase 1 (Parser): Parse the host document into declarations and type info
2. Phase 2 (Builder): Build and validate one RouteConfig tree per declaration
3. Phase 3 (Emitter): Render each tree to ordered Dart blocks plus helpers
4. Phase 4 (Assembly): Join the declarations into one library text

A failing declaration is reported and skipped; the others are still generated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .. import __version__
from ..cli_utils import reconstruct_command_line
from .analyzer.tree_builder import ConfigTreeBuilder
from .config import CodeGeneratorConfig
from .declarations.nodes import Declaration, DeclarationBatch
from .declarations.parser import DeclarationParser
from .declarations.type_info import BatchTypeInfo, TypeInfoProvider
from .diagnostics import InvalidGenerationSourceError
from .emitter.blocks import EmittedDeclaration
from .emitter.code_emitter import CodeEmitter, create_environment

logger = logging.getLogger(__name__)


@dataclass
class DeclarationResult:
    """Outcome of generating one top-level declaration."""

    declaration: Declaration
    emitted: EmittedDeclaration | None = None
    error: InvalidGenerationSourceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class GenerationReport:
    """Outcome of a whole library run."""

    results: list[DeclarationResult] = field(default_factory=list)
    code: str = ""

    @property
    def errors(self) -> list[InvalidGenerationSourceError]:
        return [r.error for r in self.results if r.error is not None]

    @property
    def ok(self) -> bool:
        return not self.errors


class PipelineGenerator:
    """Generates the route library for a batch of declarations."""

    def __init__(
        self,
        batch: DeclarationBatch,
        config: CodeGeneratorConfig | None = None,
        type_info: TypeInfoProvider | None = None,
    ):
        """
        Initialize the generator.

        Args:
            batch: Declarations (and types) supplied by the host
            config: Code generation configuration
            type_info: Type lookup (defaults to the types of batch)
        """
        self.batch = batch
        self.config = config or CodeGeneratorConfig()
        self.type_info = type_info or BatchTypeInfo(batch)
        self.builder = ConfigTreeBuilder(self.type_info)
        self.emitter = CodeEmitter(self.type_info)
        self.library_template = create_environment().get_template("library.dart.jinja2")

    @classmethod
    def from_document(cls, document: dict[str, Any], config: CodeGeneratorConfig | None = None) -> PipelineGenerator:
        """Create a generator from a host document (see DeclarationParser)."""
        return cls(DeclarationParser().parse(document), config)

    def generate_declaration(self, declaration: Declaration) -> EmittedDeclaration:
        """
        Build and emit a single declaration.

        Raises:
            InvalidGenerationSourceError: If the declaration is invalid
        """
        root = self.builder.build(declaration)
        return self.emitter.emit(root)

    def run(self) -> GenerationReport:
        """Generate every declaration, collecting failures instead of stopping at the first one."""
        report = GenerationReport()
        for declaration in self.batch.declarations:
            try:
                emitted = self.generate_declaration(declaration)
            except InvalidGenerationSourceError as e:
                logger.error("Skipping %s: %s", declaration.element, e.message)
                report.results.append(DeclarationResult(declaration=declaration, error=e))
                continue
            logger.info("Generated %s (%d block(s))", declaration.element, len(emitted.blocks))
            report.results.append(DeclarationResult(declaration=declaration, emitted=emitted))

        report.code = self.assemble([r.emitted for r in report.results if r.emitted is not None])
        return report

    def generate(self) -> str:
        """
        Generate the library text.

        Returns:
            Generated Dart code

        Raises:
            InvalidGenerationSourceError: The first failure, if any declaration failed
        """
        report = self.run()
        if report.errors:
            raise report.errors[0]
        return report.code

    def assemble(self, emitted: list[EmittedDeclaration]) -> str:
        """
        Join emitted declarations into the library text.

        Identical blocks (shared helpers in particular) are kept once, at their
        first position.
        """
        if not emitted:
            return ""

        route_getters: list[str] = []
        members: list[str] = []
        for declaration in emitted:
            if declaration.route_getter_name not in route_getters:
                route_getters.append(declaration.route_getter_name)
            for member in declaration.members:
                if member not in members:
                    members.append(member)

        return self.library_template.render(
            generation_comment=self._generate_command_comment(),
            part_of=self.config.part_of or self.batch.library,
            app_routes_getter=self.config.app_routes_getter_name if self.config.generate_app_routes else "",
            route_getters=route_getters,
            members=members,
        )

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        try:
            from ..route_data_to_code import route_data_to_code as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "route_data_to_code"

        return f"// Generated by route_data_to_code v{__version__} : {command_line}"
