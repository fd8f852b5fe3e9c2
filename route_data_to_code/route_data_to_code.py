import json
import sys
from pathlib import Path

import click

from .logging_config import setup_logging
from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    CodeWriteError,
    InvalidGenerationSourceError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--part-of", default=None, type=str, help="Library the generated file is a part of")
@click.option("--force", is_flag=True, default=False, help="Overwrite the output file if it exists")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log tree building and emission details")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def route_data_to_code(config, part_of, force, verbose, path, output):
    logger = setup_logging(verbose)

    with open(path) as f:
        document = json.load(f)

    if config is not None:
        with open(config) as f:
            config = json.load(f)
            config = CodeGeneratorConfig.from_dict(config)
    else:
        config = CodeGeneratorConfig()

    # CLI flag overrides the config file
    if part_of:
        config.part_of = part_of

    try:
        codegen = PipelineGenerator.from_document(document, config)
    except InvalidGenerationSourceError as e:
        click.echo(f"Error: {e.format()}", err=True)
        sys.exit(1)

    report = codegen.run()
    if not report.ok:
        for error in report.errors:
            click.echo(f"Error: {error.format()}", err=True)
        click.echo(f"{len(report.errors)} declaration(s) failed, nothing written.", err=True)
        sys.exit(1)

    output_config = OutputConfig(mode=OutputMode.FORCE if force else OutputMode.ERROR_IF_EXISTS)
    writer = AtomicWriter()
    try:
        if output_config.mode == OutputMode.FORCE:
            writer.write(Path(output), report.code, output_config.validate_before_write)
        else:
            writer.write_if_not_exists(Path(output), report.code, output_config.validate_before_write)
    except (FileExistsError, CodeWriteError) as e:
        raise click.ClickException(str(e)) from e

    logger.info("Wrote %d declaration(s) to %s", len(report.results), output)
