"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM_NAME = "route_data_to_code"


def _format_value(value) -> str:
    # File paths are shown by name only so the generated header stays machine independent
    if isinstance(value, (str, Path)):
        path_obj = Path(str(value))
        return path_obj.name if path_obj.exists() else str(value)
    return str(value)


def reconstruct_command_line(click_command: click.Command, program_name: str = PROGRAM_NAME) -> str:
    """
    Reconstruct the command line of the running Click command.

    Positional arguments come first, then every option whose value differs
    from its default. Boolean flags are rendered without a value.

    Args:
        click_command: Click command object for introspection
        program_name: Name the command line starts with

    Returns:
        Reconstructed command line string (program_name alone outside a Click context)
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        return program_name

    if not cli_args:
        return program_name

    arguments = []
    options = []

    for param in click_command.params:
        value = cli_args.get(param.name)
        if not value:
            continue

        if isinstance(param, click.Argument):
            arguments.append(_format_value(value))
        elif isinstance(param, click.Option):
            if value == param.default:
                continue
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if param.is_flag:
                options.append(flag)
            else:
                options.extend([flag, _format_value(value)])

    return " ".join([program_name, *arguments, *options])
