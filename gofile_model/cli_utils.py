"""
Command line echo for gofile_model output headers.
"""

from pathlib import Path

import click

PROGRAM_NAME = "gofile_model"


def display_value(value) -> str:
    """Existing files and directories are shown by their last path component."""
    text = str(value)
    path = Path(text)
    return path.name if path.exists() else text


def preferred_flag(option: click.Option) -> str:
    """The short form of an option when it has one (-f rather than --format)."""
    return min(option.opts, key=len)


def command_line_parts(click_command: click.Command, params: dict) -> list[str]:
    """
    Turn parsed parameter values back into command line words.

    Positional arguments come first, then options in declaration order.
    Unset values and options left at their default are omitted, enabled
    flags such as --no-resolve are written without a value.

    Args:
        click_command: The command the values were parsed for
        params: Parameter values by name

    Returns:
        Command line words, without the program name
    """
    arguments: list[str] = []
    options: list[str] = []

    for param in click_command.params:
        value = params.get(param.name)
        if value is None or value is False or value == "":
            continue

        if isinstance(param, click.Argument):
            arguments.append(display_value(value))
        elif isinstance(param, click.Option) and value != param.default:
            options.append(preferred_flag(param))
            if not param.is_flag:
                options.append(display_value(value))

    return arguments + options


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Rebuild the command line of the running gofile_model invocation.

    Args:
        click_command: Click command object for introspection

    Returns:
        The program name followed by its arguments, or the bare program
        name outside of a Click context
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None or not ctx.params:
        return PROGRAM_NAME

    return " ".join([PROGRAM_NAME, *command_line_parts(click_command, ctx.params)])
