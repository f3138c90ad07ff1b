import json
import logging
from pathlib import Path

import click

from .analyzer import resolve_references
from .cli_utils import reconstruct_command_line
from .config import ParserConfig
from .errors import GoFileParseError
from .model import CompilationUnit, Module
from .parser import parse_directory, parse_file, parse_text
from .report import render_summary, units_to_dict
from .writer import AtomicWriter


def load_units(path: Path, config: ParserConfig, module_name: str | None) -> list[CompilationUnit]:
    if path.is_dir():
        if module_name is not None:
            raise click.UsageError("--module-name only applies to a single file")
        return parse_directory(path, config.resolve_module, config.include_test_files)

    if module_name is not None:
        content = path.read_bytes().decode("utf-8", errors="replace")
        return [parse_text(content, str(path), Module(name=module_name))]
    return [parse_file(path, config.resolve_module)]


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--format", "-f", "output_format", default=None, type=click.Choice(["json", "summary"]))
@click.option("--include-tests", is_flag=True, default=False, help="Also parse *_test.go files")
@click.option("--no-module", is_flag=True, default=False, help="Do not search go.mod for module names")
@click.option("--module-name", default=None, type=str, help="Module name to use for a single file")
@click.option("--no-resolve", is_flag=True, default=False, help="Do not resolve type references")
@click.option("--verbose", "-v", is_flag=True, default=False)
@click.argument("path", type=click.Path(exists=True, resolve_path=True))
@click.argument("output", required=False, default=None, type=click.Path(resolve_path=True))
def gofile_model(config, output_format, include_tests, no_module, module_name, no_resolve, verbose, path, output):
    """Parse the Go type declarations of PATH (a file or a directory)."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)

    if config is not None:
        with open(config) as f:
            config = ParserConfig.from_dict(json.load(f))
    else:
        config = ParserConfig()

    # CLI flags override config file values
    if output_format is not None:
        config.output_format = output_format
    if include_tests:
        config.include_test_files = True
    if no_module:
        config.resolve_module = False
    if no_resolve:
        config.resolve_references = False

    try:
        units = load_units(Path(path), config, module_name)
        if config.resolve_references:
            resolve_references(units)

        command_line = reconstruct_command_line(gofile_model)
        if config.output_format == "summary":
            out = render_summary(units, command_line)
        else:
            data = {"command_line": command_line, **units_to_dict(units)}
            out = json.dumps(data, indent=config.indent) + "\n"

        if output is None:
            click.echo(out, nl=False)
        else:
            AtomicWriter().write(Path(output), out, config.output_format)
    except (GoFileParseError, OSError) as e:
        raise click.ClickException(str(e)) from e
