"""CLI commands for the Class Documentation Generator.

Provides the Click-based command group 'classdoc' with subcommands for
generating the documentation file, dumping extracted structure, and
previewing the prompt sent for a single class or method.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click
import yaml

from src import __version__
from src.errors import ClassDocError
from src.generators.prompts import PromptBuilder, SegmentKind
from src.generators.skeletons import class_skeleton, method_skeleton
from src.parsers.extractor import StructureExtractor
from src.pipeline import DocumentationPipeline
from src.utils.config import AppConfig, load_config
from src.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def _apply_overrides(
    config: AppConfig,
    source_dir: Optional[str] = None,
    output: Optional[str] = None,
    model: Optional[str] = None,
) -> AppConfig:
    """Apply command-line overrides to a loaded configuration."""
    if source_dir:
        config.source.root_dir = source_dir
    if output:
        config.output.path = output
    if model:
        config.backend.model = model
    return config


@click.group()
@click.version_option(version=__version__, prog_name="classdoc")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a YAML config file.",
)
@click.pass_context
def classdoc(ctx: click.Context, config_path: Optional[str]) -> None:
    """Class Documentation Generator: document classes and methods with an LLM."""
    try:
        config = load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        raise click.ClickException(f"Invalid config: {e}") from e

    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )
    ctx.obj = config


@classdoc.command()
@click.argument("source_dir", type=click.Path(file_okay=False), required=False)
@click.option("--output", "-o", type=click.Path(), default=None, help="Output file.")
@click.option("--model", default=None, help="Model name passed to the backend.")
@click.option(
    "--dry-run",
    is_flag=True,
    help="List files and extracted classes without calling the backend.",
)
@click.pass_obj
def generate(
    config: AppConfig,
    source_dir: Optional[str],
    output: Optional[str],
    model: Optional[str],
    dry_run: bool,
) -> None:
    """Generate Markdown documentation for every class and method.

    Scans SOURCE_DIR (default from config) for source files, asks the
    backend to document each class and method, and writes one file.
    """
    config = _apply_overrides(config, source_dir, output, model)
    pipeline = DocumentationPipeline(config)

    try:
        result = pipeline.run(dry_run=dry_run)
    except ClassDocError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Found {len(result.files)} source files, {len(result.classes)} classes")

    if dry_run:
        for record in result.classes:
            click.echo(f"  {record.file_path}: class {record.name}")
            for method in record.methods:
                click.echo(f"    {method.name}()")
        click.echo("Dry run complete. No backend calls made.")
        return

    assembly = result.assembly
    click.echo(
        f"Documented {assembly.class_count} classes and "
        f"{assembly.method_count} methods"
    )
    click.echo(f"Documentation written to {result.output_path}")

    if assembly.failures:
        click.echo(f"{len(assembly.failures)} sections failed:", err=True)
        for failure in assembly.failures:
            click.echo(f"  {failure.heading}: {failure.reason}", err=True)
        click.get_current_context().exit(1)


@classdoc.command()
@click.argument("source_dir", type=click.Path(file_okay=False), required=False)
@click.option(
    "--output", "-o", type=click.Path(), default=None, help="Write JSON to a file."
)
@click.pass_obj
def extract(
    config: AppConfig, source_dir: Optional[str], output: Optional[str]
) -> None:
    """Print the extracted classes and methods as JSON."""
    config = _apply_overrides(config, source_dir)
    classes = DocumentationPipeline(config).extract()
    payload = json.dumps([c.to_dict() for c in classes], indent=2)

    if output:
        Path(output).write_text(payload + "\n", encoding="utf-8")
        click.echo(f"Wrote {len(classes)} classes to {output}")
    else:
        click.echo(payload)


@classdoc.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("class_name")
@click.option("--method", "method_name", default=None, help="Method to preview.")
@click.pass_obj
def prompt(
    config: AppConfig, file_path: str, class_name: str, method_name: Optional[str]
) -> None:
    """Show the prompt that would be sent for a class or one of its methods."""
    classes = StructureExtractor().extract_file(file_path)
    record = next((c for c in classes if c.name == class_name), None)
    if record is None:
        raise click.ClickException(f"Class {class_name!r} not found in {file_path}")

    builder = PromptBuilder()
    if method_name is None:
        code = class_skeleton(record, config.project.namespace)
        click.echo(builder.build(code, SegmentKind.CLASS, record.name, record.language))
        return

    method = next((m for m in record.methods if m.name == method_name), None)
    if method is None:
        raise click.ClickException(
            f"Method {method_name!r} not found in class {class_name!r}"
        )
    code = method_skeleton(method, record.language)
    click.echo(builder.build(code, SegmentKind.METHOD, method.name, record.language))
