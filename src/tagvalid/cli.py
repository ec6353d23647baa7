"""CLI interface for tagvalid using Typer framework."""

import importlib
import json as jsonlib
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from tagvalid import __description__, __version__
from tagvalid.config import LogLevel, ReportFormat, load_config
from tagvalid.errors import RegistrationError
from tagvalid.logs import configure_logging
from tagvalid.registry import RuleRegistry
from tagvalid.session import ValidationSession

app = typer.Typer(
    name="tagvalid",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"tagvalid version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", callback=version_callback, help="Show version and exit")
    ] = False,
) -> None:
    """tagvalid - Tag-driven recursive validation for Python records."""


def _import_object(target: str) -> Any:
    """Import ``package.module:Name``."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Expected 'module:Name', got '{target}'")
    module = importlib.import_module(module_name)
    try:
        return getattr(module, attr)
    except AttributeError:
        raise ValueError(f"Module '{module_name}' has no attribute '{attr}'")


def _load_plugins(registry: RuleRegistry, plugins: list[str]) -> None:
    """Let each plugin module add its rules through ``register_rules(registry)``."""
    for plugin in plugins:
        module = importlib.import_module(plugin)
        register = getattr(module, "register_rules", None)
        if register is None:
            raise ValueError(f"Plugin '{plugin}' does not define register_rules(registry)")
        register(registry)


def _build_record(model: Any, data: Any) -> Any:
    if isinstance(model, type) and issubclass(model, BaseModel):
        return model.model_validate(data)
    return TypeAdapter(model).validate_python(data)


def _build_registry(plugins: list[str]) -> RuleRegistry:
    registry = RuleRegistry()
    try:
        _load_plugins(registry, plugins)
    except (ImportError, ValueError, RegistrationError) as e:
        console.print(f"[red]Error:[/red] Failed to load plugins: {e}")
        raise typer.Exit(1)
    return registry


@app.command()
def validate(
    data: Annotated[
        Path,
        typer.Argument(help="JSON document to validate")
    ],
    model: Annotated[
        str,
        typer.Option("--model", "-m", help="Record type as 'package.module:Name'")
    ],
    plugin: Annotated[
        Optional[list[str]],
        typer.Option("--plugin", "-p", help="Module defining register_rules(registry); repeatable")
    ] = None,
    format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: table, json, markdown (default: from config)")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .tagvalid.json)")
    ] = None,
    indexed_paths: Annotated[
        bool,
        typer.Option("--indexed-paths", help="Qualify field names with their path, e.g. files[0].name")
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Trace which record, field and rule is being checked")
    ] = False,
) -> None:
    """Validate a JSON document against a tagged record type."""
    valid_formats = [f.value for f in ReportFormat]

    try:
        tagvalid_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    format = format or tagvalid_config.output.format
    if format not in valid_formats:
        console.print(f"[red]Error:[/red] Invalid format '{format}'. Must be one of: {', '.join(valid_formats)}")
        raise typer.Exit(1)

    configure_logging(LogLevel.DEBUG if debug else tagvalid_config.logging.level)

    if indexed_paths:
        tagvalid_config.validation.indexed_paths = True

    registry = _build_registry(tagvalid_config.plugins + (plugin or []))

    try:
        record_type = _import_object(model)
    except (ImportError, ValueError) as e:
        console.print(f"[red]Error:[/red] Cannot load model: {e}")
        raise typer.Exit(1)

    try:
        with open(data, encoding="utf-8") as f:
            payload = jsonlib.load(f)
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] Data file not found: {data}")
        raise typer.Exit(1)
    except jsonlib.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] Invalid JSON in {data}: {e}")
        raise typer.Exit(1)

    try:
        record = _build_record(record_type, payload)
    except PydanticValidationError as e:
        console.print(f"[red]Error:[/red] Data does not match {model}:")
        console.print(str(e), markup=False)
        raise typer.Exit(1)

    session = ValidationSession.from_config(tagvalid_config, registry=registry)
    passed = session.validate(record)

    if format == ReportFormat.JSON.value:
        typer.echo(jsonlib.dumps(session.to_dict(), indent=2))
    elif format == ReportFormat.MARKDOWN.value:
        _print_markdown(session, passed)
    else:
        _print_table(session, passed)

    raise typer.Exit(0 if passed else 1)


def _print_markdown(session: ValidationSession, passed: bool) -> None:
    console.print("# Validation Report", markup=False)
    console.print(f"**Status:** {'pass' if passed else 'fail'}", markup=False)
    console.print(f"**Errors:** {len(session.errors)}", markup=False)

    if session.errors:
        console.print()
        console.print("## Errors", markup=False)
        for error in session.errors:
            console.print(f"- **{error.field_name}**: {error.message} (`{error.value!r}`)", markup=False)


def _print_table(session: ValidationSession, passed: bool) -> None:
    status_color = "green" if passed else "red"
    console.print(f"[{status_color}]Validation Status: {'PASS' if passed else 'FAIL'}[/{status_color}]")

    if not session.errors:
        console.print("\n[green]No issues found![/green]")
        return

    table = Table()
    table.add_column("Field", style="cyan")
    table.add_column("Error", style="white")
    table.add_column("Message", style="white")
    table.add_column("Value", style="dim")

    for error in session.errors:
        table.add_row(
            error.field_name,
            type(error.error).__name__,
            error.message,
            repr(error.value),
        )

    console.print(table)


@app.command()
def rules(
    plugin: Annotated[
        Optional[list[str]],
        typer.Option("--plugin", "-p", help="Module defining register_rules(registry); repeatable")
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Configuration file path (default: search for .tagvalid.json)")
    ] = None,
) -> None:
    """List the rule names available to field tags."""
    try:
        tagvalid_config = load_config(config)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    registry = _build_registry(tagvalid_config.plugins + (plugin or []))

    table = Table(title="Registered rules")
    table.add_column("Name", style="cyan")
    table.add_column("Tier", style="white")
    table.add_column("Implementation", style="dim")

    for name, tier in registry.names():
        rule = registry.resolve(name)
        table.add_row(name, tier, getattr(rule, "__qualname__", repr(rule)))

    console.print(table)


if __name__ == "__main__":
    app()
