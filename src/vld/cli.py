#!/usr/bin/env python3
"""
CLI for validating data files against VLD schemas.

Usage:
    vld validate myapp.schemas:user data.json
    vld validate schema.yaml '{"name": "Ada"}' --json
    vld validate schema.yaml data.yaml --locale de --quiet
    vld locales
    vld --version
"""

import importlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

import typer
import yaml

from vld import __version__
from vld.declarative import load_schema_file
from vld.formatting import prettify_error
from vld.locales import UnsupportedLocaleError, available_locales
from vld.validators import Validator

app = typer.Typer(
    name="vld",
    help="VLD - validate data against composable schemas",
    no_args_is_help=True,
    add_completion=False,
)


def load_schema(target: str) -> Validator:
    """
    Resolve SCHEMA: a YAML schema file, or a ``module:attribute`` import path.

    Raises:
        typer.Exit: If the schema cannot be loaded
    """
    path = Path(target)
    if path.suffix in (".yaml", ".yml"):
        if not path.exists():
            typer.echo(f"Error: Schema file not found: {path}", err=True)
            raise typer.Exit(1)
        try:
            return load_schema_file(path)
        except (yaml.YAMLError, ValueError, TypeError) as e:
            typer.echo(f"Error: Invalid schema file {path}: {e}", err=True)
            raise typer.Exit(1)

    module_path, sep, attr = target.partition(":")
    if not sep or not module_path or not attr:
        typer.echo(f"Error: Schema must be a YAML file or 'module:attribute', got '{target}'", err=True)
        raise typer.Exit(1)

    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        typer.echo(f"Error: Cannot import module '{module_path}': {e}", err=True)
        raise typer.Exit(1)

    schema = getattr(module, attr, None)
    if not isinstance(schema, Validator):
        typer.echo(f"Error: '{target}' is not a validator", err=True)
        raise typer.Exit(1)
    return schema


def load_data(value: str) -> Any:
    """
    Resolve DATA: a JSON/YAML file path, or an inline JSON literal.

    Raises:
        typer.Exit: On parse error
    """
    path = Path(value)
    try:
        is_file = path.is_file()
    except OSError:
        is_file = False
    try:
        if is_file:
            text = path.read_text(encoding="utf-8")
            if path.suffix in (".yaml", ".yml"):
                return yaml.safe_load(text)
            return json.loads(text)
        return json.loads(value)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        typer.echo(f"Error: Invalid data: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def validate(
    schema: str = typer.Argument(..., help="YAML schema file or module:attribute"),
    data: str = typer.Argument(..., help="JSON/YAML data file or inline JSON"),
    as_json: bool = typer.Option(False, "--json", help="Emit the result as JSON"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output on success"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Message locale (e.g. en, de)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
):
    """Validate DATA against SCHEMA. Exits 1 when validation fails."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr)

    validator = load_schema(schema)
    value = load_data(data)

    try:
        result = validator.safe_parse(value, locale=locale)
    except UnsupportedLocaleError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        if result.success:
            payload = {"success": True, "data": result.data}
        else:
            payload = result.error.to_dict()
        if result.success and quiet:
            return
        typer.echo(json.dumps(payload, indent=2, default=str))
        if not result.success:
            raise typer.Exit(1)
        return

    if result.success:
        if not quiet:
            typer.echo("✓ Valid")
        return

    typer.echo(prettify_error(result.error), err=True)
    raise typer.Exit(1)


@app.command()
def locales():
    """List the available message locales."""
    for code in available_locales():
        typer.echo(code)


def version_callback(value: bool):
    """Handle --version flag."""
    if value:
        typer.echo(f"vld {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(None, "--version", callback=version_callback, is_eager=True,
                                 help="Show version and exit"),
):
    """VLD - validate data against composable schemas."""


def main():
    """Entry point for the vld CLI."""
    app()


if __name__ == "__main__":
    main()
