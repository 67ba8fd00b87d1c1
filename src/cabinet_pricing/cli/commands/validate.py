"""Validate command for checking catalog snapshots.

This module provides the `validate` command that loads a catalog snapshot,
checks its schema, and runs the cross-row consistency checks.
"""

from pathlib import Path
from typing import Annotated

import typer

from cabinet_pricing.application.catalog import (
    CatalogError,
    ValidationResult,
    load_catalog,
    snapshot_to_catalog,
    validate_catalog,
)


def validate_command(
    catalog_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON catalog snapshot to validate"),
    ],
) -> None:
    """Validate a catalog snapshot.

    Checks the snapshot for:
    - JSON syntax errors
    - Schema errors (missing fields, negative rates, duplicate ids, etc.)
    - Bad part formulas, default dimensions outside bounds
    - Finish rows and hardware options referencing missing rows

    Exit codes:
        0 - Catalog is valid with no warnings
        1 - Catalog has errors (cannot be used for pricing)
        2 - Catalog is valid but has warnings

    Example:
        cabinet-pricing validate catalog.json
    """
    typer.echo(f"Validating {catalog_file}...")
    typer.echo()

    try:
        snapshot = load_catalog(catalog_file)
    except CatalogError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    result = validate_catalog(snapshot_to_catalog(snapshot))
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def display_load_error(error: CatalogError) -> None:
    """Display a catalog loading error on stderr."""
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation" and error.details:
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            value = detail.get("value")
            typer.echo(f"  {path}: {message}", err=True)
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for error in result.errors:
            typer.echo(f"  {error.path}: {error.message}", err=True)
            if error.value is not None:
                typer.echo(f"    Value: {error.value!r}", err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for warning in result.warnings:
            typer.echo(f"  {warning.path}: {warning.message}")
            if warning.suggestion:
                typer.echo(f"    Suggestion: {warning.suggestion}")
        typer.echo()

    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Catalog is valid.")
