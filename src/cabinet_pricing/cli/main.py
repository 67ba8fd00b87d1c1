"""Typer CLI for cabinet pricing."""

import json
import logging
from pathlib import Path
from typing import Annotated

import typer

from cabinet_pricing.application import ConfigurationRequest, get_factory
from cabinet_pricing.application.catalog import (
    CatalogError,
    load_catalog,
    snapshot_to_catalog,
)
from cabinet_pricing.cli.commands import display_load_error, validate_command
from cabinet_pricing.domain.entities import Catalog
from cabinet_pricing.infrastructure import preview_to_dict
from cabinet_pricing.infrastructure.exporters import ExporterRegistry

app = typer.Typer(
    name="cabinet-pricing",
    help="Price cabinet configurations and generate price tables from a catalog snapshot.",
)

# Register validate command
app.command(name="validate")(validate_command)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log pricing details to stderr"),
    ] = False,
) -> None:
    """Cabinet pricing tools."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(catalog_file: Path) -> Catalog:
    try:
        snapshot = load_catalog(catalog_file)
    except CatalogError as e:
        display_load_error(e)
        raise typer.Exit(code=1)
    return snapshot_to_catalog(snapshot)


@app.command()
def price(
    catalog_file: Annotated[
        Path, typer.Argument(help="Path to the JSON catalog snapshot")
    ],
    cabinet_type: Annotated[
        str, typer.Option("--cabinet-type", "-c", help="Cabinet type id")
    ],
    width: Annotated[
        float | None, typer.Option("--width", "-w", help="Width in mm (default: cabinet default)")
    ] = None,
    height: Annotated[
        float | None, typer.Option("--height", "-h", help="Height in mm (default: cabinet default)")
    ] = None,
    depth: Annotated[
        float | None, typer.Option("--depth", "-d", help="Depth in mm (default: cabinet default)")
    ] = None,
    door_style: Annotated[
        str | None, typer.Option("--door-style", help="Door style id")
    ] = None,
    color: Annotated[str | None, typer.Option("--color", help="Color id")] = None,
    finish: Annotated[
        str | None, typer.Option("--finish", help="Carcass finish id")
    ] = None,
    hardware_brand: Annotated[
        str | None,
        typer.Option("--hardware-brand", help="Hardware brand id, or 'none' for no hardware"),
    ] = None,
    quantity: Annotated[int, typer.Option("--quantity", "-q", help="Number of cabinets")] = 1,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: text, json")
    ] = "text",
) -> None:
    """Price a single cabinet configuration (ex GST)."""
    if output_format not in ("text", "json"):
        typer.echo(f"Unknown format: {output_format}. Use text or json.", err=True)
        raise typer.Exit(code=1)

    catalog = _load(catalog_file)
    factory = get_factory()
    preview = factory.create_configurator(catalog).preview(
        ConfigurationRequest(
            cabinet_type_id=cabinet_type,
            width=width,
            height=height,
            depth=depth,
            door_style_id=door_style,
            color_id=color,
            finish_id=finish,
            hardware_brand_id=hardware_brand,
            quantity=quantity,
        )
    )

    if output_format == "json":
        typer.echo(json.dumps(preview_to_dict(preview), indent=2, ensure_ascii=False))
    else:
        typer.echo(factory.get_breakdown_formatter().format(preview))

    if preview.errors:
        raise typer.Exit(code=1)


@app.command()
def table(
    catalog_file: Annotated[
        Path, typer.Argument(help="Path to the JSON catalog snapshot")
    ],
    cabinet_type: Annotated[
        str, typer.Option("--cabinet-type", "-c", help="Cabinet type id")
    ],
    hardware_brand: Annotated[
        str | None,
        typer.Option("--hardware-brand", help="Include hardware from this brand"),
    ] = None,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: text, csv, json")
    ] = "text",
    output_file: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write to a file instead of stdout")
    ] = None,
) -> None:
    """Generate the width-range x finish price table for a cabinet type."""
    if output_format != "text" and not ExporterRegistry.is_registered(output_format):
        available = ", ".join(["text", *ExporterRegistry.available_formats()])
        typer.echo(f"Unknown format: {output_format}. Available formats: {available}", err=True)
        raise typer.Exit(code=1)

    catalog = _load(catalog_file)
    factory = get_factory()
    try:
        price_table = factory.get_price_table_generator().generate_for_catalog(
            catalog, cabinet_type, hardware_brand
        )
    except KeyError:
        typer.echo(f"Error: unknown cabinet type {cabinet_type!r}", err=True)
        raise typer.Exit(code=1)

    if output_format == "text":
        text = factory.get_table_formatter().format(price_table)
        if output_file is not None:
            output_file.write_text(text + "\n", encoding="utf-8")
            typer.echo(f"Price table written to {output_file}")
        else:
            typer.echo(text)
        return

    exporter = ExporterRegistry.get(output_format)()
    if output_file is not None:
        exporter.export(price_table, output_file)
        typer.echo(f"Price table written to {output_file}")
    else:
        typer.echo(exporter.export_string(price_table), nl=False)


if __name__ == "__main__":
    app()
