"""CLI commands for browsing the add-on catalog."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from modbundle.catalog import ALL_BRANDS, resolve_catalog
from modbundle.cli import console
from modbundle.core.config import settings
from modbundle.core.exceptions import CatalogError

addons_app = typer.Typer(help="Browse the add-on catalog.")


@addons_app.command("list")
def list_addons(
    brand: Optional[str] = typer.Option(None, "--brand", "-b", help=f"Only add-ons compatible with this brand ('{ALL_BRANDS}' for every add-on)"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="YAML or JSON catalog file"),
):
    """List the add-ons that can be bundled with the kit."""
    try:
        catalog = resolve_catalog(catalog_path or settings.catalog_path)
    except CatalogError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    addons = catalog.compatible_with(brand)
    title = "Add-ons" if not brand or brand == ALL_BRANDS else f"Add-ons for {brand}"
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Brands", style="green")
    table.add_column("Description", style="dim")

    for addon in addons:
        brands = ", ".join(sorted(addon.brands)) if addon.brands else ALL_BRANDS
        table.add_row(addon.id, addon.display_name, brands, addon.description)

    console.print(table)
    if not addons:
        console.print(f"[yellow]No add-ons available for {brand}[/yellow]")
