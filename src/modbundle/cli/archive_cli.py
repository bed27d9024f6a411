"""CLI commands for looking inside a single source archive."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from modbundle.archive import RemapMode, read_archive, remap_path
from modbundle.cli import console
from modbundle.core.exceptions import BundleError

archive_app = typer.Typer(help="Inspect kit and add-on archives.")


@archive_app.command("inspect")
def inspect_archive(
    archive_path: Path = typer.Argument(..., help="Path to a kit or add-on zip file"),
    addon_id: Optional[str] = typer.Option(None, "--addon-id", "-a", help="Remap as this add-on instead of as the kit"),
):
    """Show where each file of an archive would land in the bundle."""
    if not archive_path.exists():
        console.print(f"[bold red]Error:[/bold red] File not found: {archive_path}")
        raise typer.Exit(code=1)

    mode = RemapMode.ADDON if addon_id else RemapMode.KIT
    try:
        entries = read_archive(archive_path.read_bytes(), source=str(archive_path))
    except BundleError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    table = Table(title=f"{archive_path.name} ({mode.value})")
    table.add_column("Archive path")
    table.add_column("Bundle path", style="cyan", no_wrap=True)

    files = 0
    for entry in entries:
        if entry.is_dir:
            continue
        try:
            target = remap_path(entry.path, mode, addon_id, str(archive_path))
        except (ValueError, BundleError) as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(code=1)
        table.add_row(entry.path, target or "[dim](dropped)[/dim]")
        if target:
            files += 1

    console.print(table)
    console.print(f"[bold]{files}[/bold] files would be bundled")
