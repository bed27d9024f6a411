"""
CLI command that builds a bundle and saves it to disk.
"""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from tqdm import tqdm

from modbundle.bundle import BundleOrchestrator, BuildProgress
from modbundle.cli import console
from modbundle.core.config import settings
from modbundle.core.exceptions import BundleError

logger = logging.getLogger(__name__)


def resolve_output_path(output: Optional[Path], filename: str) -> Path:
    """An existing directory receives the default file name."""
    if output is None:
        return Path.cwd() / filename
    if output.is_dir():
        return output / filename
    return output


def build_bundle(
    addon_ids: Optional[List[str]] = typer.Argument(None, help="Ids of the add-ons to include"),
    brand: Optional[str] = typer.Option(None, "--brand", "-b", help="Reject add-ons that do not support this brand"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file or directory"),
    kit_url: Optional[str] = typer.Option(None, "--kit-url", help="Override the mod kit location"),
    catalog_path: Optional[Path] = typer.Option(None, "--catalog", help="YAML or JSON catalog file"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-download timeout in seconds"),
    jobs: Optional[int] = typer.Option(None, "--jobs", "-j", min=1, help="Add-on downloads in flight at once"),
    strict_collisions: bool = typer.Option(False, "--strict-collisions", help="Fail on duplicate output paths instead of overwriting"),
    store: bool = typer.Option(False, "--store", help="Store files uncompressed"),
):
    """Download the mod kit and the selected add-ons and combine them into one ZIP."""
    overrides = {}
    if kit_url:
        overrides["kit_url"] = kit_url
    if catalog_path:
        overrides["catalog_path"] = str(catalog_path)
    if timeout:
        overrides["fetch_timeout"] = timeout
    if jobs:
        overrides["max_concurrent_fetches"] = jobs
    if strict_collisions:
        overrides["collision_policy"] = "error"
    if store:
        overrides["compression"] = "store"
    config = settings.model_copy(update=overrides)

    addon_ids = addon_ids or []
    if not addon_ids:
        console.print("[yellow]No add-ons selected; the bundle will contain the mod kit only.[/yellow]")

    try:
        orchestrator = BundleOrchestrator.from_settings(config)
        with tqdm(total=100, unit="%", bar_format="{desc} |{bar}| {n:.0f}%") as bar:
            def on_progress(update: BuildProgress):
                bar.set_description_str(update.message or update.stage)
                bar.n = update.percent
                bar.refresh()

            result = orchestrator.build(addon_ids, brand=brand, progress=on_progress)
    except BundleError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    target = resolve_output_path(output, result.filename)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(result.data)

    console.print(f"[bold green]Bundle written:[/bold green] {target}")
    console.print(f"{len(result.paths)} files, {result.size // 1024} KiB, add-ons: {', '.join(result.addons) or 'none'}")
