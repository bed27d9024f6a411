"""
Top-level CLI that aggregates the catalog, archive and build commands.
"""

import logging
from typing import Optional

import typer

from modbundle.cli.archive_cli import archive_app
from modbundle.cli.build_cli import build_bundle
from modbundle.cli.catalog_cli import addons_app
from modbundle.core.config import settings

main_app = typer.Typer(help="modbundle CLI")

main_app.add_typer(addons_app, name="addons")
main_app.add_typer(archive_app, name="archive")
main_app.command("build")(build_bundle)


@main_app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level name"),
):
    """Assemble MH2p mod kit bundles."""
    level = "DEBUG" if verbose else (log_level or settings.log_level)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(levelname)s %(name)s - %(message)s",
        force=True,
    )


def main():
    main_app()

if __name__ == "__main__":
    main()
