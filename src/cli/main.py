"""CLI principal (Typer).

Por qué Typer:
- Un comando por operación, con ayuda y validación de argumentos gratis.
- La CLI solo traduce argumentos y decide la presentación (Rich); el registro
  vive en `core.services.deployment_pipeline`.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.console_notifier import ConsoleNotifier
from adapters.local_workspace import LocalWorkspace
from cli import doctor
from cli.ui_components import build_edit_preview, build_edits_table
from core.config import AppSettings
from core.services.deployment_pipeline import register_tenant_wide_deployment

app = typer.Typer(
    no_args_is_help=True,
    help="Register SharePoint Framework extensions for tenant-wide deployment.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    settings = AppSettings()
    _configure_logging("DEBUG" if verbose else settings.log_level)


@app.command(name="add-deployment-info")
def add_deployment_info(
    manifest_path: Path = typer.Argument(
        ...,
        help="Path to the extension's *.manifest.json file.",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
    workspace_dir: Path = typer.Option(
        Path("."),
        "--workspace",
        "-w",
        help="SPFx project root (defaults to the current directory).",
        exists=True,
        file_okay=False,
        resolve_path=True,
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show the planned edits without touching any file.",
    ),
) -> None:
    """Add the ClientSideComponentInstance fragment and feature reference."""

    settings = AppSettings()
    workspace = LocalWorkspace(workspace_dir)

    outcome = asyncio.run(
        register_tenant_wide_deployment(
            manifest_path,
            workspace=workspace,
            notifier=ConsoleNotifier(_console),
            settings=settings,
            dry_run=dry_run,
        )
    )

    if dry_run and outcome.success and outcome.edit is not None:
        _console.print(build_edits_table(outcome.edit, workspace=workspace))
        for item in outcome.edit.edits:
            _console.print(build_edit_preview(item, workspace=workspace))

    if not outcome.success:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
