"""Comando `doctor`: diagnóstico de solo lectura del proyecto SPFx.

Por qué un comando aparte:
- Reutiliza los loaders del Core sin el gate de `skipFeatureDeployment`, así
  puede informar de cada problema en vez de parar en el primero.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from adapters.local_workspace import LocalWorkspace
from cli.ui_components import build_doctor_table
from core.config import AppSettings
from core.domain.errors import DeploymentInfoError
from core.interfaces.workspace import Workspace
from core.services.manifest_loader import load_manifest
from core.services.registration_scanner import find_existing_registration
from core.services.solution_config_loader import read_solution_config

app = typer.Typer(no_args_is_help=True, help="Project diagnostics for tenant-wide deployment.")

_console = Console()

CheckRow = tuple[str, str, str]


async def _check_solution(workspace: Workspace, settings: AppSettings) -> list[CheckRow]:
    try:
        loaded = await read_solution_config(workspace=workspace, settings=settings)
    except DeploymentInfoError as exc:
        return [("package-solution.json", "FAIL", str(exc))]

    rows: list[CheckRow] = [("package-solution.json", "OK", workspace.as_relative_path(loaded.path))]
    config = loaded.config
    if config.tenant_wide_enabled:
        rows.append(("skipFeatureDeployment", "OK", "Tenant-wide deployment enabled"))
    else:
        rows.append(("skipFeatureDeployment", "FAIL", "Set 'skipFeatureDeployment' to true"))

    features = (config.solution.features if config.solution else None) or []
    rows.append(("Features", "OK" if features else "INFO", f"{len(features)} feature(s) defined"))
    return rows


async def _check_manifests(workspace: Workspace, settings: AppSettings) -> list[CheckRow]:
    rows: list[CheckRow] = []
    manifests = await workspace.find_files(settings.manifests_glob, exclude=settings.exclude_glob or None)
    for path in manifests:
        label = workspace.as_relative_path(path)
        try:
            loaded = await load_manifest(path, workspace=workspace)
        except DeploymentInfoError as exc:
            rows.append((label, "SKIP", str(exc)))
            continue

        try:
            existing = await find_existing_registration(
                loaded.component_id,
                workspace=workspace,
                settings=settings,
            )
        except DeploymentInfoError as exc:
            rows.append((label, "FAIL", str(exc)))
            continue

        if existing is None:
            rows.append((label, "PENDING", f"{loaded.extension_type.value} {loaded.component_id} not registered"))
        else:
            rows.append((label, "OK", f"Registered in {workspace.as_relative_path(existing)}"))

    if not rows:
        rows.append(("Component manifests", "INFO", f"No files match {settings.manifests_glob}"))
    return rows


async def collect_checks(*, workspace: Workspace, settings: AppSettings) -> list[CheckRow]:
    """Run every read-only check; never edits the workspace."""

    rows = await _check_solution(workspace, settings)
    rows.extend(await _check_manifests(workspace, settings))
    return rows


@app.command()
def run(
    workspace_dir: Path = typer.Option(
        Path("."),
        "--workspace",
        "-w",
        help="SPFx project root.",
        exists=True,
        file_okay=False,
        resolve_path=True,
    ),
) -> None:
    """Check the project and list extensions pending registration."""

    settings = AppSettings()
    workspace = LocalWorkspace(workspace_dir)

    table = build_doctor_table()
    for check, status, details in asyncio.run(collect_checks(workspace=workspace, settings=settings)):
        table.add_row(check, status, details)
    _console.print(table)
