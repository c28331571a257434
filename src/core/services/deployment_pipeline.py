"""Pipeline de registro para despliegue tenant-wide.

Por qué un único punto de entrada:
- La CLI (u otro host) inyecta workspace y notifier; el pipeline ejecuta los
  pasos en secuencia y se detiene en el primer fallo.

Orden de los pasos:
1) ruta del manifest (extensión y pertenencia al workspace)
2) configuración de la solución (búsqueda, parseo y gate tenant-wide)
3) contenido del manifest (tipo de componente, tipo de extensión, id)
4) búsqueda de fragmentos ya existentes
5) construcción del edit set y aplicación atómica

Cada fallo esperado es un `DeploymentInfoError`: se notifica tal cual y se
devuelve en el resultado. No hay reintentos ni ediciones parciales.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from core.config import AppSettings
from core.domain.errors import DeploymentInfoError, EditApplicationFailed, WorkspaceNotFound
from core.domain.models import WorkspaceEdit
from core.interfaces.workspace import Notifier, Workspace
from core.services.manifest_loader import ensure_manifest_path, load_manifest
from core.services.registration_scanner import ensure_not_registered
from core.services.registration_writer import build_registration_edit
from core.services.solution_config_loader import load_solution_config

logger = logging.getLogger(__name__)


@dataclass
class RegistrationOutcome:
    """Resultado de una invocación del pipeline."""

    success: bool
    message: str
    component_id: str | None = None
    error: DeploymentInfoError | None = None
    edit: WorkspaceEdit | None = None
    applied: bool = False


async def build_deployment_edit(
    manifest_path: Path,
    *,
    workspace: Workspace,
    settings: AppSettings,
    id_factory: Callable[[], str] | None = None,
) -> tuple[str, WorkspaceEdit]:
    """Ejecuta todas las validaciones y devuelve `(component_id, edit)`.

    Propaga el primer `DeploymentInfoError` que encuentre.
    """

    ensure_manifest_path(manifest_path)

    workspace_root = workspace.folder_for(manifest_path)
    if workspace_root is None:
        raise WorkspaceNotFound()

    solution = await load_solution_config(workspace=workspace, settings=settings)
    manifest = await load_manifest(manifest_path, workspace=workspace)
    await ensure_not_registered(manifest.component_id, workspace=workspace, settings=settings)

    edit = build_registration_edit(
        manifest=manifest,
        solution=solution,
        workspace_root=workspace_root,
        settings=settings,
        id_factory=id_factory,
    )
    return manifest.component_id, edit


async def register_tenant_wide_deployment(
    manifest_path: Path,
    *,
    workspace: Workspace,
    notifier: Notifier,
    settings: AppSettings | None = None,
    id_factory: Callable[[], str] | None = None,
    dry_run: bool = False,
) -> RegistrationOutcome:
    settings = settings or AppSettings()
    component_id: str | None = None
    edit: WorkspaceEdit | None = None

    try:
        component_id, edit = await build_deployment_edit(
            manifest_path,
            workspace=workspace,
            settings=settings,
            id_factory=id_factory,
        )

        if dry_run:
            message = f"Would add tenant-wide deployment information for component {component_id}"
            notifier.info(message)
            return RegistrationOutcome(success=True, message=message, component_id=component_id, edit=edit)

        if not await workspace.apply_edit(edit):
            raise EditApplicationFailed(component_id)
    except DeploymentInfoError as exc:
        logger.info("Registration of %s stopped: %s", manifest_path, exc.code)
        notifier.error(str(exc))
        return RegistrationOutcome(
            success=False,
            message=str(exc),
            component_id=component_id,
            error=exc,
            edit=edit,
        )

    message = f"Successfully added tenant-wide deployment information for component {component_id}"
    notifier.info(message)
    return RegistrationOutcome(
        success=True,
        message=message,
        component_id=component_id,
        edit=edit,
        applied=True,
    )
