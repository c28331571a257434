"""Detección de un registro previo del componente.

La detección es por contención de substrings (`ComponentId="<id>"` y
`<ClientSideComponentInstance`), no por parseo XML: un id que aparezca en otro
atributo del mismo fichero da un falso positivo.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.config import AppSettings
from core.domain.errors import AlreadyRegistered
from core.interfaces.workspace import Workspace

logger = logging.getLogger(__name__)

INSTANCE_ELEMENT_MARKER = "<ClientSideComponentInstance"


def declares_instance(xml_text: str, component_id: str) -> bool:
    return f'ComponentId="{component_id}"' in xml_text and INSTANCE_ELEMENT_MARKER in xml_text


async def find_existing_registration(
    component_id: str,
    *,
    workspace: Workspace,
    settings: AppSettings,
) -> Path | None:
    """Devuelve el primer fragmento que ya registra `component_id` (o None)."""

    xml_files = await workspace.find_files(
        settings.fragments_glob,
        exclude=settings.exclude_glob or None,
    )
    for xml_file in xml_files:
        if declares_instance(await workspace.read_text(xml_file), component_id):
            return xml_file
    logger.debug("No registration for %s among %d fragment(s)", component_id, len(xml_files))
    return None


async def ensure_not_registered(
    component_id: str,
    *,
    workspace: Workspace,
    settings: AppSettings,
) -> None:
    existing = await find_existing_registration(component_id, workspace=workspace, settings=settings)
    if existing is not None:
        raise AlreadyRegistered(component_id, workspace.as_relative_path(existing))
