"""Carga y validación del manifest del componente seleccionado."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from core import jsonc
from core.domain.errors import (
    MissingId,
    NotAManifestFile,
    ParseError,
    UnsupportedComponentType,
    UnsupportedExtensionType,
)
from core.domain.models import ComponentManifest, ExtensionType, LoadedManifest
from core.interfaces.workspace import Workspace

logger = logging.getLogger(__name__)

MANIFEST_SUFFIX = ".json"
EXTENSION_COMPONENT_TYPE = "Extension"


def ensure_manifest_path(path: Path) -> None:
    if path.suffix.lower() != MANIFEST_SUFFIX:
        raise NotAManifestFile(path)


def parse_manifest(text: str, *, path: Path) -> ComponentManifest:
    try:
        data = jsonc.loads(text)
        return ComponentManifest.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ParseError(
            "The following error has occurred while parsing the contents of the "
            f"manifest file '{path.name}': {exc}",
            detail=str(exc),
        ) from exc


def validate_manifest(manifest: ComponentManifest, *, path: Path) -> LoadedManifest:
    """Comprueba tipo de componente, tipo de extensión e id (en ese orden)."""

    if manifest.component_type != EXTENSION_COMPONENT_TYPE:
        raise UnsupportedComponentType(manifest.component_type)

    try:
        extension_type = ExtensionType(manifest.extension_type)
    except (ValueError, TypeError):
        raise UnsupportedExtensionType(manifest.extension_type) from None

    if not manifest.id:
        raise MissingId()

    return LoadedManifest(
        path=path,
        manifest=manifest,
        component_id=str(manifest.id),
        extension_type=extension_type,
    )


async def load_manifest(path: Path, *, workspace: Workspace) -> LoadedManifest:
    ensure_manifest_path(path)
    text = await workspace.read_text(path)
    loaded = validate_manifest(parse_manifest(text, path=path), path=path)
    logger.debug(
        "Loaded manifest %s (id=%s, extensionType=%s)",
        path.name,
        loaded.component_id,
        loaded.extension_type.value,
    )
    return loaded
