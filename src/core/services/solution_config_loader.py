"""Localización y carga de `config/package-solution.json`.

Por qué devuelve también el texto original:
- El writer reemplaza el documento completo; con el texto y el dict original
  conserva el salto de línea final y el orden de las claves.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from core import jsonc
from core.config import AppSettings
from core.domain.errors import ConfigNotFound, ParseError, TenantWideDeploymentDisabled
from core.domain.models import LoadedSolutionConfig, SolutionConfig
from core.interfaces.workspace import Workspace

logger = logging.getLogger(__name__)


def parse_solution_config(text: str) -> tuple[SolutionConfig, dict]:
    try:
        data = jsonc.loads(text)
        config = SolutionConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ParseError(
            "The following error has occurred while parsing the contents of the "
            f"package-solution.json file: {exc}",
            detail=str(exc),
        ) from exc
    return config, data


async def read_solution_config(
    *,
    workspace: Workspace,
    settings: AppSettings,
) -> LoadedSolutionConfig:
    """Localiza y parsea la configuración, sin comprobar `skipFeatureDeployment`."""

    # Si hay varios, gana el primero (sin error de ambigüedad).
    files = await workspace.find_files(
        settings.solution_config_glob,
        exclude=settings.exclude_glob or None,
        max_results=1,
    )
    if not files:
        raise ConfigNotFound(settings.solution_config_glob)

    path = files[0]
    text = await workspace.read_text(path)
    config, data = parse_solution_config(text)
    logger.debug("Loaded solution config from %s", workspace.as_relative_path(path))
    return LoadedSolutionConfig(path=path, config=config, raw_text=text, raw_data=data)


async def load_solution_config(
    *,
    workspace: Workspace,
    settings: AppSettings,
) -> LoadedSolutionConfig:
    loaded = await read_solution_config(workspace=workspace, settings=settings)
    if not loaded.config.tenant_wide_enabled:
        raise TenantWideDeploymentDisabled()
    return loaded
