"""Construcción del edit set de registro tenant-wide.

Produce dos cambios que se aplican juntos o no se aplican:
1. Crear `sharepoint/assets/<id>.xml` con el `ClientSideComponentInstance`.
2. Reemplazar `package-solution.json` con la feature que referencia ese XML.

Nada se escribe aquí: el resultado es un `WorkspaceEdit`.
"""

from __future__ import annotations

import json
import uuid
from pathlib import Path
from typing import Any, Callable

from adapters.fragment_renderer import render_component_instance_xml
from core.config import AppSettings
from core.domain.errors import DuplicateFeatureReference
from core.domain.models import (
    Feature,
    FeatureAssets,
    LoadedManifest,
    LoadedSolutionConfig,
    Solution,
    SolutionConfig,
    WorkspaceEdit,
)

JSON_INDENT = 2
FEATURE_DESCRIPTION = "Deploys a custom action with ClientSideComponentId association"
FEATURE_VERSION = "1.0.0.0"


def _new_feature_id() -> str:
    return str(uuid.uuid4())


def default_feature(component_name: str, *, feature_id: str) -> Feature:
    return Feature(
        title=f"{component_name} - Deployment of custom action.",
        description=FEATURE_DESCRIPTION,
        id=feature_id,
        version=FEATURE_VERSION,
        assets=FeatureAssets(element_manifests=[]),
    )


def add_element_manifest(
    config: SolutionConfig,
    *,
    manifest: LoadedManifest,
    id_factory: Callable[[], str] = _new_feature_id,
) -> Feature:
    """Añade `<id>.xml` a la primera feature (o a una nueva). Muta `config`."""

    file_name = manifest.fragment_file_name

    if config.solution is None:
        config.solution = Solution()
    solution = config.solution
    if solution.features is None:
        solution.features = []

    for feature in solution.features:
        if feature.references(file_name):
            raise DuplicateFeatureReference(manifest.component_id, feature.title)

    if solution.features:
        feature = solution.features[0]
    else:
        feature = default_feature(manifest.component_name, feature_id=id_factory())
        solution.features.append(feature)

    if feature.assets is None:
        feature.assets = FeatureAssets()
    if feature.assets.element_manifests is None:
        feature.assets.element_manifests = []
    feature.assets.element_manifests.append(file_name)
    return feature


def _in_original_order(original: Any, updated: Any) -> Any:
    """Reordena `updated` según las claves de `original`; las nuevas van al final.

    Las claves que solo existen en `original` se conservan tal cual.
    """

    if isinstance(original, dict) and isinstance(updated, dict):
        merged: dict[str, Any] = {}
        for key, value in original.items():
            merged[key] = _in_original_order(value, updated[key]) if key in updated else value
        for key, value in updated.items():
            if key not in merged:
                merged[key] = value
        return merged
    if isinstance(original, list) and isinstance(updated, list):
        return [
            _in_original_order(original[i], item) if i < len(original) else item
            for i, item in enumerate(updated)
        ]
    return updated


def serialize_solution_config(config: SolutionConfig, *, original: dict[str, Any], raw_text: str) -> str:
    document = _in_original_order(original, config.to_document())
    text = json.dumps(document, indent=JSON_INDENT, ensure_ascii=False)
    if raw_text.endswith("\n"):
        text += "\n"
    return text


def fragment_path(*, workspace_root: Path, manifest: LoadedManifest, settings: AppSettings) -> Path:
    return workspace_root / settings.fragments_dir / manifest.fragment_file_name


def build_registration_edit(
    *,
    manifest: LoadedManifest,
    solution: LoadedSolutionConfig,
    workspace_root: Path,
    settings: AppSettings,
    id_factory: Callable[[], str] | None = None,
) -> WorkspaceEdit:
    """Devuelve el edit set completo; `solution.config` no se modifica."""

    config = solution.config.model_copy(deep=True)
    add_element_manifest(config, manifest=manifest, id_factory=id_factory or _new_feature_id)

    edit = WorkspaceEdit()
    edit.create_file(
        fragment_path(workspace_root=workspace_root, manifest=manifest, settings=settings),
        render_component_instance_xml(
            title=manifest.component_name,
            extension_type=manifest.extension_type,
            component_id=manifest.component_id,
        ),
        overwrite=True,
    )
    edit.replace(
        solution.path,
        serialize_solution_config(config, original=solution.raw_data, raw_text=solution.raw_text),
    )
    return edit
