from __future__ import annotations

import json
from pathlib import Path

import pytest

from core.config import AppSettings
from core.domain.errors import DuplicateFeatureReference
from core.domain.models import (
    ComponentManifest,
    ExtensionType,
    LoadedManifest,
    LoadedSolutionConfig,
    SolutionConfig,
)
from core.services.registration_writer import (
    add_element_manifest,
    build_registration_edit,
    serialize_solution_config,
)
from tests.conftest import COMPONENT_ID, FEATURE_ID


def _manifest(alias: str | None = "Foo", extension_type: ExtensionType = ExtensionType.APPLICATION_CUSTOMIZER) -> LoadedManifest:
    return LoadedManifest(
        path=Path("Foo.manifest.json"),
        manifest=ComponentManifest(
            id=COMPONENT_ID,
            alias=alias,
            componentType="Extension",
            extensionType=extension_type.value,
        ),
        component_id=COMPONENT_ID,
        extension_type=extension_type,
    )


def _loaded(data: dict, root: Path) -> LoadedSolutionConfig:
    raw_text = json.dumps(data, indent=4) + "\n"
    return LoadedSolutionConfig(
        path=root / "config" / "package-solution.json",
        config=SolutionConfig.model_validate(data),
        raw_text=raw_text,
        raw_data=json.loads(raw_text),
    )


def test_new_feature_is_synthesized_when_none_exists() -> None:
    config = SolutionConfig.model_validate({"solution": {"skipFeatureDeployment": True}})

    feature = add_element_manifest(config, manifest=_manifest(), id_factory=lambda: FEATURE_ID)

    assert config.solution.features == [feature]
    assert feature.id == FEATURE_ID
    assert feature.title == "Foo - Deployment of custom action."
    assert feature.description == "Deploys a custom action with ClientSideComponentId association"
    assert feature.version == "1.0.0.0"
    assert feature.assets.element_manifests == [f"{COMPONENT_ID}.xml"]


def test_generated_feature_ids_are_unique() -> None:
    ids = set()
    for _ in range(3):
        config = SolutionConfig.model_validate({"solution": {"features": []}})
        ids.add(add_element_manifest(config, manifest=_manifest()).id)
    assert len(ids) == 3


def test_first_feature_is_extended() -> None:
    config = SolutionConfig.model_validate(
        {
            "solution": {
                "features": [
                    {"title": "Main", "id": "a", "version": "1.0.0.0", "assets": {"elementManifests": ["other.xml"]}},
                    {"title": "Second", "id": "b", "version": "1.0.0.0"},
                ]
            }
        }
    )

    feature = add_element_manifest(config, manifest=_manifest())

    assert feature.title == "Main"
    assert feature.assets.element_manifests == ["other.xml", f"{COMPONENT_ID}.xml"]
    assert config.solution.features[1].assets is None


def test_assets_container_is_created() -> None:
    config = SolutionConfig.model_validate({"solution": {"features": [{"title": "Main", "assets": {}}]}})

    feature = add_element_manifest(config, manifest=_manifest())

    assert feature.assets.element_manifests == [f"{COMPONENT_ID}.xml"]


def test_duplicate_reference_in_any_feature() -> None:
    config = SolutionConfig.model_validate(
        {
            "solution": {
                "features": [
                    {"title": "Main", "assets": {"elementManifests": []}},
                    {"title": "Legacy", "assets": {"elementManifests": [f"{COMPONENT_ID}.xml"]}},
                ]
            }
        }
    )

    with pytest.raises(DuplicateFeatureReference) as excinfo:
        add_element_manifest(config, manifest=_manifest())
    assert str(excinfo.value) == (
        f"Tenant-wide deployment information for extension {COMPONENT_ID} already included in feature Legacy"
    )


def test_edit_set_contains_fragment_then_config(tmp_path: Path) -> None:
    solution = _loaded({"solution": {"skipFeatureDeployment": True, "features": []}}, tmp_path)
    settings = AppSettings(_env_file=None)

    edit = build_registration_edit(
        manifest=_manifest(extension_type=ExtensionType.LIST_VIEW_COMMAND_SET),
        solution=solution,
        workspace_root=tmp_path,
        settings=settings,
        id_factory=lambda: FEATURE_ID,
    )

    fragment, config_edit = edit.edits
    assert fragment.kind == "create" and fragment.overwrite
    assert fragment.path == tmp_path / "sharepoint" / "assets" / f"{COMPONENT_ID}.xml"
    assert fragment.content.startswith('<?xml version="1.0" encoding="utf-8"?>')
    assert 'Title="Foo"' in fragment.content
    assert 'Location="ClientSideExtension.ListViewCommandSet"' in fragment.content
    assert f'ComponentId="{COMPONENT_ID}"' in fragment.content
    for empty in ("Properties", "ListTemplateId", "WebTemplateId", "Sequence"):
        assert f'{empty}=""' in fragment.content

    assert config_edit.kind == "replace"
    assert config_edit.path == solution.path
    updated = json.loads(config_edit.content)
    assert updated["solution"]["features"][0]["assets"]["elementManifests"] == [f"{COMPONENT_ID}.xml"]

    # el config cargado no se modifica
    assert solution.config.solution.features == []


def test_title_is_xml_escaped(tmp_path: Path) -> None:
    solution = _loaded({"solution": {"skipFeatureDeployment": True}}, tmp_path)

    edit = build_registration_edit(
        manifest=_manifest(alias='Tom & "Jerry"'),
        solution=solution,
        workspace_root=tmp_path,
        settings=AppSettings(_env_file=None),
    )

    xml = edit.edits[0].content
    assert "Tom &amp; " in xml
    assert '"Jerry"' not in xml


def test_serialization_keeps_unknown_fields_and_key_order() -> None:
    original = {
        "$schema": "schema.json",
        "solution": {
            "name": "foo",
            "skipFeatureDeployment": True,
            "developer": {"name": "Contoso", "mpnId": ""},
            "features": [{"title": "Main", "id": "a", "componentIds": ["x"], "version": "1.0.0.0"}],
        },
        "paths": {"zippedPackage": "solution/foo.sppkg"},
    }
    raw_text = json.dumps(original, indent=4) + "\n"
    config = SolutionConfig.model_validate(original)
    add_element_manifest(config, manifest=_manifest())

    text = serialize_solution_config(config, original=original, raw_text=raw_text)

    assert text.endswith("}\n")
    assert '\n  "solution": {\n    "name": "foo",' in text
    document = json.loads(text)
    assert list(document) == ["$schema", "solution", "paths"]
    assert list(document["solution"]) == ["name", "skipFeatureDeployment", "developer", "features"]
    assert document["solution"]["developer"] == {"name": "Contoso", "mpnId": ""}
    feature = document["solution"]["features"][0]
    assert list(feature) == ["title", "id", "componentIds", "version", "assets"]
    assert feature["assets"] == {"elementManifests": [f"{COMPONENT_ID}.xml"]}


def test_serialization_without_trailing_newline() -> None:
    original = {"solution": {"skipFeatureDeployment": True}}
    config = SolutionConfig.model_validate(original)

    text = serialize_solution_config(config, original=original, raw_text=json.dumps(original))

    assert text.endswith("}")
    assert json.loads(text) == original
