from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from adapters.local_workspace import LocalWorkspace
from core.config import AppSettings

COMPONENT_ID = "11111111-1111-1111-1111-111111111111"
FEATURE_ID = "99999999-9999-9999-9999-999999999999"


class RecordingNotifier:
    def __init__(self) -> None:
        self.infos: list[str] = []
        self.errors: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_manifest(root: Path, name: str = "FooApplicationCustomizer", **fields: Any) -> Path:
    data: dict[str, Any] = {
        "$schema": "https://developer.microsoft.com/json-schemas/spfx/client-side-extension-manifest.schema.json",
        "id": COMPONENT_ID,
        "alias": "Foo",
        "componentType": "Extension",
        "extensionType": "ApplicationCustomizer",
        "version": "*",
        "manifestVersion": 2,
    }
    data.update(fields)
    data = {k: v for k, v in data.items() if v is not None}
    return write(
        root / "src" / "extensions" / name.lower() / f"{name}.manifest.json",
        json.dumps(data, indent=2),
    )


def write_solution(root: Path, data: dict[str, Any] | str) -> Path:
    text = data if isinstance(data, str) else json.dumps(data, indent=2) + "\n"
    return write(root / "config" / "package-solution.json", text)


def snapshot(root: Path) -> dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    write_solution(
        tmp_path,
        {
            "$schema": "https://developer.microsoft.com/json-schemas/spfx-build/package-solution.schema.json",
            "solution": {
                "name": "foo-client-side-solution",
                "id": "22222222-2222-2222-2222-222222222222",
                "version": "1.0.0.0",
                "includeClientSideAssets": True,
                "skipFeatureDeployment": True,
                "features": [],
            },
            "paths": {"zippedPackage": "solution/foo.sppkg"},
        },
    )
    return tmp_path


@pytest.fixture
def workspace(project: Path) -> LocalWorkspace:
    return LocalWorkspace(project)
