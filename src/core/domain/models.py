"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta de los dos artefactos SPFx (manifest y
  package-solution.json) sin acoplar el Core a la lectura de ficheros.
- Los campos opcionales (`alias`, `assets`, ...) quedan explícitos en el tipo;
  la creación de contenedores vacíos vive en el writer, no en dicts sueltos.

Nota:
- `package-solution.json` conserva campos desconocidos (`extra="allow"`) para
  poder reescribir el documento completo sin perder información.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class ExtensionType(str, Enum):
    """Tipos de extensión que admiten despliegue tenant-wide."""

    APPLICATION_CUSTOMIZER = "ApplicationCustomizer"
    LIST_VIEW_COMMAND_SET = "ListViewCommandSet"

    @property
    def location(self) -> str:
        return f"ClientSideExtension.{self.value}"


class ComponentManifest(BaseModel):
    """Manifest de un componente SPFx (`*.manifest.json`).

    Solo interesan los campos de identidad/tipo; el resto se ignora. Los campos
    son `Any`: un valor de tipo inesperado lo rechaza `validate_manifest` con su
    error específico, no el parseo.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    id: Any = Field(
        default=None,
        description="GUID del componente.",
    )
    alias: Any = Field(
        default=None,
        description="Alias legible del componente (opcional).",
    )
    component_type: Any = Field(
        default=None,
        alias="componentType",
        description="Tipo de componente ('WebPart', 'Extension', ...).",
    )
    extension_type: Any = Field(
        default=None,
        alias="extensionType",
        description="Tipo de extensión ('ApplicationCustomizer', ...).",
    )


class FeatureAssets(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    element_manifests: list[str] | None = Field(
        default=None,
        alias="elementManifests",
        description="Ficheros XML (nombre) desplegados por la feature.",
    )


class Feature(BaseModel):
    """Feature de la solución: agrupa fragmentos XML desplegables."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: str | None = None
    description: str | None = None
    id: str | None = None
    version: str | None = None
    assets: FeatureAssets | None = None

    def references(self, file_name: str) -> bool:
        if self.assets is None or not self.assets.element_manifests:
            return False
        return file_name in self.assets.element_manifests


class Solution(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    # Cualquier valor distinto de `true` desactiva el despliegue tenant-wide.
    skip_feature_deployment: Any = Field(
        default=None,
        alias="skipFeatureDeployment",
        description="True cuando la solución admite despliegue tenant-wide.",
    )
    features: list[Feature] | None = None


class SolutionConfig(BaseModel):
    """Contenido de `config/package-solution.json`."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    solution: Solution | None = None

    @property
    def tenant_wide_enabled(self) -> bool:
        return self.solution is not None and self.solution.skip_feature_deployment is True

    def to_document(self) -> dict[str, Any]:
        """Vuelca el modelo con los nombres originales (camelCase).

        `exclude_unset` evita introducir claves que el fichero no tenía.
        """

        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


@dataclass(frozen=True)
class LoadedManifest:
    """Manifest validado y listo para registrar."""

    path: Path
    manifest: ComponentManifest
    component_id: str
    extension_type: ExtensionType

    @property
    def component_name(self) -> str:
        alias = self.manifest.alias
        return str(alias) if alias else self.component_id

    @property
    def fragment_file_name(self) -> str:
        return f"{self.component_id}.xml"


@dataclass
class LoadedSolutionConfig:
    """`package-solution.json` parseado más su texto original."""

    path: Path
    config: SolutionConfig
    raw_text: str
    raw_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class FileEdit:
    """Una operación de un edit set: crear fichero o reemplazar su contenido."""

    kind: Literal["create", "replace"]
    path: Path
    content: str
    overwrite: bool = True


@dataclass
class WorkspaceEdit:
    """Conjunto de ediciones que se aplica como una unidad indivisible."""

    edits: list[FileEdit] = field(default_factory=list)

    def create_file(self, path: Path, content: str, *, overwrite: bool = True) -> None:
        self.edits.append(FileEdit(kind="create", path=path, content=content, overwrite=overwrite))

    def replace(self, path: Path, content: str) -> None:
        self.edits.append(FileEdit(kind="replace", path=path, content=content))

    @property
    def paths(self) -> list[Path]:
        return [edit.path for edit in self.edits]

    def __len__(self) -> int:
        return len(self.edits)
