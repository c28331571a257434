"""Taxonomía de errores del dominio.

Por qué una jerarquía propia:
- Cada paso del pipeline falla con una condición con nombre; la CLI (u otro
  entry-point) solo necesita capturar `DeploymentInfoError`.
- El mensaje (`str(exc)`) se muestra tal cual al operador.
"""

from __future__ import annotations

from pathlib import Path


class DeploymentInfoError(Exception):
    """Base de todos los fallos esperados del registro tenant-wide."""

    code: str = "deployment_info_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NotAManifestFile(DeploymentInfoError):
    code = "not_a_manifest_file"

    def __init__(self, path: Path) -> None:
        super().__init__(f"File '{path.name}' is not a SharePoint Framework component manifest")
        self.path = path


class WorkspaceNotFound(DeploymentInfoError):
    code = "workspace_not_found"

    def __init__(self) -> None:
        super().__init__("Couldn't determine workspace folder for the currently selected file")


class ConfigNotFound(DeploymentInfoError):
    code = "config_not_found"

    def __init__(self, pattern: str) -> None:
        super().__init__(f"{pattern} not found")
        self.pattern = pattern


class ParseError(DeploymentInfoError):
    """Fichero ilegible o con JSON inválido (manifest, package-solution.json, fragmento)."""

    code = "parse_error"

    def __init__(self, message: str, *, detail: str) -> None:
        super().__init__(message)
        self.detail = detail


class TenantWideDeploymentDisabled(DeploymentInfoError):
    code = "tenant_wide_deployment_disabled"

    def __init__(self) -> None:
        super().__init__(
            "Tenant-wide deployment is not enabled for this solution. Enable it in "
            "package-solution.json by setting the 'skipFeatureDeployment' property to "
            "'true' and try again."
        )


class UnsupportedComponentType(DeploymentInfoError):
    code = "unsupported_component_type"

    def __init__(self, component_type: object) -> None:
        super().__init__("Selected manifest file is not an extension")
        self.component_type = component_type


class UnsupportedExtensionType(DeploymentInfoError):
    code = "unsupported_extension_type"

    def __init__(self, extension_type: object) -> None:
        super().__init__(
            f"{extension_type} is not a supported extension type. "
            "Only ApplicationCustomizer and ListViewCommandSet are supported"
        )
        self.extension_type = extension_type


class MissingId(DeploymentInfoError):
    code = "missing_id"

    def __init__(self) -> None:
        super().__init__(
            "Selected manifest doesn't contain component id. Specify the id property and try again"
        )


class AlreadyRegistered(DeploymentInfoError):
    code = "already_registered"

    def __init__(self, component_id: str, location: str) -> None:
        super().__init__(
            f"Tenant-wide deployment information for component {component_id} "
            f"already present in file {location}"
        )
        self.component_id = component_id
        self.location = location


class DuplicateFeatureReference(DeploymentInfoError):
    code = "duplicate_feature_reference"

    def __init__(self, component_id: str, feature_title: str | None) -> None:
        super().__init__(
            f"Tenant-wide deployment information for extension {component_id} "
            f"already included in feature {feature_title}"
        )
        self.component_id = component_id
        self.feature_title = feature_title


class EditApplicationFailed(DeploymentInfoError):
    code = "edit_application_failed"

    def __init__(self, component_id: str) -> None:
        super().__init__(
            f"Adding tenant-wide deployment information for component {component_id} failed"
        )
        self.component_id = component_id
