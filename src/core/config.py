"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el pipeline y los adaptadores lean las mismas rutas/globs.

Las constantes que forman parte del contrato del fichero generado (indentación
JSON, descripción/versión de la feature) no son configurables: viven en
`core.services.registration_writer`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Configuración central de la herramienta.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SPFX_TWD_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    solution_config_glob: str = Field(
        default="config/package-solution.json",
        min_length=1,
        description="Glob (relativo al workspace) del fichero de configuración de la solución.",
    )
    fragments_glob: str = Field(
        default="sharepoint/assets/*.xml",
        min_length=1,
        description="Glob de los fragmentos XML ya generados.",
    )
    fragments_dir: Path = Field(
        default=Path("sharepoint") / "assets",
        description="Directorio (relativo al workspace) donde se crean los fragmentos.",
    )
    exclude_glob: str = Field(
        default="**/node_modules/**",
        description="Glob excluido en todas las búsquedas (directorios de dependencias).",
    )
    manifests_glob: str = Field(
        default="src/**/*.manifest.json",
        min_length=1,
        description="Glob de manifests de componentes (solo para `doctor`).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de diagnóstico (DEBUG, INFO, WARNING, ...).",
    )
