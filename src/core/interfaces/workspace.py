"""Contratos del entorno anfitrión (workspace + notificaciones).

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El pipeline se prueba sin editor ni consola: basta con un workspace local
  sobre `tmp_path` y un notifier que graba mensajes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from core.domain.models import WorkspaceEdit


@runtime_checkable
class Workspace(Protocol):
    """Acceso a los ficheros del proyecto SPFx.

    Reglas de diseño:
    - Las lecturas/búsquedas son asíncronas porque hacen I/O.
    - `apply_edit` es todo-o-nada: devuelve False sin dejar cambios parciales.
    """

    root: Path

    def folder_for(self, path: Path) -> Path | None:
        """Devuelve la raíz del workspace si `path` pertenece a él."""

        ...

    def as_relative_path(self, path: Path) -> str:
        ...

    async def find_files(
        self,
        pattern: str,
        *,
        exclude: str | None = None,
        max_results: int | None = None,
    ) -> list[Path]:
        """Busca ficheros por glob relativo a la raíz (orden estable)."""

        ...

    async def read_text(self, path: Path) -> str:
        ...

    async def apply_edit(self, edit: WorkspaceEdit) -> bool:
        ...


@runtime_checkable
class Notifier(Protocol):
    """Canal de mensajes hacia el operador."""

    def info(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...
