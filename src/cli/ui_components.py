"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en `add-deployment-info` y `doctor`.
"""

from __future__ import annotations

from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from core.domain.models import FileEdit, WorkspaceEdit
from core.interfaces.workspace import Workspace


def build_edits_table(edit: WorkspaceEdit, *, workspace: Workspace) -> Table:
    """Tabla con las operaciones de un edit set (modo --dry-run)."""

    table = Table(title="Planned edits")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Action", style="cyan", no_wrap=True)
    table.add_column("File", style="magenta")
    table.add_column("Size", style="white", justify="right")
    for index, item in enumerate(edit.edits, start=1):
        action = "create (overwrite)" if item.kind == "create" and item.overwrite else item.kind
        table.add_row(
            str(index),
            action,
            workspace.as_relative_path(item.path),
            f"{len(item.content)} chars",
        )
    return table


def build_edit_preview(item: FileEdit, *, workspace: Workspace) -> Panel:
    """Panel con el contenido resultante de una edición."""

    lexer = "xml" if item.path.suffix.lower() == ".xml" else "json"
    title = Text(workspace.as_relative_path(item.path), style="bold yellow")
    return Panel(Syntax(item.content, lexer, word_wrap=True), title=title, border_style="yellow")


def build_doctor_table() -> Table:
    table = Table(title="SPFx tenant-wide deployment doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
