"""Notificaciones al operador por consola (Rich).

Por qué un adaptador:
- El pipeline solo conoce `Notifier`; la CLI decide colores y stream.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape


class ConsoleNotifier:
    """Implementación de `Notifier` sobre una `rich.console.Console`."""

    def __init__(self, console: Console | None = None, *, error_console: Console | None = None) -> None:
        self._console = console or Console()
        self._error_console = error_console or Console(stderr=True)

    def info(self, message: str) -> None:
        self._console.print(f"[green]{escape(message)}[/green]")

    def error(self, message: str) -> None:
        self._error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")
