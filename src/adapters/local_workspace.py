"""Workspace sobre el sistema de ficheros local.

Por qué está en adapters:
- Búsqueda por glob, lectura y escritura son detalles de infraestructura.
- El Core solo conoce el contrato `core.interfaces.workspace.Workspace`.

`apply_edit` prepara todo el contenido en ficheros temporales hermanos y solo
después los mueve a su sitio con `os.replace`; si algo falla, restaura lo ya
movido. Así nunca queda un fragmento XML huérfano sin su referencia en
`package-solution.json` (ni al revés).
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import tempfile
from fnmatch import fnmatch
from pathlib import Path

from core.domain.errors import ParseError
from core.domain.models import FileEdit, WorkspaceEdit

logger = logging.getLogger(__name__)


class LocalWorkspace:
    """Implementación de `Workspace` anclada a un directorio raíz."""

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()

    def folder_for(self, path: Path) -> Path | None:
        if path.resolve().is_relative_to(self.root):
            return self.root
        return None

    def as_relative_path(self, path: Path) -> str:
        resolved = path.resolve()
        if resolved.is_relative_to(self.root):
            return resolved.relative_to(self.root).as_posix()
        return str(path)

    async def find_files(
        self,
        pattern: str,
        *,
        exclude: str | None = None,
        max_results: int | None = None,
    ) -> list[Path]:
        return await asyncio.to_thread(self._find_files, pattern, exclude, max_results)

    def _find_files(self, pattern: str, exclude: str | None, max_results: int | None) -> list[Path]:
        matches: list[Path] = []
        for path in sorted(self.root.glob(pattern)):
            if not path.is_file():
                continue
            relative = path.relative_to(self.root).as_posix()
            if exclude and _is_excluded(relative, exclude):
                continue
            matches.append(path)
            if max_results is not None and len(matches) >= max_results:
                break
        logger.debug("find_files(%s) -> %d match(es)", pattern, len(matches))
        return matches

    async def read_text(self, path: Path) -> str:
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as exc:
            raise ParseError(f"Could not read file '{path.name}': {exc}", detail=str(exc)) from exc
        return _decode(data)

    async def apply_edit(self, edit: WorkspaceEdit) -> bool:
        return await asyncio.to_thread(self._apply_edit, edit)

    def _apply_edit(self, edit: WorkspaceEdit) -> bool:
        staged: list[tuple[Path, Path]] = []
        backups: dict[Path, bytes | None] = {}
        created_dirs: list[Path] = []
        committed: list[Path] = []
        applied = False

        try:
            for item in edit.edits:
                _check_edit(item)
                target = item.path
                created_dirs.extend(_make_parents(target.parent))
                if target not in backups:
                    backups[target] = target.read_bytes() if target.exists() else None
                fd, tmp_name = tempfile.mkstemp(
                    prefix=f".{target.name}.",
                    suffix=".tmp",
                    dir=target.parent,
                )
                staged.append((Path(tmp_name), target))
                with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                    fh.write(item.content)

            for tmp, target in staged:
                os.replace(tmp, target)
                committed.append(target)
            applied = True
        except OSError as exc:
            logger.warning("Applying edit set failed, rolling back: %s", exc)
        finally:
            # Temporales fuera antes del rollback: rmdir exige directorios vacíos.
            _discard(staged)
            if not applied:
                _rollback(committed, backups, created_dirs)

        if applied:
            logger.info("Applied %d file edit(s)", len(edit))
        return applied


def _discard(staged: list[tuple[Path, Path]]) -> None:
    for tmp, _ in staged:
        try:
            tmp.unlink(missing_ok=True)
        except OSError:
            logger.debug("Could not remove staged file %s", tmp)


def _decode(data: bytes) -> str:
    # Los fragmentos guardados desde Visual Studio pueden venir en UTF-16 con BOM.
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16", errors="replace")
    return data.decode("utf-8-sig", errors="replace")


def _is_excluded(relative: str, exclude: str) -> bool:
    # "**/x/**" también debe cubrir "x/..." en la raíz
    return fnmatch(relative, exclude) or fnmatch("/" + relative, exclude)


def _check_edit(item: FileEdit) -> None:
    if item.kind == "create" and item.path.exists() and not item.overwrite:
        raise FileExistsError(f"File already exists: {item.path}")
    if item.kind == "replace" and not item.path.is_file():
        raise FileNotFoundError(f"Cannot replace contents of missing file: {item.path}")


def _make_parents(directory: Path) -> list[Path]:
    missing: list[Path] = []
    current = directory
    while not current.exists():
        missing.append(current)
        current = current.parent
    directory.mkdir(parents=True, exist_ok=True)
    return missing


def _rollback(
    committed: list[Path],
    backups: dict[Path, bytes | None],
    created_dirs: list[Path],
) -> None:
    for target in reversed(committed):
        original = backups.get(target)
        try:
            if original is None:
                target.unlink(missing_ok=True)
            else:
                target.write_bytes(original)
        except OSError:
            logger.exception("Rollback of %s failed", target)

    # created_dirs va de más profundo a menos profundo
    for directory in created_dirs:
        try:
            directory.rmdir()
        except OSError:
            break
