"""JSON con comentarios (formato de los ficheros de config de SPFx).

Regla: se eliminan los comentarios `//` y `/* */` fuera de strings y el resto
se parsea como JSON estricto. Los comentarios se sustituyen por espacios
(conservando saltos de línea) para que línea/columna de los errores de
`json` sigan apuntando al fichero original.
"""

from __future__ import annotations

import json
from typing import Any


def strip_json_comments(text: str) -> str:
    out: list[str] = []
    i = 0
    n = len(text)
    in_string = False

    while i < n:
        ch = text[i]

        if in_string:
            out.append(ch)
            if ch == "\\" and i + 1 < n:
                out.append(text[i + 1])
                i += 2
                continue
            if ch == '"':
                in_string = False
            i += 1
            continue

        if ch == '"':
            in_string = True
            out.append(ch)
            i += 1
            continue

        nxt = text[i + 1] if i + 1 < n else ""
        if ch == "/" and nxt == "/":
            end = text.find("\n", i)
            if end == -1:
                end = n
            out.append(" " * (end - i))
            i = end
            continue
        if ch == "/" and nxt == "*":
            end = text.find("*/", i + 2)
            end = n if end == -1 else end + 2
            out.append("".join(c if c in "\r\n" else " " for c in text[i:end]))
            i = end
            continue

        out.append(ch)
        i += 1

    return "".join(out)


def loads(text: str) -> Any:
    """Parsea JSON-with-comments; propaga `json.JSONDecodeError`."""

    return json.loads(strip_json_comments(text.lstrip("\ufeff")))
