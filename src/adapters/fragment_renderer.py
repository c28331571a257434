"""Render del fragmento `ClientSideComponentInstance`.

Por qué Jinja2:
- La plantilla XML vive como fichero, no como string en el Core.
- `autoescape` para XML evita que un alias con `&` o `"` rompa el documento.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from core.domain.models import ExtensionType


_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_FRAGMENT_TEMPLATE = "client_side_component_instance.xml.j2"


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["xml", "xml.j2"]),
        undefined=StrictUndefined,
        keep_trailing_newline=False,
    )


def render_component_instance_xml(
    *,
    title: str,
    extension_type: ExtensionType,
    component_id: str,
) -> str:
    """Genera el XML; Properties/ListTemplateId/WebTemplateId/Sequence quedan vacíos."""

    template = _get_env().get_template(_FRAGMENT_TEMPLATE)
    return template.render(
        title=title,
        location=extension_type.location,
        component_id=component_id,
    )
