"""
Sanitización y escape de HTML.

- ``sanitize_html``: para campos que pueden llevar HTML limitado (comentario).
  Solo sobreviven las etiquetas, atributos y esquemas de la lista permitida.
- ``escape_html``: para campos que nunca deben llevar HTML (nombre, email)
  antes de insertarlos en un contexto HTML.

No son intercambiables.
"""
from typing import Optional

import bleach

from .normalize import coerce_text
from .policy import DEFAULT_SANITIZE_POLICY, SanitizePolicy

# El orden importa: primero '&' para no escapar dos veces las entidades
# introducidas por las sustituciones siguientes.
_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#039;"),
)

_MAX_CLEAN_PASSES = 16


def sanitize_html(dirty, policy: Optional[SanitizePolicy] = None) -> str:
    """
    Elimina todo el marcado fuera de la lista permitida.

    Las etiquetas no permitidas se quitan conservando su texto (escapado),
    los atributos no permitidos desaparecen y los ``href`` con esquemas
    peligrosos (``javascript:``, ``data:``...) se descartan. Es idempotente y
    nunca lanza: el marcado malicioso se descarta sin informar.

    Args:
        dirty: HTML sin confiar
        policy: Lista permitida; por defecto ``DEFAULT_SANITIZE_POLICY``

    Returns:
        HTML seguro para insertar en la página
    """
    policy = policy or DEFAULT_SANITIZE_POLICY
    cleaned = coerce_text(dirty)
    # Una pasada de bleach no siempre es un punto fijo: al quitar un bloque
    # dentro de <pre> emite un "\n" inicial que el parser descarta al releer.
    for _ in range(_MAX_CLEAN_PASSES):
        if not cleaned:
            return ""
        previous, cleaned = cleaned, _clean_once(cleaned, policy)
        if cleaned == previous:
            break
    return cleaned


def _clean_once(text: str, policy: SanitizePolicy) -> str:
    return bleach.clean(
        text,
        tags=policy.tags,
        attributes=policy.attribute_map,
        protocols=policy.protocols,
        strip=True,
        strip_comments=True,
    )


def escape_html(text) -> str:
    """
    Convierte ``& < > " '`` en entidades HTML.

    No es idempotente: escapar ``&lt;`` produce ``&amp;lt;``.
    """
    escaped = coerce_text(text)
    for char, entity in _HTML_ESCAPES:
        escaped = escaped.replace(char, entity)
    return escaped
