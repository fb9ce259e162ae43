"""
Normalización de texto previa a cualquier validación.

Ejemplo de entrada con espacios innecesarios::

    "Ana   López"  ->  "Ana López"

Cualquier valor de entrada (None, números, bytes...) se convierte primero a
texto: un valor ausente o None se trata como texto vacío.
"""
import re

_WHITESPACE_RUN = re.compile(r"\s+")


def coerce_text(value) -> str:
    """
    Convierte cualquier valor recibido en texto.

    Args:
        value: Valor sin confiar (str, None, número, bytes, ...)

    Returns:
        El texto equivalente; ``""`` si el valor es None
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def normalize_text(value) -> str:
    """
    Recorta los extremos y colapsa cada secuencia de espacios en blanco
    (espacios, tabuladores, saltos de línea) en un único espacio.

    Nunca falla; es idempotente.
    """
    return _WHITESPACE_RUN.sub(" ", coerce_text(value).strip())


def normalize_email(value) -> str:
    """Normaliza un email y lo convierte a minúsculas."""
    return normalize_text(value).lower()
