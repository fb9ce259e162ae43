"""Request-related utilities."""
from typing import Iterable, Optional

from flask import request as flask_request


def get_client_ip(req=None):
    """
    Obtiene la IP del cliente; respeta X-Forwarded-For y X-Real-IP si existen.

    Args:
        req: Flask request object. Defaults to the global request.
    """
    req = req or flask_request
    if req is None:
        return None

    forwarded_for = req.headers.get("X-Forwarded-For", "")
    first_hop = next((part.strip() for part in forwarded_for.split(",") if part.strip()), None)
    if first_hop:
        return first_hop

    real_ip = (req.headers.get("X-Real-IP") or "").strip()
    return real_ip or req.remote_addr


def read_json_object(req=None) -> Optional[dict]:
    """
    Lee el cuerpo JSON de la petición.

    Returns:
        El objeto JSON, o None si el cuerpo no es JSON válido o no es un objeto
    """
    req = req or flask_request
    data = req.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def origin_allowed(
    origin: Optional[str],
    allowed_origins: Iterable[str],
    allow_missing: bool = True,
) -> bool:
    """
    Decide si un origen puede usar la API.

    Sin cabecera Origin (peticiones del mismo origen o de herramientas como
    curl) la decisión depende de ``allow_missing``. Una lista vacía o con
    ``"*"`` admite cualquier origen.
    """
    if not origin:
        return allow_missing
    allowed = set(allowed_origins or [])
    if not allowed or "*" in allowed:
        return True
    return origin.rstrip("/") in {item.rstrip("/") for item in allowed}
