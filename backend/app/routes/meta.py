"""Control de origen y respuestas JSON para errores comunes de la API."""
from flask import jsonify, current_app, request

from . import api
from ..services.request_utils import origin_allowed


@api.before_request
def enforce_allowed_origin():
    """
    Aplica la política de orígenes configurada.

    - ``CORS_ALLOW_MISSING_ORIGIN=false`` rechaza peticiones sin cabecera Origin.
    - ``CORS_REJECT_DISALLOWED_ORIGIN=true`` rechaza orígenes fuera de CORS_ORIGINS
      en lugar de limitarse a omitir las cabeceras CORS.
    """
    origin = request.headers.get("Origin")
    allow_missing = current_app.config.get("CORS_ALLOW_MISSING_ORIGIN", True)

    if not origin:
        if allow_missing:
            return None
        reason = "missing"
    elif not current_app.config.get("CORS_REJECT_DISALLOWED_ORIGIN", False):
        return None
    elif origin_allowed(origin, current_app.config.get("CORS_ORIGINS") or [], allow_missing):
        return None
    else:
        reason = "disallowed"

    current_app.logger.warning(
        "Origen no permitido",
        extra={"event": "cors.rejected", "origin": origin, "reason": reason},
    )
    return jsonify(ok=False, error="Origen no permitido"), 403


@api.errorhandler(413)
def handle_payload_too_large(e):
    """El cuerpo supera MAX_CONTENT_LENGTH."""
    limit = current_app.config.get("MAX_CONTENT_LENGTH")
    return jsonify(ok=False, error="Payload demasiado grande", details={"max_bytes": limit}), 413


@api.errorhandler(429)
def handle_rate_limit(e):
    """Retorna respuestas JSON consistentes para errores de rate limit en la API."""
    retry_after = None
    if hasattr(e, "get_headers"):
        retry_after = dict(e.get_headers()).get("Retry-After")

    limit = getattr(e, "limit", None)
    details = {"message": getattr(e, "description", "Too many requests.")}
    if limit:
        details["limit"] = str(limit)
    if retry_after:
        details["retry_after"] = retry_after

    response = jsonify(ok=False, error="Too Many Requests", details=details)
    if retry_after:
        response.headers["Retry-After"] = retry_after
    return response, 429
