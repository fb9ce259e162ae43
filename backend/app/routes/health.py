"""Health check del servicio."""
from datetime import datetime, timezone

from flask import jsonify, current_app

from . import api


@api.get("/health")
def health_check():
    """Verifica que la app responde y que las políticas del perfil están cargadas."""
    policies_loaded = (
        "profile_policy" in current_app.extensions
        and "sanitize_policy" in current_app.extensions
    )
    status = "ok" if policies_loaded else "error"
    payload = {
        "status": status,
        "indicators": {"policies": "ok" if policies_loaded else "critical"},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    return jsonify(payload), 200 if policies_loaded else 500
