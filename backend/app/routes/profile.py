"""Endpoints del formulario de perfil."""
from flask import jsonify, current_app

from . import api
from ..extensions import limiter
from ..services.profile import process_profile
from ..services.request_utils import read_json_object


def _policies():
    return (
        current_app.extensions["profile_policy"],
        current_app.extensions["sanitize_policy"],
    )


@api.get("/profile/policy")
def profile_policy():
    """Expone las reglas activas para que el cliente aplique las mismas."""
    validation_policy, sanitize_policy = _policies()
    return jsonify(validation=validation_policy.to_dict(), sanitize=sanitize_policy.to_dict())


@api.post("/profile")
@limiter.limit(lambda: current_app.config.get("RATELIMIT_PROFILE", "30 per minute"))
def submit_profile():
    """
    Repite en el servidor el pipeline Normalizar -> Validar -> Sanitizar
    sobre ``{name, email, comment}``.
    """
    data = read_json_object()
    if data is None:
        return jsonify(ok=False, errors={"body": "Se esperaba un objeto JSON."}), 400

    validation_policy, sanitize_policy = _policies()
    outcome = process_profile(data, validation_policy, sanitize_policy)

    if not outcome.ok:
        # Solo los nombres de campo: los valores son entrada sin confiar
        current_app.logger.info(
            "Perfil rechazado",
            extra={"event": "profile.rejected", "fields": sorted(outcome.errors)},
        )
        return jsonify(outcome.to_dict()), 400

    current_app.logger.info("Perfil aceptado", extra={"event": "profile.accepted"})
    return jsonify(outcome.to_dict()), 200
