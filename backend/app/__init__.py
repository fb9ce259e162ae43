"""Application factory for the profile validation service."""
from flask import Flask
from backend.config import Config, init_app_config

# Importamos las instancias de las extensiones
from .extensions import cors, limiter
from .logging_config import configure_logging, setup_request_logging
from .services.policy import policy_from_config, sanitize_policy_from_config


def init_profile_policies(app: Flask) -> None:
    """
    Construye las políticas de validación y sanitización una sola vez a partir
    de la configuración y las guarda en ``app.extensions``.
    """
    try:
        validation_policy = policy_from_config(app.config)
    except ValueError as exc:
        raise RuntimeError(f"FATAL: política de perfil inválida: {exc}") from exc

    app.extensions["profile_policy"] = validation_policy
    app.extensions["sanitize_policy"] = sanitize_policy_from_config(app.config)
    app.logger.info(
        "Políticas de perfil cargadas",
        extra={
            "event": "profile.policy_loaded",
            "comment_max_length": validation_policy.comment_max_length,
            "comment_required": validation_policy.comment_required,
        },
    )


def create_app(config_object=Config) -> Flask:
    """
    Fábrica de la aplicación Flask.
    Configura la app
    """
    app = Flask(__name__)

    app.config.from_object(config_object)
    init_app_config(app)

    runtime_env = app.config.get("APP_ENV", "production")
    cors_origins = app.config.get("CORS_ORIGINS") or []

    if runtime_env == "production":
        if not cors_origins:
            raise RuntimeError(
                "FATAL: CORS_ORIGINS no está configurado para producción. "
                "Define una lista de dominios permitidos antes de iniciar la aplicación."
            )
    if not cors_origins:
        cors_origins = "*"

    # Configure structured logging early
    configure_logging(app)
    setup_request_logging(app)

    init_profile_policies(app)

    supports_credentials = bool(app.config.get("CORS_SUPPORTS_CREDENTIALS", False))

    cors.init_app(
        app,
        resources={r"/api/*": {"origins": cors_origins}},
        supports_credentials=supports_credentials,
    )

    # Note: storage_uri debe configurarse en el limiter object antes de init_app
    storage_uri = app.config.get("RATELIMIT_STORAGE_URI", "memory://")
    limiter.storage_uri = storage_uri
    limiter.init_app(app)

    from .routes import api as api_blueprint

    app.register_blueprint(api_blueprint, url_prefix="/api")

    from .cli import register_cli

    register_cli(app)

    return app
