"""Application configuration values."""
import os
import sys
import json
from typing import List, Optional
from pathlib import Path
from dotenv import load_dotenv


# --- Cargar variables de entorno ---
load_dotenv()

BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent

_ENV_ALIASES = {
    "dev": "development",
    "development": "development",
    "prod": "production",
    "production": "production",
    "testing": "test",
    "tests": "test",
    "pytest": "test",
    "test": "test",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _normalize_env(value: str) -> str:
    normalized = _ENV_ALIASES.get(value.strip().lower(), value.strip().lower())
    return normalized or "production"


def detect_runtime_env() -> str:
    """Determina el entorno actual (production, development, test)."""
    explicit = (
        os.getenv("APP_ENV")
        or os.getenv("FLASK_ENV")
        or os.getenv("ENV")
        or ""
    ).strip()
    if explicit:
        return _normalize_env(explicit)

    if os.getenv("PYTEST_CURRENT_TEST") or any("pytest" in arg for arg in sys.argv):
        return "test"

    debug_flag = os.getenv("FLASK_DEBUG", "").strip().lower()
    if debug_flag in _TRUTHY:
        return "development"

    return "production"


def parse_bool(value, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    normalized = str(value).strip().lower()
    if normalized in _TRUTHY:
        return True
    if normalized in _FALSY:
        return False
    return default


def parse_int(value, default: int, minimum: Optional[int] = None) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        parsed = default
    if minimum is not None:
        parsed = max(minimum, parsed)
    return parsed


def parse_list_env(name: str) -> List[str]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return []
    if raw.startswith("["):
        try:
            return [str(s) for s in json.loads(raw)]
        except (TypeError, ValueError):
            return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def init_app_config(app) -> None:
    """Aplica valores derivados del entorno sin forzar evaluación temprana."""
    runtime_env = _normalize_env(
        str(app.config.get("APP_ENV", "") or app.config.get("ENV", "")).strip()
        or detect_runtime_env()
    )
    app.config["APP_ENV"] = runtime_env
    app.config["ENV"] = runtime_env

    if "TESTING" not in app.config:
        app.config["TESTING"] = runtime_env == "test"
    if "DEBUG" not in app.config:
        app.config["DEBUG"] = runtime_env == "development"

    # Verifica la clave secreta en producción para evitar valores inseguros.
    secret_key = app.config.get("SECRET_KEY") or os.getenv("SECRET_KEY")
    if runtime_env == "production":
        if not secret_key or secret_key == "dev-secret-key":
            raise RuntimeError(
                "FATAL: SECRET_KEY no está definida para producción. "
                "Establece SECRET_KEY con un valor aleatorio y seguro antes de iniciar la aplicación."
            )
    if secret_key:
        app.config["SECRET_KEY"] = secret_key

    # --- Política del perfil ---
    name_min = parse_int(app.config.get("PROFILE_NAME_MIN_LENGTH"), 2, minimum=1)
    name_max = parse_int(app.config.get("PROFILE_NAME_MAX_LENGTH"), 50, minimum=1)
    if name_max < name_min:
        raise RuntimeError(
            f"FATAL: PROFILE_NAME_MAX_LENGTH ({name_max}) es menor que "
            f"PROFILE_NAME_MIN_LENGTH ({name_min})."
        )
    app.config["PROFILE_NAME_MIN_LENGTH"] = name_min
    app.config["PROFILE_NAME_MAX_LENGTH"] = name_max
    app.config["PROFILE_COMMENT_MAX_LENGTH"] = parse_int(
        app.config.get("PROFILE_COMMENT_MAX_LENGTH"), 500, minimum=0
    )
    app.config["PROFILE_COMMENT_REQUIRED"] = parse_bool(app.config.get("PROFILE_COMMENT_REQUIRED"))

    # --- Orígenes ---
    app.config["CORS_ALLOW_MISSING_ORIGIN"] = parse_bool(
        app.config.get("CORS_ALLOW_MISSING_ORIGIN"), default=True
    )
    app.config["CORS_REJECT_DISALLOWED_ORIGIN"] = parse_bool(
        app.config.get("CORS_REJECT_DISALLOWED_ORIGIN")
    )

    app.config["MAX_CONTENT_LENGTH"] = parse_int(
        app.config.get("MAX_CONTENT_LENGTH"), 100 * 1024, minimum=1
    )


class Config:
    # clave secreta de flask
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

    _runtime = detect_runtime_env()
    TESTING = _runtime == "test"
    ENV = _runtime
    DEBUG = _runtime == "development"

    # --- Cuerpo JSON ---
    # 100 KB, suficiente para un perfil y corta payloads abusivos
    MAX_CONTENT_LENGTH = os.getenv("MAX_CONTENT_LENGTH", str(100 * 1024))

    # --- Política del formulario de perfil ---
    PROFILE_NAME_MIN_LENGTH = os.getenv("PROFILE_NAME_MIN_LENGTH", "2")
    PROFILE_NAME_MAX_LENGTH = os.getenv("PROFILE_NAME_MAX_LENGTH", "50")
    # Algunas variantes del formulario usan 255 (límite de columna en BD)
    PROFILE_COMMENT_MAX_LENGTH = os.getenv("PROFILE_COMMENT_MAX_LENGTH", "500")
    PROFILE_COMMENT_REQUIRED = os.getenv("PROFILE_COMMENT_REQUIRED", "false")

    # Vacío = política por defecto del sanitizador
    SANITIZE_ALLOWED_TAGS = parse_list_env("SANITIZE_ALLOWED_TAGS")
    SANITIZE_ALLOWED_PROTOCOLS = parse_list_env("SANITIZE_ALLOWED_PROTOCOLS")

    # --- CORS ---
    CORS_ORIGINS = parse_list_env("CORS_ORIGINS")
    CORS_SUPPORTS_CREDENTIALS = os.getenv("CORS_SUPPORTS_CREDENTIALS", "false").lower() == "true"
    # false = rechaza peticiones sin cabecera Origin (mismo origen, curl, ...)
    CORS_ALLOW_MISSING_ORIGIN = os.getenv("CORS_ALLOW_MISSING_ORIGIN", "true")
    CORS_REJECT_DISALLOWED_ORIGIN = os.getenv("CORS_REJECT_DISALLOWED_ORIGIN", "false")

    # --- Rate Limiting Configuration ---
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
    RATELIMIT_PROFILE = os.getenv("RATELIMIT_PROFILE", "30 per minute")

    # --- Logging Configuration ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", None)  # None = auto-detect based on APP_ENV
    LOG_JSON_ENABLED = None  # None = auto-detect (True for production, False otherwise)
    _log_json_env = os.getenv("LOG_JSON_ENABLED", "").strip().lower()
    if _log_json_env in _TRUTHY:
        LOG_JSON_ENABLED = True
    elif _log_json_env in _FALSY:
        LOG_JSON_ENABLED = False
    del _log_json_env
