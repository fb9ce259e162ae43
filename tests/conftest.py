# tests/conftest.py
import os
import sys
import pathlib

import pytest

# ---------- PATH raíz del repo ----------
THIS = pathlib.Path(__file__).resolve()
ROOT = THIS.parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("APP_ENV", "test")

from backend.app import create_app  # noqa: E402


# ---------- Config de pruebas ----------
class TestConfig:
    TESTING = True
    APP_ENV = "test"
    SECRET_KEY = "test-secret-key"
    LOG_LEVEL = None  # Auto-detect per APP_ENV during tests
    LOG_JSON_ENABLED = False
    CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]
    CORS_SUPPORTS_CREDENTIALS = True
    CORS_ALLOW_MISSING_ORIGIN = True
    CORS_REJECT_DISALLOWED_ORIGIN = False
    PROFILE_COMMENT_MAX_LENGTH = 500
    PROFILE_COMMENT_REQUIRED = False
    MAX_CONTENT_LENGTH = 100 * 1024
    RATELIMIT_STORAGE_URI = "memory://"
    RATELIMIT_PROFILE = "1000 per minute"


@pytest.fixture(scope="session", autouse=True)
def _clean_env():
    """
    Limpia variables de entorno que podrían alterar la política durante los tests.
    """
    keys = [
        "PROFILE_NAME_MIN_LENGTH",
        "PROFILE_NAME_MAX_LENGTH",
        "PROFILE_COMMENT_MAX_LENGTH",
        "PROFILE_COMMENT_REQUIRED",
        "SANITIZE_ALLOWED_TAGS",
        "SANITIZE_ALLOWED_PROTOCOLS",
    ]
    saved = {key: os.environ.pop(key) for key in keys if key in os.environ}
    yield
    os.environ.update(saved)


@pytest.fixture(scope="session")
def app():
    app = create_app(TestConfig)
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_app():
    """Crea una app con overrides sobre TestConfig."""
    def _mk(**overrides):
        config = type("OverrideConfig", (TestConfig,), overrides)
        return create_app(config)
    return _mk


@pytest.fixture()
def valid_profile():
    return {
        "name": "Ana López",
        "email": "ana@mail.com",
        "comment": "Hola <b>mundo</b>",
    }
