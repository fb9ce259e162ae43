"""
Logging setup for the profile validation service.

Production writes one JSON object per line (python-json-logger); development
writes coloured single-line records; test only emits warnings and keeps
pytest's capture handlers in place.

Every record written inside a request carries the request id, method, path,
client address and, when present, the Origin header and the elapsed time.
Submitted field values never reach the logs: profile events carry field
names only.
"""

import logging
import sys
import time
import uuid
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from flask import Flask, g, has_request_context, request
from pythonjsonlogger import jsonlogger
from werkzeug.exceptions import HTTPException

from .services.request_utils import get_client_ip

# Códigos ANSI por nivel
_LEVEL_COLORS = {
    logging.DEBUG: "36",
    logging.INFO: "32",
    logging.WARNING: "33",
    logging.ERROR: "31",
    logging.CRITICAL: "35",
}


def _elapsed_ms(started: float) -> float:
    return round((time.time() - started) * 1000, 2)


def request_log_fields() -> Dict[str, Any]:
    """Fields describing the current request, or ``{}`` outside of one."""
    if not has_request_context():
        return {}

    fields: Dict[str, Any] = {
        "request_id": getattr(g, "request_id", None),
        "method": request.method,
        "path": request.path,
        "remote_addr": get_client_ip(request),
    }
    origin = request.headers.get("Origin")
    if origin:
        fields["origin"] = origin
    started = getattr(g, "request_start_time", None)
    if started:
        fields["response_time_ms"] = _elapsed_ms(started)
    return fields


class ContextualJsonFormatter(jsonlogger.JsonFormatter):
    """JSON records enriched with ``app_env`` and the request fields."""

    def __init__(self, *args, app_env: str = "production", **kwargs):
        super().__init__(*args, **kwargs)
        self.app_env = app_env

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(
            timestamp=datetime.now(timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
            app_env=self.app_env,
        )
        log_record.update(request_log_fields())
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


class DevelopmentFormatter(logging.Formatter):
    """
    One coloured line per record, followed by a bracketed context suffix:
    short request id, ``METHOD /path`` and the ``event`` extra.
    """

    def format(self, record: logging.LogRecord) -> str:
        code = _LEVEL_COLORS.get(record.levelno)
        level = f"{record.levelname:8s}"
        if code:
            level = f"\033[{code}m{level}\033[0m"
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        line = f"[{timestamp}] {level} {record.name:30s} | {record.getMessage()}"

        suffix = self._context_suffix(record)
        if suffix:
            line += f" [{suffix}]"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line

    @staticmethod
    def _context_suffix(record: logging.LogRecord) -> str:
        fields = request_log_fields()
        parts = []
        if fields.get("request_id"):
            parts.append(f"request_id={fields['request_id'][:8]}")
        if fields:
            parts.append(f"{fields['method']} {fields['path']}")
        event = getattr(record, "event", None)
        if event:
            parts.append(f"event={event}")
        return " | ".join(parts)


def resolve_log_level(app_env: str, log_level_str=None) -> int:
    """LOG_LEVEL explícito o, si falta, el nivel por defecto del entorno."""
    if log_level_str:
        return getattr(logging, str(log_level_str).upper(), logging.INFO)
    return {"test": logging.WARNING, "development": logging.DEBUG}.get(app_env, logging.INFO)


def build_formatter(app_env: str, json_enabled: Optional[bool] = None) -> logging.Formatter:
    """JSON unless disabled; ``None`` means JSON only in production."""
    if json_enabled is None:
        json_enabled = app_env == "production"
    if json_enabled:
        return ContextualJsonFormatter(fmt="%(message)s", app_env=app_env)
    return DevelopmentFormatter()


def configure_logging(app: Flask) -> None:
    """
    Attach a stdout handler to ``app.logger`` and the root logger.

    In test the existing handlers are kept (pytest's caplog) and the app
    logger propagates; elsewhere the handler replaces whatever was there.
    """
    app_env = app.config.get("APP_ENV", "production")
    log_level = resolve_log_level(app_env, app.config.get("LOG_LEVEL"))
    formatter = build_formatter(app_env, app.config.get("LOG_JSON_ENABLED"))
    testing = app_env == "test"

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    if not testing:
        app.logger.handlers.clear()
    app.logger.addHandler(handler)
    app.logger.setLevel(log_level)
    app.logger.propagate = testing

    root_logger = logging.getLogger()
    if not testing:
        root_logger.handlers.clear()
        root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    if app_env == "development":
        logging.getLogger("werkzeug").setLevel(logging.WARNING)

    app.logger.info(
        "Logging configured",
        extra={
            "app_env": app_env,
            "log_level": logging.getLevelName(log_level),
            "json_enabled": isinstance(formatter, ContextualJsonFormatter),
        },
    )


def setup_request_logging(app: Flask) -> None:
    """
    Register the request id and timing hooks, echo the id back in
    ``X-Request-ID``, and log uncaught exceptions before re-raising them.
    """

    @app.before_request
    def start_request_log():
        g.request_id = str(uuid.uuid4())
        g.request_start_time = time.time()
        app.logger.debug("Request started", extra={"event": "request.started"})

    @app.after_request
    def finish_request_log(response):
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)

        started = getattr(g, "request_start_time", None)
        if started:
            app.logger.info(
                "Request completed",
                extra={
                    "event": "request.completed",
                    "status_code": response.status_code,
                    "response_time_ms": _elapsed_ms(started),
                },
            )
        return response

    @app.errorhandler(Exception)
    def log_uncaught_exception(error: Exception):
        # 4xx/413/429 are answered as-is
        if isinstance(error, HTTPException):
            return error

        app.logger.error(
            f"Uncaught exception: {error}",
            exc_info=True,
            extra={
                "event": "exception.uncaught",
                "exception_type": type(error).__name__,
            },
        )
        raise error
