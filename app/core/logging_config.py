"""
Structured logging configuration for the application.

Provides JSON-formatted logs in production and human-readable logs in development.
Records logged while a request is being served carry the request method, path
and caller, set by the policy-enforcing route class in app/core/deps.py.
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional
from datetime import datetime, timezone
from pythonjsonlogger import jsonlogger

ANONYMOUS = "anonymous"

# {"method", "path", "user"} for the request being served, if any
request_context: ContextVar[Optional[Dict[str, str]]] = ContextVar("request_context", default=None)


def bind_request_context(method: str, path: str, user: Optional[str] = None):
    """Attach request details to every log record; returns a token for reset_request_context."""
    return request_context.set({"method": method, "path": path, "user": user or ANONYMOUS})


def reset_request_context(token) -> None:
    request_context.reset(token)


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """
    JSON formatter that adds standard fields, plus the request context
    when the record was emitted while serving a request.
    """

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        log_record['level'] = record.levelname
        log_record['logger'] = record.name

        context = request_context.get()
        if context is not None:
            log_record['http_method'] = context["method"]
            log_record['http_path'] = context["path"]
            log_record['user'] = context["user"]

        if record.levelno >= logging.WARNING:
            log_record['location'] = f"{record.module}.{record.funcName}:{record.lineno}"


class RequestContextFormatter(logging.Formatter):
    """Plain-text formatter that appends "[METHOD /path user]" inside requests."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = request_context.get()
        if context is None:
            return message
        return f"{message} [{context['method']} {context['path']} {context['user']}]"


def setup_logging(log_level: str = "INFO", json_logs: bool = True) -> None:
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: JSON records (production) or plain lines (development)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)

    if json_logs:
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(logger)s %(message)s')
    else:
        formatter = RequestContextFormatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    console_handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, log_level.upper()))
    root_logger.addHandler(console_handler)

    # SQL echo and passlib's bcrypt version probing are noise here
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
