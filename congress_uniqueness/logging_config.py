"""Structured JSON logging configuration with per-run correlation IDs."""

from __future__ import annotations

import logging
import uuid
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter as _JsonFormatter

# Correlation ID shared by every record emitted during one analysis run
run_id_var: ContextVar[str] = ContextVar("run_id", default="")


class RunIdFilter(logging.Filter):
    """Inject run_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = run_id_var.get("")  # type: ignore[attr-defined]
        return True


def generate_run_id() -> str:
    """Generate a new run ID."""
    return uuid.uuid4().hex[:16]


def setup_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure logging for CLI runs.

    JSON output is the default; plain text is handy when reading the
    console interactively.
    """
    handler = logging.StreamHandler()
    if json_output:
        formatter: logging.Formatter = _JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(module)s %(funcName)s %(message)s %(run_id)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    handler.setFormatter(formatter)
    handler.addFilter(RunIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Quiet noisy third-party loggers
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
