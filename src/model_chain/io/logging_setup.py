"""Logging bootstrap for the model-chain CLI.

Every invocation appends to one rotating file, so repeated short commands share
model-chain.log and its backups instead of leaving a file per run.

// [LAW:single-enforcer] Logger handler wiring is enforced in this module only.
// [LAW:one-source-of-truth] Runtime log path/level are derived here and returned to callers.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FILE_NAME = "model-chain.log"


@dataclass(frozen=True)
class LoggingRuntime:
    """Resolved runtime logging configuration.

    file_path is empty when the log file could not be opened.
    """

    level_name: str
    level: int
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _parse_level(raw: str) -> tuple[str, int]:
    normalized = str(raw or "WARNING").strip().upper()
    level = getattr(logging, normalized, logging.WARNING)
    if not isinstance(level, int):
        level = logging.WARNING
    return str(logging.getLevelName(level)), int(level)


def log_file_path() -> Path:
    """MODEL_CHAIN_LOG_FILE, else MODEL_CHAIN_LOG_DIR (default
    ~/.local/share/model-chain/logs) / model-chain.log."""
    explicit = os.environ.get("MODEL_CHAIN_LOG_FILE", "").strip()
    if explicit:
        return Path(explicit).expanduser()
    log_dir = os.environ.get("MODEL_CHAIN_LOG_DIR") or os.path.expanduser(
        "~/.local/share/model-chain/logs"
    )
    return Path(log_dir) / LOG_FILE_NAME


def _make_stream_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("[%(name)s] %(levelname)s %(message)s"))
    return handler


def _make_file_handler(level: int, path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [pid=%(process)d] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )
    return handler


def configure() -> LoggingRuntime:
    """Configure the model_chain logger with stderr + rotating file handlers.

    An unusable log location degrades to stderr only; logging never stops a
    command from running. Idempotent: repeated calls return the originally
    configured runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name, level = _parse_level(os.environ.get("MODEL_CHAIN_LOG_LEVEL", "WARNING"))
    path = log_file_path()

    # [LAW:single-enforcer] All model_chain module loggers propagate to this one logger.
    logger = logging.getLogger("model_chain")
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.addHandler(_make_stream_handler(level))

    file_path = str(path)
    try:
        logger.addHandler(_make_file_handler(level, path))
    except OSError as exc:
        file_path = ""
        logger.warning("file logging disabled, cannot open %s: %s", path, exc)

    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level_name=level_name, level=level, file_path=file_path)
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    """Return configured logging runtime, if configure() has run."""
    return _RUNTIME
