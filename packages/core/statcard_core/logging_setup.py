"""JSON-lines render logs and crash hooks for the card service."""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import sys
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any

from .config import AppConfig, config_root


_LOGGER_NAME = "statcard"
# Extras set by the renderer and CardService that are copied into each JSON line.
_EXTRA_FIELDS = ("event", "crash_id", "theme", "render_ms", "bytes")

_fault_file: IO[str] | None = None


def log_dir() -> Path:
    path = config_root() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update({key: getattr(record, key) for key in _EXTRA_FIELDS if hasattr(record, key)})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def configure_logging(cfg: AppConfig, directory: Path | None = None) -> logging.Logger:
    """Attach the rotating JSON file handler (and optionally stderr) to the ``statcard`` tree once."""
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, cfg.logging.level, logging.INFO))
    target = directory or log_dir()
    target.mkdir(parents=True, exist_ok=True)

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(target / "statcard.log"),
        when="midnight",
        backupCount=max(2, cfg.diagnostics.keep_log_files),
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    if cfg.logging.console:
        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        logger.addHandler(console)

    logger.info("logging configured dir=%s", target, extra={"event": "logging_configured"})
    return logger


def _report_crash(event: str, exc_info) -> str:
    crash_id = str(uuid.uuid4())
    logging.getLogger(_LOGGER_NAME).critical(
        "%s crash_id=%s",
        event.replace("_", " "),
        crash_id,
        exc_info=exc_info,
        extra={"event": event, "crash_id": crash_id},
    )
    return crash_id


def install_crash_hooks(directory: Path | None = None) -> None:
    """Log uncaught exceptions from the main thread and render workers, and dump faults to ``fault.log``."""
    global _fault_file

    sys.excepthook = lambda exc_type, exc, tb: _report_crash("uncaught_exception", (exc_type, exc, tb))
    threading.excepthook = lambda args: _report_crash(
        "thread_exception", (args.exc_type, args.exc_value, args.exc_traceback)
    )

    if _fault_file is None:
        _fault_file = ((directory or log_dir()) / "fault.log").open("a", encoding="utf-8")
        faulthandler.enable(file=_fault_file, all_threads=True)


def remove_crash_hooks() -> None:
    global _fault_file

    sys.excepthook = sys.__excepthook__
    threading.excepthook = threading.__excepthook__
    if _fault_file is not None:
        faulthandler.disable()
        _fault_file.close()
        _fault_file = None
