from __future__ import annotations

import logging
import os
import platform
import sys
import traceback
from datetime import datetime
from logging.handlers import RotatingFileHandler

from .config import APP_DIR


_LOG_NAME = "app.log"


def log_dir() -> str:
    return os.path.normpath(os.path.join(APP_DIR, "debug", "logs"))


def ensure_log_dir() -> str:
    path = log_dir()
    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass
    return path


def log_file_path() -> str:
    return os.path.join(ensure_log_dir(), _LOG_NAME)


def setup_logging(level: int | str = logging.DEBUG) -> logging.Logger:
    """Configure a rotating file logger under <app dir>/debug/logs/app.log.

    Returns the configured top-level logger ("arkconfig").
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.DEBUG
    logger = logging.getLogger("arkconfig")
    logger.setLevel(level)

    # Avoid duplicate handlers if called twice
    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        try:
            fhandler = RotatingFileHandler(log_file_path(), maxBytes=512_000, backupCount=3, encoding="utf-8")
        except OSError as e:
            logger.warning("File logging unavailable: %s", e)
        else:
            fhandler.setLevel(logging.DEBUG)
            fhandler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
            logger.addHandler(fhandler)

    # RotatingFileHandler is a StreamHandler subclass, so check the exact type
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setLevel(logging.INFO)
        ch.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(ch)

    logger.debug("Logging initialized at %s", log_file_path())
    return logger


def install_excepthook(logger: logging.Logger | None = None) -> None:
    """Install a sys.excepthook that logs uncaught exceptions with traceback."""
    lg = logger or logging.getLogger("arkconfig")

    def _hook(exc_type, exc, tb):
        lg.error("Uncaught exception:")
        for line in traceback.format_exception(exc_type, exc, tb):
            lg.error(line.rstrip())
        # Chain to default hook for console visibility
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _hook


def log_environment(logger: logging.Logger | None = None) -> None:
    """Log interpreter and configuration paths, useful when reporting issues."""
    from . import config

    lg = logger or logging.getLogger("arkconfig")
    lg.debug("Environment diagnostics start")
    lg.info("Platform: %s", platform.platform())
    lg.info("Python: %s", sys.version.replace("\n", " "))
    lg.info("CWD: %s", os.getcwd())
    lg.info("App dir: %s", config.APP_DIR)
    lg.info("Server registry: %s", config.SERVER_REGISTRY_PATH)
    lg.info("Poll interval: %ss", config.POLL_INTERVAL)
    for k in ("ARKCONFIG_APP_DIR", "ARKCONFIG_CONFIG_SUBDIR", "ARKCONFIG_DEFAULT_VARIANT"):
        lg.info("%s: %s", k, os.environ.get(k, "<unset>"))
    lg.debug("Environment diagnostics end")


def log_exception_context(msg: str, logger: logging.Logger | None = None) -> None:
    lg = logger or logging.getLogger("arkconfig")
    lg.error(msg)
    lg.error("Last exception:")
    lg.error(traceback.format_exc())


def crash_hint() -> str:
    """Return a short hint with the log file location to show users."""
    lf = log_file_path()
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    return f"[{ts}] See log for details: {lf}"
