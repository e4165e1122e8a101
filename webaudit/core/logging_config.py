"""
Centralised logging configuration for the webaudit engine.

Usage in any module:
    from webaudit.core.logging_config import get_logger
    logger = get_logger(__name__)

Usage in a CLI entrypoint (activates stdout + file handlers):
    from webaudit.core.logging_config import setup_pipeline_logging
    setup_pipeline_logging(log_dir="Logs", run_name="audit_example.com")

Library callers (an API route running audits in-process) can skip the setup
entirely; records then propagate to whatever the host application configured.
"""

from __future__ import annotations

import logging
import re
import sys
from datetime import datetime
from pathlib import Path

# ── Constants ────────────────────────────────────────────────────────────────
_ROOT_LOGGER = "webaudit"
_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Transport and SDK loggers that report every request at INFO/DEBUG.
_NOISY_LOGGERS: tuple[str, ...] = ("urllib3", "httpx", "httpcore", "openai")
_UNSAFE_FILENAME_RE = re.compile(r"[^\w.-]+")


# ── Public API ────────────────────────────────────────────────────────────────

def get_logger(name: str) -> logging.Logger:
    """Return a child logger scoped under the 'webaudit' hierarchy.

    Module names inside the package (``webaudit.checks``) are already
    qualified; anything else (tests, scripts) is nested under the root.
    """
    qualified = f"{_ROOT_LOGGER}.{name}" if not name.startswith(_ROOT_LOGGER) else name
    return logging.getLogger(qualified)


def log_file_for(log_dir: str | Path, run_name: str, when: datetime | None = None) -> Path:
    """Path of the run log: ``<log_dir>/<run_name>_<YYYYmmdd_HHMMSS>.log``.

    ``run_name`` usually embeds the audited host, so characters that are not
    safe in file names are collapsed to ``_``.

    >>> log_file_for("Logs", "audit_shop.example.com:8080", datetime(2026, 1, 2, 3, 4, 5)).name
    'audit_shop.example.com_8080_20260102_030405.log'
    """
    safe_name = _UNSAFE_FILENAME_RE.sub("_", run_name).strip("_") or "audit"
    stamp = (when or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return Path(log_dir) / f"{safe_name}_{stamp}.log"


def setup_pipeline_logging(
    log_dir: str | Path | None = "Logs",
    run_name: str = "audit",
    level: int = logging.INFO,
) -> logging.Logger:
    """Configure the root 'webaudit' logger with stdout + file handlers.

    Call this **once** at the start of a CLI entrypoint.  Re-calls return the
    already configured logger untouched.

    The file handler always records DEBUG, so every per-check decision of a
    run can be traced afterwards while the console stays at ``level``.

    Args:
        log_dir:  Directory for the run log (created if absent); ``None``
                  logs to stdout only.
        run_name: Prefix of the log file name, e.g. ``audit_example.com``.
        level:    Console logging level (default: INFO).

    Returns:
        The configured root ``webaudit`` :class:`logging.Logger`.
    """
    root = logging.getLogger(_ROOT_LOGGER)
    root.setLevel(logging.DEBUG)

    if root.handlers:
        return root

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(formatter)
    root.addHandler(stdout_handler)

    if log_dir is None:
        root.debug("Logging initialised (console only)")
        return root

    log_file = log_file_for(log_dir, run_name)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    root.info("Logging initialised -> %s", log_file)
    return root


def reset_logging() -> None:
    """Close and detach every handler of the 'webaudit' root (test isolation)."""
    root = logging.getLogger(_ROOT_LOGGER)
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)
