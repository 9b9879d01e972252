"""Logging configuration for simetimer.

Logs to both:
- ~/.config/simetimer/simetimer.log (every save, load and clock transition; 5 MB cap, 2 backups)
- stderr (only warnings and above, so the TUI is not drawn over)
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIR = Path.home() / ".config" / "simetimer"
LOG_FILE_NAME = "simetimer.log"

_LOG_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_LOG_BACKUP_COUNT = 2


def setup_logging(debug: bool = False, log_dir: Path | None = None) -> logging.Logger:
    """Attach file and stderr handlers to the ``simetimer`` logger once."""
    root = logging.getLogger("simetimer")
    root.setLevel(logging.DEBUG if debug else logging.INFO)
    if root.handlers:
        return root

    log_dir = log_dir or LOG_DIR
    log_dir.mkdir(parents=True, exist_ok=True)

    fh = RotatingFileHandler(
        str(log_dir / LOG_FILE_NAME),
        maxBytes=_LOG_MAX_BYTES,
        backupCount=_LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(fh)

    sh = logging.StreamHandler()
    sh.setLevel(logging.DEBUG if debug else logging.WARNING)
    sh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(sh)
    return root
