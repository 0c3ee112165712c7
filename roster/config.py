"""
Runtime settings and logging setup.

Settings come from the environment (a .env file in the working directory is
loaded first) and are exposed as plain module constants:

    ROSTER_API_URL          base URL of the students API
    ROSTER_REQUEST_TIMEOUT  seconds per HTTP request
    ROSTER_LOG_LEVEL        root log level
    ROSTER_LOG_DIR          directory for the rotating log file
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

API_URL         = os.getenv("ROSTER_API_URL", "http://localhost:3000/api").rstrip("/")
REQUEST_TIMEOUT = float(os.getenv("ROSTER_REQUEST_TIMEOUT", "10"))
LOG_LEVEL       = os.getenv("ROSTER_LOG_LEVEL", "INFO").upper()
LOG_DIR         = Path(os.getenv("ROSTER_LOG_DIR", "logs"))
LOG_FILE        = LOG_DIR / "roster.log"

_configured = False


def setup_logging() -> None:
    """Attach stdout + rotating file handlers to the root logger (once per process)."""
    global _configured
    if _configured:
        return

    LOG_DIR.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter("%(asctime)s  %(levelname)s  %(message)s")

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)

    # Rotate at 5 MB, keep 3 backups
    rotating = logging.handlers.RotatingFileHandler(
        LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
    root.addHandler(stream)
    root.addHandler(rotating)
    _configured = True
