"""Centralised settings for Link Cleaner.

The cleaning core takes no configuration; everything here belongs to the
surfaces around it (clipboard watcher, HTTP API, CLI logging).  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Clipboard watcher
    # ------------------------------------------------------------------
    poll_interval: float = field(
        default_factory=lambda: float(os.environ.get("LINKCLEAN_POLL_INTERVAL", "0.5"))
    )

    # ------------------------------------------------------------------
    # HTTP API
    # ------------------------------------------------------------------
    api_host: str = field(
        default_factory=lambda: os.environ.get("LINKCLEAN_API_HOST", "127.0.0.1")
    )
    api_port: int = field(
        default_factory=lambda: int(os.environ.get("LINKCLEAN_API_PORT", "8765"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LINKCLEAN_LOG_LEVEL", "WARNING").upper()
    )


# Module-level singleton, import this everywhere:
#   from linkclean.config import settings
settings = Settings()
