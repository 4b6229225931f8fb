"""Centralized runtime configuration.

Loads environment variables (and an optional ``.env`` file) at import
time. Every setting has a default so the dashboard runs against the
bundled survey export without any configuration.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


# ── Data sources ────────────────────────────────────────────────────────
ZAR_DATA_DIR: str = os.getenv("ZAR_DATA_DIR", os.path.join(os.getcwd(), "data"))
INTERVIEWS_MD_PATH: str = os.getenv(
    "INTERVIEWS_MD_PATH", os.path.join(ZAR_DATA_DIR, "data.md")
)
TRANSCRIPTS_DIR: str = os.getenv(
    "TRANSCRIPTS_DIR", os.path.join(os.getcwd(), "transcripts")
)

# ── Nexus webhook sync ──────────────────────────────────────────────────
NEXUS_WEBHOOK_URL: str = os.getenv(
    "NEXUS_WEBHOOK_URL", "https://nexus.zar.app/webhooks/zar_surveys"
)
NEXUS_API_KEY: str = os.getenv("NEXUS_API_KEY", "")
NEXUS_SOURCE: str = os.getenv("NEXUS_SOURCE", "zar_surveys")
NEXUS_PROJECT: str = os.getenv("NEXUS_PROJECT", "zar-retail-survey")
NEXUS_SYNC_STATE_PATH: str = os.getenv(
    "NEXUS_SYNC_STATE_PATH", os.path.join(os.getcwd(), ".nexus-sync-state.json")
)
NEXUS_SYNC_ON_STARTUP: bool = _env_bool("NEXUS_SYNC_ON_STARTUP", "true")
NEXUS_REQUEST_DELAY: float = float(os.getenv("NEXUS_REQUEST_DELAY", "0.2"))
NEXUS_BULK_DELAY: float = float(os.getenv("NEXUS_BULK_DELAY", "0.5"))
NEXUS_TIMEOUT: float = float(os.getenv("NEXUS_TIMEOUT", "15.0"))

# ── Server ──────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
DEBUG: bool = _env_bool("DEBUG")
HOST: str = os.getenv("HOST", "127.0.0.1")
PORT: int = int(os.getenv("PORT", "8000"))
CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "http://localhost:3000,http://127.0.0.1:3000,http://localhost:3001",
    ).split(",")
    if origin.strip()
]


def nexus_configured() -> bool:
    """True when the webhook key is present."""
    return bool(NEXUS_API_KEY)


def log_config_status() -> None:
    """Print data-source and integration status for startup visibility."""
    print(f"   Survey table:  {INTERVIEWS_MD_PATH}")
    print(f"   Transcripts:   {TRANSCRIPTS_DIR}")
    if nexus_configured():
        print(f"   Nexus sync:    Configured ({NEXUS_WEBHOOK_URL})")
    else:
        print("   Nexus sync:    Not set (NEXUS_API_KEY missing, sync disabled)")
        logger.warning("[CONFIG] NEXUS_API_KEY not configured, webhook sync disabled")
