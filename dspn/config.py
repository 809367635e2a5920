"""
DSPN Scoring - Configuration
============================
Centralised settings for language defaults, logging and the API surface.
Loads overrides from the project-level .env file.

Clinical constants (normative anchors, cutoffs, transition windows) live next
to the code that uses them and are not configurable here.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

from dspn.utils import get_logger

logger = get_logger(__name__)

# ── Paths ───────────────────────────────────────────────────────────────
PACKAGE_DIR = Path(__file__).resolve().parent                  # dspn/
PROJECT_ROOT = PACKAGE_DIR.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")

# ── Localisation ────────────────────────────────────────────────────────
SUPPORTED_LANGUAGES = ("es", "en")
DEFAULT_LANGUAGE: str = os.getenv("DSPN_DEFAULT_LANGUAGE", "es").lower()
if DEFAULT_LANGUAGE not in SUPPORTED_LANGUAGES:
    logger.warning(
        f"DSPN_DEFAULT_LANGUAGE='{DEFAULT_LANGUAGE}' is not supported "
        f"(expected one of {', '.join(SUPPORTED_LANGUAGES)}), using 'es'"
    )
    DEFAULT_LANGUAGE = "es"

# ── Logging ─────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("DSPN_LOG_LEVEL", "INFO")
LOG_FILE: str = os.getenv("DSPN_LOG_FILE", "")                 # empty = console only

# ── API ─────────────────────────────────────────────────────────────────
API_TITLE: str = os.getenv("DSPN_API_TITLE", "DSPN Nerve Conduction Scoring API")
API_HOST: str = os.getenv("DSPN_API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("DSPN_API_PORT", "8000"))
