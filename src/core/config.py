"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = PROJECT_ROOT / "data"

# =============================================================================
# REMOTE DATA ENDPOINTS (Apps Script web apps)
# =============================================================================

TASKS_API_URL = os.environ.get(
    "TASKS_API_URL",
    "https://script.google.com/macros/s/AKfycbwEG5QTclinIyBCGzqnY6ofnx1mw6gh5RW1ogTjcBjUghssttCc0YZLGkKSuXB1xRl9/exec",
)
BIS_API_URL = os.environ.get(
    "BIS_API_URL",
    "https://script.google.com/macros/s/AKfycby7CrJGDyOhEkjRDgZe0rGRCztzniMVW1G6G9fYfyDbiG77EAtEvD1zjSWp1wN3a9jTjg/exec",
)
SYSTEMS_API_URL = os.environ.get(
    "SYSTEMS_API_URL",
    "https://script.google.com/macros/s/AKfycbwmYPnRKjTH9H_RdM7WBQQ1TzvxYQKQuE6k7UAMFQgL0_DVe4KteuVm6BubHTF7WkAZWw/exec",
)
DELEGATION_API_URL = os.environ.get(
    "DELEGATION_API_URL",
    "https://script.google.com/macros/s/AKfycbwdoJqTCz9ocP02UBPtasFuImG-gHK8r-TBmQg3NvvOuF83SHiTrv_kOn3nop_Po2XW/exec",
)

API_BASES = {
    "tasks": TASKS_API_URL,
    "bis": BIS_API_URL,
    "systems": SYSTEMS_API_URL,
    "delegation": DELEGATION_API_URL,
}

# Empty string disables the relay hop
RELAY_URL = os.environ.get("RELAY_URL", "https://employeedas.mis-truetone.workers.dev")

# =============================================================================
# TRANSPORT / CACHE
# =============================================================================

REQUEST_TIMEOUT_SECONDS = float(os.environ.get("REQUEST_TIMEOUT_SECONDS", "10"))
CACHE_TTL_MS = int(os.environ.get("CACHE_TTL_MS", "30000"))

# =============================================================================
# IDENTITY
# =============================================================================

DASHBOARD_USER_EMAIL = os.environ.get("DASHBOARD_USER_EMAIL", "")

# =============================================================================
# RELAY SERVER
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8787"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"

RELAY_DEFAULT_CONTENT_TYPE = "application/x-www-form-urlencoded"
RELAY_ALLOWED_METHODS = "GET, POST, OPTIONS"
RELAY_ALLOWED_HEADERS = "Content-Type"

# =============================================================================
# REQUEST LOG
# =============================================================================

REQUEST_LOG_ENABLED = os.environ.get("REQUEST_LOG_ENABLED", "false").lower() == "true"
REQUEST_LOG_DB_PATH = Path(
    os.environ.get("REQUEST_LOG_DB_PATH", str(DATA_DIR / "db" / "relay-requests.db"))
)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
