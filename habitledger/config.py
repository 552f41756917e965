"""Configuration — loads environment variables with sensible defaults.

All tunables live here. Override via .env file or environment variables.
No hardcoded thresholds/timings elsewhere in the codebase.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

def _env(key: str, default: str = "") -> str:
    return os.getenv(key, default)

def _env_int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))

def _env_bool(key: str, default: bool = False) -> bool:
    return os.getenv(key, str(default)).lower() in ("1", "true", "yes")


# ═══════════════════════════════════════════════════════════════════════════
# Database
# ═══════════════════════════════════════════════════════════════════════════

DB_PATH = Path(_env("HABITLEDGER_DB_PATH") or _PROJECT_ROOT / "data" / "habitledger.db")

# ═══════════════════════════════════════════════════════════════════════════
# Streak timing (seconds)
# ═══════════════════════════════════════════════════════════════════════════
# A habit can be logged at most once per LOG_WINDOW. Logging again before
# GRACE_WINDOW has elapsed extends the streak; after that it resets to 1.

LOG_WINDOW_SECONDS = _env_int("LOG_WINDOW_SECONDS", 86400)
GRACE_WINDOW_SECONDS = _env_int("GRACE_WINDOW_SECONDS", 172800)

# Longest-streak candidate: prior streak + 1 (true, matches deployed ledgers)
# or the streak actually stored after the log (false).
LONGEST_STREAK_FROM_PRIOR = _env_bool("LONGEST_STREAK_FROM_PRIOR", True)

# ═══════════════════════════════════════════════════════════════════════════
# Queries
# ═══════════════════════════════════════════════════════════════════════════

DEFAULT_PAGE_SIZE = _env_int("DEFAULT_PAGE_SIZE", 20)
