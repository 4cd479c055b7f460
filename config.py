# config.py
# Settings for the planner, read from the environment (and a local .env file when present).

import os

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.dirname(os.path.abspath(__file__))


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    raw = os.environ.get(name, "")
    try:
        return max(minimum, int(raw))
    except (TypeError, ValueError):
        return default


_env_catalog = os.environ.get("CATALOG_FILE")
if not _env_catalog:
    CATALOG_FILE = os.path.join(BASE_DIR, "catalog.json")
elif not os.path.isabs(_env_catalog):
    CATALOG_FILE = os.path.join(BASE_DIR, _env_catalog)
else:
    CATALOG_FILE = _env_catalog

# Ceiling on section combinations enumerated for a single course; 0 disables it.
MAX_OPTIONS_PER_COURSE = _env_int("MAX_OPTIONS_PER_COURSE", 5000)

# Same-day meetings separated by at most this many minutes count as one continuous block.
CONTINUOUS_GAP_MINUTES = _env_int("CONTINUOUS_GAP_MINUTES", 10)

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
PORT = _env_int("PORT", 5000, minimum=1)
