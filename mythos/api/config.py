"""API configuration constants.

Single source of truth for paths and settings used across the API layer.
"""

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

load_dotenv(find_dotenv())

# Base directories
API_DIR = Path(__file__).parent
PACKAGE_DIR = API_DIR.parent
PROJECT_DIR = PACKAGE_DIR.parent
DATA_DIR = Path(os.getenv("MYTHOS_DATA_DIR", PROJECT_DIR / "data"))

# Persisted collections live one JSON file per key
STORE_DIR = DATA_DIR / "store"

# Logging
LOG_JSON = os.getenv("LOG_JSON", "true").lower() in ("1", "true", "yes")
LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

# CORS origins for the web frontend
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
