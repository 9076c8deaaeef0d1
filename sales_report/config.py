"""
Settings for the sales report service.

Values come from environment variables (a local .env file is honoured) with
defaults suitable for local runs and tests.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------
APP_TITLE: str = "Seller Sales Report Service"
APP_VERSION: str = "1.0.0"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------
TOP_PRODUCTS_LIMIT: int = int(os.getenv("TOP_PRODUCTS_LIMIT", "10"))

# ---------------------------------------------------------------------------
# Seed data
# ---------------------------------------------------------------------------
SEED_ON_STARTUP: bool = _flag("SEED_ON_STARTUP", "true")
SEED: int = int(os.getenv("SEED", "42"))
