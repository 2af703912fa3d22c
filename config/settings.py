#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Sheet nesting engine settings.

Environment overrides are read from a .env file when present.
"""

import os
import logging
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# ============================================================
# NESTING CONFIG FILE
# ============================================================

# JSON with machine constants, sheet catalog and genetic parameters.
# Empty = packaged nesting/config/default_config.json
NESTING_CONFIG_PATH = os.getenv("NESTING_CONFIG_PATH", "")

# Overrides genetic.seed from the JSON config when set
_seed = os.getenv("NESTING_GENETIC_SEED", "")
NESTING_GENETIC_SEED = int(_seed) if _seed.strip() else None

# ============================================================
# LOGGING
# ============================================================

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOG_FORMAT = os.getenv(
    "LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


def setup_logging(level: str = None):
    """Configure root logging for scripts and services embedding the engine."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL), logging.INFO),
        format=LOG_FORMAT
    )


# ============================================================
# VALIDATION
# ============================================================

def validate_config():
    """
    Check that the settings are usable.
    Call once at startup.
    """
    errors = []

    if NESTING_CONFIG_PATH and not Path(NESTING_CONFIG_PATH).exists():
        errors.append(f"NESTING_CONFIG_PATH does not exist: {NESTING_CONFIG_PATH}")

    if LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        errors.append(f"LOG_LEVEL is not a logging level: {LOG_LEVEL}")

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return True


if __name__ == "__main__":
    print("=" * 60)
    print("NESTING SETTINGS")
    print("=" * 60)
    print(f"Config path: {NESTING_CONFIG_PATH or '(packaged default)'}")
    print(f"Genetic seed override: {NESTING_GENETIC_SEED}")
    print(f"Log level: {LOG_LEVEL}")
    print()

    try:
        validate_config()
        print("[OK] Settings valid")
    except ValueError as e:
        print(f"[FAIL] {e}")
