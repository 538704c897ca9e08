"""Environment variable configuration for the ADS client.

Settings are loaded in priority order:
  1. Shell environment variables (highest priority)
  2. .env file in current directory
  3. ~/.ads/.env (persistent config, set via `ads env set`)

Run `ads env` to see which keys are configured.
Run `ads env set KEY value` to save a key persistently.

Known keys:
    ADS_API_TOKEN     ->  required by `ads search`, `ads cite`, `ads details`
    ADS_LABEL_POLICY  ->  `author-year` (default) or `verbatim`
    ADS_API_TIMEOUT   ->  request timeout in seconds (default 15)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from adsbib.exceptions import AuthError

logger = logging.getLogger(__name__)

# Persistent config location (shared with the saved listing)
ADS_DIR = Path.home() / ".ads"
PERSISTENT_ENV = ADS_DIR / ".env"

# Load in reverse priority order (later loads don't overwrite existing)
if PERSISTENT_ENV.exists():
    load_dotenv(PERSISTENT_ENV)

load_dotenv()

DEFAULT_TIMEOUT = 15
DEFAULT_LABEL_POLICY = "author-year"
LABEL_POLICIES = {"author-year", "verbatim"}


# --- Persistent config ---

def save_key(name: str, value: str) -> Path:
    """Save a key to ~/.ads/.env for persistent use."""
    ADS_DIR.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    replaced = False
    if PERSISTENT_ENV.exists():
        for line in PERSISTENT_ENV.read_text().splitlines():
            if line.startswith(f"{name}="):
                lines.append(f"{name}={value}")
                replaced = True
            else:
                lines.append(line)

    if not replaced:
        lines.append(f"{name}={value}")

    PERSISTENT_ENV.write_text("\n".join(lines) + "\n")

    os.environ[name] = value

    return PERSISTENT_ENV


# --- Accessors ---

def get_ads_token() -> str:
    token = os.getenv("ADS_API_TOKEN", "").strip()
    if not token:
        raise AuthError(
            "ADS_API_TOKEN is not set. "
            "Run `ads env set ADS_API_TOKEN <your-token>` to configure it."
        )
    return token


def get_label_policy() -> str:
    policy = os.getenv("ADS_LABEL_POLICY", "").strip().lower()
    if not policy:
        return DEFAULT_LABEL_POLICY
    if policy not in LABEL_POLICIES:
        logger.warning("Unknown ADS_LABEL_POLICY %r, using %s", policy, DEFAULT_LABEL_POLICY)
        return DEFAULT_LABEL_POLICY
    return policy


def get_timeout() -> float:
    raw = os.getenv("ADS_API_TIMEOUT", "")
    try:
        return float(raw) if raw else DEFAULT_TIMEOUT
    except ValueError:
        logger.warning("Invalid ADS_API_TIMEOUT %r, using %ss", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT


# --- Status check ---

VALID_KEYS = {"ADS_API_TOKEN", "ADS_LABEL_POLICY", "ADS_API_TIMEOUT"}

ENV_VARS = {
    "ADS_API_TOKEN": {
        "required_by": ["ads search", "ads cite", "ads details"],
        "description": "NASA ADS API bearer token",
    },
    "ADS_LABEL_POLICY": {
        "required_by": ["ads cite (optional, default author-year)"],
        "description": "BibTeX key policy: author-year or verbatim",
    },
    "ADS_API_TIMEOUT": {
        "required_by": ["all network commands (optional, default 15)"],
        "description": "Request timeout in seconds",
    },
}


def check_env() -> list[tuple[str, bool, dict]]:
    """Return list of (var_name, is_set, info) for all known env vars."""
    result = []
    for var, info in ENV_VARS.items():
        is_set = bool(os.getenv(var))
        result.append((var, is_set, info))
    return result
