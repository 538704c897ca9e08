"""Persist the current result listing under ~/.ads/ between commands."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from adsbib.models import Entry, ResultSet

logger = logging.getLogger(__name__)

ADS_DIR = Path.home() / ".ads"


def _safe_json_load(path: Path, fallback=None):
    """Load JSON from a file, returning fallback if corrupted."""
    try:
        return json.loads(path.read_text())
    except (json.JSONDecodeError, ValueError):
        logger.warning("Corrupted JSON file: %s - ignoring", path)
        return fallback


def ensure_dirs() -> None:
    ADS_DIR.mkdir(parents=True, exist_ok=True)


def results_path() -> Path:
    return ADS_DIR / "results.json"


def save_results(results: ResultSet) -> None:
    """Replace the saved listing with ``results``."""
    ensure_dirs()
    p = results_path()
    data = {
        "query": results.query,
        "entries": [asdict(e) for e in results.entries],
    }
    # Atomic write: write to temp file, then rename
    tmp = p.with_suffix(".tmp")
    tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False))
    tmp.rename(p)


def load_results() -> Optional[ResultSet]:
    p = results_path()
    if not p.exists():
        return None
    data = _safe_json_load(p, fallback=None)
    if not isinstance(data, dict):
        return None
    try:
        entries = tuple(
            Entry(
                index=e["index"],
                identifier=e["identifier"],
                score=e.get("score", 0.0),
                date=e.get("date", ""),
                authors=tuple(e.get("authors") or ()),
                title=e.get("title", ""),
            )
            for e in data.get("entries", [])
        )
    except (KeyError, TypeError, ValueError):
        logger.warning("Saved listing %s has invalid entries - ignoring", p)
        return None
    return ResultSet(entries=entries, query=data.get("query"))
