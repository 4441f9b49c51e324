from __future__ import annotations
import os


def _flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


UNIT_DIR = os.environ.get("INITORDER_UNIT_DIR", "units")
STRICT = _flag("INITORDER_STRICT")
