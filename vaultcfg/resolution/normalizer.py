"""
Key normalization for resolution bundles.

Descriptor names such as "ssh/ca-config" become flat keys ("ssh-ca-config")
that editing surfaces can address directly.
"""

from __future__ import annotations

from .models import RESERVED_KEYS

PATH_SEPARATOR = "/"
KEY_JOINER = "-"


def normalize_key(raw_name: str) -> str:
    """Flatten a descriptor name into a bundle key. Idempotent."""
    if raw_name in RESERVED_KEYS:
        return raw_name
    return raw_name.replace(PATH_SEPARATOR, KEY_JOINER)
