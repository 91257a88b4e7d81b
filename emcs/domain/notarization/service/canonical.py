"""Canonical serialization and content hashing of JSON-like documents.

Mapping keys are sorted at every nesting level; list order is significant and
left untouched. Two documents that differ only in key order therefore hash to
the same value. Integral floats are written as integers, so ``1000`` and
``1000.0`` produce the same bytes.
"""

import hashlib
import json
import math
from typing import Any

from emcs.domain.notarization.model.value import HASH_PREFIX


def _coerce_numbers(obj: Any) -> Any:
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, float):
        if math.isfinite(obj) and obj.is_integer():
            return int(obj)
        return obj
    if isinstance(obj, (list, tuple)):
        return [_coerce_numbers(x) for x in obj]
    if isinstance(obj, dict):
        return {k: _coerce_numbers(v) for k, v in obj.items()}
    return obj


def canonicalize(document: Any) -> bytes:
    """Serialize ``document`` to compact, key-sorted UTF-8 JSON.

    Raises:
        TypeError: If the document contains values JSON cannot represent.
        ValueError: If the document contains NaN or infinite floats.
    """
    return json.dumps(
        _coerce_numbers(document),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def digest(data: bytes) -> str:
    return HASH_PREFIX + hashlib.sha256(data).hexdigest()


def compute_hash(document: Any) -> str:
    """Return the ``0x``-prefixed lowercase SHA-256 of the canonical form."""
    return digest(canonicalize(document))
