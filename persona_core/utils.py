"""
persona_core.utils
------------------
Small helpers shared by every namespace reader: timestamp encoding, identity
key normalisation, and the self-healing JSON decoder.
"""

from __future__ import annotations
import json, time, uuid
from datetime import datetime, timezone
from typing import Any, Optional, Tuple


def now_ts(clock=time.time) -> str:
    # ISO 8601 in UTC, microsecond precision
    return datetime.fromtimestamp(clock(), tz=timezone.utc).isoformat()


def parse_ts(value: Any) -> Optional[float]:
    """Return POSIX seconds for an ISO timestamp, or None if it does not parse."""
    if not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def new_id() -> str:
    return uuid.uuid4().hex


def is_numeric(value: Any) -> bool:
    # bool is an int subclass but never an identity
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def identity_key(identity: Any) -> str:
    """JSON object keys are strings; 7 and 7.0 address the same record."""
    if isinstance(identity, float) and identity.is_integer():
        identity = int(identity)
    return str(identity)


def encode(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def decode_or_default(raw: Optional[str], default: Any, expected_type: Optional[type] = None) -> Tuple[Any, bool]:
    """
    Decode a stored JSON value.

    Returns ``(value, was_corrupt)``. A missing value yields the default and is
    not corrupt; unparsable text, ``null`` and values of the wrong type yield
    the default and are flagged corrupt.
    """
    if raw is None:
        return default, False
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        return default, True
    if value is None:
        return default, True
    if expected_type is not None and not isinstance(value, expected_type):
        return default, True
    return value, False
