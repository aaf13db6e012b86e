"""
Canonical JSON, Hashes and Identifier Normalization

Two evaluations of the same inputs must serialize to the same bytes, so
results and rule tables can be hashed and compared:
- keys sorted, no insignificant whitespace
- Decimal amounts kept as strings (no float rounding)
- dates and datetimes in ISO 8601, datetimes converted to UTC

Document fingerprints are hashes of the raw upload, not of any
extracted data, so a resubmission is only "identical" byte for byte.
"""
from __future__ import annotations

import hashlib
import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


def _encode(value: Any) -> Any:
    """json.dumps fallback for the types CocGuard results contain."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    raise TypeError(f"Cannot serialize {type(value).__name__} canonically")


def canonical_json(obj: Any) -> str:
    """
    Serialize to canonical JSON.

    Example:
        >>> canonical_json({"limit": Decimal("10000000"), "basis": "aggregate"})
        '{"basis":"aggregate","limit":"10000000"}'
    """
    return json.dumps(
        obj,
        default=_encode,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def content_hash(obj: Any) -> str:
    """SHA-256 hex digest of the canonical JSON form of obj."""
    return hashlib.sha256(canonical_json(obj).encode("utf-8")).hexdigest()


def compute_rule_pack_hash(tables: Any) -> str:
    """
    Hash a loaded rule pack.

    Stored alongside a verdict, it identifies the exact tables that
    produced it.
    """
    return content_hash(tables)


def document_fingerprint(content: bytes) -> str:
    """
    Fingerprint an uploaded document.

    Args:
        content: Raw file bytes

    Returns:
        SHA-256 hex digest (64 characters)
    """
    return hashlib.sha256(content).hexdigest()


def normalize_identifier(value: Optional[str]) -> str:
    """
    Strip all whitespace from a business identifier or policy number.

    Example:
        >>> normalize_identifier("51 824 753 556")
        '51824753556'
    """
    if not value:
        return ""
    return "".join(value.split())
