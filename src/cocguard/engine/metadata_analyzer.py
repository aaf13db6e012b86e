"""
CocGuard Metadata Analyzer

Inspects file-level provenance signals for signs of tampering.

Two independent sub-checks, one result each:
- metadata_modification: gap between creation and modification timestamps
- metadata_software: producer/creator classified against the rule pack's
  trusted and suspicious software lists

A genuine certificate is generated by an insurer's document system and
never touched again. A raster editor in the producer chain, or a
long gap before the last modification, both point at hand editing.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Optional

from ..models import (
    DocumentMetadata,
    FraudCheckResult,
    FraudCheckStatus,
    FraudCheckType,
    SoftwareClass,
)
from ..rules import RuleTables, resolve_tables

logger = logging.getLogger(__name__)


# Modification scoring: base + one point per (started) day, capped
MODIFICATION_BASE_SCORE = 5
MODIFICATION_MAX_SCORE = 60

SUSPICIOUS_SOFTWARE_SCORE = 70
UNRECOGNIZED_SOFTWARE_SCORE = 30

_SECONDS_PER_DAY = 86400


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def modification_score(gap_days: float) -> int:
    """
    Score a creation-to-modification gap.

    Monotonic in the gap: a same-day edit scores 6, a 14-day gap 19,
    and anything from 55 days on saturates at 60.
    """
    if gap_days <= 0:
        return 0
    return min(MODIFICATION_MAX_SCORE, MODIFICATION_BASE_SCORE + math.ceil(gap_days))


# =============================================================================
# Sub-checks
# =============================================================================

def check_modification(metadata: DocumentMetadata) -> FraudCheckResult:
    """
    Compare creation and modification timestamps.

    A modification earlier than creation is scored on the absolute gap.
    """
    created = metadata.creation_date
    modified = metadata.modification_date

    if created is None or modified is None:
        logger.warning("Modification check skipped: document timestamps incomplete")
        return FraudCheckResult.create(
            FraudCheckType.METADATA_MODIFICATION,
            FraudCheckStatus.INFO,
            0,
            "Creation or modification timestamp not available",
        )

    created = _as_utc(created)
    modified = _as_utc(modified)

    if created == modified:
        return FraudCheckResult.create(
            FraudCheckType.METADATA_MODIFICATION,
            FraudCheckStatus.PASS,
            0,
            "Document has not been modified since creation",
        )

    gap_seconds = (modified - created).total_seconds()
    gap_days = abs(gap_seconds) / _SECONDS_PER_DAY
    score = modification_score(gap_days)

    if gap_seconds > 0:
        details = f"Document modified {gap_days:.1f} days after creation"
    else:
        details = f"Modification timestamp precedes creation by {gap_days:.1f} days"

    logger.debug("Modification gap %.2f days scored %d", gap_days, score)
    return FraudCheckResult.create(
        FraudCheckType.METADATA_MODIFICATION,
        FraudCheckStatus.WARNING,
        score,
        details,
        evidence=f"Created: {created.isoformat()}, Modified: {modified.isoformat()}",
    )


def check_software(
    metadata: DocumentMetadata,
    tables: Optional[RuleTables] = None,
) -> FraudCheckResult:
    """
    Classify the producer and creator of the document.

    Any suspicious tool fails the check, otherwise any trusted tool
    passes it, otherwise the tooling is unrecognized.
    """
    tables = resolve_tables(tables)
    names = metadata.software_names
    classes = {name: tables.classify_software(name) for name in names}

    suspicious = [n for n, c in classes.items() if c == SoftwareClass.SUSPICIOUS]
    if suspicious:
        logger.info("Suspicious authoring software detected: %s", ", ".join(suspicious))
        return FraudCheckResult.create(
            FraudCheckType.METADATA_SOFTWARE,
            FraudCheckStatus.FAIL,
            SUSPICIOUS_SOFTWARE_SCORE,
            "Document was produced or edited with image editing software",
            evidence=f"Software: {', '.join(suspicious)}",
        )

    trusted = [n for n, c in classes.items() if c == SoftwareClass.TRUSTED]
    if trusted:
        return FraudCheckResult.create(
            FraudCheckType.METADATA_SOFTWARE,
            FraudCheckStatus.PASS,
            0,
            f"Document generated by recognized software ({', '.join(trusted)})",
        )

    software = ", ".join(names) if names else "none recorded"
    logger.warning("Unrecognized authoring software: %s", software)
    return FraudCheckResult.create(
        FraudCheckType.METADATA_SOFTWARE,
        FraudCheckStatus.WARNING,
        UNRECOGNIZED_SOFTWARE_SCORE,
        "Document authoring software is not recognized",
        evidence=f"Software: {software}",
    )


# =============================================================================
# Convenience Functions
# =============================================================================

def analyze_metadata(
    metadata: Optional[DocumentMetadata],
    tables: Optional[RuleTables] = None,
) -> list[FraudCheckResult]:
    """
    Run both metadata sub-checks.

    Returns an empty list when no metadata was supplied.
    """
    if metadata is None:
        return []
    return [
        check_modification(metadata),
        check_software(metadata, tables),
    ]
