"""
CocGuard Duplicate/Manipulation Detector

Compares the current document with the counterparty's submission
history:

1. Fingerprint equal to a prior submission -> identical resubmission
   (info), no further checks
2. Same policy number as a prior submission but a different expiry
   -> silent expiry-date edit (fail)
3. Otherwise -> pass

History is a read-only snapshot; entries are never reordered or changed.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..canon import normalize_identifier
from ..models import (
    ExtractedCertificate,
    FraudCheckResult,
    FraudCheckStatus,
    FraudCheckType,
    SubmissionHistoryEntry,
)

logger = logging.getLogger(__name__)


DUPLICATE_SCORE = 10
DATE_MANIPULATION_SCORE = 95


def _same_policy(left: Optional[str], right: Optional[str]) -> bool:
    a = normalize_identifier(left).upper()
    b = normalize_identifier(right).upper()
    return bool(a) and a == b


def find_fingerprint_match(
    fingerprint: Optional[str],
    history: Sequence[SubmissionHistoryEntry],
) -> Optional[SubmissionHistoryEntry]:
    """Get the first prior submission with the same fingerprint."""
    if not fingerprint:
        return None
    for entry in history:
        if entry.fingerprint == fingerprint:
            return entry
    return None


def find_expiry_change(
    certificate: ExtractedCertificate,
    history: Sequence[SubmissionHistoryEntry],
) -> Optional[SubmissionHistoryEntry]:
    """Get the first prior submission of this policy with a different expiry."""
    current_end = certificate.period_end
    if current_end is None:
        return None
    for entry in history:
        if entry.coverage_end is None:
            continue
        if _same_policy(entry.policy_number, certificate.policy_number) \
                and entry.coverage_end != current_end:
            return entry
    return None


def detect_duplicate_manipulation(
    certificate: ExtractedCertificate,
    history: Sequence[SubmissionHistoryEntry],
    fingerprint: Optional[str] = None,
    filename: Optional[str] = None,
) -> list[FraudCheckResult]:
    """
    Check the document against prior submissions.

    Args:
        certificate: Current extracted certificate
        history: Prior submissions for the same relationship
        fingerprint: Content hash of the current document
        filename: Current filename, for log context

    Returns:
        A single-element list with the duplicate or manipulation result
    """
    duplicate = find_fingerprint_match(fingerprint, history)
    if duplicate is not None:
        logger.info("Identical resubmission of %s detected", filename or "document")
        uploaded = duplicate.upload_date.isoformat() if duplicate.upload_date else "unknown date"
        return [
            FraudCheckResult.create(
                FraudCheckType.DUPLICATE_DETECTION,
                FraudCheckStatus.INFO,
                DUPLICATE_SCORE,
                "Identical document was previously submitted",
                evidence=f"Previous submission: {duplicate.filename or 'unnamed'} ({uploaded})",
            )
        ]

    changed = find_expiry_change(certificate, history)
    if changed is not None:
        logger.info(
            "Policy %s resubmitted with a different expiry", certificate.policy_number
        )
        return [
            FraudCheckResult.create(
                FraudCheckType.DATE_MANIPULATION,
                FraudCheckStatus.FAIL,
                DATE_MANIPULATION_SCORE,
                "Same policy number was previously submitted with a different expiry date",
                evidence=(
                    f"Previous expiry: {changed.coverage_end.isoformat()}. "
                    f"Current expiry: {certificate.period_end.isoformat()}"
                ),
            )
        ]

    return [
        FraudCheckResult.create(
            FraudCheckType.DATE_MANIPULATION,
            FraudCheckStatus.PASS,
            0,
            "No duplicate or manipulated resubmission found",
        )
    ]
