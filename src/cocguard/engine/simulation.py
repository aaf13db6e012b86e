"""
CocGuard Fraud Simulation

Test and demo helpers for environments without real document metadata.

- simulate_fraud_analysis: derives tamper signals from filename hints
  and still runs the real ABN and date checks on the extracted data
- should_skip_fraud_detection / skipped_fraud_analysis: lets test
  uploads bypass fraud analysis entirely

Filename hints:
    modified, edited  -> metadata_modification fail (85)
    forged            -> template_match fail (75)
    duplicate         -> date_manipulation fail (95)
    fake_abn          -> abn_checksum fail (80)

Filenames marked authentic, genuine or valid carry no simulated signals.
"""
from __future__ import annotations

import logging
import re
from typing import Optional

from ..models import (
    ExtractedCertificate,
    FraudAnalysisResult,
    FraudCheckResult,
    FraudCheckStatus,
    FraudCheckType,
    RiskLevel,
)
from ..rules import RuleTables
from .data_logic import check_abn, check_dates
from .fraud_aggregator import aggregate_fraud_checks

logger = logging.getLogger(__name__)


SKIP_FRAUD_MARKER = "_TEST_SKIP_FRAUD_"

SIMULATED_MODIFICATION_SCORE = 85
SIMULATED_FORGERY_SCORE = 75
SIMULATED_DUPLICATE_SCORE = 95
SIMULATED_FAKE_ABN_SCORE = 80

_CLEAN_MARKER = re.compile(r"(?<![a-z])(authentic|genuine|valid)")


# =============================================================================
# Skip Toggle
# =============================================================================

def should_skip_fraud_detection(filename: Optional[str], skip: Optional[bool] = None) -> bool:
    """
    Decide whether fraud analysis should be bypassed.

    An explicit flag wins; otherwise the filename's skip marker decides.
    Fraud analysis runs by default, and for _TEST_FRAUD_ uploads.
    """
    if skip is not None:
        return skip
    return SKIP_FRAUD_MARKER in (filename or "")


def skipped_fraud_analysis() -> FraudAnalysisResult:
    """Neutral low-risk result used when fraud analysis is bypassed."""
    return FraudAnalysisResult(
        overall_risk_score=0,
        risk_level=RiskLevel.LOW,
        is_blocked=False,
        recommendation="ACCEPT: Fraud detection skipped (risk score 0/100).",
        checks=[],
        evidence_summary=[],
    )


# =============================================================================
# Simulated Analysis
# =============================================================================

def is_clean_filename(filename: Optional[str]) -> bool:
    """Check if the filename is marked as a known-good document."""
    return bool(_CLEAN_MARKER.search((filename or "").lower()))


def simulated_checks(filename: Optional[str]) -> list[FraudCheckResult]:
    """Tamper signals implied by the filename."""
    if is_clean_filename(filename):
        return []

    name = (filename or "").lower()
    evidence = f"Filename: {filename}"
    checks: list[FraudCheckResult] = []

    if "modified" in name or "edited" in name:
        checks.append(FraudCheckResult.create(
            FraudCheckType.METADATA_MODIFICATION,
            FraudCheckStatus.FAIL,
            SIMULATED_MODIFICATION_SCORE,
            "Document was modified after it was issued",
            evidence=evidence,
        ))
    if "forged" in name:
        checks.append(FraudCheckResult.create(
            FraudCheckType.TEMPLATE_MATCH,
            FraudCheckStatus.FAIL,
            SIMULATED_FORGERY_SCORE,
            "Document layout does not match the insurer's template",
            evidence=evidence,
        ))
    if "duplicate" in name:
        checks.append(FraudCheckResult.create(
            FraudCheckType.DATE_MANIPULATION,
            FraudCheckStatus.FAIL,
            SIMULATED_DUPLICATE_SCORE,
            "Same policy was previously submitted with a different expiry date",
            evidence=evidence,
        ))
    if "fake_abn" in name:
        checks.append(FraudCheckResult.create(
            FraudCheckType.ABN_CHECKSUM,
            FraudCheckStatus.FAIL,
            SIMULATED_FAKE_ABN_SCORE,
            "ABN checksum validation failed - invalid ABN",
            evidence=evidence,
        ))
    return checks


def simulate_fraud_analysis(
    certificate: ExtractedCertificate,
    filename: Optional[str],
    tables: Optional[RuleTables] = None,
) -> FraudAnalysisResult:
    """
    Fraud analysis driven by filename hints.

    The real ABN check runs unless a simulated ABN failure already
    covers it; the real date check always runs.
    """
    checks = simulated_checks(filename)
    if not any(c.check_type == FraudCheckType.ABN_CHECKSUM for c in checks):
        checks.append(check_abn(certificate))
    checks.append(check_dates(certificate, tables))

    logger.debug("Simulated fraud analysis for %s: %d checks", filename, len(checks))
    return aggregate_fraud_checks(checks, tables)
