"""
CocGuard Fraud Risk Aggregator

Runs every fraud rule against one document and grades the outcome.

Scoring:
1. overall score = highest single check score, plus a bonus of
   warning_bonus per warning beyond free_warnings, capped at 100
2. risk level from the rule pack's floors (critical/high/medium/low)
3. blocked when the level is critical OR block_fail_count checks failed
4. BLOCK / REVIEW / ACCEPT recommendation carrying the score
5. evidence summary of every non-pass check, in check order

Rule inputs are capability flags: metadata checks run only when
metadata is supplied, the duplicate check only when history is.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..exceptions import CertificateRequiredError
from ..models import (
    DocumentMetadata,
    ExtractedCertificate,
    FraudAnalysisResult,
    FraudCheckResult,
    FraudCheckStatus,
    RiskLevel,
    SubmissionHistoryEntry,
)
from ..rules import RuleTables, Thresholds, resolve_tables
from .data_logic import validate_data_logic
from .duplicate_detector import detect_duplicate_manipulation
from .metadata_analyzer import analyze_metadata
from .template_matcher import match_insurer_template

logger = logging.getLogger(__name__)


MAX_RISK_SCORE = 100


# =============================================================================
# Scoring
# =============================================================================

def calculate_risk_score(
    checks: Sequence[FraudCheckResult],
    thresholds: Optional[Thresholds] = None,
) -> int:
    """Highest check score plus the cumulative-warning bonus, capped."""
    thresholds = thresholds or resolve_tables(None).thresholds
    if not checks:
        return 0

    score = max(check.risk_score for check in checks)
    warnings = sum(1 for c in checks if c.status == FraudCheckStatus.WARNING)
    if warnings > thresholds.free_warnings:
        score += thresholds.warning_bonus * (warnings - thresholds.free_warnings)
    return min(MAX_RISK_SCORE, score)


def determine_risk_level(score: int, thresholds: Optional[Thresholds] = None) -> RiskLevel:
    """Grade a risk score."""
    thresholds = thresholds or resolve_tables(None).thresholds
    if score >= thresholds.critical_risk:
        return RiskLevel.CRITICAL
    if score >= thresholds.high_risk:
        return RiskLevel.HIGH
    if score >= thresholds.medium_risk:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def build_recommendation(score: int, risk_level: RiskLevel, is_blocked: bool) -> str:
    """Recommendation text for a graded result."""
    if is_blocked:
        return (
            f"BLOCK: Strong indicators of document fraud or tampering "
            f"(risk score {score}/100). Reject and obtain the certificate "
            f"directly from the insurer or broker."
        )
    if risk_level == RiskLevel.HIGH:
        return (
            f"REVIEW: Elevated fraud risk (risk score {score}/100). "
            f"Confirm the certificate with the insurer before accepting."
        )
    return f"ACCEPT: No significant fraud indicators (risk score {score}/100)."


def build_evidence_summary(checks: Sequence[FraudCheckResult]) -> list[str]:
    """Details and evidence of every non-pass check, in order."""
    summary: list[str] = []
    for check in checks:
        if check.status == FraudCheckStatus.PASS:
            continue
        line = f"{check.check_name}: {check.details}"
        if check.evidence:
            line = f"{line} ({check.evidence})"
        summary.append(line)
    return summary


def aggregate_fraud_checks(
    checks: Sequence[FraudCheckResult],
    tables: Optional[RuleTables] = None,
) -> FraudAnalysisResult:
    """
    Grade a set of fraud check results.

    Args:
        checks: Rule outcomes in evaluation order
        tables: Rule pack (defaults to the bundled pack)

    Returns:
        FraudAnalysisResult holding a copy of the checks
    """
    thresholds = resolve_tables(tables).thresholds

    score = calculate_risk_score(checks, thresholds)
    level = determine_risk_level(score, thresholds)
    fail_count = sum(1 for c in checks if c.status == FraudCheckStatus.FAIL)
    blocked = level == RiskLevel.CRITICAL or fail_count >= thresholds.block_fail_count

    return FraudAnalysisResult(
        overall_risk_score=score,
        risk_level=level,
        is_blocked=blocked,
        recommendation=build_recommendation(score, level, blocked),
        checks=list(checks),
        evidence_summary=build_evidence_summary(checks),
    )


# =============================================================================
# Fraud Analyzer
# =============================================================================

@dataclass
class FraudAnalyzer:
    """
    Runs the fraud rule set for a document.

    Usage:
        analyzer = FraudAnalyzer()
        result = analyzer.analyze(certificate, metadata=metadata, history=history)

        if result.is_blocked:
            print(result.recommendation)
    """

    tables: Optional[RuleTables] = None

    def collect_checks(
        self,
        certificate: ExtractedCertificate,
        metadata: Optional[DocumentMetadata] = None,
        filename: Optional[str] = None,
        history: Optional[Sequence[SubmissionHistoryEntry]] = None,
        fingerprint: Optional[str] = None,
    ) -> list[FraudCheckResult]:
        """Run every applicable rule and return the raw results."""
        tables = resolve_tables(self.tables)
        checks: list[FraudCheckResult] = []

        if metadata is not None:
            checks.extend(analyze_metadata(metadata, tables))

        checks.extend(match_insurer_template(certificate, tables))
        checks.extend(validate_data_logic(certificate, tables))

        if history is not None:
            checks.extend(
                detect_duplicate_manipulation(certificate, history, fingerprint, filename)
            )

        return checks

    def analyze(
        self,
        certificate: ExtractedCertificate,
        metadata: Optional[DocumentMetadata] = None,
        filename: Optional[str] = None,
        history: Optional[Sequence[SubmissionHistoryEntry]] = None,
        fingerprint: Optional[str] = None,
    ) -> FraudAnalysisResult:
        """
        Score a document for signs of forgery, tampering or resubmission.

        Raises:
            CertificateRequiredError: If no certificate was supplied
        """
        if certificate is None:
            raise CertificateRequiredError(message="Fraud analysis requires an extracted certificate")

        checks = self.collect_checks(certificate, metadata, filename, history, fingerprint)
        result = aggregate_fraud_checks(checks, self.tables)

        if result.is_blocked:
            logger.info(
                "Document %s blocked: risk %s (%d)",
                filename or certificate.document_id or "<unnamed>",
                result.risk_level.value,
                result.overall_risk_score,
            )
        else:
            logger.debug(
                "Document %s scored %d (%s)",
                filename or certificate.document_id or "<unnamed>",
                result.overall_risk_score,
                result.risk_level.value,
            )
        return result


# =============================================================================
# Convenience Functions
# =============================================================================

def evaluate_fraud(
    certificate: ExtractedCertificate,
    metadata: Optional[DocumentMetadata] = None,
    filename: Optional[str] = None,
    history: Optional[Sequence[SubmissionHistoryEntry]] = None,
    fingerprint: Optional[str] = None,
    tables: Optional[RuleTables] = None,
) -> FraudAnalysisResult:
    """
    Score a document for fraud.

    Convenience function that creates a temporary analyzer.
    """
    return FraudAnalyzer(tables=tables).analyze(
        certificate,
        metadata=metadata,
        filename=filename,
        history=history,
        fingerprint=fingerprint,
    )
