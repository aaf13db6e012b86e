"""
CocGuard Decision Combiner

Merges the compliance result and the fraud analysis into the single
FinalVerdict handed to the Decision Sink.

Rules:
- Blocked fraud forces fail, adds a critical fraud_detected deficiency
  and copies every failed fraud check into the merged checks
- Otherwise a high fraud risk downgrades a pass to review and adds a
  fraud_risk_warning entry
- Inputs are never mutated; the verdict holds copies
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Protocol, Sequence, Union

from ..exceptions import CertificateRequiredError
from ..models import (
    CheckStatus,
    CoverageDeficiency,
    DeficiencySeverity,
    DeficiencyType,
    DocumentMetadata,
    ExtractedCertificate,
    FinalVerdict,
    FraudAnalysisResult,
    FraudCheckStatus,
    InsuranceRequirement,
    RiskLevel,
    SubmissionHistoryEntry,
    VerificationCheck,
    VerificationResult,
    VerificationStatus,
)
from ..rules import RuleTables
from .coverage_verifier import evaluate_compliance
from .fraud_aggregator import evaluate_fraud
from .simulation import should_skip_fraud_detection, skipped_fraud_analysis

logger = logging.getLogger(__name__)


class DecisionSink(Protocol):
    """Receives final verdicts for persistence, status changes and notices."""

    def submit(self, verdict: FinalVerdict) -> None:
        ...


def combine(compliance: VerificationResult, fraud: FraudAnalysisResult) -> FinalVerdict:
    """
    Merge compliance and fraud outcomes.

    Args:
        compliance: Coverage verification result
        fraud: Fraud analysis result

    Returns:
        FinalVerdict holding copies of the merged checks and deficiencies
    """
    status = compliance.status
    checks = list(compliance.checks)
    deficiencies = list(compliance.deficiencies)

    if fraud.is_blocked:
        status = VerificationStatus.FAIL
        deficiencies.append(
            CoverageDeficiency(
                type=DeficiencyType.FRAUD_DETECTED,
                severity=DeficiencySeverity.CRITICAL,
                description=f"Document failed fraud analysis. {fraud.recommendation}",
                required_value="Authentic document",
                actual_value=(
                    f"Risk level: {fraud.risk_level.value} "
                    f"(score: {fraud.overall_risk_score})"
                ),
            )
        )
        for check in fraud.checks:
            if check.status != FraudCheckStatus.FAIL:
                continue
            checks.append(
                VerificationCheck(
                    check_type=f"fraud_{check.check_type.value}",
                    description=check.check_name,
                    status=CheckStatus.FAIL,
                    details=(
                        f"{check.details} ({check.evidence})" if check.evidence
                        else check.details
                    ),
                )
            )
        logger.info("Verdict forced to fail by fraud analysis (score %d)", fraud.overall_risk_score)

    elif fraud.risk_level == RiskLevel.HIGH and status == VerificationStatus.PASS:
        status = VerificationStatus.REVIEW
        checks.append(
            VerificationCheck(
                check_type="fraud_risk_warning",
                description="Fraud risk assessment",
                status=CheckStatus.WARNING,
                details=(
                    f"Elevated fraud risk (score: {fraud.overall_risk_score}) "
                    f"- manual review recommended"
                ),
            )
        )

    return FinalVerdict(
        status=status,
        checks=checks,
        deficiencies=deficiencies,
        confidence_score=compliance.confidence_score,
        fraud_analysis=fraud,
    )


def verify_certificate(
    certificate: ExtractedCertificate,
    requirements: Optional[Sequence[InsuranceRequirement]] = None,
    metadata: Optional[DocumentMetadata] = None,
    filename: Optional[str] = None,
    history: Optional[Sequence[SubmissionHistoryEntry]] = None,
    fingerprint: Optional[str] = None,
    project_end_date: Optional[date] = None,
    project_jurisdiction: Optional[str] = None,
    counterparty_id: Optional[str] = None,
    now: Optional[Union[date, datetime]] = None,
    skip_fraud: Optional[bool] = None,
    tables: Optional[RuleTables] = None,
    sink: Optional[DecisionSink] = None,
) -> FinalVerdict:
    """
    Run fraud analysis and compliance verification, then combine them.

    Fraud analysis is replaced by a neutral result when skip_fraud is
    True, or when it is None and the filename carries the skip marker.
    Without requirements only the certificate-level compliance checks run.
    The verdict is handed to the sink, when one is given, and returned.

    Raises:
        CertificateRequiredError: If no certificate was supplied
    """
    if certificate is None:
        raise CertificateRequiredError(message="Verification requires an extracted certificate")

    if should_skip_fraud_detection(filename, skip_fraud):
        logger.info("Fraud detection skipped for %s", filename or "<unnamed>")
        fraud = skipped_fraud_analysis()
    else:
        fraud = evaluate_fraud(
            certificate,
            metadata=metadata,
            filename=filename,
            history=history,
            fingerprint=fingerprint,
            tables=tables,
        )

    compliance = evaluate_compliance(
        certificate,
        requirements,
        project_end_date=project_end_date,
        project_jurisdiction=project_jurisdiction,
        counterparty_id=counterparty_id,
        now=now,
        tables=tables,
    )

    verdict = combine(compliance, fraud)
    logger.info("Certificate verdict: %s", verdict.audit_summary())

    if sink is not None:
        sink.submit(verdict)
    return verdict
