"""
CocGuard Fraud Models

Results produced by the fraud/authenticity rule set.

Key components:
- FraudCheckResult: Outcome of one fraud rule
- FraudAnalysisResult: Aggregated, graded risk assessment
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .enums import FraudCheckStatus, FraudCheckType, RiskLevel


# Human-readable rule names, keyed by rule
CHECK_NAMES: dict[FraudCheckType, str] = {
    FraudCheckType.METADATA_MODIFICATION: "Document Modification Analysis",
    FraudCheckType.METADATA_SOFTWARE: "Authoring Software Analysis",
    FraudCheckType.TEMPLATE_MATCH: "Insurer Template Match",
    FraudCheckType.POLICY_NUMBER_FORMAT: "Policy Number Format",
    FraudCheckType.TEMPLATE_ELEMENTS: "Certificate Elements",
    FraudCheckType.ABN_CHECKSUM: "ABN Checksum Validation",
    FraudCheckType.DATE_LOGIC: "Policy Date Logic",
    FraudCheckType.LIMIT_VALIDATION: "Coverage Limit Validation",
    FraudCheckType.DUPLICATE_DETECTION: "Duplicate Submission Detection",
    FraudCheckType.DATE_MANIPULATION: "Date Manipulation Detection",
}


# =============================================================================
# Fraud Check Result
# =============================================================================

@dataclass(frozen=True)
class FraudCheckResult:
    """
    Outcome of a single fraud rule.

    Attributes:
        check_type: Which rule produced this result
        check_name: Human-readable rule name
        status: pass / warning / fail / info
        risk_score: Integer risk contribution (0-100)
        details: Human-readable explanation
        evidence: Supporting values, when there are any
    """
    check_type: FraudCheckType
    check_name: str
    status: FraudCheckStatus
    risk_score: int
    details: str
    evidence: Optional[str] = None

    def __post_init__(self) -> None:
        if not 0 <= self.risk_score <= 100:
            raise ValueError(f"risk_score must be within 0-100, got {self.risk_score}")

    @classmethod
    def create(
        cls,
        check_type: FraudCheckType,
        status: FraudCheckStatus,
        risk_score: int,
        details: str,
        evidence: Optional[str] = None,
    ) -> FraudCheckResult:
        """Factory method that fills in the rule's display name."""
        return cls(
            check_type=check_type,
            check_name=CHECK_NAMES[check_type],
            status=status,
            risk_score=risk_score,
            details=details,
            evidence=evidence,
        )

    @property
    def passed(self) -> bool:
        """Check if the rule passed."""
        return self.status == FraudCheckStatus.PASS

    @property
    def failed(self) -> bool:
        """Check if the rule failed."""
        return self.status == FraudCheckStatus.FAIL

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        result: dict[str, Any] = {
            "check_type": self.check_type.value,
            "check_name": self.check_name,
            "status": self.status.value,
            "risk_score": self.risk_score,
            "details": self.details,
        }
        if self.evidence:
            result["evidence"] = self.evidence
        return result


# =============================================================================
# Fraud Analysis Result
# =============================================================================

@dataclass
class FraudAnalysisResult:
    """
    Aggregated fraud assessment for one document.

    Attributes:
        overall_risk_score: Composite score (0-100)
        risk_level: Grade derived from the score
        is_blocked: Whether the document must be rejected outright
        recommendation: BLOCK / REVIEW / ACCEPT guidance text
        checks: Every rule outcome, in evaluation order
        evidence_summary: Details of every non-pass check, in order
    """
    overall_risk_score: int
    risk_level: RiskLevel
    is_blocked: bool
    recommendation: str
    checks: list[FraudCheckResult] = field(default_factory=list)
    evidence_summary: list[str] = field(default_factory=list)

    @property
    def failed_checks(self) -> list[FraudCheckResult]:
        """Checks with a fail status."""
        return [c for c in self.checks if c.status == FraudCheckStatus.FAIL]

    @property
    def warning_checks(self) -> list[FraudCheckResult]:
        """Checks with a warning status."""
        return [c for c in self.checks if c.status == FraudCheckStatus.WARNING]

    def get_check(self, check_type: FraudCheckType) -> Optional[FraudCheckResult]:
        """Get the first result for a rule, if it ran."""
        for check in self.checks:
            if check.check_type == check_type:
                return check
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "overall_risk_score": self.overall_risk_score,
            "risk_level": self.risk_level.value,
            "is_blocked": self.is_blocked,
            "recommendation": self.recommendation,
            "checks": [c.to_dict() for c in self.checks],
            "evidence_summary": list(self.evidence_summary),
        }
