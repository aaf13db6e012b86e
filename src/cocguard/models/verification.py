"""
CocGuard Verification Models

Results produced by the coverage-compliance rule set and by the
decision combiner.

Key components:
- VerificationCheck: One compliance check entry
- CoverageDeficiency: One unmet requirement
- VerificationResult: Compliance outcome for one certificate
- FinalVerdict: Combined compliance + fraud outcome
- IdentifierLookup: Business identifier validity and registry status
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .enums import (
    CheckStatus,
    DeficiencySeverity,
    DeficiencyType,
    VerificationStatus,
)
from .fraud import FraudAnalysisResult


# =============================================================================
# Checks and Deficiencies
# =============================================================================

@dataclass(frozen=True)
class VerificationCheck:
    """
    One compliance check entry.

    Attributes:
        check_type: Check identifier (e.g., "coverage_public_liability")
        description: What was checked
        status: pass / fail / warning
        details: Outcome explanation
    """
    check_type: str
    description: str
    status: CheckStatus
    details: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "check_type": self.check_type,
            "description": self.description,
            "status": self.status.value,
            "details": self.details,
        }


@dataclass(frozen=True)
class CoverageDeficiency:
    """
    One unmet requirement.

    Attributes:
        type: Deficiency category
        severity: critical / major / minor
        description: Human-readable explanation
        required_value: What the contract requires
        actual_value: What the certificate shows
    """
    type: DeficiencyType
    severity: DeficiencySeverity
    description: str
    required_value: Optional[str] = None
    actual_value: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "description": self.description,
            "required_value": self.required_value,
            "actual_value": self.actual_value,
        }


# =============================================================================
# Verification Result
# =============================================================================

@dataclass
class VerificationResult:
    """
    Compliance outcome for one certificate.

    Attributes:
        status: pass / fail / review
        checks: Check entries in evaluation order
        deficiencies: Unmet requirements in evaluation order
        confidence_score: Extraction confidence carried through (0.0-1.0)
    """
    status: VerificationStatus
    checks: list[VerificationCheck] = field(default_factory=list)
    deficiencies: list[CoverageDeficiency] = field(default_factory=list)
    confidence_score: float = 1.0

    @property
    def has_critical_deficiency(self) -> bool:
        """Check if any deficiency is critical."""
        return any(d.severity == DeficiencySeverity.CRITICAL for d in self.deficiencies)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "status": self.status.value,
            "checks": [c.to_dict() for c in self.checks],
            "deficiencies": [d.to_dict() for d in self.deficiencies],
            "confidence_score": self.confidence_score,
        }


# =============================================================================
# Final Verdict
# =============================================================================

@dataclass
class FinalVerdict:
    """
    Combined outcome handed to the Decision Sink.

    Holds copies of the compliance checks and deficiencies, extended
    with whatever the fraud analysis contributed.

    Attributes:
        status: Final pass / fail / review
        checks: Merged check entries
        deficiencies: Merged deficiencies
        confidence_score: Extraction confidence
        fraud_analysis: The fraud assessment the verdict was derived from
    """
    status: VerificationStatus
    checks: list[VerificationCheck] = field(default_factory=list)
    deficiencies: list[CoverageDeficiency] = field(default_factory=list)
    confidence_score: float = 1.0
    fraud_analysis: Optional[FraudAnalysisResult] = None

    def audit_summary(self) -> dict[str, Any]:
        """
        Compact summary for audit log entries.

        Contains the status, confidence, check/deficiency counts and
        the fraud score, level and block flag.
        """
        summary: dict[str, Any] = {
            "status": self.status.value,
            "confidence_score": self.confidence_score,
            "checks_count": len(self.checks),
            "deficiencies_count": len(self.deficiencies),
            "critical_deficiencies": sum(
                1 for d in self.deficiencies
                if d.severity == DeficiencySeverity.CRITICAL
            ),
        }
        if self.fraud_analysis is not None:
            summary["fraud_risk_score"] = self.fraud_analysis.overall_risk_score
            summary["fraud_risk_level"] = self.fraud_analysis.risk_level.value
            summary["fraud_blocked"] = self.fraud_analysis.is_blocked
        return summary

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "status": self.status.value,
            "checks": [c.to_dict() for c in self.checks],
            "deficiencies": [d.to_dict() for d in self.deficiencies],
            "confidence_score": self.confidence_score,
            "fraud_analysis": (
                self.fraud_analysis.to_dict() if self.fraud_analysis else None
            ),
        }


# =============================================================================
# Identifier Lookup
# =============================================================================

@dataclass
class IdentifierLookup:
    """
    Business identifier validity and registry status.

    Attributes:
        abn: Normalized identifier
        valid: Whether the checksum passed
        error: Checksum error message, if invalid
        entity_name: Registered entity name, when found
        status: Registry status (e.g., "Active"), when found
    """
    abn: str
    valid: bool
    error: Optional[str] = None
    entity_name: Optional[str] = None
    status: Optional[str] = None

    @property
    def found(self) -> bool:
        """Check if the registry knew the identifier."""
        return self.entity_name is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "abn": self.abn,
            "valid": self.valid,
            "error": self.error,
            "entity_name": self.entity_name,
            "status": self.status,
        }
