"""
CocGuard Exception Hierarchy

Evaluation itself never raises across the engine boundary: rule findings
are reported as check results and deficiencies. Exceptions are reserved
for broken preconditions and for rule-pack configuration problems.

Exception codes follow the pattern: CG_<CATEGORY>_<SPECIFIC>
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class CocGuardError(Exception):
    """
    Base exception for all CocGuard errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (CG_*)
        details: Additional context, e.g. pydantic validation errors
        source: Rule pack path or document the error relates to
    """
    message: str
    code: str = "CG_INTERNAL_ERROR"
    details: dict[str, Any] = field(default_factory=dict)
    source: Optional[str] = None

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def __str__(self) -> str:
        text = f"[{self.code}] {self.message}"
        return f"{text} ({self.source})" if self.source else text

    def to_dict(self) -> dict[str, Any]:
        """Serialize for audit logs."""
        return {
            "code": self.code,
            "message": self.message,
            "source": self.source,
            "details": dict(self.details),
        }


# =============================================================================
# Rule Pack Errors
# =============================================================================

@dataclass
class RulePackLoadError(CocGuardError):
    """A rule pack file could not be read or parsed."""
    code: str = "CG_RULE_PACK_LOAD_ERROR"


@dataclass
class RulePackValidationError(CocGuardError):
    """A rule pack did not match the schema."""
    code: str = "CG_RULE_PACK_VALIDATION_ERROR"


@dataclass
class RulePackVersionMismatch(CocGuardError):
    """A rule pack declares an unsupported schema version."""
    code: str = "CG_RULE_PACK_VERSION_MISMATCH"


# =============================================================================
# Evaluation Preconditions
# =============================================================================

@dataclass
class CertificateRequiredError(CocGuardError):
    """No extracted certificate was supplied to the engine."""
    code: str = "CG_CERTIFICATE_REQUIRED"
