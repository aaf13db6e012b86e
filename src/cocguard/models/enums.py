"""
CocGuard Enumerations

All enumeration types used throughout the CocGuard engine.
Organized by domain area for clarity.

All enums inherit from (str, Enum) for JSON serialization compatibility.
Every status the engine emits is drawn from one of these closed sets.
"""
from __future__ import annotations

from enum import Enum
from typing import Union


# =============================================================================
# Coverage
# =============================================================================

class CoverageType(str, Enum):
    """Coverage classes that appear on an Australian Certificate of Currency."""
    PUBLIC_LIABILITY = "public_liability"
    PRODUCTS_LIABILITY = "products_liability"
    WORKERS_COMP = "workers_comp"
    PROFESSIONAL_INDEMNITY = "professional_indemnity"
    MOTOR_VEHICLE = "motor_vehicle"
    CONTRACT_WORKS = "contract_works"


def coverage_type_key(coverage_type: Union[str, CoverageType]) -> str:
    """
    Plain identifier for a coverage type.

    CoverageType members and raw strings compare equal through this key;
    str() of a member would give "CoverageType.PUBLIC_LIABILITY".

    Example:
        >>> coverage_type_key(CoverageType.WORKERS_COMP)
        'workers_comp'
        >>> coverage_type_key("cyber_liability")
        'cyber_liability'
    """
    if isinstance(coverage_type, CoverageType):
        return coverage_type.value
    return str(coverage_type)


class LimitBasis(str, Enum):
    """How a coverage limit is measured."""
    PER_OCCURRENCE = "per_occurrence"
    AGGREGATE = "aggregate"
    PER_CLAIM = "per_claim"
    STATUTORY = "statutory"
    PER_PROJECT = "per_project"


class PrincipalNaming(str, Enum):
    """
    How the principal contractor is identified on the policy.

    PRINCIPAL_NAMED gives full principal protection.
    INTERESTED_PARTY gives notice rights only and never satisfies a
    PRINCIPAL_NAMED requirement.
    """
    PRINCIPAL_NAMED = "principal_named"
    INTERESTED_PARTY = "interested_party"


# =============================================================================
# Fraud Analysis
# =============================================================================

class FraudCheckType(str, Enum):
    """Identifiers for individual fraud/authenticity rules."""
    METADATA_MODIFICATION = "metadata_modification"
    METADATA_SOFTWARE = "metadata_software"
    TEMPLATE_MATCH = "template_match"
    POLICY_NUMBER_FORMAT = "policy_number_format"
    TEMPLATE_ELEMENTS = "template_elements"
    ABN_CHECKSUM = "abn_checksum"
    DATE_LOGIC = "date_logic"
    LIMIT_VALIDATION = "limit_validation"
    DUPLICATE_DETECTION = "duplicate_detection"
    DATE_MANIPULATION = "date_manipulation"


class FraudCheckStatus(str, Enum):
    """Outcome of a single fraud rule."""
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"
    INFO = "info"           # Noteworthy but not suspicious


class RiskLevel(str, Enum):
    """Graded fraud risk, derived from the overall risk score."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class SoftwareClass(str, Enum):
    """Classification of the tool that produced a document."""
    TRUSTED = "trusted"
    SUSPICIOUS = "suspicious"       # Raster/image editors
    UNRECOGNIZED = "unrecognized"


# =============================================================================
# Compliance Verification
# =============================================================================

class CheckStatus(str, Enum):
    """Outcome of a single compliance check entry."""
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"


class VerificationStatus(str, Enum):
    """Overall compliance (and final verdict) status."""
    PASS = "pass"
    FAIL = "fail"
    REVIEW = "review"       # Human review required


class DeficiencySeverity(str, Enum):
    """Severity tier of an unmet requirement."""
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


class DeficiencyType(str, Enum):
    """Taxonomy of unmet requirements."""
    MISSING_COVERAGE = "missing_coverage"
    INSUFFICIENT_LIMIT = "insufficient_limit"
    EXCESS_TOO_HIGH = "excess_too_high"
    MISSING_ENDORSEMENT = "missing_endorsement"
    MISSING_PRINCIPAL_NAMING = "missing_principal_naming"
    INSUFFICIENT_PRINCIPAL_NAMING = "insufficient_principal_naming"
    STATE_MISMATCH = "state_mismatch"
    EXPIRED_POLICY = "expired_policy"
    POLICY_EXPIRES_BEFORE_PROJECT = "policy_expires_before_project"
    UNLICENSED_INSURER = "unlicensed_insurer"
    ABN_MISMATCH = "abn_mismatch"
    FRAUD_DETECTED = "fraud_detected"
