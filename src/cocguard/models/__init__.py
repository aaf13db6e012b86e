"""
CocGuard Models

All domain models for the CocGuard certificate verification engine.

Exports all models organized by category for convenient imports:

    from cocguard.models import (
        # Enums
        CoverageType, FraudCheckStatus, RiskLevel, VerificationStatus,
        # Inputs
        ExtractedCertificate, ExtractedCoverage, DocumentMetadata,
        SubmissionHistoryEntry, InsuranceRequirement,
        # Results
        FraudCheckResult, FraudAnalysisResult,
        VerificationCheck, CoverageDeficiency, VerificationResult,
        FinalVerdict,
    )
"""
from __future__ import annotations

# =============================================================================
# Enums
# =============================================================================
from .enums import (
    CheckStatus,
    CoverageType,
    coverage_type_key,
    DeficiencySeverity,
    DeficiencyType,
    FraudCheckStatus,
    FraudCheckType,
    LimitBasis,
    PrincipalNaming,
    RiskLevel,
    SoftwareClass,
    VerificationStatus,
)

# =============================================================================
# Inputs
# =============================================================================
from .certificate import (
    DocumentMetadata,
    ExtractedCertificate,
    ExtractedCoverage,
    SubmissionHistoryEntry,
    parse_amount,
    parse_date,
    parse_timestamp,
)
from .requirement import InsuranceRequirement

# =============================================================================
# Results
# =============================================================================
from .fraud import CHECK_NAMES, FraudAnalysisResult, FraudCheckResult
from .verification import (
    CoverageDeficiency,
    FinalVerdict,
    IdentifierLookup,
    VerificationCheck,
    VerificationResult,
)


__all__ = [
    # Enums
    "CheckStatus",
    "CoverageType",
    "coverage_type_key",
    "DeficiencySeverity",
    "DeficiencyType",
    "FraudCheckStatus",
    "FraudCheckType",
    "LimitBasis",
    "PrincipalNaming",
    "RiskLevel",
    "SoftwareClass",
    "VerificationStatus",
    # Inputs
    "DocumentMetadata",
    "ExtractedCertificate",
    "ExtractedCoverage",
    "SubmissionHistoryEntry",
    "InsuranceRequirement",
    "parse_amount",
    "parse_date",
    "parse_timestamp",
    # Results
    "CHECK_NAMES",
    "FraudAnalysisResult",
    "FraudCheckResult",
    "CoverageDeficiency",
    "FinalVerdict",
    "IdentifierLookup",
    "VerificationCheck",
    "VerificationResult",
]
