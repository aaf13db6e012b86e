"""
CocGuard - Certificate of Currency Verification Engine

CocGuard scores machine-extracted insurance certificates for signs of
forgery, tampering or resubmission, checks their coverage against a
contract's insurance requirements, and combines both into one
accept / review / block verdict.

It is a pure computation library: no I/O during evaluation, no shared
mutable state, and an explicit "now" for every date-based check.

Quick Start:
    from datetime import date
    from decimal import Decimal
    from cocguard import (
        ExtractedCertificate, ExtractedCoverage, InsuranceRequirement,
        verify_certificate,
    )

    certificate = ExtractedCertificate(
        insured_party_abn="51 824 753 556",
        insurer_name="QBE Insurance (Australia) Limited",
        policy_number="QBEPL12345678",
        period_start=date(2024, 7, 1),
        period_end=date(2025, 7, 1),
        coverages=[ExtractedCoverage("public_liability", Decimal("20000000"))],
    )
    requirements = [InsuranceRequirement("public_liability", Decimal("10000000"))]

    verdict = verify_certificate(certificate, requirements, now=date(2024, 9, 1))
    print(verdict.status.value, verdict.audit_summary())

Version: 0.1.0
"""
from __future__ import annotations

__version__ = "0.1.0"
__author__ = "CocGuard Team"

# =============================================================================
# Core Models (Re-exported for convenience)
# =============================================================================
from .models import (
    # Enums
    CheckStatus,
    CoverageType,
    DeficiencySeverity,
    DeficiencyType,
    FraudCheckStatus,
    FraudCheckType,
    LimitBasis,
    PrincipalNaming,
    RiskLevel,
    SoftwareClass,
    VerificationStatus,
    # Inputs
    DocumentMetadata,
    ExtractedCertificate,
    ExtractedCoverage,
    InsuranceRequirement,
    SubmissionHistoryEntry,
    # Results
    CoverageDeficiency,
    FinalVerdict,
    FraudAnalysisResult,
    FraudCheckResult,
    IdentifierLookup,
    VerificationCheck,
    VerificationResult,
)

# =============================================================================
# Engine Entry Points
# =============================================================================
from .engine import (
    ChecksumResult,
    CoverageVerifier,
    DecisionSink,
    FraudAnalyzer,
    combine,
    evaluate_compliance,
    evaluate_fraud,
    format_coverage_type,
    format_deficiency_list,
    lookup_identifier,
    should_skip_fraud_detection,
    simulate_fraud_analysis,
    skipped_fraud_analysis,
    validate_abn_checksum,
    verify_certificate,
)

# =============================================================================
# Rule Packs, Errors, Hashing
# =============================================================================
from .rules import RuleTables, default_rule_tables, load_rule_pack, load_rule_pack_from_string
from .exceptions import (
    CertificateRequiredError,
    CocGuardError,
    RulePackLoadError,
    RulePackValidationError,
    RulePackVersionMismatch,
)
from .canon import canonical_json, content_hash, document_fingerprint


__all__ = [
    "__version__",
    # Enums
    "CheckStatus",
    "CoverageType",
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
    "InsuranceRequirement",
    "SubmissionHistoryEntry",
    # Results
    "CoverageDeficiency",
    "FinalVerdict",
    "FraudAnalysisResult",
    "FraudCheckResult",
    "IdentifierLookup",
    "VerificationCheck",
    "VerificationResult",
    # Engine
    "ChecksumResult",
    "CoverageVerifier",
    "DecisionSink",
    "FraudAnalyzer",
    "combine",
    "evaluate_compliance",
    "evaluate_fraud",
    "format_coverage_type",
    "format_deficiency_list",
    "lookup_identifier",
    "should_skip_fraud_detection",
    "simulate_fraud_analysis",
    "skipped_fraud_analysis",
    "validate_abn_checksum",
    "verify_certificate",
    # Rule packs
    "RuleTables",
    "default_rule_tables",
    "load_rule_pack",
    "load_rule_pack_from_string",
    # Errors
    "CertificateRequiredError",
    "CocGuardError",
    "RulePackLoadError",
    "RulePackValidationError",
    "RulePackVersionMismatch",
    # Hashing
    "canonical_json",
    "content_hash",
    "document_fingerprint",
]
