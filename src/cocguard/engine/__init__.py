"""
CocGuard Engine

Rule services for certificate fraud scoring and coverage compliance.

Services:
- Checksum Validator: ABN modulus-89 validation
- Metadata Analyzer: modification gap and authoring software
- Template Matcher: insurer policy-number formats and structural elements
- Data Logic Validator: ABN, period-of-insurance and limit sanity
- Duplicate Detector: resubmission and silent expiry edits
- FraudAnalyzer: runs the fraud rules and grades the result
- CoverageVerifier: checks coverage terms against requirements
- Decision Combiner: merges both into the FinalVerdict

Usage:
    from cocguard.engine import evaluate_fraud, evaluate_compliance, combine

    fraud = evaluate_fraud(certificate, metadata=metadata, history=history)
    compliance = evaluate_compliance(certificate, requirements, now=today)
    verdict = combine(compliance, fraud)
"""
from __future__ import annotations

from .checksum import (
    ChecksumResult,
    format_abn,
    is_valid_abn,
    lookup_identifier,
    validate_abn_checksum,
)
from .coverage_verifier import CoverageVerifier, evaluate_compliance
from .data_logic import check_abn, check_dates, check_limit, validate_data_logic
from .decision_combiner import DecisionSink, combine, verify_certificate
from .duplicate_detector import (
    detect_duplicate_manipulation,
    find_expiry_change,
    find_fingerprint_match,
)
from .formatting import format_coverage_type, format_deficiency_list, format_money
from .fraud_aggregator import (
    FraudAnalyzer,
    aggregate_fraud_checks,
    build_evidence_summary,
    build_recommendation,
    calculate_risk_score,
    determine_risk_level,
    evaluate_fraud,
)
from .metadata_analyzer import (
    analyze_metadata,
    check_modification,
    check_software,
    modification_score,
)
from .simulation import (
    should_skip_fraud_detection,
    simulate_fraud_analysis,
    skipped_fraud_analysis,
)
from .template_matcher import (
    check_elements,
    check_policy_number,
    match_insurer_template,
)


__all__ = [
    # Checksum
    "ChecksumResult",
    "format_abn",
    "is_valid_abn",
    "lookup_identifier",
    "validate_abn_checksum",
    # Metadata
    "analyze_metadata",
    "check_modification",
    "check_software",
    "modification_score",
    # Template
    "check_elements",
    "check_policy_number",
    "match_insurer_template",
    # Data logic
    "check_abn",
    "check_dates",
    "check_limit",
    "validate_data_logic",
    # Duplicates
    "detect_duplicate_manipulation",
    "find_expiry_change",
    "find_fingerprint_match",
    # Aggregation
    "FraudAnalyzer",
    "aggregate_fraud_checks",
    "build_evidence_summary",
    "build_recommendation",
    "calculate_risk_score",
    "determine_risk_level",
    "evaluate_fraud",
    # Compliance
    "CoverageVerifier",
    "evaluate_compliance",
    # Decision
    "DecisionSink",
    "combine",
    "verify_certificate",
    # Simulation
    "should_skip_fraud_detection",
    "simulate_fraud_analysis",
    "skipped_fraud_analysis",
    # Formatting
    "format_coverage_type",
    "format_deficiency_list",
    "format_money",
]
