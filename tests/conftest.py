"""
Pytest configuration and fixtures for CocGuard tests.

Provides helper factories and common fixtures matching actual model definitions.
"""
import pytest
from datetime import date, datetime, timezone
from decimal import Decimal

from cocguard.models import (
    CoverageType,
    DocumentMetadata,
    ExtractedCertificate,
    ExtractedCoverage,
    InsuranceRequirement,
    LimitBasis,
    PrincipalNaming,
    SubmissionHistoryEntry,
)
from cocguard.rules import RuleTables, default_rule_tables


VALID_ABN = "51824753556"
VALID_ABN_ATO = "33102417032"
INVALID_ABN = "12345678901"

LICENSED_QBE = "QBE Insurance (Australia) Limited"

# Evaluation date used by every date-based compliance test
TODAY = date(2024, 9, 1)


# =============================================================================
# Factory Helpers
# =============================================================================

def make_coverage(
    coverage_type: str = CoverageType.PUBLIC_LIABILITY.value,
    limit=Decimal("20000000"),
    limit_basis: LimitBasis = LimitBasis.PER_OCCURRENCE,
    excess=Decimal("1000"),
    principal_indemnity: bool = None,
    cross_liability: bool = None,
    waiver_of_subrogation: bool = None,
    principal_naming: PrincipalNaming = None,
    jurisdiction: str = None,
) -> ExtractedCoverage:
    """Create an ExtractedCoverage with sensible defaults."""
    return ExtractedCoverage(
        coverage_type=coverage_type,
        limit=Decimal(str(limit)),
        limit_basis=limit_basis,
        excess=Decimal(str(excess)),
        principal_indemnity=principal_indemnity,
        cross_liability=cross_liability,
        waiver_of_subrogation=waiver_of_subrogation,
        principal_naming=principal_naming,
        jurisdiction=jurisdiction,
    )


def make_certificate(
    insured_party_abn: str = VALID_ABN,
    insured_party_name: str = "Acme Scaffolding Pty Ltd",
    insurer_name: str = "QBE Insurance",
    policy_number: str = "QBEPL12345678",
    period_start: date = None,
    period_end: date = None,
    coverages: list = None,
    extraction_confidence: float = 0.95,
    detected_elements: list = None,
    document_id: str = "DOC-001",
) -> ExtractedCertificate:
    """
    Create an ExtractedCertificate.

    Defaults describe a genuine QBE certificate with a one-year period
    and $10M public liability.
    """
    if period_start is None:
        period_start = date(2024, 1, 1)
    if period_end is None:
        period_end = date(2025, 1, 1)
    if coverages is None:
        coverages = [make_coverage(limit=Decimal("10000000"))]

    return ExtractedCertificate(
        insured_party_abn=insured_party_abn,
        insured_party_name=insured_party_name,
        insurer_name=insurer_name,
        policy_number=policy_number,
        period_start=period_start,
        period_end=period_end,
        coverages=coverages,
        extraction_confidence=extraction_confidence,
        detected_elements=detected_elements,
        document_id=document_id,
    )


def make_compliant_certificate(**overrides) -> ExtractedCertificate:
    """Create a certificate issued by a licensed insurer, current on TODAY."""
    values = {
        "insurer_name": LICENSED_QBE,
        "period_start": date(2024, 7, 1),
        "period_end": date(2025, 7, 1),
        "coverages": [make_coverage()],
    }
    values.update(overrides)
    return make_certificate(**values)


def make_metadata(
    creation_date: datetime = None,
    modification_date: datetime = None,
    producer: str = "Adobe PDF Library 15.0",
    creator: str = "Adobe Acrobat Pro DC",
) -> DocumentMetadata:
    """Create DocumentMetadata; timestamps default to an unmodified file."""
    if creation_date is None:
        creation_date = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
    if modification_date is None:
        modification_date = creation_date
    return DocumentMetadata(
        creation_date=creation_date,
        modification_date=modification_date,
        producer=producer,
        creator=creator,
    )


def make_requirement(
    coverage_type: str = CoverageType.PUBLIC_LIABILITY.value,
    minimum_limit=Decimal("10000000"),
    maximum_excess=None,
    principal_indemnity_required: bool = False,
    cross_liability_required: bool = False,
    waiver_of_subrogation_required: bool = False,
    principal_naming_required: PrincipalNaming = None,
) -> InsuranceRequirement:
    """Create an InsuranceRequirement."""
    return InsuranceRequirement(
        coverage_type=coverage_type,
        minimum_limit=Decimal(str(minimum_limit)) if minimum_limit is not None else None,
        maximum_excess=Decimal(str(maximum_excess)) if maximum_excess is not None else None,
        principal_indemnity_required=principal_indemnity_required,
        cross_liability_required=cross_liability_required,
        waiver_of_subrogation_required=waiver_of_subrogation_required,
        principal_naming_required=principal_naming_required,
    )


def make_history_entry(
    fingerprint: str = "abc123",
    filename: str = "coc_2024.pdf",
    upload_date: date = None,
    policy_number: str = "QBEPL12345678",
    coverage_end: date = None,
) -> SubmissionHistoryEntry:
    """Create a SubmissionHistoryEntry."""
    return SubmissionHistoryEntry(
        fingerprint=fingerprint,
        filename=filename,
        upload_date=upload_date or date(2024, 1, 15),
        policy_number=policy_number,
        coverage_end=coverage_end or date(2024, 12, 31),
    )


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def tables() -> RuleTables:
    """Bundled rule tables."""
    return default_rule_tables()


@pytest.fixture
def certificate() -> ExtractedCertificate:
    """Genuine QBE certificate."""
    return make_certificate()


@pytest.fixture
def compliant_certificate() -> ExtractedCertificate:
    """Certificate that satisfies the default requirement on TODAY."""
    return make_compliant_certificate()
