"""
CocGuard Certificate Models

Inputs handed to the engine by its collaborators.

Key components:
- ExtractedCoverage: One coverage section read from a certificate
- ExtractedCertificate: Structured fields read from a Certificate of Currency
- DocumentMetadata: File-level provenance signals
- SubmissionHistoryEntry: A prior submission for the same relationship

All of these are produced outside the engine (Extraction Service,
Submission History) and are treated as read-only snapshots.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from .enums import CoverageType, LimitBasis, PrincipalNaming, coverage_type_key


# Structural elements every Certificate of Currency is expected to show.
# Used when the extraction did not report a detected-elements list.
ELEMENT_ABN = "ABN"
ELEMENT_POLICY_NUMBER = "Policy Number"
ELEMENT_PERIOD = "Period of Insurance"
ELEMENT_INSURED = "Insured"


# =============================================================================
# Parsing Helpers
# =============================================================================

def parse_date(value: Any) -> Optional[date]:
    """Parse an ISO date (or datetime) value into a date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if "T" in text:
        parsed = parse_timestamp(text)
        return parsed.date() if parsed else None
    return date.fromisoformat(text[:10])


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a timestamp into a timezone-aware datetime.

    Accepts datetime/date objects, ISO 8601 strings (with or without a
    trailing "Z") and PDF date strings ("D:20240101093000Z").
    Naive values are taken to be UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    else:
        text = str(value).strip()
        if text.startswith("D:"):
            digits = text[2:16]
            parsed = datetime.strptime(digits.ljust(14, "0"), "%Y%m%d%H%M%S")
        else:
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_amount(value: Any) -> Decimal:
    """Parse a monetary amount; unreadable values become zero."""
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).replace("$", "").replace(",", "").strip())
    except InvalidOperation:
        return Decimal("0")


def _parse_optional_amount(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return parse_amount(value)


def _parse_limit_basis(value: Any) -> Optional[LimitBasis]:
    """Extracted limit bases outside LimitBasis are treated as not stated."""
    if not value:
        return None
    try:
        return LimitBasis(value)
    except ValueError:
        return None


# =============================================================================
# Extracted Coverage
# =============================================================================

@dataclass
class ExtractedCoverage:
    """
    One coverage section read from a certificate.

    Endorsement flags are None when the extraction could not tell
    whether the endorsement is present.

    Attributes:
        coverage_type: Coverage class (CoverageType members are stored
            as their plain value)
        limit: Limit of indemnity
        limit_basis: How the limit is measured
        excess: Deductible / excess amount
        principal_indemnity: Principal indemnity extension present
        cross_liability: Cross liability clause present
        waiver_of_subrogation: Waiver of subrogation present
        principal_naming: How the principal is named, if at all
        jurisdiction: State scheme (workers' compensation only)
    """
    coverage_type: str
    limit: Decimal
    limit_basis: Optional[LimitBasis] = None
    excess: Decimal = Decimal("0")

    # Endorsements
    principal_indemnity: Optional[bool] = None
    cross_liability: Optional[bool] = None
    waiver_of_subrogation: Optional[bool] = None
    principal_naming: Optional[PrincipalNaming] = None

    # Workers' compensation scheme
    jurisdiction: Optional[str] = None

    def __post_init__(self) -> None:
        self.coverage_type = coverage_type_key(self.coverage_type)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExtractedCoverage:
        """Build from an extraction payload entry."""
        basis = data.get("limit_basis") or data.get("limit_type")
        naming = data.get("principal_naming") or data.get("principal_naming_type")
        return cls(
            coverage_type=str(data.get("coverage_type") or data.get("type") or ""),
            limit=parse_amount(data.get("limit")),
            limit_basis=_parse_limit_basis(basis),
            excess=parse_amount(data.get("excess")),
            principal_indemnity=data.get("principal_indemnity"),
            cross_liability=data.get("cross_liability"),
            waiver_of_subrogation=data.get("waiver_of_subrogation"),
            principal_naming=PrincipalNaming(naming) if naming else None,
            jurisdiction=data.get("jurisdiction") or data.get("state"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "coverage_type": self.coverage_type,
            "limit": str(self.limit),
            "limit_basis": self.limit_basis.value if self.limit_basis else None,
            "excess": str(self.excess),
            "principal_indemnity": self.principal_indemnity,
            "cross_liability": self.cross_liability,
            "waiver_of_subrogation": self.waiver_of_subrogation,
            "principal_naming": self.principal_naming.value if self.principal_naming else None,
            "jurisdiction": self.jurisdiction,
        }


# =============================================================================
# Extracted Certificate
# =============================================================================

@dataclass
class ExtractedCertificate:
    """
    Structured fields read from a Certificate of Currency.

    Produced once per document by the Extraction Service. The engine
    never modifies it.

    Attributes:
        insured_party_abn: Insured party's business identifier
        insured_party_name: Insured party's registered name
        insurer_name: Issuing insurer
        policy_number: Policy / document number
        period_start: Start of the period of insurance
        period_end: End of the period of insurance
        coverages: Coverage sections found on the certificate
        extraction_confidence: Extraction confidence (0.0 to 1.0)
        detected_elements: Structural elements detected on the page,
            or None when the extraction did not report them
        document_id: Caller's identifier for the source document
    """
    insured_party_abn: Optional[str] = None
    insured_party_name: Optional[str] = None
    insurer_name: Optional[str] = None
    policy_number: Optional[str] = None
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    coverages: list[ExtractedCoverage] = field(default_factory=list)
    extraction_confidence: float = 1.0
    detected_elements: Optional[list[str]] = None
    document_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ExtractedCertificate:
        """
        Build from an Extraction Service payload.

        Accepts both the engine's own field names and the
        period_of_insurance_* names used by the extraction payload.
        """
        start = data.get("period_start", data.get("period_of_insurance_start"))
        end = data.get("period_end", data.get("period_of_insurance_end"))
        confidence = data.get("extraction_confidence")
        return cls(
            insured_party_abn=data.get("insured_party_abn"),
            insured_party_name=data.get("insured_party_name"),
            insurer_name=data.get("insurer_name"),
            policy_number=data.get("policy_number"),
            period_start=parse_date(start),
            period_end=parse_date(end),
            coverages=[
                ExtractedCoverage.from_dict(c) for c in data.get("coverages") or []
            ],
            extraction_confidence=float(confidence) if confidence is not None else 1.0,
            detected_elements=data.get("detected_elements"),
            document_id=data.get("document_id"),
        )

    def get_coverage(
        self, coverage_type: Union[str, CoverageType]
    ) -> Optional[ExtractedCoverage]:
        """Get the first coverage of the given type."""
        key = coverage_type_key(coverage_type)
        for coverage in self.coverages:
            if coverage_type_key(coverage.coverage_type) == key:
                return coverage
        return None

    @property
    def structural_elements(self) -> list[str]:
        """
        Structural elements present on the certificate.

        Falls back to the fields the extraction managed to populate
        when no explicit element list was reported.
        """
        if self.detected_elements is not None:
            return list(self.detected_elements)

        elements: list[str] = []
        if self.insured_party_abn:
            elements.append(ELEMENT_ABN)
        if self.policy_number:
            elements.append(ELEMENT_POLICY_NUMBER)
        if self.period_start and self.period_end:
            elements.append(ELEMENT_PERIOD)
        if self.insured_party_name or self.insured_party_abn:
            elements.append(ELEMENT_INSURED)
        return elements

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "insured_party_abn": self.insured_party_abn,
            "insured_party_name": self.insured_party_name,
            "insurer_name": self.insurer_name,
            "policy_number": self.policy_number,
            "period_start": self.period_start.isoformat() if self.period_start else None,
            "period_end": self.period_end.isoformat() if self.period_end else None,
            "coverages": [c.to_dict() for c in self.coverages],
            "extraction_confidence": self.extraction_confidence,
            "detected_elements": self.detected_elements,
            "document_id": self.document_id,
        }


# =============================================================================
# Document Metadata
# =============================================================================

@dataclass
class DocumentMetadata:
    """
    File-level provenance signals.

    Attributes:
        creation_date: When the file says it was created
        modification_date: When the file says it was last modified
        producer: Tool that wrote the PDF
        creator: Authoring application
    """
    creation_date: Optional[datetime] = None
    modification_date: Optional[datetime] = None
    producer: Optional[str] = None
    creator: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DocumentMetadata:
        """Build from a metadata payload (camelCase or snake_case keys)."""
        return cls(
            creation_date=parse_timestamp(
                data.get("creation_date", data.get("creationDate"))
            ),
            modification_date=parse_timestamp(
                data.get("modification_date", data.get("modificationDate"))
            ),
            producer=data.get("producer"),
            creator=data.get("creator"),
        )

    @property
    def software_names(self) -> list[str]:
        """Non-empty producer/creator names, producer first."""
        return [name for name in (self.producer, self.creator) if name]


# =============================================================================
# Submission History
# =============================================================================

@dataclass
class SubmissionHistoryEntry:
    """
    A prior submission for the same counterparty relationship.

    Attributes:
        fingerprint: Content hash of the prior document
        filename: Original filename
        upload_date: When it was uploaded
        policy_number: Policy number extracted at the time
        coverage_end: Period-of-insurance end extracted at the time
    """
    fingerprint: str
    filename: Optional[str] = None
    upload_date: Optional[date] = None
    policy_number: Optional[str] = None
    coverage_end: Optional[date] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubmissionHistoryEntry:
        """Build from a history record."""
        extracted = data.get("extracted_data") or data.get("extractedData") or {}
        return cls(
            fingerprint=data.get("fingerprint") or data.get("hash") or "",
            filename=data.get("filename") or data.get("fileName"),
            upload_date=parse_date(data.get("upload_date") or data.get("uploadDate")),
            policy_number=data.get("policy_number")
            or extracted.get("policy_number")
            or extracted.get("policyNumber"),
            coverage_end=parse_date(
                data.get("coverage_end")
                or extracted.get("expiry_date")
                or extracted.get("expiryDate")
            ),
        )
