"""
CocGuard Requirement Models

Contractual insurance requirements supplied by the Requirement Store.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .certificate import _parse_optional_amount
from .enums import LimitBasis, PrincipalNaming, coverage_type_key


@dataclass
class InsuranceRequirement:
    """
    A contractual minimum for one coverage type.

    Attributes:
        coverage_type: Coverage class the requirement applies to
        minimum_limit: Minimum limit of indemnity (None = any limit)
        limit_basis: How the minimum limit is measured
        maximum_excess: Highest acceptable excess (None = no cap)
        principal_indemnity_required: Principal indemnity extension required
        cross_liability_required: Cross liability clause required
        waiver_of_subrogation_required: Waiver of subrogation required
        principal_naming_required: Required principal-naming tier, if any
        id: Requirement Store identifier
    """
    coverage_type: str
    minimum_limit: Optional[Decimal] = None
    limit_basis: LimitBasis = LimitBasis.PER_OCCURRENCE
    maximum_excess: Optional[Decimal] = None
    principal_indemnity_required: bool = False
    cross_liability_required: bool = False
    waiver_of_subrogation_required: bool = False
    principal_naming_required: Optional[PrincipalNaming] = None
    id: Optional[str] = None

    def __post_init__(self) -> None:
        self.coverage_type = coverage_type_key(self.coverage_type)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InsuranceRequirement:
        """Build from a Requirement Store row."""
        basis = data.get("limit_basis") or data.get("limit_type")
        naming = data.get("principal_naming_required")
        return cls(
            coverage_type=coverage_type_key(data["coverage_type"]),
            minimum_limit=_parse_optional_amount(data.get("minimum_limit")),
            limit_basis=LimitBasis(basis) if basis else LimitBasis.PER_OCCURRENCE,
            maximum_excess=_parse_optional_amount(data.get("maximum_excess")),
            principal_indemnity_required=bool(data.get("principal_indemnity_required")),
            cross_liability_required=bool(data.get("cross_liability_required")),
            waiver_of_subrogation_required=bool(data.get("waiver_of_subrogation_required")),
            principal_naming_required=PrincipalNaming(naming) if naming else None,
            id=data.get("id"),
        )
