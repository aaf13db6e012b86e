"""
CocGuard Display Formatting

Human-readable labels used in check descriptions and broker notices.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Union

from ..models import CoverageDeficiency, CoverageType, coverage_type_key


COVERAGE_TYPE_NAMES: dict[str, str] = {
    CoverageType.PUBLIC_LIABILITY.value: "Public Liability",
    CoverageType.PRODUCTS_LIABILITY.value: "Products Liability",
    CoverageType.WORKERS_COMP.value: "Workers' Compensation",
    CoverageType.PROFESSIONAL_INDEMNITY.value: "Professional Indemnity",
    CoverageType.MOTOR_VEHICLE.value: "Motor Vehicle",
    CoverageType.CONTRACT_WORKS.value: "Contract Works",
}


def format_coverage_type(coverage_type: Union[str, CoverageType]) -> str:
    """
    Display name for a coverage type.

    Unknown types are title-cased from their identifier.

    Example:
        >>> format_coverage_type("workers_comp")
        "Workers' Compensation"
        >>> format_coverage_type("cyber_liability")
        'Cyber Liability'
    """
    key = coverage_type_key(coverage_type)
    name = COVERAGE_TYPE_NAMES.get(key)
    if name:
        return name
    return " ".join(word.capitalize() for word in key.split("_") if word)


def format_money(amount: Optional[Union[Decimal, int, float]]) -> str:
    """
    Format an amount as whole dollars with thousands separators.

    Example:
        >>> format_money(Decimal("10000000"))
        '$10,000,000'
    """
    if amount is None:
        return "$0"
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return f"${int(value):,}"
    return f"${value:,.2f}"


def format_deficiency_list(
    deficiencies: Iterable[CoverageDeficiency],
    include_type: bool = True,
) -> str:
    """
    Render deficiencies as the bullet list used in broker notices.

    Example:
        - insufficient_limit: Public Liability limit is below minimum requirement
        - expired_policy: Certificate of Currency has expired
    """
    lines = []
    for deficiency in deficiencies:
        description = deficiency.description or "Unknown issue"
        if include_type:
            lines.append(f"- {deficiency.type.value}: {description}")
        else:
            lines.append(f"- {description}")
    return "\n".join(lines)
