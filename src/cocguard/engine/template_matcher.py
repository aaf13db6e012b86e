"""
CocGuard Template Matcher

Checks a certificate against its insurer's known document template:
- template_match: is the insurer one we hold a template for
- policy_number_format: does the policy number have the insurer's format
- template_elements: are the insurer's structural elements all present

Unknown insurers yield a single warning and no further checks.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..models import (
    ExtractedCertificate,
    FraudCheckResult,
    FraudCheckStatus,
    FraudCheckType,
)
from ..rules import InsurerTemplate, RuleTables, resolve_tables

logger = logging.getLogger(__name__)


UNKNOWN_TEMPLATE_SCORE = 20
POLICY_FORMAT_SCORE = 65
MISSING_ELEMENT_SCORE = 10
MISSING_ELEMENTS_MAX_SCORE = 50


def missing_elements(template: InsurerTemplate, present: list[str]) -> list[str]:
    """Expected elements absent from the detected list (case-insensitive)."""
    detected = {element.strip().lower() for element in present}
    return [e for e in template.expected_elements if e.lower() not in detected]


def check_policy_number(
    template: InsurerTemplate,
    policy_number: Optional[str],
) -> FraudCheckResult:
    """Validate a policy number against the insurer's format."""
    value = (policy_number or "").strip()
    if value and template.matches_policy_number(value):
        return FraudCheckResult.create(
            FraudCheckType.POLICY_NUMBER_FORMAT,
            FraudCheckStatus.PASS,
            0,
            f"Policy number matches {template.name} format",
        )

    return FraudCheckResult.create(
        FraudCheckType.POLICY_NUMBER_FORMAT,
        FraudCheckStatus.FAIL,
        POLICY_FORMAT_SCORE,
        f"Policy number does not match {template.name} format",
        evidence=f"Policy number: {value or 'not found'}",
    )


def check_elements(template: InsurerTemplate, present: list[str]) -> FraudCheckResult:
    """Compare detected structural elements with the template."""
    missing = missing_elements(template, present)
    if not missing:
        return FraudCheckResult.create(
            FraudCheckType.TEMPLATE_ELEMENTS,
            FraudCheckStatus.PASS,
            0,
            "All expected certificate elements present",
        )

    return FraudCheckResult.create(
        FraudCheckType.TEMPLATE_ELEMENTS,
        FraudCheckStatus.WARNING,
        min(MISSING_ELEMENTS_MAX_SCORE, MISSING_ELEMENT_SCORE * len(missing)),
        f"{len(missing)} expected certificate element(s) missing",
        evidence=f"Missing: {', '.join(missing)}",
    )


def match_insurer_template(
    certificate: ExtractedCertificate,
    tables: Optional[RuleTables] = None,
) -> list[FraudCheckResult]:
    """
    Run the template checks for a certificate.

    Structural elements come from the certificate's detected list, or
    are derived from its populated fields when none was reported.
    """
    tables = resolve_tables(tables)
    insurer = certificate.insurer_name
    template = tables.find_insurer_template(insurer)

    if template is None:
        logger.warning("No certificate template for insurer %r", insurer)
        return [
            FraudCheckResult.create(
                FraudCheckType.TEMPLATE_MATCH,
                FraudCheckStatus.WARNING,
                UNKNOWN_TEMPLATE_SCORE,
                "Insurer template not recognized",
                evidence=f"Insurer: {insurer or 'not found'}",
            )
        ]

    return [
        FraudCheckResult.create(
            FraudCheckType.TEMPLATE_MATCH,
            FraudCheckStatus.PASS,
            0,
            f"Certificate matches known insurer template ({template.name})",
        ),
        check_policy_number(template, certificate.policy_number),
        check_elements(template, certificate.structural_elements),
    ]
