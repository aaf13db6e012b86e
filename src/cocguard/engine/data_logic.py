"""
CocGuard Data Logic Validator

Sanity checks over the already-extracted certificate fields:
- abn_checksum: the insured party's ABN passes the modulus-89 check
- date_logic: the period of insurance is ordered and plausibly long
- limit_validation: coverage limits are positive and, for public and
  products liability, not implausibly low

Limit findings are only emitted for problems. Low limits on other
coverage types are not reported at all.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..models import (
    ExtractedCertificate,
    ExtractedCoverage,
    FraudCheckResult,
    FraudCheckStatus,
    FraudCheckType,
)
from ..rules import RuleTables, resolve_tables
from .checksum import validate_abn_checksum
from .formatting import format_coverage_type, format_money

logger = logging.getLogger(__name__)


INVALID_ABN_SCORE = 80
INVERTED_DATES_SCORE = 90
MISSING_DATES_SCORE = 50
LONG_PERIOD_SCORE = 25
SHORT_PERIOD_SCORE = 20
NON_POSITIVE_LIMIT_SCORE = 70
LOW_LIMIT_SCORE = 40


def check_abn(certificate: ExtractedCertificate) -> FraudCheckResult:
    """Validate the insured party's ABN."""
    result = validate_abn_checksum(certificate.insured_party_abn)
    if result.valid:
        return FraudCheckResult.create(
            FraudCheckType.ABN_CHECKSUM,
            FraudCheckStatus.PASS,
            0,
            "ABN checksum is valid",
        )

    return FraudCheckResult.create(
        FraudCheckType.ABN_CHECKSUM,
        FraudCheckStatus.FAIL,
        INVALID_ABN_SCORE,
        result.error or "Invalid ABN",
        evidence=f"ABN: {certificate.insured_party_abn or 'not found'}",
    )


def check_dates(
    certificate: ExtractedCertificate,
    tables: Optional[RuleTables] = None,
) -> FraudCheckResult:
    """Check the period of insurance is ordered and of plausible length."""
    thresholds = resolve_tables(tables).thresholds
    start = certificate.period_start
    end = certificate.period_end

    if start is None or end is None:
        return FraudCheckResult.create(
            FraudCheckType.DATE_LOGIC,
            FraudCheckStatus.WARNING,
            MISSING_DATES_SCORE,
            "Period of insurance is incomplete",
            evidence=f"Start: {start or 'not found'}, End: {end or 'not found'}",
        )

    evidence = f"Start: {start.isoformat()}, End: {end.isoformat()}"
    if end <= start:
        return FraudCheckResult.create(
            FraudCheckType.DATE_LOGIC,
            FraudCheckStatus.FAIL,
            INVERTED_DATES_SCORE,
            "Policy end date is not after start date",
            evidence=evidence,
        )

    span_days = (end - start).days
    if span_days > thresholds.max_policy_days:
        return FraudCheckResult.create(
            FraudCheckType.DATE_LOGIC,
            FraudCheckStatus.WARNING,
            LONG_PERIOD_SCORE,
            f"Unusually long policy period ({span_days} days)",
            evidence=evidence,
        )
    if span_days < thresholds.min_policy_days:
        return FraudCheckResult.create(
            FraudCheckType.DATE_LOGIC,
            FraudCheckStatus.WARNING,
            SHORT_PERIOD_SCORE,
            f"Unusually short policy period ({span_days} days)",
            evidence=evidence,
        )

    return FraudCheckResult.create(
        FraudCheckType.DATE_LOGIC,
        FraudCheckStatus.PASS,
        0,
        f"Policy period of {span_days} days is valid",
    )


def check_limit(
    coverage: ExtractedCoverage,
    tables: Optional[RuleTables] = None,
) -> Optional[FraudCheckResult]:
    """Check one coverage limit; None when there is nothing to report."""
    label = format_coverage_type(coverage.coverage_type)

    if coverage.limit <= 0:
        return FraudCheckResult.create(
            FraudCheckType.LIMIT_VALIDATION,
            FraudCheckStatus.FAIL,
            NON_POSITIVE_LIMIT_SCORE,
            f"{label} limit must be greater than zero",
            evidence=f"Limit: {format_money(coverage.limit)}",
        )

    floor = resolve_tables(tables).minimum_recommended_limit(coverage.coverage_type)
    if floor is not None and coverage.limit < floor:
        return FraudCheckResult.create(
            FraudCheckType.LIMIT_VALIDATION,
            FraudCheckStatus.WARNING,
            LOW_LIMIT_SCORE,
            f"Unusually low {label} limit",
            evidence=(
                f"Limit: {format_money(coverage.limit)}, "
                f"minimum recommended: {format_money(floor)}"
            ),
        )

    return None


def validate_data_logic(
    certificate: ExtractedCertificate,
    tables: Optional[RuleTables] = None,
) -> list[FraudCheckResult]:
    """Run the ABN, date and limit checks, in that order."""
    checks = [check_abn(certificate), check_dates(certificate, tables)]
    for coverage in certificate.coverages:
        finding = check_limit(coverage, tables)
        if finding is not None:
            checks.append(finding)
    return checks
