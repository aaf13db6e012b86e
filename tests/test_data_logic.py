"""
Tests for the data logic validator.
"""
from datetime import date
from decimal import Decimal

import pytest

from cocguard.engine import check_abn, check_dates, check_limit, validate_data_logic
from cocguard.models import CoverageType, ExtractedCoverage, FraudCheckStatus, FraudCheckType

from tests.conftest import INVALID_ABN, VALID_ABN, make_certificate, make_coverage


class TestAbnCheck:
    """Insured party ABN."""

    def test_valid_abn_passes(self):
        result = check_abn(make_certificate(insured_party_abn=VALID_ABN))
        assert result.check_type == FraudCheckType.ABN_CHECKSUM
        assert result.status == FraudCheckStatus.PASS
        assert result.risk_score == 0

    def test_invalid_abn_fails(self):
        """Bad checksum fails with 80 and the validator's message."""
        result = check_abn(make_certificate(insured_party_abn=INVALID_ABN))
        assert result.status == FraudCheckStatus.FAIL
        assert result.risk_score == 80
        assert result.details == "ABN checksum validation failed - invalid ABN"
        assert INVALID_ABN in result.evidence

    def test_missing_abn_fails(self):
        result = check_abn(make_certificate(insured_party_abn=None))
        assert result.status == FraudCheckStatus.FAIL
        assert result.details == "ABN must be exactly 11 digits"


class TestDateCheck:
    """Period of insurance."""

    def test_one_year_passes(self):
        result = check_dates(make_certificate(
            period_start=date(2024, 1, 1), period_end=date(2025, 1, 1),
        ))
        assert result.check_type == FraudCheckType.DATE_LOGIC
        assert result.status == FraudCheckStatus.PASS

    def test_inverted_dates_fail(self):
        """End before start fails with 90."""
        result = check_dates(make_certificate(
            period_start=date(2025, 1, 1), period_end=date(2024, 1, 1),
        ))
        assert result.status == FraudCheckStatus.FAIL
        assert result.risk_score == 90

    def test_equal_dates_fail(self):
        """End must be strictly after start."""
        result = check_dates(make_certificate(
            period_start=date(2024, 6, 1), period_end=date(2024, 6, 1),
        ))
        assert result.status == FraudCheckStatus.FAIL

    def test_long_period_warns(self):
        """Two years is longer than any normal policy."""
        result = check_dates(make_certificate(
            period_start=date(2024, 1, 1), period_end=date(2026, 1, 1),
        ))
        assert result.status == FraudCheckStatus.WARNING
        assert result.risk_score == 25

    def test_short_period_warns(self):
        result = check_dates(make_certificate(
            period_start=date(2024, 1, 1), period_end=date(2024, 1, 15),
        ))
        assert result.status == FraudCheckStatus.WARNING
        assert result.risk_score == 20

    def test_boundaries_pass(self):
        """Exactly the minimum and maximum lengths are accepted."""
        start = date(2024, 1, 1)
        for days in (30, 400):
            result = check_dates(make_certificate(
                period_start=start, period_end=date.fromordinal(start.toordinal() + days),
            ))
            assert result.status == FraudCheckStatus.PASS

    def test_missing_end_date_warns(self):
        certificate = make_certificate()
        certificate.period_end = None
        result = check_dates(certificate)
        assert result.status == FraudCheckStatus.WARNING
        assert result.risk_score == 50


class TestLimitCheck:
    """Coverage limits."""

    def test_healthy_limit_reports_nothing(self):
        assert check_limit(make_coverage(limit=Decimal("20000000"))) is None

    @pytest.mark.parametrize("limit", ["0", "-1"])
    def test_non_positive_limit_fails(self, limit):
        result = check_limit(make_coverage(limit=Decimal(limit)))
        assert result.check_type == FraudCheckType.LIMIT_VALIDATION
        assert result.status == FraudCheckStatus.FAIL
        assert result.risk_score == 70

    @pytest.mark.parametrize("coverage_type", [
        CoverageType.PUBLIC_LIABILITY.value,
        CoverageType.PRODUCTS_LIABILITY.value,
    ])
    def test_low_liability_limit_warns(self, coverage_type):
        """Liability limits under $1M are implausible."""
        result = check_limit(make_coverage(coverage_type=coverage_type, limit=Decimal("500000")))
        assert result.status == FraudCheckStatus.WARNING
        assert result.risk_score == 40
        assert "$500,000" in result.evidence

    def test_low_limit_on_enum_coverage_type_warns(self):
        result = check_limit(ExtractedCoverage(CoverageType.PUBLIC_LIABILITY, Decimal("50000")))
        assert result.status == FraudCheckStatus.WARNING
        assert result.risk_score == 40
        assert "Public Liability" in result.details

    def test_low_limit_on_other_types_not_reported(self):
        result = check_limit(make_coverage(
            coverage_type=CoverageType.PROFESSIONAL_INDEMNITY.value, limit=Decimal("500000"),
        ))
        assert result is None

    def test_floor_itself_is_acceptable(self):
        assert check_limit(make_coverage(limit=Decimal("1000000"))) is None


class TestValidateDataLogic:
    """All data checks together."""

    def test_clean_certificate_order(self):
        """ABN first, then dates; healthy limits add nothing."""
        results = validate_data_logic(make_certificate())
        assert [r.check_type for r in results] == [
            FraudCheckType.ABN_CHECKSUM,
            FraudCheckType.DATE_LOGIC,
        ]
        assert all(r.status == FraudCheckStatus.PASS for r in results)

    def test_one_finding_per_problem_coverage(self):
        certificate = make_certificate(coverages=[
            make_coverage(limit=Decimal("0")),
            make_coverage(coverage_type=CoverageType.PRODUCTS_LIABILITY.value, limit=Decimal("100000")),
            make_coverage(coverage_type=CoverageType.MOTOR_VEHICLE.value, limit=Decimal("50000")),
        ])
        results = validate_data_logic(certificate)
        limits = [r for r in results if r.check_type == FraudCheckType.LIMIT_VALIDATION]
        assert [r.status for r in limits] == [FraudCheckStatus.FAIL, FraudCheckStatus.WARNING]
