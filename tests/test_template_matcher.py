"""
Tests for the insurer template matcher.
"""
import pytest

from cocguard.engine import match_insurer_template
from cocguard.models import FraudCheckStatus, FraudCheckType

from tests.conftest import make_certificate


ALL_ELEMENTS = ["ABN", "Policy Number", "Period of Insurance", "Insured"]


def _by_type(results):
    return {r.check_type: r for r in results}


class TestKnownInsurer:
    """Insurers with a template."""

    def test_genuine_qbe_certificate(self):
        """Matching template, format and elements all pass."""
        results = _by_type(match_insurer_template(
            make_certificate(insurer_name="QBE Insurance", detected_elements=ALL_ELEMENTS)
        ))
        assert results[FraudCheckType.TEMPLATE_MATCH].status == FraudCheckStatus.PASS
        assert results[FraudCheckType.POLICY_NUMBER_FORMAT].status == FraudCheckStatus.PASS
        assert results[FraudCheckType.TEMPLATE_ELEMENTS].status == FraudCheckStatus.PASS

    @pytest.mark.parametrize("insurer,policy_number", [
        ("QBE Insurance", "QBEPL12345678"),
        ("QBE Insurance", "QBE12345678"),
        ("Allianz Australia", "ALZ1234567890"),
        ("CGU Insurance", "CGU123456789"),
        ("Zurich Australian Insurance Limited", "ZURA12345678"),
        ("Suncorp Group Limited", "SUN123456789"),
        ("Vero Insurance", "VER123456789"),
        ("AIG Australia Limited", "AIG1234567890"),
        ("Chubb Insurance Australia Limited", "CHB1234567890"),
    ])
    def test_valid_policy_numbers(self, insurer, policy_number):
        """Each insurer's own format passes."""
        results = _by_type(match_insurer_template(
            make_certificate(insurer_name=insurer, policy_number=policy_number)
        ))
        assert results[FraudCheckType.POLICY_NUMBER_FORMAT].status == FraudCheckStatus.PASS

    def test_invalid_policy_number_fails(self):
        """A policy number in the wrong format fails with 65."""
        results = _by_type(match_insurer_template(
            make_certificate(insurer_name="QBE Insurance", policy_number="INVALID12345")
        ))
        check = results[FraudCheckType.POLICY_NUMBER_FORMAT]
        assert check.status == FraudCheckStatus.FAIL
        assert check.risk_score == 65
        assert "INVALID12345" in check.evidence

    def test_other_insurers_format_fails(self):
        """An Allianz-format number on a QBE certificate fails."""
        results = _by_type(match_insurer_template(
            make_certificate(insurer_name="QBE Insurance", policy_number="ALZ1234567890")
        ))
        assert results[FraudCheckType.POLICY_NUMBER_FORMAT].status == FraudCheckStatus.FAIL

    def test_missing_policy_number_fails(self):
        results = _by_type(match_insurer_template(
            make_certificate(insurer_name="QBE Insurance", policy_number=None)
        ))
        assert results[FraudCheckType.POLICY_NUMBER_FORMAT].status == FraudCheckStatus.FAIL

    def test_insurer_name_case_insensitive(self):
        results = _by_type(match_insurer_template(make_certificate(insurer_name="qbe insurance")))
        assert results[FraudCheckType.TEMPLATE_MATCH].status == FraudCheckStatus.PASS


class TestElements:
    """Structural element comparison."""

    def test_missing_elements_warn(self):
        """Only the ABN detected: three elements missing."""
        results = _by_type(match_insurer_template(
            make_certificate(detected_elements=["ABN"])
        ))
        check = results[FraudCheckType.TEMPLATE_ELEMENTS]
        assert check.status == FraudCheckStatus.WARNING
        assert check.risk_score == 30
        assert "Policy Number" in check.evidence

    def test_score_is_capped(self):
        """No elements at all: four missing scores 40, within the 50 cap."""
        results = _by_type(match_insurer_template(make_certificate(detected_elements=[])))
        assert results[FraudCheckType.TEMPLATE_ELEMENTS].risk_score == 40

    def test_elements_compared_case_insensitively(self):
        results = _by_type(match_insurer_template(
            make_certificate(detected_elements=[e.upper() for e in ALL_ELEMENTS])
        ))
        assert results[FraudCheckType.TEMPLATE_ELEMENTS].status == FraudCheckStatus.PASS

    def test_elements_derived_from_fields(self):
        """Without a detected list, populated fields stand in for elements."""
        results = _by_type(match_insurer_template(make_certificate(detected_elements=None)))
        assert results[FraudCheckType.TEMPLATE_ELEMENTS].status == FraudCheckStatus.PASS

    def test_derived_elements_reflect_missing_fields(self):
        results = _by_type(match_insurer_template(
            make_certificate(detected_elements=None, insured_party_abn=None, insured_party_name=None)
        ))
        check = results[FraudCheckType.TEMPLATE_ELEMENTS]
        assert check.status == FraudCheckStatus.WARNING
        assert check.risk_score == 20


class TestUnknownInsurer:
    """Insurers without a template."""

    def test_unknown_insurer_single_warning(self):
        """One warning with score 20 and no format or element checks."""
        results = match_insurer_template(
            make_certificate(insurer_name="Unknown Insurance Co", policy_number="XYZ123")
        )
        assert len(results) == 1
        assert results[0].check_type == FraudCheckType.TEMPLATE_MATCH
        assert results[0].status == FraudCheckStatus.WARNING
        assert results[0].risk_score == 20

    def test_missing_insurer_name(self):
        results = match_insurer_template(make_certificate(insurer_name=None))
        assert len(results) == 1
        assert results[0].status == FraudCheckStatus.WARNING
