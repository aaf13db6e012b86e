"""
Tests for the duplicate/manipulation detector.
"""
from datetime import date

from cocguard.engine import (
    detect_duplicate_manipulation,
    find_expiry_change,
    find_fingerprint_match,
)
from cocguard.models import FraudCheckStatus, FraudCheckType

from tests.conftest import make_certificate, make_history_entry


class TestIdenticalResubmission:
    """Same document uploaded again."""

    def test_fingerprint_match_is_info(self):
        """A repeated fingerprint is noteworthy, not suspicious."""
        history = [make_history_entry(fingerprint="abc123", filename="coc_march.pdf")]
        results = detect_duplicate_manipulation(make_certificate(), history, fingerprint="abc123")

        assert len(results) == 1
        assert results[0].check_type == FraudCheckType.DUPLICATE_DETECTION
        assert results[0].status == FraudCheckStatus.INFO
        assert results[0].risk_score == 10
        assert "coc_march.pdf" in results[0].evidence

    def test_fingerprint_match_short_circuits(self):
        """An identical document is not also checked for expiry edits."""
        history = [make_history_entry(fingerprint="abc123", coverage_end=date(2023, 6, 30))]
        results = detect_duplicate_manipulation(make_certificate(), history, fingerprint="abc123")
        assert [r.check_type for r in results] == [FraudCheckType.DUPLICATE_DETECTION]

    def test_no_fingerprint_no_match(self):
        assert find_fingerprint_match(None, [make_history_entry()]) is None


class TestExpiryManipulation:
    """Same policy, different expiry."""

    def test_changed_expiry_fails(self):
        """Resubmitting a policy with a moved expiry fails with 95."""
        history = [make_history_entry(
            fingerprint="old", policy_number="QBEPL12345678", coverage_end=date(2024, 12, 31),
        )]
        certificate = make_certificate(policy_number="QBEPL12345678", period_end=date(2025, 12, 31))

        results = detect_duplicate_manipulation(certificate, history, fingerprint="new")
        assert len(results) == 1
        result = results[0]
        assert result.check_type == FraudCheckType.DATE_MANIPULATION
        assert result.status == FraudCheckStatus.FAIL
        assert result.risk_score == 95
        assert result.evidence == "Previous expiry: 2024-12-31. Current expiry: 2025-12-31"

    def test_policy_numbers_compared_loosely(self):
        """Case and spacing differences still identify the same policy."""
        history = [make_history_entry(policy_number="qbepl 12345678", coverage_end=date(2024, 12, 31))]
        certificate = make_certificate(policy_number="QBEPL12345678", period_end=date(2025, 12, 31))
        assert find_expiry_change(certificate, history) is history[0]

    def test_same_expiry_passes(self):
        history = [make_history_entry(fingerprint="old", coverage_end=date(2025, 1, 1))]
        results = detect_duplicate_manipulation(make_certificate(), history, fingerprint="new")
        assert results[0].check_type == FraudCheckType.DATE_MANIPULATION
        assert results[0].status == FraudCheckStatus.PASS

    def test_different_policy_passes(self):
        """A new policy number is a renewal, not a manipulation."""
        history = [make_history_entry(policy_number="QBEPL00000001", coverage_end=date(2023, 12, 31))]
        results = detect_duplicate_manipulation(make_certificate(), history, fingerprint="new")
        assert results[0].status == FraudCheckStatus.PASS
        assert results[0].risk_score == 0

    def test_empty_history_passes(self):
        results = detect_duplicate_manipulation(make_certificate(), [], fingerprint="abc123")
        assert len(results) == 1
        assert results[0].status == FraudCheckStatus.PASS

    def test_history_not_modified(self):
        history = [
            make_history_entry(fingerprint="b", policy_number="QBEPL00000002"),
            make_history_entry(fingerprint="a", policy_number="QBEPL00000001"),
        ]
        snapshot = list(history)
        detect_duplicate_manipulation(make_certificate(), history, fingerprint="c")
        assert history == snapshot
