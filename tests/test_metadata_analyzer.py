"""
Tests for the metadata analyzer.
"""
from datetime import datetime, timedelta, timezone

import pytest

from cocguard.engine import (
    analyze_metadata,
    check_modification,
    check_software,
    modification_score,
)
from cocguard.models import DocumentMetadata, FraudCheckStatus, FraudCheckType

from tests.conftest import make_metadata


CREATED = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


class TestModificationCheck:
    """Creation vs. modification timestamps."""

    def test_unmodified_document_passes(self):
        """Equal timestamps pass with score 0."""
        result = check_modification(make_metadata(CREATED, CREATED))
        assert result.check_type == FraudCheckType.METADATA_MODIFICATION
        assert result.status == FraudCheckStatus.PASS
        assert result.risk_score == 0

    def test_two_week_gap_warns(self):
        """A 14-day gap is a clear but sub-critical warning."""
        result = check_modification(make_metadata(CREATED, CREATED + timedelta(days=14)))
        assert result.status == FraudCheckStatus.WARNING
        assert 14 <= result.risk_score <= 20
        assert result.evidence is not None
        assert "Created:" in result.evidence and "Modified:" in result.evidence

    def test_year_gap_capped(self):
        """A 365-day gap saturates at 60."""
        result = check_modification(make_metadata(CREATED, CREATED + timedelta(days=365)))
        assert result.status == FraudCheckStatus.WARNING
        assert result.risk_score == 60

    def test_small_gap_still_warns(self):
        """Any non-zero gap is a warning."""
        result = check_modification(make_metadata(CREATED, CREATED + timedelta(minutes=5)))
        assert result.status == FraudCheckStatus.WARNING
        assert result.risk_score > 0

    def test_modification_before_creation_uses_absolute_gap(self):
        """An inverted pair scores the same as the forward gap."""
        forward = check_modification(make_metadata(CREATED, CREATED + timedelta(days=10)))
        backward = check_modification(make_metadata(CREATED + timedelta(days=10), CREATED))
        assert backward.status == FraudCheckStatus.WARNING
        assert backward.risk_score == forward.risk_score
        assert "precedes" in backward.details

    def test_missing_timestamp_is_info(self):
        """Incomplete timestamps yield an info result with no score."""
        metadata = DocumentMetadata(creation_date=CREATED, producer="Microsoft Word")
        result = check_modification(metadata)
        assert result.status == FraudCheckStatus.INFO
        assert result.risk_score == 0

    def test_naive_and_aware_timestamps_compare(self):
        """Naive timestamps are read as UTC."""
        naive = datetime(2024, 1, 1, 9, 0)
        result = check_modification(make_metadata(CREATED, naive))
        assert result.status == FraudCheckStatus.PASS


class TestModificationScore:
    """Gap-to-score mapping."""

    def test_monotonic_and_capped(self):
        """Scores never decrease with the gap and never exceed 60."""
        scores = [modification_score(days) for days in range(0, 400, 7)]
        assert scores == sorted(scores)
        assert max(scores) == 60

    def test_zero_gap(self):
        assert modification_score(0) == 0


class TestSoftwareCheck:
    """Producer/creator classification."""

    def test_acrobat_passes(self):
        """Adobe Acrobat is a recognized generator."""
        result = check_software(make_metadata(producer="Adobe Acrobat Pro", creator=None))
        assert result.check_type == FraudCheckType.METADATA_SOFTWARE
        assert result.status == FraudCheckStatus.PASS
        assert result.risk_score == 0

    def test_photoshop_fails(self):
        """Photoshop in the producer chain fails with 70."""
        result = check_software(make_metadata(producer="Adobe Photoshop CC 2024", creator=None))
        assert result.status == FraudCheckStatus.FAIL
        assert result.risk_score == 70
        assert "Photoshop" in result.evidence

    def test_gimp_creator_fails(self):
        """A raster editor as creator fails even with a trusted producer."""
        result = check_software(make_metadata(producer="Adobe PDF Library", creator="GIMP 2.10"))
        assert result.status == FraudCheckStatus.FAIL

    def test_unknown_software_warns(self):
        """Unrecognized tooling warns with 30."""
        result = check_software(make_metadata(producer="Unknown PDF Creator", creator=None))
        assert result.status == FraudCheckStatus.WARNING
        assert result.risk_score == 30

    def test_sap_passes(self):
        """SAP Crystal Reports is recognized."""
        result = check_software(make_metadata(producer="SAP Crystal Reports", creator="SAP"))
        assert result.status == FraudCheckStatus.PASS

    def test_case_insensitive(self):
        result = check_software(make_metadata(producer="MICROSOFT® WORD FOR MICROSOFT 365", creator=None))
        assert result.status == FraudCheckStatus.PASS

    def test_no_software_recorded_warns(self):
        """Empty producer and creator are unrecognized."""
        result = check_software(DocumentMetadata(creation_date=CREATED, modification_date=CREATED))
        assert result.status == FraudCheckStatus.WARNING
        assert result.risk_score == 30


class TestAnalyzeMetadata:
    """Both sub-checks together."""

    def test_no_metadata_skips_both(self):
        assert analyze_metadata(None) == []

    def test_one_result_per_sub_check(self):
        results = analyze_metadata(make_metadata())
        assert [r.check_type for r in results] == [
            FraudCheckType.METADATA_MODIFICATION,
            FraudCheckType.METADATA_SOFTWARE,
        ]

    @pytest.mark.parametrize("producer", ["Pixlr X", "Canva", "Paint.NET 5.0"])
    def test_image_editors_fail(self, producer):
        results = analyze_metadata(make_metadata(producer=producer, creator=None))
        assert results[1].status == FraudCheckStatus.FAIL
