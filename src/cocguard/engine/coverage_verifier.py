"""
CocGuard Coverage Requirement Verifier

Checks a certificate's coverage terms against contractual insurance
requirements.

Cross-cutting checks (run once):
- policy_validity: expired (fail) or expiring soon (warning)
- project_coverage: policy ends before the project does
- abn_verification: insured ABN differs from the expected counterparty
- insurer_licensing: insurer not on the licensed register

Per requirement:
- coverage present and limit at least the minimum
- excess no higher than the maximum
- required endorsements present
- principal naming tier sufficient
- workers' compensation scheme matches the project jurisdiction

Status: fail on any failed check or critical deficiency, else review on
any warning or low extraction confidence, else pass.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence, Union

from ..canon import normalize_identifier
from ..exceptions import CertificateRequiredError
from ..models import (
    CheckStatus,
    CoverageDeficiency,
    CoverageType,
    DeficiencySeverity,
    DeficiencyType,
    ExtractedCertificate,
    ExtractedCoverage,
    InsuranceRequirement,
    PrincipalNaming,
    VerificationCheck,
    VerificationResult,
    VerificationStatus,
    coverage_type_key,
)
from ..rules import RuleTables, resolve_tables
from .formatting import format_coverage_type, format_money

logger = logging.getLogger(__name__)


PRINCIPAL_NAMING_LABELS = {
    PrincipalNaming.PRINCIPAL_NAMED: "Principal Named",
    PrincipalNaming.INTERESTED_PARTY: "Interested Party",
}


def _as_date(value: Union[date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _add(
    result: VerificationResult,
    check_type: str,
    description: str,
    status: CheckStatus,
    details: str,
    deficiency: Optional[CoverageDeficiency] = None,
) -> None:
    result.checks.append(VerificationCheck(check_type, description, status, details))
    if deficiency is not None:
        result.deficiencies.append(deficiency)


# =============================================================================
# Coverage Verifier
# =============================================================================

@dataclass
class CoverageVerifier:
    """
    Verifies certificates against insurance requirements.

    Usage:
        verifier = CoverageVerifier()
        result = verifier.verify(
            certificate,
            requirements,
            project_end_date=date(2025, 6, 30),
            project_jurisdiction="NSW",
            now=date.today(),
        )

        for deficiency in result.deficiencies:
            print(deficiency.severity.value, deficiency.description)
    """

    tables: Optional[RuleTables] = None

    def verify(
        self,
        certificate: ExtractedCertificate,
        requirements: Optional[Sequence[InsuranceRequirement]] = None,
        project_end_date: Optional[date] = None,
        project_jurisdiction: Optional[str] = None,
        counterparty_id: Optional[str] = None,
        now: Optional[Union[date, datetime]] = None,
    ) -> VerificationResult:
        """
        Verify a certificate.

        Args:
            certificate: Extracted certificate
            requirements: Contractual requirements (never modified); None
                skips the per-coverage checks
            project_end_date: Contractual project completion date
            project_jurisdiction: State the project is located in
            counterparty_id: ABN the certificate must belong to
            now: Evaluation date (defaults to today)

        Returns:
            VerificationResult with checks, deficiencies and status

        Raises:
            CertificateRequiredError: If no certificate was supplied
        """
        if certificate is None:
            raise CertificateRequiredError(message="Compliance verification requires an extracted certificate")

        tables = resolve_tables(self.tables)
        today = _as_date(now) if now is not None else date.today()

        result = VerificationResult(
            status=VerificationStatus.PASS,
            confidence_score=certificate.extraction_confidence,
        )

        self._check_policy_validity(certificate, today, tables, result)
        if project_end_date is not None:
            self._check_project_coverage(certificate, _as_date(project_end_date), result)
        if counterparty_id:
            self._check_counterparty(certificate, counterparty_id, result)
        self._check_insurer_licensing(certificate, tables, result)

        for requirement in requirements or ():
            self._check_requirement(certificate, requirement, project_jurisdiction, result)

        result.status = self._determine_status(result, tables)
        logger.debug(
            "Compliance %s: %d checks, %d deficiencies",
            result.status.value,
            len(result.checks),
            len(result.deficiencies),
        )
        return result

    # -------------------------------------------------------------------------
    # Cross-cutting checks
    # -------------------------------------------------------------------------

    def _check_policy_validity(
        self,
        certificate: ExtractedCertificate,
        today: date,
        tables: RuleTables,
        result: VerificationResult,
    ) -> None:
        """Expired, expiring soon, or valid."""
        end = certificate.period_end
        description = "Policy validity period"

        if end is None:
            _add(result, "policy_validity", description, CheckStatus.WARNING,
                 "Policy end date not found on certificate")
            return

        days_left = (end - today).days
        if end < today:
            _add(
                result, "policy_validity", description, CheckStatus.FAIL,
                "Policy has expired",
                CoverageDeficiency(
                    type=DeficiencyType.EXPIRED_POLICY,
                    severity=DeficiencySeverity.CRITICAL,
                    description="Certificate of Currency has expired",
                    required_value="Valid policy",
                    actual_value=f"Expired on {end.isoformat()}",
                ),
            )
        elif days_left <= tables.thresholds.expiry_warning_days:
            if days_left == 0:
                details = "Policy expires today"
            elif days_left == 1:
                details = "Policy expires in 1 day"
            else:
                details = f"Policy expires in {days_left} days"
            _add(result, "policy_validity", description, CheckStatus.WARNING, details)
        else:
            _add(result, "policy_validity", description, CheckStatus.PASS,
                 f"Policy valid until {end.isoformat()}")

    def _check_project_coverage(
        self,
        certificate: ExtractedCertificate,
        project_end: date,
        result: VerificationResult,
    ) -> None:
        """Policy must run until the project ends."""
        end = certificate.period_end
        description = "Project period coverage"

        if end is None:
            _add(result, "project_coverage", description, CheckStatus.WARNING,
                 "Policy end date not found; project coverage cannot be confirmed")
            return

        if end < project_end:
            _add(
                result, "project_coverage", description, CheckStatus.FAIL,
                f"Policy expires before project end date ({project_end.isoformat()})",
                CoverageDeficiency(
                    type=DeficiencyType.POLICY_EXPIRES_BEFORE_PROJECT,
                    severity=DeficiencySeverity.CRITICAL,
                    description="Policy expires before project completion date",
                    required_value=f"Valid until {project_end.isoformat()}",
                    actual_value=f"Expires {end.isoformat()}",
                ),
            )
        else:
            _add(result, "project_coverage", description, CheckStatus.PASS,
                 f"Policy covers project period (ends {project_end.isoformat()})")

    def _check_counterparty(
        self,
        certificate: ExtractedCertificate,
        counterparty_id: str,
        result: VerificationResult,
    ) -> None:
        """Insured ABN must be the expected counterparty's."""
        actual = normalize_identifier(certificate.insured_party_abn)
        expected = normalize_identifier(counterparty_id)
        description = "ABN verification"

        if actual != expected:
            _add(
                result, "abn_verification", description, CheckStatus.FAIL,
                f"ABN {actual or 'not found'} does not match subcontractor ABN {expected}",
                CoverageDeficiency(
                    type=DeficiencyType.ABN_MISMATCH,
                    severity=DeficiencySeverity.CRITICAL,
                    description="Certificate ABN does not match subcontractor ABN",
                    required_value=expected,
                    actual_value=actual or "Not found",
                ),
            )
        else:
            _add(result, "abn_verification", description, CheckStatus.PASS,
                 f"ABN {actual} matches subcontractor record")

    def _check_insurer_licensing(
        self,
        certificate: ExtractedCertificate,
        tables: RuleTables,
        result: VerificationResult,
    ) -> None:
        """Insurer must be on the licensed register."""
        insurer = certificate.insurer_name
        description = "Insurer licensing"

        if not tables.is_licensed_insurer(insurer):
            logger.warning("Insurer %r is not on the licensed register", insurer)
            _add(
                result, "insurer_licensing", description, CheckStatus.FAIL,
                f'Insurer "{insurer or "Unknown"}" is not on the licensed insurers register',
                CoverageDeficiency(
                    type=DeficiencyType.UNLICENSED_INSURER,
                    severity=DeficiencySeverity.CRITICAL,
                    description="Insurer is not licensed in Australia",
                    required_value="Licensed insurer",
                    actual_value=insurer or "Unknown",
                ),
            )
        else:
            _add(result, "insurer_licensing", description, CheckStatus.PASS,
                 f'Insurer "{insurer}" is licensed')

    # -------------------------------------------------------------------------
    # Per-requirement checks
    # -------------------------------------------------------------------------

    def _check_requirement(
        self,
        certificate: ExtractedCertificate,
        requirement: InsuranceRequirement,
        project_jurisdiction: Optional[str],
        result: VerificationResult,
    ) -> None:
        """Check one requirement against the matching coverage."""
        coverage_type = coverage_type_key(requirement.coverage_type)
        label = format_coverage_type(coverage_type)
        coverage = certificate.get_coverage(coverage_type)

        if coverage is None:
            _add(
                result, f"coverage_{coverage_type}", f"{label} coverage", CheckStatus.FAIL,
                "Coverage not found in certificate",
                CoverageDeficiency(
                    type=DeficiencyType.MISSING_COVERAGE,
                    severity=DeficiencySeverity.CRITICAL,
                    description=f"{label} coverage is required but not present",
                    required_value=(
                        format_money(requirement.minimum_limit)
                        if requirement.minimum_limit else "Required"
                    ),
                    actual_value="Not found",
                ),
            )
            return

        self._check_limit(coverage, requirement, label, result)
        self._check_excess(coverage, requirement, label, result)
        self._check_endorsements(coverage, requirement, label, result)
        self._check_principal_naming(coverage, requirement, label, result)

        if coverage_type == CoverageType.WORKERS_COMP.value and project_jurisdiction:
            self._check_jurisdiction(coverage, project_jurisdiction, result)

    def _check_limit(
        self,
        coverage: ExtractedCoverage,
        requirement: InsuranceRequirement,
        label: str,
        result: VerificationResult,
    ) -> None:
        check_type = f"coverage_{coverage_type_key(coverage.coverage_type)}"
        minimum = requirement.minimum_limit

        if minimum and coverage.limit < minimum:
            _add(
                result, check_type, f"{label} limit", CheckStatus.FAIL,
                f"Limit {format_money(coverage.limit)} is below required {format_money(minimum)}",
                CoverageDeficiency(
                    type=DeficiencyType.INSUFFICIENT_LIMIT,
                    severity=DeficiencySeverity.MAJOR,
                    description=f"{label} limit is below minimum requirement",
                    required_value=format_money(minimum),
                    actual_value=format_money(coverage.limit),
                ),
            )
        else:
            _add(result, check_type, f"{label} limit", CheckStatus.PASS,
                 f"Limit {format_money(coverage.limit)} meets minimum requirement")

    def _check_excess(
        self,
        coverage: ExtractedCoverage,
        requirement: InsuranceRequirement,
        label: str,
        result: VerificationResult,
    ) -> None:
        maximum = requirement.maximum_excess
        if maximum is None:
            return

        check_type = f"excess_{coverage_type_key(coverage.coverage_type)}"
        if coverage.excess > maximum:
            _add(
                result, check_type, f"{label} excess", CheckStatus.FAIL,
                f"Excess {format_money(coverage.excess)} exceeds maximum {format_money(maximum)}",
                CoverageDeficiency(
                    type=DeficiencyType.EXCESS_TOO_HIGH,
                    severity=DeficiencySeverity.MINOR,
                    description=f"{label} excess exceeds maximum allowed",
                    required_value=f"Max {format_money(maximum)}",
                    actual_value=format_money(coverage.excess),
                ),
            )
        else:
            _add(result, check_type, f"{label} excess", CheckStatus.PASS,
                 f"Excess {format_money(coverage.excess)} within maximum {format_money(maximum)}")

    def _check_endorsements(
        self,
        coverage: ExtractedCoverage,
        requirement: InsuranceRequirement,
        label: str,
        result: VerificationResult,
    ) -> None:
        """Principal indemnity, cross liability and waiver of subrogation."""
        endorsements = (
            ("principal_indemnity", "principal indemnity", "Principal indemnity extension",
             requirement.principal_indemnity_required, coverage.principal_indemnity),
            ("cross_liability", "cross liability", "Cross liability extension",
             requirement.cross_liability_required, coverage.cross_liability),
            ("waiver_of_subrogation", "waiver of subrogation", "Waiver of subrogation",
             requirement.waiver_of_subrogation_required, coverage.waiver_of_subrogation),
        )

        for key, name, title, required, present in endorsements:
            if not required:
                continue
            check_type = f"{key}_{coverage_type_key(coverage.coverage_type)}"
            if present is True:
                _add(result, check_type, f"{label} {name}", CheckStatus.PASS,
                     f"{title} present")
                continue
            _add(
                result, check_type, f"{label} {name}", CheckStatus.FAIL,
                f"{title} required but not present",
                CoverageDeficiency(
                    type=DeficiencyType.MISSING_ENDORSEMENT,
                    severity=DeficiencySeverity.MAJOR,
                    description=f"{title} required for {label}",
                    required_value="Yes",
                    actual_value="No" if present is False else "Not stated",
                ),
            )

    def _check_principal_naming(
        self,
        coverage: ExtractedCoverage,
        requirement: InsuranceRequirement,
        label: str,
        result: VerificationResult,
    ) -> None:
        """
        Compare principal naming tiers.

        Interested party status grants notice rights only, so it never
        satisfies a principal_named requirement. Principal naming does
        satisfy an interested_party requirement.
        """
        required = requirement.principal_naming_required
        if required is None:
            return

        check_type = f"principal_naming_{coverage_type_key(coverage.coverage_type)}"
        description = f"{label} principal naming"
        actual = coverage.principal_naming
        strict = required == PrincipalNaming.PRINCIPAL_NAMED
        wanted = "Principal naming" if strict else "Interested party notation"

        if actual is None:
            _add(
                result, check_type, description, CheckStatus.FAIL,
                f"{wanted} required but not found",
                CoverageDeficiency(
                    type=DeficiencyType.MISSING_PRINCIPAL_NAMING,
                    severity=DeficiencySeverity.CRITICAL if strict else DeficiencySeverity.MAJOR,
                    description=f"{wanted} required for {label}",
                    required_value=PRINCIPAL_NAMING_LABELS[required],
                    actual_value="Not found",
                ),
            )
        elif strict and actual == PrincipalNaming.INTERESTED_PARTY:
            _add(
                result, check_type, description, CheckStatus.FAIL,
                "Principal naming required but only Interested Party notation found (weaker protection)",
                CoverageDeficiency(
                    type=DeficiencyType.INSUFFICIENT_PRINCIPAL_NAMING,
                    severity=DeficiencySeverity.MAJOR,
                    description=(
                        f"Principal naming required but only Interested Party notation "
                        f"found for {label}. Interested Party provides notification "
                        f"rights only, not full principal protection."
                    ),
                    required_value="Principal Named",
                    actual_value="Interested Party Only",
                ),
            )
        else:
            _add(result, check_type, description, CheckStatus.PASS,
                 f"{PRINCIPAL_NAMING_LABELS[actual]} - principal party identification verified")

    def _check_jurisdiction(
        self,
        coverage: ExtractedCoverage,
        project_jurisdiction: str,
        result: VerificationResult,
    ) -> None:
        """Workers' compensation scheme must be the project's state scheme."""
        description = "Workers' Compensation state coverage"
        scheme = (coverage.jurisdiction or "").strip().upper()
        project = project_jurisdiction.strip().upper()

        if not scheme:
            _add(result, "workers_comp_state", description, CheckStatus.WARNING,
                 f"WC scheme state not shown; project is in {project}")
        elif scheme != project:
            _add(
                result, "workers_comp_state", description, CheckStatus.FAIL,
                f"WC scheme is for {scheme} but project is in {project}",
                CoverageDeficiency(
                    type=DeficiencyType.STATE_MISMATCH,
                    severity=DeficiencySeverity.CRITICAL,
                    description="Workers' Compensation scheme does not cover project state",
                    required_value=f"{project} scheme",
                    actual_value=f"{scheme} scheme",
                ),
            )
        else:
            _add(result, "workers_comp_state", description, CheckStatus.PASS,
                 f"WC scheme ({scheme}) matches project state")

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def _determine_status(
        self,
        result: VerificationResult,
        tables: RuleTables,
    ) -> VerificationStatus:
        """Derive the overall status; may append a confidence_check entry."""
        if result.has_critical_deficiency or any(
            c.status == CheckStatus.FAIL for c in result.checks
        ):
            return VerificationStatus.FAIL

        low_confidence = result.confidence_score < tables.thresholds.low_confidence
        if low_confidence:
            _add(
                result, "confidence_check", "AI extraction confidence", CheckStatus.WARNING,
                f"Low confidence score ({result.confidence_score * 100:.0f}%) "
                f"- manual review recommended",
            )

        if low_confidence or any(c.status == CheckStatus.WARNING for c in result.checks):
            return VerificationStatus.REVIEW
        return VerificationStatus.PASS


# =============================================================================
# Convenience Functions
# =============================================================================

def evaluate_compliance(
    certificate: ExtractedCertificate,
    requirements: Optional[Sequence[InsuranceRequirement]] = None,
    project_end_date: Optional[date] = None,
    project_jurisdiction: Optional[str] = None,
    counterparty_id: Optional[str] = None,
    now: Optional[Union[date, datetime]] = None,
    tables: Optional[RuleTables] = None,
) -> VerificationResult:
    """
    Verify a certificate against requirements.

    Convenience function that creates a temporary verifier.
    """
    return CoverageVerifier(tables=tables).verify(
        certificate,
        requirements,
        project_end_date=project_end_date,
        project_jurisdiction=project_jurisdiction,
        counterparty_id=counterparty_id,
        now=now,
    )
