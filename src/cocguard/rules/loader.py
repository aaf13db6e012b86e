"""
CocGuard Rule Pack Loader

Loads and validates rule packs from YAML or JSON files.

Converts Pydantic schema models to frozen RuleTables dataclasses, the
read-only lookup tables every engine component consults.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import ValidationError

from ..exceptions import RulePackLoadError, RulePackValidationError, RulePackVersionMismatch
from ..models import CoverageType, SoftwareClass, coverage_type_key
from .schema import (
    SCHEMA_VERSION,
    InsurerTemplateSchema,
    RulePackSchema,
    check_schema_version,
    validate_rule_pack,
)

logger = logging.getLogger(__name__)

DEFAULT_PACK_PATH = Path(__file__).parent / "packs" / "au_default.yaml"


@lru_cache(maxsize=256)
def _compiled(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


# =============================================================================
# Rule Tables
# =============================================================================

@dataclass(frozen=True)
class InsurerTemplate:
    """
    Certificate template for one insurer.

    Attributes:
        key: Lower-case substring matched against the insurer name
        name: Display name
        policy_number_pattern: Regex a genuine policy number matches
        expected_elements: Structural elements the certificate always shows
    """
    key: str
    name: str
    policy_number_pattern: str
    expected_elements: tuple[str, ...] = ()

    def matches_insurer(self, insurer_name: str) -> bool:
        """Check if the insurer name contains this template's key."""
        return self.key in insurer_name.lower()

    def matches_policy_number(self, policy_number: str) -> bool:
        """Check if a policy number has this insurer's format."""
        return _compiled(self.policy_number_pattern).match(policy_number) is not None


@dataclass(frozen=True)
class Thresholds:
    """Numeric thresholds used by the rules."""
    low_confidence: float = 0.70
    expiry_warning_days: int = 30
    max_policy_days: int = 400
    min_policy_days: int = 30
    critical_risk: int = 80
    high_risk: int = 60
    medium_risk: int = 30
    free_warnings: int = 2
    warning_bonus: int = 10
    block_fail_count: int = 2


@dataclass(frozen=True)
class RuleTables:
    """
    Read-only lookup tables for one rule pack.

    Attributes:
        pack_id: Pack identifier
        version: Pack content version
        jurisdiction: Jurisdiction the tables describe
        insurer_templates: Templates, matched in order
        licensed_insurers: Register of licensed insurer names
        trusted_software: Lower-case substrings of known generators
        suspicious_software: Lower-case substrings of image editors
        minimum_recommended_limits: Per coverage type plausibility floor
        thresholds: Numeric thresholds
    """
    pack_id: str
    version: str
    jurisdiction: str = "AU"
    insurer_templates: tuple[InsurerTemplate, ...] = ()
    licensed_insurers: tuple[str, ...] = ()
    trusted_software: tuple[str, ...] = ()
    suspicious_software: tuple[str, ...] = ()
    minimum_recommended_limits: dict[str, Decimal] = field(default_factory=dict)
    thresholds: Thresholds = field(default_factory=Thresholds)

    def find_insurer_template(self, insurer_name: Optional[str]) -> Optional[InsurerTemplate]:
        """Get the first template whose key occurs in the insurer name."""
        if not insurer_name:
            return None
        for template in self.insurer_templates:
            if template.matches_insurer(insurer_name):
                return template
        return None

    def is_licensed_insurer(self, insurer_name: Optional[str]) -> bool:
        """Check the register for an exact, case-insensitive name match."""
        if not insurer_name:
            return False
        wanted = insurer_name.strip().lower()
        return any(name.lower() == wanted for name in self.licensed_insurers)

    def classify_software(self, software: Optional[str]) -> SoftwareClass:
        """
        Classify an authoring tool name.

        Suspicious entries win over trusted ones so that, for example,
        "Adobe Photoshop" is never trusted on the strength of "adobe".
        """
        if not software:
            return SoftwareClass.UNRECOGNIZED
        lowered = software.lower()
        if any(entry in lowered for entry in self.suspicious_software):
            return SoftwareClass.SUSPICIOUS
        if any(entry in lowered for entry in self.trusted_software):
            return SoftwareClass.TRUSTED
        return SoftwareClass.UNRECOGNIZED

    def minimum_recommended_limit(
        self, coverage_type: Union[str, CoverageType]
    ) -> Optional[Decimal]:
        """Get the plausibility floor for a coverage type, if it has one."""
        return self.minimum_recommended_limits.get(coverage_type_key(coverage_type))


# =============================================================================
# Schema Conversion
# =============================================================================

def _convert_insurer_template(schema: InsurerTemplateSchema) -> InsurerTemplate:
    """Convert InsurerTemplateSchema to InsurerTemplate."""
    return InsurerTemplate(
        key=schema.key,
        name=schema.name,
        policy_number_pattern=schema.policy_number_pattern,
        expected_elements=tuple(schema.expected_elements),
    )


def _convert_rule_pack(schema: RulePackSchema) -> RuleTables:
    """Convert RulePackSchema to RuleTables."""
    levels = schema.thresholds.risk_levels
    return RuleTables(
        pack_id=schema.id,
        version=schema.version,
        jurisdiction=schema.jurisdiction,
        insurer_templates=tuple(
            _convert_insurer_template(t) for t in schema.insurer_templates
        ),
        licensed_insurers=tuple(schema.licensed_insurers),
        trusted_software=tuple(schema.software.trusted),
        suspicious_software=tuple(schema.software.suspicious),
        minimum_recommended_limits={
            str(k): v for k, v in schema.minimum_recommended_limits.items()
        },
        thresholds=Thresholds(
            low_confidence=schema.thresholds.low_confidence,
            expiry_warning_days=schema.thresholds.expiry_warning_days,
            max_policy_days=schema.thresholds.max_policy_days,
            min_policy_days=schema.thresholds.min_policy_days,
            critical_risk=levels.critical,
            high_risk=levels.high,
            medium_risk=levels.medium,
            free_warnings=schema.thresholds.free_warnings,
            warning_bonus=schema.thresholds.warning_bonus,
            block_fail_count=schema.thresholds.block_fail_count,
        ),
    )


# =============================================================================
# Rule Pack Loader
# =============================================================================

class RulePackLoader:
    """
    Reads rule packs and turns them into RuleTables.

    Usage:
        loader = RulePackLoader()
        tables = loader.load("packs/nz_default.yaml")

        # Accept packs written for a newer major schema version
        tables = RulePackLoader(strict_version=False).load_data(data)
    """

    def __init__(self, strict_version: bool = True):
        """
        Args:
            strict_version: Reject packs whose major schema version differs
        """
        self.strict_version = strict_version

    def load(self, path: Union[str, Path]) -> RuleTables:
        """
        Read, validate and convert a rule pack file.

        JSON is chosen by the .json suffix; anything else is read as YAML.

        Raises:
            RulePackLoadError: The file is unreadable or not valid YAML/JSON
            RulePackValidationError: The content does not match the schema
            RulePackVersionMismatch: The schema version is unsupported
        """
        path = Path(path)
        try:
            data = self._read(path)
        except (OSError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise RulePackLoadError(
                message=f"Cannot read rule pack: {e}",
                details={"error": str(e)},
                source=str(path),
            )

        tables = self.load_data(data, source=str(path))
        logger.debug("Loaded rule pack %s v%s from %s", tables.pack_id, tables.version, path)
        return tables

    def load_data(self, data: Any, source: str = "<string>") -> RuleTables:
        """
        Validate and convert an already-parsed rule pack.

        Raises:
            RulePackValidationError: The content does not match the schema
            RulePackVersionMismatch: The schema version is unsupported
        """
        if not isinstance(data, dict):
            raise RulePackValidationError(
                message=f"Rule pack must be a mapping, got {type(data).__name__}",
                source=source,
            )

        if self.strict_version and not check_schema_version(data):
            declared = data.get("schema_version")
            raise RulePackVersionMismatch(
                message=f"Unsupported rule pack schema {declared} (supported: {SCHEMA_VERSION})",
                details={"declared": declared, "supported": SCHEMA_VERSION},
                source=source,
            )

        try:
            schema = validate_rule_pack(data)
        except ValidationError as e:
            raise RulePackValidationError(
                message=f"Rule pack has {e.error_count()} schema error(s)",
                details={"errors": e.errors(include_url=False)},
                source=source,
            )

        return _convert_rule_pack(schema)

    @staticmethod
    def _read(path: Path) -> Any:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)


# =============================================================================
# Convenience Functions
# =============================================================================

def load_rule_pack(path: Union[str, Path]) -> RuleTables:
    """
    Load a rule pack from a file.

    Convenience function that creates a temporary loader.
    """
    return RulePackLoader().load(path)


def load_rule_pack_from_string(content: str, format: str = "yaml") -> RuleTables:
    """
    Load a rule pack held in memory.

    Args:
        content: Pack text
        format: "yaml" (default) or "json"

    Raises:
        RulePackLoadError: The text is not valid YAML/JSON
        RulePackValidationError: The content does not match the schema
        RulePackVersionMismatch: The schema version is unsupported
    """
    parse = json.loads if format.lower() == "json" else yaml.safe_load
    try:
        data = parse(content)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise RulePackLoadError(
            message=f"Cannot parse {format} rule pack: {e}",
            details={"format": format, "error": str(e)},
        )
    return RulePackLoader().load_data(data)


@lru_cache(maxsize=1)
def default_rule_tables() -> RuleTables:
    """Get the bundled Australian rule pack, loaded once per process."""
    return load_rule_pack(DEFAULT_PACK_PATH)


def resolve_tables(tables: Optional[RuleTables]) -> RuleTables:
    """Return the given tables, or the bundled defaults when None."""
    return tables if tables is not None else default_rule_tables()
