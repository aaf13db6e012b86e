"""
CocGuard Rule Pack Schemas

Pydantic models for validating rule pack YAML/JSON files.

A rule pack carries every lookup table the engine consults: insurer
document templates, the licensed-insurer register, authoring software
allow/deny lists, minimum recommended limits and scoring thresholds.
The schemas map to the frozen RuleTables dataclasses in
cocguard.rules.loader.

Schema versioning:
- schema_version field tracks breaking changes
- Loaders should check version compatibility
"""
from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator


# =============================================================================
# Schema Version
# =============================================================================

SCHEMA_VERSION = "1.0.0"


# =============================================================================
# Enums as Literals (for YAML validation)
# =============================================================================

CoverageTypeValue = Literal[
    "public_liability", "products_liability", "workers_comp",
    "professional_indemnity", "motor_vehicle", "contract_works",
]


# =============================================================================
# Insurer Templates
# =============================================================================

class InsurerTemplateSchema(BaseModel):
    """Schema for one insurer's certificate template."""
    key: str = Field(..., description="Lower-case substring matched against the insurer name")
    name: str = Field(..., description="Display name")
    policy_number_pattern: str = Field(..., description="Regex a genuine policy number matches")
    expected_elements: list[str] = Field(
        default_factory=lambda: ["ABN", "Policy Number", "Period of Insurance", "Insured"],
        description="Structural elements the insurer's certificate always shows",
    )

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys are matched against lower-cased names."""
        if not v.strip():
            raise ValueError("Insurer key must not be empty")
        return v.strip().lower()

    @field_validator("policy_number_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Reject patterns that do not compile."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid policy number pattern {v!r}: {e}")
        return v


# =============================================================================
# Software Lists
# =============================================================================

class SoftwareListsSchema(BaseModel):
    """Schema for authoring software classification lists."""
    trusted: list[str] = Field(
        default_factory=list,
        description="Lower-case substrings of known document generators",
    )
    suspicious: list[str] = Field(
        default_factory=list,
        description="Lower-case substrings of raster/image editors",
    )

    @field_validator("trusted", "suspicious")
    @classmethod
    def lower_case(cls, v: list[str]) -> list[str]:
        """Entries are matched case-insensitively."""
        return [item.strip().lower() for item in v if item.strip()]


# =============================================================================
# Thresholds
# =============================================================================

class RiskLevelThresholdsSchema(BaseModel):
    """Score floors for each graded risk level."""
    critical: int = Field(80, ge=0, le=100)
    high: int = Field(60, ge=0, le=100)
    medium: int = Field(30, ge=0, le=100)

    @model_validator(mode="after")
    def validate_order(self) -> "RiskLevelThresholdsSchema":
        """Floors must be strictly descending."""
        if not self.critical > self.high > self.medium:
            raise ValueError("Risk level thresholds must satisfy critical > high > medium")
        return self


class ThresholdsSchema(BaseModel):
    """Schema for numeric thresholds used by the rules."""
    low_confidence: float = Field(0.70, ge=0.0, le=1.0, description="Below this, manual review")
    expiry_warning_days: int = Field(30, ge=0, description="Warn when expiry is this close")
    max_policy_days: int = Field(400, gt=0, description="Longer periods are unusual")
    min_policy_days: int = Field(30, gt=0, description="Shorter periods are unusual")
    risk_levels: RiskLevelThresholdsSchema = Field(default_factory=RiskLevelThresholdsSchema)
    free_warnings: int = Field(2, ge=0, description="Warnings tolerated before the bonus applies")
    warning_bonus: int = Field(10, ge=0, description="Score added per warning beyond free_warnings")
    block_fail_count: int = Field(2, ge=1, description="Fail count that blocks a document")

    model_config = {
        "extra": "forbid",
    }


# =============================================================================
# Rule Pack
# =============================================================================

class RulePackSchema(BaseModel):
    """
    Schema for a complete rule pack.

    Top-level structure of a rule pack YAML/JSON file.
    """
    schema_version: str = Field(SCHEMA_VERSION, description="Rule pack schema version")
    id: str = Field(..., description="Unique pack identifier")
    name: str = Field(..., description="Human-readable pack name")
    version: str = Field(..., description="Pack content version")
    jurisdiction: str = Field("AU", description="Jurisdiction the tables describe")

    insurer_templates: list[InsurerTemplateSchema] = Field(
        default_factory=list,
        description="Per-insurer certificate templates, matched in order",
    )
    licensed_insurers: list[str] = Field(
        default_factory=list,
        description="Register of licensed insurers (exact names)",
    )
    software: SoftwareListsSchema = Field(default_factory=SoftwareListsSchema)
    minimum_recommended_limits: dict[CoverageTypeValue, Decimal] = Field(
        default_factory=dict,
        description="Limits below which a liability coverage looks implausible",
    )
    thresholds: ThresholdsSchema = Field(default_factory=ThresholdsSchema)

    @model_validator(mode="after")
    def validate_unique_keys(self) -> "RulePackSchema":
        """Insurer keys must be unique."""
        seen: set[str] = set()
        for template in self.insurer_templates:
            if template.key in seen:
                raise ValueError(f"Duplicate insurer template key: {template.key}")
            seen.add(template.key)
        return self

    @field_validator("jurisdiction")
    @classmethod
    def validate_jurisdiction(cls, v: str) -> str:
        """Jurisdiction codes are upper-case."""
        return v.upper()

    model_config = {
        "extra": "forbid",  # Reject unknown fields
    }


# =============================================================================
# Validation Helpers
# =============================================================================

def validate_rule_pack(data: dict[str, Any]) -> RulePackSchema:
    """
    Validate a rule pack dictionary against the schema.

    Args:
        data: Dictionary loaded from YAML/JSON

    Returns:
        Validated RulePackSchema

    Raises:
        pydantic.ValidationError: If validation fails
    """
    return RulePackSchema.model_validate(data)


def check_schema_version(data: dict[str, Any]) -> bool:
    """
    Check if a rule pack's schema version is compatible.

    Only the major version has to match.
    """
    pack_version = str(data.get("schema_version", SCHEMA_VERSION))
    pack_major = pack_version.split(".")[0]
    current_major = SCHEMA_VERSION.split(".")[0]
    return pack_major == current_major
