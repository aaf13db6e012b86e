"""
CocGuard Rule Packs

Schema validation and loading of the lookup tables the engine consults.

Usage:
    from cocguard.rules import default_rule_tables, load_rule_pack

    tables = default_rule_tables()
    custom = load_rule_pack("path/to/pack.yaml")
"""
from __future__ import annotations

from .loader import (
    DEFAULT_PACK_PATH,
    InsurerTemplate,
    RulePackLoader,
    RuleTables,
    Thresholds,
    default_rule_tables,
    load_rule_pack,
    load_rule_pack_from_string,
    resolve_tables,
)
from .schema import (
    SCHEMA_VERSION,
    InsurerTemplateSchema,
    RulePackSchema,
    SoftwareListsSchema,
    ThresholdsSchema,
    check_schema_version,
    validate_rule_pack,
)


__all__ = [
    # Loader
    "DEFAULT_PACK_PATH",
    "InsurerTemplate",
    "RulePackLoader",
    "RuleTables",
    "Thresholds",
    "default_rule_tables",
    "load_rule_pack",
    "load_rule_pack_from_string",
    "resolve_tables",
    # Schema
    "SCHEMA_VERSION",
    "InsurerTemplateSchema",
    "RulePackSchema",
    "SoftwareListsSchema",
    "ThresholdsSchema",
    "check_schema_version",
    "validate_rule_pack",
]
