"""
CocGuard Checksum Validator

Validates Australian Business Numbers with the weighted modulus-89
algorithm:

1. Strip all whitespace; exactly 11 ASCII digits must remain
2. Subtract 1 from the first digit
3. Multiply each digit by its weight (10, 1, 3, 5, ..., 19)
4. The identifier is valid iff the weighted sum is divisible by 89

Invalid input is a normal outcome here: validation never raises.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..canon import normalize_identifier
from ..models import IdentifierLookup


ABN_WEIGHTS = (10, 1, 3, 5, 7, 9, 11, 13, 15, 17, 19)
ABN_LENGTH = 11
ABN_MODULUS = 89

ERROR_INVALID_LENGTH = "ABN must be exactly 11 digits"
ERROR_INVALID_CHECKSUM = "ABN checksum validation failed - invalid ABN"

_ASCII_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class ChecksumResult:
    """Outcome of a checksum validation."""
    valid: bool
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        result: dict[str, Any] = {"valid": self.valid}
        if self.error:
            result["error"] = self.error
        return result


def validate_abn_checksum(value: Optional[str]) -> ChecksumResult:
    """
    Validate an ABN.

    Example:
        >>> validate_abn_checksum("51 824 753 556").valid
        True
        >>> validate_abn_checksum("12345678901").error
        'ABN checksum validation failed - invalid ABN'
    """
    normalized = normalize_identifier(value)

    if len(normalized) != ABN_LENGTH or not set(normalized) <= _ASCII_DIGITS:
        return ChecksumResult(valid=False, error=ERROR_INVALID_LENGTH)

    digits = [int(ch) for ch in normalized]
    digits[0] -= 1

    total = sum(digit * weight for digit, weight in zip(digits, ABN_WEIGHTS))
    if total % ABN_MODULUS != 0:
        return ChecksumResult(valid=False, error=ERROR_INVALID_CHECKSUM)

    return ChecksumResult(valid=True)


def is_valid_abn(value: Optional[str]) -> bool:
    """Check if an ABN passes validation."""
    return validate_abn_checksum(value).valid


def format_abn(value: Optional[str]) -> str:
    """
    Format an ABN in the conventional 2-3-3-3 grouping.

    Values that are not 11 digits are returned normalized but ungrouped.
    """
    normalized = normalize_identifier(value)
    if len(normalized) != ABN_LENGTH:
        return normalized
    return f"{normalized[:2]} {normalized[2:5]} {normalized[5:8]} {normalized[8:]}"


def lookup_identifier(
    abn: Optional[str],
    registry: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> IdentifierLookup:
    """
    Validate an ABN and look it up in a business register snapshot.

    The register is supplied by the caller, keyed by normalized ABN,
    with "entity_name" and "status" entries per record. Invalid
    identifiers are never looked up.

    Args:
        abn: Identifier as printed on the certificate
        registry: Register snapshot

    Returns:
        IdentifierLookup with checksum validity and any register data
    """
    normalized = normalize_identifier(abn)
    checksum = validate_abn_checksum(normalized)
    result = IdentifierLookup(abn=normalized, valid=checksum.valid, error=checksum.error)

    if not checksum.valid or not registry:
        return result

    record = registry.get(normalized)
    if record is None:
        return result

    result.entity_name = record.get("entity_name")
    result.status = record.get("status")
    return result
