"""
Schema-driven validation of config documents.

Checks the values currently in a document against the field definitions of a
schema. Validation is advisory: the editor reports issues but the lenient
parser and the save path never refuse a document because of them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .ini import ConfigDocument
from .schema import FieldSchema, FieldType, Schema, iter_fields

logger = logging.getLogger(__name__)

_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class ValidationSeverity(Enum):
    """Validation result severity levels."""
    ERROR = "error"          # Value the server cannot interpret
    WARNING = "warning"      # Accepted by the server but outside the expected range
    INFO = "info"            # Informational only


@dataclass
class ValidationIssue:
    """Represents a validation issue found in a document."""
    severity: ValidationSeverity
    message: str
    path: str  # "Section/Key"
    field: Optional[str] = None
    expected: Optional[str] = None
    actual: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of document validation."""
    is_valid: bool
    issues: List[ValidationIssue]

    @property
    def has_errors(self) -> bool:
        """True if any errors exist."""
        return any(issue.severity == ValidationSeverity.ERROR for issue in self.issues)

    @property
    def has_warnings(self) -> bool:
        """True if any warnings exist."""
        return any(issue.severity == ValidationSeverity.WARNING for issue in self.issues)

    def get_errors(self) -> List[ValidationIssue]:
        """Get all error-level issues."""
        return [issue for issue in self.issues if issue.severity == ValidationSeverity.ERROR]

    def get_warnings(self) -> List[ValidationIssue]:
        """Get all warning-level issues."""
        return [issue for issue in self.issues if issue.severity == ValidationSeverity.WARNING]


def _fmt(n: float) -> str:
    return f"{n:g}"


def validate_value(field: FieldSchema, value: str) -> List[ValidationIssue]:
    """Check a single value against its field definition.

    Empty values are never reported; the server falls back to its default.
    """
    issues: List[ValidationIssue] = []
    path = f"{field.section}/{field.key}"
    if value == "":
        return issues

    if field.type == FieldType.NUMBER:
        try:
            number = float(value)
        except ValueError:
            issues.append(ValidationIssue(
                ValidationSeverity.ERROR, f"{field.label} must be a number", path,
                field=field.key, expected="number", actual=value,
            ))
            return issues
        if field.min is not None and number < field.min:
            issues.append(ValidationIssue(
                ValidationSeverity.WARNING, f"{field.label} is below the minimum of {_fmt(field.min)}", path,
                field=field.key, expected=f">= {_fmt(field.min)}", actual=value,
            ))
        if field.max is not None and number > field.max:
            issues.append(ValidationIssue(
                ValidationSeverity.WARNING, f"{field.label} is above the maximum of {_fmt(field.max)}", path,
                field=field.key, expected=f"<= {_fmt(field.max)}", actual=value,
            ))

    elif field.type == FieldType.BOOLEAN:
        if value.lower() not in ("true", "false"):
            issues.append(ValidationIssue(
                ValidationSeverity.ERROR, f"{field.label} must be True or False", path,
                field=field.key, expected="True|False", actual=value,
            ))

    elif field.type == FieldType.SELECT:
        allowed = [opt.value for opt in field.options]
        if allowed and value not in allowed:
            issues.append(ValidationIssue(
                ValidationSeverity.WARNING, f"{field.label} is not one of the known options", path,
                field=field.key, expected="|".join(allowed), actual=value,
            ))

    elif field.type == FieldType.COLOR:
        if not _COLOR_RE.match(value):
            issues.append(ValidationIssue(
                ValidationSeverity.WARNING, f"{field.label} is not a #RRGGBB color", path,
                field=field.key, expected="#RRGGBB", actual=value,
            ))

    return issues


def validate_document(doc: ConfigDocument, schema: Optional[Schema]) -> ValidationResult:
    """Validate every schema field present in ``doc``.

    Keys the schema does not describe, and schema fields missing from the
    document, are not reported.
    """
    issues: List[ValidationIssue] = []
    if not schema:
        return ValidationResult(True, issues)

    seen = set()
    for field in iter_fields(schema):
        slot = (field.section, field.key)
        # The same field can appear in several groups
        if slot in seen:
            continue
        seen.add(slot)
        value = doc.get(field.section, {}).get(field.key)
        if value is None:
            continue
        issues.extend(validate_value(field, value))

    result = ValidationResult(not any(i.severity == ValidationSeverity.ERROR for i in issues), issues)
    if issues:
        logger.debug("Validation found %d issue(s), %d error(s)", len(issues), len(result.get_errors()))
    return result
