"""Regulatory compliance notes for scope items and measurements."""

from scopeworks.compliance.standards import (
    MEASUREMENT_RULES,
    SCOPE_RULES,
    ComplianceRule,
    compliance_notes,
    measurement_notes,
    resolve_jurisdiction,
)

__all__ = [
    "MEASUREMENT_RULES",
    "SCOPE_RULES",
    "ComplianceRule",
    "compliance_notes",
    "measurement_notes",
    "resolve_jurisdiction",
]
