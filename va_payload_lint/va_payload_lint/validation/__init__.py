"""Schema validation of payloads.

Thin layer over :mod:`jsonschema`; it never interprets or rewrites the payload.
"""

from .engine import (
    ROOT_PATH_LABEL,
    ValidationEngine,
    ValidationResult,
    Violation,
    validate,
)

__all__ = [
    "ROOT_PATH_LABEL",
    "ValidationEngine",
    "ValidationResult",
    "Violation",
    "validate",
]
