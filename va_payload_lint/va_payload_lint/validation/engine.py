# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""JSON Schema validation of payloads.

Validation itself is delegated to :mod:`jsonschema`. This module compiles a
schema once, runs it over a payload and converts every reported error into a
:class:`Violation` located by a JSON Pointer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from jsonschema import Draft4Validator, FormatChecker
from jsonschema.exceptions import SchemaError, ValidationError
from jsonschema.validators import validator_for

from ..exceptions import SchemaCompileFailed

logger = logging.getLogger(__name__)


JsonPointer = str

ROOT_PATH_LABEL = "(root)"


@dataclass(frozen=True)
class Violation:
    path: JsonPointer
    message: str
    keyword: Optional[str] = None
    params: Optional[Mapping[str, Any]] = None

    @property
    def display_path(self) -> str:
        return self.path or ROOT_PATH_LABEL


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    violations: Tuple[Violation, ...] = ()


def _jp_escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def _error_pointer(error: ValidationError) -> JsonPointer:
    if not error.absolute_path:
        return ""
    return "/" + "/".join(_jp_escape(str(p)) for p in error.absolute_path)


def _is_subschema(value: Any) -> bool:
    if isinstance(value, dict):
        return True
    return isinstance(value, list) and any(isinstance(v, dict) for v in value)


def _error_params(error: ValidationError) -> Optional[Dict[str, Any]]:
    # Keywords whose value is itself a schema (anyOf, items, ...) are left out;
    # the nested errors already describe the constraint.
    if not isinstance(error.validator, str) or _is_subschema(error.validator_value):
        return None
    return {error.validator: error.validator_value}


def _to_violation(error: ValidationError) -> Violation:
    return Violation(
        path=_error_pointer(error),
        message=error.message,
        keyword=error.validator if isinstance(error.validator, str) else None,
        params=_error_params(error),
    )


class ValidationEngine:
    """Compile a JSON Schema and check payloads against it.

    Args:
        collect_all: Report every violation in the document. When False the
            engine stops at the first violation it finds.
        default_validator: Validator class used when the schema does not
            declare ``$schema``.
        check_formats: Enable ``format`` assertions such as ``date``.
    """

    def __init__(
        self,
        *,
        collect_all: bool = True,
        default_validator: type = Draft4Validator,
        check_formats: bool = True,
    ):
        self.collect_all = collect_all
        self.default_validator = default_validator
        self.check_formats = check_formats
        self._validator = None

    @property
    def compiled(self) -> bool:
        return self._validator is not None

    def compile(self, schema: Any) -> "ValidationEngine":
        """Compile the schema.

        Raises:
            SchemaCompileFailed: If the schema is not a valid JSON Schema document
        """
        if not isinstance(schema, (dict, bool)):
            raise SchemaCompileFailed(
                f"Schema must be a JSON object, got {type(schema).__name__}"
            )

        cls = validator_for(schema, default=self.default_validator)
        try:
            cls.check_schema(schema)
        except SchemaError as e:
            location = "/".join(str(p) for p in e.absolute_schema_path)
            raise SchemaCompileFailed(
                f"Invalid JSON Schema ({location or 'root'}): {e.message}"
            ) from e

        # FormatChecker() carries every registered format, independent of the draft
        format_checker = FormatChecker() if self.check_formats else None
        self._validator = cls(schema, format_checker=format_checker)
        logger.debug(f"Compiled schema with {cls.__name__}")
        return self

    def validate(self, payload: Any) -> ValidationResult:
        """Validate a payload against the compiled schema.

        Returns:
            ValidationResult listing violations in the order jsonschema reports them
        """
        if self._validator is None:
            raise RuntimeError("compile() must be called before validate()")

        violations: List[Violation] = []
        for error in self._validator.iter_errors(payload):
            violations.append(_to_violation(error))
            if not self.collect_all:
                break

        return ValidationResult(valid=not violations, violations=tuple(violations))


def validate(schema: Any, payload: Any, *, collect_all: bool = True) -> ValidationResult:
    """Compile ``schema`` and validate ``payload`` against it in one call."""
    return ValidationEngine(collect_all=collect_all).compile(schema).validate(payload)
