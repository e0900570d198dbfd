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

"""Linter package for JSON payload validation."""

from typing import Any, Dict

from ..config import RunOptions
from ..validation import ValidationEngine
from .key_case_linter import KeyCaseDetector, KeyCaseLinter, key_case_mismatch
from .report import RunReport

__all__ = ['lint_payload', 'RunReport', 'KeyCaseDetector', 'KeyCaseLinter', 'key_case_mismatch']


def lint_payload(payload: Any, schema: Dict[str, Any], options: RunOptions) -> RunReport:
    """Validate a parsed payload and scan its key casing.

    Args:
        payload: Parsed JSON payload
        schema: JSON Schema document
        options: Run configuration

    Returns:
        RunReport with the validation result and any warnings

    Raises:
        SchemaCompileFailed: If the schema cannot be compiled
    """
    report = RunReport(options.json_path)

    engine = ValidationEngine(collect_all=True).compile(schema)
    report.result = engine.validate(payload)

    KeyCaseLinter(options.expect_case, options.key_scan_limit).lint(payload, report)

    return report
