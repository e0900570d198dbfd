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

"""Report rendering for the payload linter."""

import json
from typing import Any, Dict, List, Optional

from ..config import KeyCase
from ..validation import ValidationResult

REPORT_TITLE = "VA Form 526 Payload Validation"


class RunReport:
    """Container for the outcome of a single payload lint run."""

    def __init__(self, payload_path: Optional[str] = None):
        """Initialize the report.

        Args:
            payload_path: Path of the payload file, or None when read from stdin
        """
        self.payload_path = payload_path
        self.result: Optional[ValidationResult] = None
        self.warnings: List[Dict[str, Any]] = []
        self.detected_case = KeyCase.UNKNOWN
        self.expected_case = KeyCase.UNKNOWN

    def add_warning(self, message: str):
        """Add a non-fatal warning message."""
        self.warnings.append({'message': message})

    @property
    def valid(self) -> bool:
        return self.result is not None and self.result.valid

    def render(self, output_format: str = 'human') -> str:
        """Render the report in one of ``human``, ``json`` or ``github-actions``."""
        if output_format == 'json':
            return self.render_json()
        if output_format == 'github-actions':
            return self.render_github_actions()
        return self.render_human()

    def render_human(self) -> str:
        lines = ["", REPORT_TITLE, ""]
        for warning in self.warnings:
            lines.append(f"⚠ {warning['message']}")

        if self.valid:
            lines.append("✓ Schema validation: PASS")
            return "\n".join(lines)

        lines.append("✗ Schema validation: FAIL")
        for violation in self._violations():
            lines.append(f"  ✗ {violation.display_path}: {violation.message}")
            if violation.params:
                lines.append(f"    params: {json.dumps(violation.params, default=str)}")
        return "\n".join(lines)

    def render_json(self) -> str:
        output = {
            'valid': self.valid,
            'detected_case': str(self.detected_case),
            'expected_case': str(self.expected_case),
            'warnings': [w['message'] for w in self.warnings],
            'violations': [
                {
                    'path': v.path,
                    'message': v.message,
                    'keyword': v.keyword,
                    'params': dict(v.params) if v.params else None,
                }
                for v in self._violations()
            ],
        }
        return json.dumps(output, indent=2, default=str)

    def render_github_actions(self) -> str:
        file_part = f" file={self.payload_path}" if self.payload_path else ""
        lines = []
        for warning in self.warnings:
            lines.append(f"::warning{file_part}::{warning['message']}")
        for violation in self._violations():
            lines.append(f"::error{file_part}::{violation.display_path}: {violation.message}")
        if self.valid:
            lines.append("Schema validation: PASS")
        return "\n".join(lines)

    def _violations(self):
        return self.result.violations if self.result is not None else ()
