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

"""Key naming convention linter for JSON payloads."""

import re
from typing import Any, List

from ..config import DEFAULT_KEY_SCAN_LIMIT, KeyCase
from .report import RunReport


_CAMEL_HUMP = re.compile(r'[a-z][A-Z]')


class KeyCaseDetector:
    """Classify the dominant key naming convention of a JSON value."""

    def __init__(self, key_scan_limit: int = DEFAULT_KEY_SCAN_LIMIT):
        """Initialize the detector.

        Args:
            key_scan_limit: Maximum number of keys collected before the scan stops
        """
        self.key_scan_limit = key_scan_limit

    def collect_keys(self, value: Any) -> List[str]:
        """Collect object keys depth-first, in discovery order, up to the scan limit."""
        keys: List[str] = []

        def _walk(node: Any) -> None:
            if len(keys) >= self.key_scan_limit:
                return
            if isinstance(node, dict):
                for key, child in node.items():
                    if len(keys) >= self.key_scan_limit:
                        return
                    keys.append(str(key))
                    _walk(child)
            elif isinstance(node, list):
                for item in node:
                    _walk(item)

        _walk(value)
        return keys

    def detect(self, value: Any) -> KeyCase:
        """Detect the key case of a JSON value.

        Precedence is dash, then snake, then camel: a single dash key decides
        the verdict even when most keys are camelCase.

        Args:
            value: Parsed JSON value (object, array or scalar)

        Returns:
            The detected KeyCase
        """
        return self.classify(self.collect_keys(value))

    @staticmethod
    def classify(keys: List[str]) -> KeyCase:
        if any('-' in key for key in keys):
            return KeyCase.DASH
        if any('_' in key for key in keys):
            return KeyCase.SNAKE
        if any(_CAMEL_HUMP.search(key) for key in keys):
            return KeyCase.CAMEL
        return KeyCase.UNKNOWN


def key_case_mismatch(expected: KeyCase, detected: KeyCase) -> bool:
    """Return True when a configured expectation disagrees with a known verdict."""
    if expected == KeyCase.UNKNOWN or detected == KeyCase.UNKNOWN:
        return False
    return expected != detected


class KeyCaseLinter:
    """Linter that warns when payload keys do not follow the expected case."""

    def __init__(self, expected: KeyCase, key_scan_limit: int = DEFAULT_KEY_SCAN_LIMIT):
        self.expected = expected
        self.detector = KeyCaseDetector(key_scan_limit)

    def lint(self, payload: Any, report: RunReport) -> KeyCase:
        """Record the detected key case and add a warning on mismatch.

        Args:
            payload: Parsed JSON payload
            report: RunReport to add warnings to

        Returns:
            The detected KeyCase
        """
        detected = self.detector.detect(payload)
        report.detected_case = detected
        report.expected_case = self.expected
        if key_case_mismatch(self.expected, detected):
            report.add_warning(
                f"Key casing looks like {detected}, but expected {self.expected}"
            )
        return detected
