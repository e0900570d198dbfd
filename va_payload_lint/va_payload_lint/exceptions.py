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

"""Custom exceptions for the payload linter."""


EXIT_OK = 0
EXIT_VALIDATION_FAILED = 1
EXIT_INVALID_PAYLOAD = 2
EXIT_FATAL = 3


class PayloadLintError(Exception):
    """Base exception for payload-lint related errors."""

    exit_code = EXIT_FATAL


class InvalidPayloadJSON(PayloadLintError):
    """Exception raised when the payload is missing or is not valid JSON."""

    exit_code = EXIT_INVALID_PAYLOAD


class SchemaLoadError(PayloadLintError):
    """Exception raised when no schema could be obtained."""
    pass


class SchemaNotFound(SchemaLoadError):
    """Exception raised when the configured local schema file does not exist."""
    pass


class SchemaParseFailed(SchemaLoadError):
    """Exception raised when a local schema file is not a valid JSON object."""
    pass


class SchemaFetchFailed(SchemaLoadError):
    """Exception raised when fetching the remote schema fails."""
    pass


class SchemaCompileFailed(PayloadLintError):
    """Exception raised when the schema is not a valid JSON Schema document."""
    pass
