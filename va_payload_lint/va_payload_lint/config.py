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

"""Run configuration for the payload linter."""

import argparse
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .utils.logging_utils import configure_split_stream_logging


DEFAULT_BASE_URL = "https://sandbox-api.va.gov/services/claims/v1"
DEFAULT_SCHEMA_CACHE = ".cache/526.schema.json"
SCHEMA_RESOURCE_PATH = "/forms/526"

# Upper bound on keys collected by the key-case scan.
DEFAULT_KEY_SCAN_LIMIT = 200

OUTPUT_FORMATS = ("human", "json", "github-actions")


class KeyCase(str, Enum):
    """Key naming conventions recognised by the key-case scan."""

    CAMEL = "camel"
    SNAKE = "snake"
    DASH = "dash"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class RunOptions:
    """Configuration for a single lint run.

    Built once at startup and passed to each component explicitly.
    """
    json_path: Optional[str] = None
    schema_file: Optional[str] = None
    schema_cache: str = DEFAULT_SCHEMA_CACHE
    cache_enabled: bool = True
    base_url: str = DEFAULT_BASE_URL
    schema_url: Optional[str] = None
    expect_case: KeyCase = KeyCase.UNKNOWN

    # None waits for the remote endpoint indefinitely
    fetch_timeout: Optional[float] = None
    key_scan_limit: int = DEFAULT_KEY_SCAN_LIMIT
    output_format: str = "human"
    log_level: str = "WARNING"

    @property
    def remote_schema_url(self) -> str:
        """URL the remote resolver fetches from."""
        if self.schema_url:
            return self.schema_url
        return f"{self.base_url.rstrip('/')}{SCHEMA_RESOURCE_PATH}"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> 'RunOptions':
        """Create configuration from parsed command-line arguments."""
        return cls(
            json_path=args.json,
            schema_file=args.schema_file,
            schema_cache=args.schema_cache,
            cache_enabled=not args.no_cache,
            base_url=args.base_url,
            schema_url=args.schema_url,
            expect_case=KeyCase(args.expect_case) if args.expect_case else KeyCase.UNKNOWN,
            fetch_timeout=args.fetch_timeout,
            key_scan_limit=args.key_scan_limit,
            output_format=args.format,
            log_level=args.log_level,
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        configure_split_stream_logging(level=level, stderr_level=logging.WARNING, formatter=formatter)

        return logging.getLogger('va_payload_lint')
