#!/usr/bin/env python3
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

"""CLI entry point for linting JSON payloads against the VA Form 526 schema."""

import argparse
import json
import logging
import sys
from typing import Any, List, Optional

import httpx

from ..config import (
    DEFAULT_BASE_URL,
    DEFAULT_KEY_SCAN_LIMIT,
    DEFAULT_SCHEMA_CACHE,
    OUTPUT_FORMATS,
    KeyCase,
    RunOptions,
)
from ..exceptions import (
    EXIT_FATAL,
    EXIT_OK,
    EXIT_VALIDATION_FAILED,
    InvalidPayloadJSON,
    PayloadLintError,
)
from ..schema import SchemaProvider
from . import lint_payload

logger = logging.getLogger(__name__)

USAGE_EXAMPLES = """\
examples:
  pbpaste | va-payload-lint --schema-file <path-to-schema>
  va-payload-lint --json payload.json --schema-file <path-to-schema>

exit codes:
  0  validation passed
  1  schema validation failed
  2  payload is missing or not valid JSON
  3  schema load/compile/fetch failure or other fatal error
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='va-payload-lint',
        description='Validate a JSON payload against the VA Form 526 JSON Schema',
        epilog=USAGE_EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--json',
        metavar='PATH',
        help='Read payload from file (otherwise stdin)',
    )
    parser.add_argument(
        '--schema-file',
        metavar='PATH',
        help='Validate against a local schema file (offline mode: no cache, no network)',
    )
    parser.add_argument(
        '--schema-cache',
        metavar='PATH',
        default=DEFAULT_SCHEMA_CACHE,
        help=f'Cache fetched schema (default: {DEFAULT_SCHEMA_CACHE})',
    )
    parser.add_argument(
        '--no-cache',
        action='store_true',
        help='Disable cache usage',
    )
    parser.add_argument(
        '--base-url',
        metavar='URL',
        default=DEFAULT_BASE_URL,
        help='Base URL for schema endpoint (default: sandbox)',
    )
    parser.add_argument(
        '--schema-url',
        metavar='URL',
        help='Full schema URL override',
    )
    parser.add_argument(
        '--expect-case',
        choices=[c.value for c in KeyCase if c != KeyCase.UNKNOWN],
        help='Expected key casing (warn only)',
    )
    parser.add_argument(
        '--fetch-timeout',
        type=float,
        metavar='SECONDS',
        default=None,
        help='Timeout for the remote schema fetch (default: wait indefinitely)',
    )
    parser.add_argument(
        '--key-scan-limit',
        type=int,
        metavar='N',
        default=DEFAULT_KEY_SCAN_LIMIT,
        help=f'Maximum number of keys inspected for key casing (default: {DEFAULT_KEY_SCAN_LIMIT})',
    )
    parser.add_argument(
        '--format',
        choices=OUTPUT_FORMATS,
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Logging level (default: WARNING)',
    )
    return parser


def read_payload(json_path: Optional[str]) -> Any:
    """Read and parse the payload from a file or stdin.

    Raises:
        InvalidPayloadJSON: If the payload cannot be read or parsed
    """
    try:
        if json_path:
            with open(json_path, 'rb') as f:
                raw = f.read()
        else:
            raw = sys.stdin.buffer.read()
    except OSError as e:
        raise InvalidPayloadJSON(f"Cannot read payload: {e}") from e

    try:
        text = raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise InvalidPayloadJSON(f"Payload is not valid UTF-8: {e}") from e

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidPayloadJSON(str(e)) from e


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are accepted by the json module but are not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


def run(options: RunOptions, *, client: Optional[httpx.Client] = None) -> int:
    """Run the lint pipeline and return the process exit code."""
    payload = read_payload(options.json_path)
    schema = SchemaProvider(options, client=client).load()

    report = lint_payload(payload, schema, options)
    print(report.render(options.output_format))

    return EXIT_OK if report.valid else EXIT_VALIDATION_FAILED


def main(argv: List[str] | None = None, *, client: Optional[httpx.Client] = None) -> int:
    """Main entry point for the linter CLI."""
    args = build_parser().parse_args(argv)
    options = RunOptions.from_args(args)
    options.set_logging()

    try:
        return run(options, client=client)
    except InvalidPayloadJSON as e:
        print(f"Invalid JSON: {e}", file=sys.stderr)
        return e.exit_code
    except PayloadLintError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return e.exit_code
    except Exception as e:
        logger.debug("Unexpected error", exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        return EXIT_FATAL


if __name__ == '__main__':
    sys.exit(main())
