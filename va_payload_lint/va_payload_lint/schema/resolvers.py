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

"""Schema resolver strategies.

Each resolver tries one source and reports a tagged outcome. Fatal problems
(missing local file, failed fetch) are raised; soft problems such as a
corrupt cache are returned so the next resolver can take over.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

import httpx

from ..exceptions import SchemaFetchFailed, SchemaNotFound, SchemaParseFailed
from .cache import SchemaCache, read_json_object

logger = logging.getLogger(__name__)


class ResolveStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    SOFT_FAILURE = "soft_failure"


@dataclass(frozen=True)
class ResolveOutcome:
    status: ResolveStatus
    schema: Optional[Dict[str, Any]] = None
    source: str = ""
    detail: str = ""

    @classmethod
    def found(cls, schema: Dict[str, Any], source: str) -> ResolveOutcome:
        return cls(ResolveStatus.FOUND, schema=schema, source=source)

    @classmethod
    def not_found(cls, detail: str = "") -> ResolveOutcome:
        return cls(ResolveStatus.NOT_FOUND, detail=detail)

    @classmethod
    def soft_failure(cls, detail: str) -> ResolveOutcome:
        return cls(ResolveStatus.SOFT_FAILURE, detail=detail)


class SchemaResolver(ABC):
    """Abstract schema source."""

    NAME: str

    @abstractmethod
    def resolve(self) -> ResolveOutcome:
        """Try to obtain the schema from this source."""


class LocalFileResolver(SchemaResolver):
    """Load the schema from an explicit local file. Never touches cache or network."""

    NAME = "schema-file"

    def __init__(self, path: str):
        self.path = path

    def resolve(self) -> ResolveOutcome:
        if not os.path.isfile(self.path):
            raise SchemaNotFound(f"Schema file not found: {self.path}")
        try:
            schema = read_json_object(self.path)
        except (OSError, ValueError) as e:
            raise SchemaParseFailed(f"Invalid schema file {self.path}: {e}") from e
        return ResolveOutcome.found(schema, source=self.path)


class CacheResolver(SchemaResolver):
    """Load the schema from the on-disk cache, treating corruption as a miss."""

    NAME = "cache"

    def __init__(self, cache: SchemaCache):
        self.cache = cache

    def resolve(self) -> ResolveOutcome:
        if not self.cache.exists():
            return ResolveOutcome.not_found(f"no cache file at {self.cache.path}")
        try:
            schema = self.cache.load()
        except (OSError, ValueError) as e:
            return ResolveOutcome.soft_failure(f"corrupt schema cache {self.cache.path}: {e}")
        return ResolveOutcome.found(schema, source=self.cache.path)


class RemoteResolver(SchemaResolver):
    """Fetch the schema over HTTP and optionally populate the cache.

    Args:
        url: Full schema URL
        cache: Cache to write the fetched schema to, or None to skip caching
        timeout: Request timeout in seconds, None to wait indefinitely
        client: Optional pre-configured httpx client
    """

    NAME = "remote"

    def __init__(
        self,
        url: str,
        *,
        cache: Optional[SchemaCache] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.url = url
        self.cache = cache
        self.timeout = timeout
        self.client = client

    def _get(self) -> httpx.Response:
        headers = {"Accept": "application/json"}
        if self.client is not None:
            return self.client.get(self.url, headers=headers, timeout=self.timeout, follow_redirects=True)
        return httpx.get(self.url, headers=headers, timeout=self.timeout, follow_redirects=True)

    def resolve(self) -> ResolveOutcome:
        logger.info(f"Fetching schema: {self.url}")
        try:
            response = self._get()
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise SchemaFetchFailed(
                f"Failed to fetch {self.url}: {status} {e.response.reason_phrase}"
            ) from e
        except httpx.HTTPError as e:
            raise SchemaFetchFailed(f"Failed to fetch {self.url}: {e}") from e

        try:
            schema = response.json()
        except ValueError as e:
            raise SchemaFetchFailed(f"Schema at {self.url} is not valid JSON: {e}") from e
        if not isinstance(schema, dict):
            raise SchemaFetchFailed(
                f"Schema at {self.url} must be a JSON object, got {type(schema).__name__}"
            )

        if self.cache is not None:
            self.cache.save(schema)

        return ResolveOutcome.found(schema, source=self.url)
