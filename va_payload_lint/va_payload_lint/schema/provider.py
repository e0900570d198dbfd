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

"""Schema acquisition for a lint run."""

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import RunOptions
from ..exceptions import SchemaNotFound
from .cache import SchemaCache
from .resolvers import (
    CacheResolver,
    LocalFileResolver,
    RemoteResolver,
    ResolveStatus,
    SchemaResolver,
)

logger = logging.getLogger(__name__)


class SchemaProvider:
    """Resolve the schema for a run from the configured sources."""

    def __init__(self, options: RunOptions, *, client: Optional[httpx.Client] = None):
        """Initialize the provider.

        Args:
            options: Run configuration
            client: Optional httpx client used for the remote fetch
        """
        self.options = options
        self.client = client

    def build_resolvers(self) -> List[SchemaResolver]:
        """Build the ordered resolver chain.

        Resolution order:
        - An explicit schema file is the only source when configured
        - Otherwise the cache (when enabled), then the remote endpoint

        Returns:
            Resolvers in the order they are tried
        """
        opts = self.options
        if opts.schema_file:
            return [LocalFileResolver(opts.schema_file)]

        resolvers: List[SchemaResolver] = []
        cache = SchemaCache(opts.schema_cache) if opts.cache_enabled and opts.schema_cache else None
        if cache is not None:
            resolvers.append(CacheResolver(cache))
        resolvers.append(
            RemoteResolver(
                opts.remote_schema_url,
                cache=cache,
                timeout=opts.fetch_timeout,
                client=self.client,
            )
        )
        return resolvers

    def load(self) -> Dict[str, Any]:
        """Load the schema.

        Returns:
            Schema dictionary

        Raises:
            SchemaLoadError: If no resolver produced a schema
        """
        tried = []
        for resolver in self.build_resolvers():
            outcome = resolver.resolve()
            if outcome.status == ResolveStatus.FOUND:
                logger.info(f"Loaded schema from {resolver.NAME}: {outcome.source}")
                return outcome.schema
            if outcome.status == ResolveStatus.SOFT_FAILURE:
                logger.warning(f"Ignoring {outcome.detail}")
            else:
                logger.debug(f"{resolver.NAME}: {outcome.detail}")
            tried.append(resolver.NAME)

        raise SchemaNotFound(f"No schema source succeeded (tried: {', '.join(tried) or 'none'})")


def load_schema(options: RunOptions, *, client: Optional[httpx.Client] = None) -> Dict[str, Any]:
    """Load the schema for ``options``."""
    return SchemaProvider(options, client=client).load()
