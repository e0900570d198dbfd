"""Schema acquisition.

A schema comes from exactly one of: an explicit local file, the on-disk cache,
or the remote forms endpoint. See :class:`SchemaProvider` for the precedence.
"""

from .cache import SchemaCache
from .provider import SchemaProvider, load_schema
from .resolvers import (
    CacheResolver,
    LocalFileResolver,
    RemoteResolver,
    ResolveOutcome,
    ResolveStatus,
    SchemaResolver,
)

__all__ = [
    "SchemaCache",
    "SchemaProvider",
    "load_schema",
    "CacheResolver",
    "LocalFileResolver",
    "RemoteResolver",
    "ResolveOutcome",
    "ResolveStatus",
    "SchemaResolver",
]
