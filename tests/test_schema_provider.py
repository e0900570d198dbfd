from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import httpx
import pytest

from va_payload_lint.config import RunOptions
from va_payload_lint.exceptions import SchemaFetchFailed, SchemaNotFound, SchemaParseFailed
from va_payload_lint.schema import (
    CacheResolver,
    LocalFileResolver,
    RemoteResolver,
    ResolveStatus,
    SchemaCache,
    SchemaProvider,
)
from va_payload_lint.validation import validate

from conftest import RecordingTransport, write_json


def options(tmp_path: Path, **overrides) -> RunOptions:
    values = {"schema_cache": str(tmp_path / ".cache" / "526.schema.json")}
    values.update(overrides)
    return RunOptions(**values)


def test_remote_url_is_computed_from_base_url():
    assert RunOptions().remote_schema_url == "https://sandbox-api.va.gov/services/claims/v1/forms/526"
    assert RunOptions(base_url="https://example.test/v2/").remote_schema_url == "https://example.test/v2/forms/526"
    assert RunOptions(schema_url="https://example.test/x.json").remote_schema_url == "https://example.test/x.json"


def test_run_options_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        RunOptions().cache_enabled = False


def test_resolver_chain_order(tmp_path):
    assert [type(r) for r in SchemaProvider(options(tmp_path, schema_file="s.json")).build_resolvers()] == [
        LocalFileResolver
    ]
    assert [type(r) for r in SchemaProvider(options(tmp_path)).build_resolvers()] == [CacheResolver, RemoteResolver]
    assert [type(r) for r in SchemaProvider(options(tmp_path, cache_enabled=False)).build_resolvers()] == [
        RemoteResolver
    ]


def test_schema_file_is_loaded_without_cache_or_network(tmp_path, schema_file, sample_schema, offline_server):
    opts = options(tmp_path, schema_file=str(schema_file))

    schema = SchemaProvider(opts, client=offline_server.client()).load()

    assert schema == sample_schema
    assert offline_server.requests == []
    assert not Path(opts.schema_cache).exists()


def test_schema_file_ignores_existing_cache(tmp_path, schema_file, sample_schema, offline_server):
    opts = options(tmp_path, schema_file=str(schema_file))
    write_json(Path(opts.schema_cache), {"type": "string"})

    assert SchemaProvider(opts, client=offline_server.client()).load() == sample_schema


def test_missing_schema_file_is_fatal_even_with_cache(tmp_path, sample_schema, offline_server):
    opts = options(tmp_path, schema_file=str(tmp_path / "missing.json"))
    write_json(Path(opts.schema_cache), sample_schema)

    with pytest.raises(SchemaNotFound, match="missing.json"):
        SchemaProvider(opts, client=offline_server.client()).load()
    assert offline_server.requests == []


def test_unparseable_schema_file_is_fatal(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")

    with pytest.raises(SchemaParseFailed):
        SchemaProvider(options(tmp_path, schema_file=str(bad))).load()


def test_cache_hit_skips_network(tmp_path, sample_schema, offline_server):
    opts = options(tmp_path)
    write_json(Path(opts.schema_cache), sample_schema)

    assert SchemaProvider(opts, client=offline_server.client()).load() == sample_schema
    assert offline_server.requests == []


def test_remote_fetch_populates_cache(tmp_path, sample_schema, schema_server):
    opts = options(tmp_path, cache_enabled=True, schema_cache=str(tmp_path / "a" / "b" / "schema.json"))

    schema = SchemaProvider(opts, client=schema_server.client()).load()

    assert schema == sample_schema
    assert len(schema_server.requests) == 1
    request = schema_server.requests[0]
    assert str(request.url) == "https://sandbox-api.va.gov/services/claims/v1/forms/526"
    assert request.headers["accept"] == "application/json"

    cached = Path(opts.schema_cache).read_text(encoding="utf-8")
    assert json.loads(cached) == sample_schema
    assert cached == json.dumps(sample_schema, indent=2)


def test_schema_url_override_is_used(tmp_path, schema_server):
    opts = options(tmp_path, schema_url="https://example.test/schemas/526.json", base_url="https://ignored.test")
    SchemaProvider(opts, client=schema_server.client()).load()
    assert str(schema_server.requests[0].url) == "https://example.test/schemas/526.json"


def test_cache_round_trip_needs_one_fetch(tmp_path, schema_server):
    opts = options(tmp_path)
    payload = {"claimDate": "bad", "disabilities": [{"rating": 150}]}

    fetched = SchemaProvider(opts, client=schema_server.client()).load()
    cached = SchemaProvider(opts, client=schema_server.client()).load()

    assert len(schema_server.requests) == 1
    assert validate(cached, payload) == validate(fetched, payload)


def test_corrupt_cache_falls_through_to_remote(tmp_path, sample_schema, schema_server):
    opts = options(tmp_path)
    cache_path = Path(opts.schema_cache)
    cache_path.parent.mkdir(parents=True)
    cache_path.write_text("{ this is not json", encoding="utf-8")

    schema = SchemaProvider(opts, client=schema_server.client()).load()

    assert schema == sample_schema
    assert len(schema_server.requests) == 1
    assert json.loads(cache_path.read_text(encoding="utf-8")) == sample_schema


def test_cache_resolver_reports_soft_failure(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("[1, 2", encoding="utf-8")

    outcome = CacheResolver(SchemaCache(str(path))).resolve()
    assert outcome.status == ResolveStatus.SOFT_FAILURE
    assert outcome.schema is None

    assert CacheResolver(SchemaCache(str(tmp_path / "none.json"))).resolve().status == ResolveStatus.NOT_FOUND


def test_no_cache_neither_reads_nor_writes(tmp_path, sample_schema, schema_server):
    opts = options(tmp_path, cache_enabled=False)
    cache_path = Path(opts.schema_cache)
    write_json(cache_path, {"type": "string"})

    assert SchemaProvider(opts, client=schema_server.client()).load() == sample_schema
    assert len(schema_server.requests) == 1
    assert json.loads(cache_path.read_text(encoding="utf-8")) == {"type": "string"}


def test_http_error_status_is_fatal(tmp_path):
    server = RecordingTransport(lambda request: httpx.Response(503, json={"error": "down"}))
    opts = options(tmp_path)

    with pytest.raises(SchemaFetchFailed, match="503"):
        SchemaProvider(opts, client=server.client()).load()
    assert not Path(opts.schema_cache).exists()


def test_network_error_is_fatal(tmp_path, offline_server):
    with pytest.raises(SchemaFetchFailed, match="network disabled"):
        SchemaProvider(options(tmp_path), client=offline_server.client()).load()


@pytest.mark.parametrize("body", [b"<html>oops</html>", b"[1, 2, 3]"])
def test_non_object_response_is_fatal(tmp_path, body):
    server = RecordingTransport(lambda request: httpx.Response(200, content=body))

    with pytest.raises(SchemaFetchFailed):
        SchemaProvider(options(tmp_path), client=server.client()).load()
