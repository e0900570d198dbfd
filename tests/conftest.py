from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, List

import httpx
import pytest


SAMPLE_SCHEMA = {
    "type": "object",
    "properties": {
        "veteranId": {"type": "string"},
        "claimDate": {"type": "string", "format": "date"},
        "disabilities": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "rating": {"type": "number", "minimum": 0, "maximum": 100},
                },
                "required": ["name"],
            },
        },
    },
    "required": ["veteranId"],
}

VALID_PAYLOAD = {
    "veteranId": "123456",
    "claimDate": "2025-01-01",
    "disabilities": [{"name": "Back pain", "rating": 50}],
}


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


class RecordingTransport:
    """httpx mock transport that records every request it serves."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def sample_schema() -> dict:
    return json.loads(json.dumps(SAMPLE_SCHEMA))


@pytest.fixture
def schema_file(tmp_path: Path, sample_schema: dict) -> Path:
    return write_json(tmp_path / "schemas" / "526.schema.json", sample_schema)


@pytest.fixture
def schema_server(sample_schema: dict) -> RecordingTransport:
    return RecordingTransport(lambda request: httpx.Response(200, json=sample_schema))


@pytest.fixture
def offline_server() -> RecordingTransport:
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("network disabled", request=request)

    return RecordingTransport(_refuse)
