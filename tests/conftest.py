from types import SimpleNamespace
from typing import Any

import pytest

from infra.descriptor import DescriptorConfig


class RecordingSink:
    """Request sink that keeps everything it receives."""

    def __init__(self) -> None:
        self.records: list[tuple[dict[str, Any], str]] = []

    def record(self, request: dict[str, Any], serialized: str) -> None:
        self.records.append((request, serialized))


class FailingSink:
    def record(self, request: dict[str, Any], serialized: str) -> None:
        raise RuntimeError("log sink unavailable")


@pytest.fixture
def make_event():
    def _make(path: str | None = "/hello", **overrides: Any) -> dict[str, Any]:
        event: dict[str, Any] = {
            "resource": "/{proxy+}",
            "path": path,
            "httpMethod": "GET",
            "headers": {"Accept": "*/*"},
            "queryStringParameters": None,
            "pathParameters": {"proxy": (path or "").lstrip("/")},
            "body": None,
            "isBase64Encoded": False,
        }
        event.update(overrides)
        return event

    return _make


@pytest.fixture
def lambda_context() -> SimpleNamespace:
    return SimpleNamespace(
        aws_request_id="req-123",
        function_name="uppercase-api-test-function",
    )


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()


@pytest.fixture
def artifact(tmp_path) -> str:
    path = tmp_path / "handler.zip"
    path.write_bytes(b"PK\x05\x06" + b"\x00" * 18)
    return str(path)


@pytest.fixture
def descriptor_config(artifact) -> DescriptorConfig:
    return DescriptorConfig(project="uppercase-api", stack="test", artifact_path=artifact)
