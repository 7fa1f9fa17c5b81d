"""Shared test fixtures."""

from dataclasses import dataclass, field

import httpx
import pytest

from off_client.adapters.off_client import HttpxOffClient
from off_client.domain.params import ApiVersion
from off_client.services.search import SearchBuilderV0, SearchBuilderV2


@dataclass
class RecordingTransport:
    """Records requests and answers each with a fixed JSON payload."""

    status_code: int = 200
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json={"count": 0, "products": []})

    def client(self, version: ApiVersion) -> HttpxOffClient:
        async_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return HttpxOffClient(version=version, http_client=async_client)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def v0_builder() -> SearchBuilderV0:
    return SearchBuilderV0()


@pytest.fixture
def v2_builder() -> SearchBuilderV2:
    return SearchBuilderV2()
