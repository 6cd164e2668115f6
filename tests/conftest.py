from __future__ import annotations

import httpx
import pytest

from otpclient import OtpClient

from .fakes import BASE_URL, SECRET, RecordingService


@pytest.fixture
def service() -> RecordingService:
    return RecordingService()


@pytest.fixture
def http(service: RecordingService):
    client = httpx.Client(transport=httpx.MockTransport(service.handler))
    yield client
    client.close()


@pytest.fixture
def otp_client(http: httpx.Client) -> OtpClient:
    return OtpClient(BASE_URL, SECRET, http_client=http)
