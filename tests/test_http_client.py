from __future__ import annotations

import json
import logging

import httpx
import pytest
from pydantic import BaseModel, ValidationError

from otpclient import http_client
from otpclient.http_client import USER_AGENT, HttpRequest, build_client
from otpclient.utils.logging import set_level


class Payload(BaseModel):
    name: str
    count: int


URL = "https://otp.test/things"


def test_get_decodes_success_body(service, http):
    service.reply(200, json={"name": "a", "count": 3})

    response = http_client.get(HttpRequest(url=URL), Payload, client=http)

    assert response.status_code == 200
    assert response.has_error is False
    assert response.body == Payload(name="a", count=3)
    assert service.last.method == "GET"


def test_query_parameters_and_headers_are_merged(service, http):
    service.reply(200, json={"name": "a", "count": 1})
    request = HttpRequest(url=URL, query_parameters={"page": "2"}, headers={"X-Trace": "abc"})

    http_client.get(request, Payload, client=http)

    sent = service.last
    assert sent.url.params["page"] == "2"
    assert sent.headers["X-Trace"] == "abc"
    assert sent.headers["User-Agent"] == USER_AGENT


def test_user_agent_overrides_caller_value(service, http):
    request = HttpRequest(url=URL, headers={"User-Agent": "custom"})

    http_client.post_with_no_content(request, client=http)

    assert service.last.headers["User-Agent"] == USER_AGENT


def test_not_found_is_bodyless_and_not_an_error(service, http):
    service.reply(404, text="<html>missing</html>")

    response = http_client.get(HttpRequest(url=URL), Payload, client=http)

    assert response.status_code == 404
    assert response.has_error is False
    assert response.body is None
    assert response.error_body is None


def test_failing_status_decodes_problem_and_skips_body(service, http):
    service.reply(409, json={"problem": "already exists"})

    response = http_client.post(HttpRequest(url=URL), Payload, client=http)

    assert response.has_error is True
    assert response.error_body.problem == "already exists"
    assert response.body is None


def test_undecodable_error_body_raises(service, http):
    service.reply(502, text="bad gateway")

    with pytest.raises(ValidationError):
        http_client.delete_with_no_content(HttpRequest(url=URL), client=http)


def test_undecodable_success_body_raises(service, http):
    service.reply(200, json={"name": "a"})

    with pytest.raises(ValidationError):
        http_client.get(HttpRequest(url=URL), Payload, client=http)


def test_post_skips_decoding_on_no_content(service, http):
    service.reply(204)

    response = http_client.post(HttpRequest(url=URL), Payload, client=http)

    assert response.status_code == 204
    assert response.body is None


def test_post_with_body_sends_json(service, http):
    service.reply(201, json={"name": "b", "count": 2})
    request = HttpRequest(url=URL, body=Payload(name="b", count=2))

    response = http_client.post_with_body(request, Payload, client=http)

    assert response.body.count == 2
    assert service.last.headers["Content-Type"] == "application/json"
    assert json.loads(service.last.content) == {"name": "b", "count": 2}


def test_body_variants_require_a_body(http):
    with pytest.raises(ValueError):
        http_client.post_with_body_with_no_content(HttpRequest(url=URL), client=http)


def test_delete_uses_delete_verb(service, http):
    response = http_client.delete_with_no_content(HttpRequest(url=URL), client=http)

    assert service.last.method == "DELETE"
    assert response.status_code == 204
    assert response.has_error is False


def test_network_errors_propagate(service, http):
    def explode(request):
        raise httpx.ConnectError("connection refused", request=request)

    service.respond = explode

    with pytest.raises(httpx.ConnectError):
        http_client.get(HttpRequest(url=URL), Payload, client=http)


def test_with_header_returns_copy():
    request = HttpRequest(url=URL, headers={"A": "1"})

    updated = request.with_header("B", "2")

    assert request.headers == {"A": "1"}
    assert updated.headers == {"A": "1", "B": "2"}


def test_repeated_response_headers_keep_every_value(service, http):
    service.reply(
        200,
        headers=[("set-cookie", "a=1"), ("set-cookie", "b=2")],
        json={"name": "a", "count": 1},
    )

    response = http_client.get(HttpRequest(url=URL), Payload, client=http)

    assert response.headers["set-cookie"] == ["a=1", "b=2"]


def test_built_client_follows_redirects():
    client = build_client()
    try:
        assert client.follow_redirects is True
    finally:
        client.close()


class _Collect(logging.Handler):
    def __init__(self) -> None:
        super().__init__(logging.DEBUG)
        self.lines = []

    def emit(self, record: logging.LogRecord) -> None:
        self.lines.append(record.getMessage())


def test_calls_are_logged_without_header_values(service, http):
    service.reply(200, json={"name": "a", "count": 1})
    collector = _Collect()
    transport_logger = logging.getLogger("otpclient.http")
    transport_logger.addHandler(collector)
    set_level(logging.DEBUG)
    try:
        request = HttpRequest(url=URL).with_header("X-Secret", "do-not-log-me")
        http_client.get(request, Payload, client=http)
    finally:
        set_level(logging.INFO)
        transport_logger.removeHandler(collector)

    assert collector.lines == [f"GET {URL} -> 200"]
    assert all("do-not-log-me" not in line for line in collector.lines)
