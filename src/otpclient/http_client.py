"""Thin httpx transport returning typed response descriptors."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Dict, Generic, Iterator, List, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator

from otpclient.utils.logging import get_logger

USER_AGENT = "otp-service-client-go"

T = TypeVar("T", bound=BaseModel)

logger = get_logger("otpclient.http")


class ErrorBody(BaseModel):
    """Payload the service returns alongside a failing status code."""

    problem: str = ""

    @field_validator("problem", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Optional[str]) -> str:
        return "" if value is None else value


class HttpRequest(BaseModel):
    """Everything needed to dispatch one call."""

    model_config = ConfigDict(frozen=True)

    url: str
    query_parameters: Dict[str, str] = Field(default_factory=dict)
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[BaseModel] = None

    def with_header(self, key: str, value: str) -> "HttpRequest":
        return self.model_copy(update={"headers": {**self.headers, key: value}})


class HttpResponse(BaseModel, Generic[T]):
    """Outcome of a call. 404 is reported as a bodyless, non-error response."""

    status_code: int
    headers: Dict[str, List[str]] = Field(default_factory=dict)
    has_error: bool = False
    error_body: Optional[ErrorBody] = None
    body: Optional[T] = None


def build_client(transport: Optional[httpx.BaseTransport] = None) -> httpx.Client:
    """Client used whenever the caller does not supply one. Redirects are followed."""
    return httpx.Client(transport=transport, follow_redirects=True)


@contextmanager
def _client_scope(client: Optional[httpx.Client]) -> Iterator[httpx.Client]:
    if client is not None:
        yield client
        return
    owned = build_client()
    try:
        yield owned
    finally:
        owned.close()


def _send(method: str, request: HttpRequest, client: Optional[httpx.Client]) -> Tuple[int, Dict[str, List[str]], bytes]:
    headers = dict(request.headers)
    content: Optional[bytes] = None
    if request.body is not None:
        content = request.body.model_dump_json().encode("utf-8")
        headers["Content-Type"] = "application/json"
    headers["User-Agent"] = USER_AGENT

    with _client_scope(client) as http:
        response = http.request(
            method,
            request.url,
            params=request.query_parameters or None,
            headers=headers,
            content=content,
        )
        try:
            raw = response.read()
        finally:
            response.close()

    logger.debug("%s %s -> %s", method, request.url, response.status_code)
    headers_out: Dict[str, List[str]] = {}
    for key, value in response.headers.multi_items():
        headers_out.setdefault(key, []).append(value)
    return response.status_code, headers_out, raw


def _build(
    method: str,
    request: HttpRequest,
    client: Optional[httpx.Client],
    response_model: Optional[Type[T]] = None,
    *,
    skip_no_content: bool = True,
) -> HttpResponse[T]:
    status_code, headers, raw = _send(method, request, client)
    response_type = HttpResponse[response_model] if response_model is not None else HttpResponse
    result = response_type(status_code=status_code, headers=headers)

    if status_code == httpx.codes.NOT_FOUND:
        return result
    if not 200 <= status_code <= 299:
        result.error_body = ErrorBody.model_validate_json(raw)
        result.has_error = True
        return result
    if response_model is None:
        return result
    if skip_no_content and status_code == httpx.codes.NO_CONTENT:
        return result

    result.body = response_model.model_validate_json(raw)
    return result


def _bodyless(request: HttpRequest) -> HttpRequest:
    return request.model_copy(update={"body": None}) if request.body is not None else request


def get(request: HttpRequest, response_model: Type[T], *, client: Optional[httpx.Client] = None) -> HttpResponse[T]:
    return _build("GET", _bodyless(request), client, response_model, skip_no_content=False)


def post(request: HttpRequest, response_model: Type[T], *, client: Optional[httpx.Client] = None) -> HttpResponse[T]:
    return _build("POST", _bodyless(request), client, response_model)


def post_with_body(
    request: HttpRequest,
    response_model: Type[T],
    *,
    client: Optional[httpx.Client] = None,
) -> HttpResponse[T]:
    if request.body is None:
        raise ValueError("post_with_body requires a request body")
    return _build("POST", request, client, response_model)


def post_with_no_content(request: HttpRequest, *, client: Optional[httpx.Client] = None) -> HttpResponse:
    return _build("POST", _bodyless(request), client)


def post_with_body_with_no_content(request: HttpRequest, *, client: Optional[httpx.Client] = None) -> HttpResponse:
    if request.body is None:
        raise ValueError("post_with_body_with_no_content requires a request body")
    return _build("POST", request, client)


def delete_with_no_content(request: HttpRequest, *, client: Optional[httpx.Client] = None) -> HttpResponse:
    return _build("DELETE", _bodyless(request), client)
