"""Client for the OTP provisioning service."""

from __future__ import annotations

from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from otpclient import http_client
from otpclient.errors import BadRequestError, ConflictError, NotFoundError, UnknownError
from otpclient.http_client import HttpRequest, HttpResponse, build_client
from otpclient.models import (
    CreateUserOtpResponse,
    GetUserOtpResponse,
    ValidateOtpRequest,
    VerifyOtpRequest,
)
from otpclient.settings import ClientSettings

T = TypeVar("T", bound=BaseModel)

SECRET_HEADER = "X-Secret"


def _raise_for_response(response: HttpResponse) -> None:
    if response.status_code == httpx.codes.NOT_FOUND:
        raise NotFoundError()

    if response.has_error:
        problem = response.error_body.problem if response.error_body else ""
        if response.status_code == httpx.codes.BAD_REQUEST:
            raise BadRequestError(problem, status_code=response.status_code)
        if response.status_code == httpx.codes.CONFLICT:
            raise ConflictError(problem, status_code=response.status_code)
        raise UnknownError(problem, status_code=response.status_code)


class OtpClient:
    """Typed access to a user's OTP registration.

    Every call carries the shared secret in the ``X-Secret`` header. Service
    failures are raised as :class:`~otpclient.errors.OtpServiceError`
    subclasses; network and decoding failures propagate from httpx and
    pydantic untouched.

    Usage:
        with OtpClient("https://otp.internal", "s3cret") as client:
            client.create_user_otp(1001)
            client.verify_otp(1001, "123456")
    """

    def __init__(
        self,
        base_url: str,
        secret: str,
        *,
        http_client: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._secret = secret
        self._owns_client = http_client is None
        self._http = http_client or build_client(transport)

    @classmethod
    def from_settings(cls, settings: ClientSettings, *, http_client: Optional[httpx.Client] = None) -> "OtpClient":
        return cls(settings.base_url, settings.secret, http_client=http_client)

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def secret(self) -> str:
        return self._secret

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> "OtpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, path: str, body: Optional[BaseModel] = None) -> HttpRequest:
        request = HttpRequest(url=f"{self._base_url}{path}", body=body)
        return request.with_header(SECRET_HEADER, self._secret)

    def _get(self, request: HttpRequest, response_model: Type[T]) -> T:
        response = http_client.get(request, response_model, client=self._http)
        _raise_for_response(response)
        return response.body

    def _post(self, request: HttpRequest, response_model: Type[T]) -> T:
        response = http_client.post(request, response_model, client=self._http)
        _raise_for_response(response)
        return response.body

    def get_user_otp(self, user_id: int) -> GetUserOtpResponse:
        return self._get(self._request(f"/users/{user_id}/otp"), GetUserOtpResponse)

    def create_user_otp(self, user_id: int) -> CreateUserOtpResponse:
        return self._post(self._request(f"/users/{user_id}/otp"), CreateUserOtpResponse)

    def disable_user_otp(self, user_id: int) -> None:
        response = http_client.post_with_no_content(self._request(f"/users/{user_id}/otp/disable"), client=self._http)
        _raise_for_response(response)

    def delete_user_otp(self, user_id: int) -> None:
        response = http_client.delete_with_no_content(self._request(f"/users/{user_id}/otp"), client=self._http)
        _raise_for_response(response)

    def verify_otp(self, user_id: int, token: str) -> None:
        request = self._request("/otp/verify", VerifyOtpRequest(user_id=user_id, token=token))
        _raise_for_response(http_client.post_with_body_with_no_content(request, client=self._http))

    def validate_otp(self, user_id: int, token: str) -> None:
        request = self._request("/otp/validate", ValidateOtpRequest(user_id=user_id, token=token))
        _raise_for_response(http_client.post_with_body_with_no_content(request, client=self._http))
