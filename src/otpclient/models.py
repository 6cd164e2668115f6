"""Payloads exchanged with the OTP service."""

from __future__ import annotations

from pydantic import BaseModel


class GetUserOtpResponse(BaseModel):
    """Current OTP registration for a user."""

    verified: bool
    enabled: bool
    secret: str
    auth_url: str


class CreateUserOtpResponse(BaseModel):
    """Freshly provisioned OTP secret and its provisioning URI."""

    secret: str
    auth_url: str


class VerifyOtpRequest(BaseModel):
    user_id: int
    token: str


class ValidateOtpRequest(BaseModel):
    user_id: int
    token: str
