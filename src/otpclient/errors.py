"""Exceptions raised by the OTP service client."""

from __future__ import annotations

from typing import Optional


class OtpServiceError(Exception):
    """Base class for failures reported by the OTP service."""

    def __init__(self, problem: str = "", *, status_code: Optional[int] = None) -> None:
        self.problem = problem
        self.status_code = status_code
        super().__init__(str(self))

    def __str__(self) -> str:
        return self.problem


class NotFoundError(OtpServiceError):
    def __init__(self, *, status_code: int = 404) -> None:
        super().__init__("", status_code=status_code)

    def __str__(self) -> str:
        return "not found"


class BadRequestError(OtpServiceError):
    def __str__(self) -> str:
        return f"bad request: {self.problem}"


class ConflictError(OtpServiceError):
    def __str__(self) -> str:
        return f"conflict: {self.problem}"


class UnknownError(OtpServiceError):
    """Any failing status the client has no dedicated mapping for."""

    def __str__(self) -> str:
        return f"unknown error: {self.problem}"
