"""Client library for the OTP provisioning service."""

from otpclient.client import OtpClient
from otpclient.errors import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    OtpServiceError,
    UnknownError,
)
from otpclient.models import (
    CreateUserOtpResponse,
    GetUserOtpResponse,
    ValidateOtpRequest,
    VerifyOtpRequest,
)
from otpclient.settings import ClientSettings

__all__ = [
    "__version__",
    "BadRequestError",
    "ClientSettings",
    "ConflictError",
    "CreateUserOtpResponse",
    "GetUserOtpResponse",
    "NotFoundError",
    "OtpClient",
    "OtpServiceError",
    "UnknownError",
    "ValidateOtpRequest",
    "VerifyOtpRequest",
]

__version__ = "0.1.0"
