"""Client settings loader."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from otpclient.utils.env import get_bool_env, get_str_env

BASE_URL_ENV = "OTP_SERVICE_BASE_URL"
SECRET_ENV = "OTP_SERVICE_SECRET"
DEBUG_ENV = "OTP_SERVICE_DEBUG"


class ClientSettings(BaseModel):
    """Where the OTP service lives and the shared secret it expects."""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(min_length=1)
    secret: str = Field(min_length=1)
    debug: bool = False

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @classmethod
    def from_file(cls, path: Path) -> "ClientSettings":
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid client settings: {exc}") from exc
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid client settings: {exc}") from exc

    @classmethod
    def from_env(cls) -> "ClientSettings":
        base_url = get_str_env(BASE_URL_ENV)
        secret = get_str_env(SECRET_ENV)
        missing = [name for name, value in ((BASE_URL_ENV, base_url), (SECRET_ENV, secret)) if value is None]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")
        return cls(base_url=base_url, secret=secret, debug=get_bool_env(DEBUG_ENV))
