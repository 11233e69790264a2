from __future__ import annotations

import typing as t

import annotated_types as ant
import pydantic as p

from .base import BaseSettings


class ServeSettings(BaseSettings):
    host: p.IPvAnyAddress
    port: t.Annotated[int, ant.Gt(0), ant.Le(65535)]


class AuthSettings(BaseSettings):
    """Authentication settings for JWT tokens."""

    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 30


class LabdeskWebSettings(BaseSettings):
    """Settings for the labdesk JSON application."""

    backend: ServeSettings
    auth: AuthSettings = AuthSettings()
    cors_origins: list[str] = []


class WebSettings(BaseSettings):
    labdesk: LabdeskWebSettings
