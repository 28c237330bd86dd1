"""
Sign-in/sign-up delegated to an external auth provider over HTTP.
This service never sees or stores password hashes.
"""
from typing import Optional, Protocol

import requests
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from logging_handler import setup_logger

logger = setup_logger(__name__)


class AuthError(Exception):
    """Sign-in/sign-up rejected or provider unreachable. str(e) is user-facing."""


class AuthUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    email: str
    full_name: Optional[str] = Field(default=None, alias="fullName")


class AuthProvider(Protocol):
    def sign_in(self, email: str, password: str) -> AuthUser: ...
    def sign_up(self, email: str, password: str, full_name: str) -> AuthUser: ...


def _error_message(resp: requests.Response) -> str:
    """Best-effort message from a provider error response; may be empty."""
    try:
        data = resp.json()
    except ValueError:
        return (resp.text or "").strip()
    if isinstance(data, dict):
        for field in ("message", "error", "detail"):
            value = data.get(field)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return ""


class HttpAuthProvider:
    """POSTs credentials as JSON to `<base_url>/sign-in` and `<base_url>/sign-up`."""

    def __init__(self, base_url: str, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def sign_in(self, email: str, password: str) -> AuthUser:
        return self._post("/sign-in", {"email": email, "password": password})

    def sign_up(self, email: str, password: str, full_name: str) -> AuthUser:
        return self._post(
            "/sign-up",
            {"email": email, "password": password, "fullName": full_name},
        )

    def _post(self, path: str, payload: dict) -> AuthUser:
        url = f"{self.base_url}{path}"
        try:
            resp = requests.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Auth provider unreachable at {url}: {e}")
            raise AuthError(str(e)) from e
        if not resp.ok:
            raise AuthError(_error_message(resp))
        try:
            return AuthUser.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise AuthError("Auth provider returned an invalid user") from e
