"""
Dependencies shared by the routers.
"""
from fastapi import Depends, Header, HTTPException, Request
from sqlmodel import Session

import config
from auth import AuthProvider, HttpAuthProvider
from db import get_session
from storage import KeyValueStore
from timer import TimerRegistry


def require_user_id(user_id: str | None = Header(default=None, alias="X-User-Id")) -> str:
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=400, detail="Missing X-User-Id header")
    return user_id.strip()


def get_store(db: Session = Depends(get_session)) -> KeyValueStore:
    return KeyValueStore(db)


def get_timers(request: Request) -> TimerRegistry:
    return request.app.state.timers


def get_auth_provider() -> AuthProvider:
    if not config.AUTH_PROVIDER_URL:
        raise HTTPException(
            status_code=503,
            detail="Auth provider not configured. Set AUTH_PROVIDER_URL in backend/.env (see .env.example).",
        )
    return HttpAuthProvider(config.AUTH_PROVIDER_URL, timeout=config.AUTH_TIMEOUT_SECONDS)
