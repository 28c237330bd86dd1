"""
Sign-in / sign-up forms, backed by the external auth provider.

Both routes answer with a toast for the frontend: on success in the body,
on failure as the `detail` of a 401.
"""
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from auth import AuthError, AuthProvider
from content import t
from deps import get_auth_provider
from logging_handler import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class SignInRequest(BaseModel):
    email: str
    password: str
    language: Literal["en", "ar"] = "en"


class SignUpRequest(BaseModel):
    email: str
    password: str
    full_name: str
    language: Literal["en", "ar"] = "en"


def _error_toast(e: AuthError, language: str) -> dict:
    return {
        "title": t("error", language),
        "description": str(e) or t("generic_error", language),
        "variant": "destructive",
    }


@router.post("/sign-in")
def sign_in(req: SignInRequest, provider: AuthProvider = Depends(get_auth_provider)):
    try:
        user = provider.sign_in(req.email, req.password)
    except AuthError as e:
        logger.warning(f"Sign-in failed for {req.email}: {e}")
        raise HTTPException(status_code=401, detail=_error_toast(e, req.language))
    logger.info(f"User {user.id} signed in")
    return {
        "user": user.model_dump(by_alias=True),
        "toast": {"title": t("success", req.language), "description": t("signed_in", req.language)},
        "redirect": "/",
    }


@router.post("/sign-up", status_code=201)
def sign_up(req: SignUpRequest, provider: AuthProvider = Depends(get_auth_provider)):
    try:
        user = provider.sign_up(req.email, req.password, req.full_name)
    except AuthError as e:
        logger.warning(f"Sign-up failed for {req.email}: {e}")
        raise HTTPException(status_code=401, detail=_error_toast(e, req.language))
    logger.info(f"User {user.id} signed up")
    return {
        "user": user.model_dump(by_alias=True),
        "toast": {"title": t("success", req.language), "description": t("signed_up", req.language)},
        "redirect": "/",
    }
