from __future__ import annotations

from fastapi import Header, HTTPException, status

from declutter.core.config import get_settings


def reauthenticate_exception(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={
            "error": message,
            "action": "redirect_to_auth",
            "auth_url": get_settings().auth_redirect_url,
        },
    )


def get_access_token(authorization: str | None = Header(default=None)) -> str:
    scheme, _sep, token = (authorization or "").partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise reauthenticate_exception("Missing or invalid Authorization header")
    return token
