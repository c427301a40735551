# nurture_audit/core/security.py
from __future__ import annotations

import time
from typing import Any, Dict, Optional

import jwt  # PyJWT
from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader, HTTPAuthorizationCredentials, HTTPBearer

from nurture_audit.core.config import Settings, get_settings


def _require_jwt_secret(settings: Settings) -> str:
    secret = settings.JWT_SECRET
    if not secret or len(secret) < 16:
        raise RuntimeError(
            "JWT_SECRET is not set or too short. Set a strong secret (>=16 chars) in environment."
        )
    return secret


# ---------- API Key auth (token issuance) ----------

def validate_api_key(api_key: Optional[str], settings: Settings) -> str:
    """
    Checks the key against the configured allow-list.
    Returns the key if valid; raises HTTP 401 otherwise.
    """
    if not api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing API key header '{settings.API_KEY_HEADER_NAME}'.",
        )
    if api_key not in settings.VALID_API_KEYS:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key.",
        )
    return api_key


# The header name is fixed when the app is imported so the OpenAPI docs can show it.
api_key_header = APIKeyHeader(name=get_settings().API_KEY_HEADER_NAME, auto_error=False)


def api_key_auth(
    api_key: Optional[str] = Depends(api_key_header),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    FastAPI dependency: validates API key and returns it.
    Use this only on the token endpoint.
    """
    return validate_api_key(api_key, settings)


# ---------- JWT creation & validation ----------

def create_access_token(
    subject: str,
    settings: Settings,
    extra_claims: Optional[Dict[str, Any]] = None,
) -> str:
    secret = _require_jwt_secret(settings)

    now = int(time.time())
    payload: Dict[str, Any] = {
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "nbf": now,
        "exp": now + settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        "sub": subject,
        "typ": "access",
    }
    if extra_claims:
        payload.update(extra_claims)

    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


bearer_scheme = HTTPBearer(auto_error=False)


def decode_and_verify_token(token: str, settings: Settings) -> Dict[str, Any]:
    """
    Decodes the JWT and validates signature + standard claims.
    Raises HTTP 401 on failure.
    """
    secret = _require_jwt_secret(settings)
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            options={"require": ["exp", "iat", "sub", "iss", "aud"]},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token expired.",
        )
    except jwt.InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token.",
        )

    if payload.get("typ") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type.",
        )
    return payload


def jwt_auth(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """
    FastAPI dependency for protected endpoints.
    Requires: Authorization: Bearer <token>
    """
    if not creds or not creds.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token.",
        )
    return decode_and_verify_token(creds.credentials, settings)
