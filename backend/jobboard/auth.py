from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
import time

from fastapi import Depends, Header, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from jobboard.config import Settings
from jobboard.database import get_db
from jobboard.errors import ErrorKind, ProcedureError
from jobboard.services.guard import Caller
from jobboard.services.users import load_caller


security = HTTPBearer(auto_error=False)


def create_access_token(user_id: int, secret: str, ttl_seconds: int) -> str:
    exp = int(time.time()) + ttl_seconds
    nonce = secrets.token_hex(6)
    payload = f"{user_id}:{exp}:{nonce}"
    signature = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()
    token_raw = f"{payload}:{signature}".encode("utf-8")
    return base64.urlsafe_b64encode(token_raw).decode("utf-8").rstrip("=")


def decode_access_token(token: str, secret: str) -> int | None:
    if not token:
        return None
    padding = "=" * (-len(token) % 4)
    try:
        decoded = base64.urlsafe_b64decode((token + padding).encode("utf-8")).decode("utf-8")
        user_id_str, exp_str, nonce, signature = decoded.split(":", 3)
        payload = f"{user_id_str}:{exp_str}:{nonce}"
    except (ValueError, UnicodeDecodeError):
        return None

    expected_signature = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).hexdigest()
    if not hmac.compare_digest(expected_signature, signature):
        return None

    try:
        exp = int(exp_str)
        user_id = int(user_id_str)
    except ValueError:
        return None
    if exp < int(time.time()):
        return None
    return user_id


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Caller | None:
    """Resolve the bearer token to a caller; anonymous when absent or invalid.

    Anonymous callers still reach public procedures, and the guard answers
    ``UNAUTHENTICATED`` for everything else.
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    user_id = decode_access_token(credentials.credentials, settings.auth_secret)
    if user_id is None:
        return None
    return load_caller(db, user_id)


def require_identity_backchannel(
    x_identity_secret: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    expected = settings.identity_shared_secret
    if not expected or not x_identity_secret or not hmac.compare_digest(expected, x_identity_secret):
        raise ProcedureError(ErrorKind.UNAUTHENTICATED, "Identity provider credentials required")
