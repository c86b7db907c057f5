# tubely/services/auth/tokens.py
from __future__ import annotations

import time
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from tubely.common.settings import Settings, get_settings
from tubely.domain.errors import Unauthenticated


def create_access_token(user_id: UUID, *, expires_in: Optional[int] = None, cfg: Optional[Settings] = None) -> str:
    cfg = cfg or get_settings()
    now = int(time.time())
    claims = {
        "iss": cfg.jwt_issuer,
        "sub": str(user_id),
        "iat": now,
        "exp": now + int(expires_in if expires_in is not None else cfg.jwt_expires_sec),
    }
    return jwt.encode(claims, cfg.jwt_secret, algorithm=cfg.jwt_algo)


def validate_access_token(token: str, *, cfg: Optional[Settings] = None) -> UUID:
    """Verify signature, expiry and issuer; return the subject as a user id."""
    cfg = cfg or get_settings()
    try:
        claims = jwt.decode(token, cfg.jwt_secret, algorithms=[cfg.jwt_algo], issuer=cfg.jwt_issuer)
    except JWTError as e:
        raise Unauthenticated(f"Couldn't validate JWT: {e}") from e
    try:
        return UUID(str(claims.get("sub")))
    except ValueError as e:
        raise Unauthenticated("JWT subject is not a user id") from e
