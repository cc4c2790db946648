# asset_ledger/core/security.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt

from asset_ledger.core.config import get_settings

# Claims the caller may not override through `claims=`.
_RESERVED = frozenset({"sub", "iss", "iat", "exp"})


def create_access_token(
    subject: str,
    claims: Optional[Dict[str, Any]] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Signs a bearer token whose `sub` is the ledger principal.

    The ledger only ever reads `sub`; extra claims ride along for clients.
    """
    settings = get_settings()
    extra = {k: v for k, v in (claims or {}).items() if k not in _RESERVED}
    now = datetime.now(timezone.utc)
    ttl = timedelta(minutes=expires_minutes or settings.jwt_access_token_minutes)
    payload = {
        **extra,
        "sub": subject,
        "iss": settings.jwt_issuer,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    settings = get_settings()
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        issuer=settings.jwt_issuer,
    )
