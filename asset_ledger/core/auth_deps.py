# asset_ledger/core/auth_deps.py
from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from asset_ledger.core.security import decode_token
from asset_ledger.core.types import PRINCIPAL_MAX_LEN

bearer = HTTPBearer(auto_error=True)


def get_caller(
    request: Request,
    creds: HTTPAuthorizationCredentials = Depends(bearer),
) -> str:
    """
    Authenticated caller principal for a mutating operation.

    Guarantees:
    - JWT is valid and unexpired
    - `sub` claim is present and within the principal bound
    """
    try:
        payload = decode_token(creds.credentials)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token.")

    subject = payload.get("sub")
    if not subject or len(str(subject)) > PRINCIPAL_MAX_LEN:
        raise HTTPException(status_code=401, detail="Token missing subject claim.")

    request.state.caller = str(subject)
    return str(subject)
