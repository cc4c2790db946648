from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from asset_ledger.core.errors import ErrorKind, LedgerError

logger = logging.getLogger(__name__)

_STATUS = {
    ErrorKind.UNAUTHORIZED: 403,
    ErrorKind.VERIFIER_ONLY: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.ASSET_EXISTS: 409,
    ErrorKind.ALREADY_TOKENIZED: 409,
    ErrorKind.DECOMMISSIONED: 409,
}


def status_for(kind: ErrorKind) -> int:
    return _STATUS.get(kind, 422)


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    rid = getattr(request.state, "request_id", None)
    logger.info(
        "[api] %s %s -> %s (%d) request_id=%s",
        request.method, request.url.path, exc.kind.name, exc.code, rid,
    )
    return JSONResponse(
        status_code=status_for(exc.kind),
        content={"error": exc.kind.name, "code": exc.code, "detail": exc.detail},
    )
