from asset_ledger.core.config import get_settings
from asset_ledger.core.errors import LedgerError
from asset_ledger.core.logging import configure_logging
from asset_ledger.core.middleware import RequestIdMiddleware
from asset_ledger.api.errors import ledger_error_handler
from asset_ledger.api.v1.router import v1_router

from fastapi import FastAPI


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
    )

    # Middleware: Request ID
    app.add_middleware(RequestIdMiddleware, header_name=settings.request_id_header)

    # Ledger rejections -> stable JSON error body
    app.add_exception_handler(LedgerError, ledger_error_handler)

    # API v1
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


app = create_app()
