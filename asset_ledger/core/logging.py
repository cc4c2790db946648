import contextvars
import logging
import sys
from typing import Optional

from pythonjsonlogger import jsonlogger

from asset_ledger.core.config import Settings

# Set by RequestIdMiddleware for the lifetime of one HTTP request.
request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "request_id", default=None
)


class LedgerContextFilter(logging.Filter):
    """
    Stamps every record with the deployment environment and the current
    request id (None outside a request).
    """

    def __init__(self, environment: str):
        super().__init__()
        self.environment = environment

    def filter(self, record: logging.LogRecord) -> bool:
        record.environment = self.environment
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()
        return True


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(LedgerContextFilter(settings.environment))
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(request_id)s %(environment)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
        )
    )

    root = logging.getLogger()
    root.setLevel(level)
    # create_app() may run more than once per process (tests, reload)
    root.handlers = [handler]

    for name in ("uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).setLevel(level)
    # SQL echo only when explicitly debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level <= logging.DEBUG else logging.WARNING
    )
