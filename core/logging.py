"""JSON logging with the current order id attached to every record."""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

from core.config import settings


order_id_ctx: ContextVar[str] = ContextVar("order_id", default="")


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = settings.APP_NAME
        record.order_id = order_id_ctx.get()
        return True


def configure_logging() -> None:
    """Configure the root logger once per process."""

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ContextFilter())
    handler.setFormatter(
        JsonFormatter("%(asctime)s %(levelname)s %(name)s %(service_name)s %(order_id)s %(message)s")
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.LOG_LEVEL)


def mask_key(key: str) -> str:
    """Render a secret as ``<first 15>...<last 4>`` for log output."""
    if not key:
        return "MISSING"
    if len(key) <= 19:
        return f"{key[:4]}..."
    return f"{key[:15]}...{key[-4:]}"
