"""Logging filters for enriching log records with request context.

This module provides logging filters that inject the current request id and
tracing span id into log records using the ContextVars set by the gateway
middleware and by ``gateway.tracing.span``. Adding the filters to your
logging configuration enables per-request correlation in logs without
modifying individual log statements.
"""

from logging import Filter, LogRecord
from .middleware import REQUEST_ID_CTX
from .tracing import SPAN_ID_CTX


class RequestIdFilter(Filter):
    """Attach a ``request_id`` attribute to log records.

    The value is retrieved from the ``REQUEST_ID_CTX`` ContextVar set by
    ``RequestIdMiddleware``. If no value is present, a hyphen ("-") is used
    as a placeholder so formatters can reliably reference ``%(request_id)s``.
    """

    def filter(self, record: LogRecord) -> bool:
        """Populate ``record.request_id`` and allow the record to be logged.

        Args:
            record: The log record to enrich.

        Returns:
            bool: Always True to indicate the record should be processed.
        """
        record.request_id = REQUEST_ID_CTX.get()
        return True


class SpanIdFilter(Filter):
    """Attach the active tracing ``span_id`` to log records.

    Records that already carry a ``span_id`` (for example the record emitted
    when a span finishes) keep their own value.
    """

    def filter(self, record: LogRecord) -> bool:
        if not hasattr(record, "span_id"):
            record.span_id = SPAN_ID_CTX.get()
        return True
