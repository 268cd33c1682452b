"""Lightweight tracing spans bound to the current request context.

A span brackets a block of code: it gets a random id, remembers its parent
(the span active when it was opened), is exposed through ``SPAN_ID_CTX`` so
log records and outgoing HTTP calls can reference it, and is always closed
when the block exits, whatever the outcome. Closing a span emits a single
structured log record with its name, duration and outcome.
"""

import contextvars
import logging
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

SPAN_ID_CTX = contextvars.ContextVar("span_id", default="-")

logger = logging.getLogger("tracing")


@dataclass
class Span:
    """A single timed region.

    Attributes:
        name: Fixed name describing the traced operation.
        span_id: Random 16-hex identifier.
        parent_id: Identifier of the enclosing span, or None at the root.
        started_at: ``time.monotonic()`` value when the span was opened.
        duration_ms: Elapsed time, set when the span ends.
        outcome: ``"ok"`` or ``"error"``, set when the span ends.
    """

    name: str
    span_id: str
    parent_id: Optional[str]
    started_at: float
    duration_ms: Optional[float] = None
    outcome: Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.duration_ms is not None


def _new_span_id() -> str:
    return uuid.uuid4().hex[:16]


@contextmanager
def span(name: str) -> Iterator[Span]:
    """Open a span named ``name`` for the duration of the ``with`` block.

    The span is ended on every exit path. Exceptions are re-raised untouched
    after the span is recorded with ``outcome="error"``.

    Yields:
        Span: The active span.
    """
    parent = SPAN_ID_CTX.get()
    current = Span(
        name=name,
        span_id=_new_span_id(),
        parent_id=None if parent == "-" else parent,
        started_at=time.monotonic(),
    )
    token = SPAN_ID_CTX.set(current.span_id)
    current.outcome = "error"
    try:
        yield current
        current.outcome = "ok"
    finally:
        current.duration_ms = round((time.monotonic() - current.started_at) * 1000, 3)
        SPAN_ID_CTX.reset(token)
        logger.info(
            "span finished",
            extra={
                "span_name": current.name,
                "span_id": current.span_id,
                "parent_span_id": current.parent_id,
                "duration_ms": current.duration_ms,
                "outcome": current.outcome,
            },
        )
