import logging

from django.db import connection
from django.db.utils import DatabaseError
from django.http import JsonResponse

logger = logging.getLogger("monitoring")


def health_view(_request):
    """Readiness probe: reports whether the orders database answers."""
    db_ok = True
    try:
        with connection.cursor() as cur:
            cur.execute("SELECT 1;")
    except DatabaseError:
        logger.warning("database health check failed", exc_info=True)
        db_ok = False

    return JsonResponse(
        {"ok": db_ok, "components": {"db": {"ok": db_ok}}},
        status=200 if db_ok else 503,
    )
