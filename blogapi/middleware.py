import logging
import time
from contextvars import ContextVar

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger(__name__)

# Statements sent to the store while serving the current request.
statement_count: ContextVar[int] = ContextVar("statement_count", default=0)


def count_statements(engine: AsyncEngine) -> None:
    """
    Bump ``statement_count`` each time *engine* sends a statement to the store.

    A post lookup costs two statements (post, then its comments) and a like
    costs one UPDATE; the ``X-Query-Count`` header makes that visible per
    request.  Call once for every engine that serves requests.
    """

    @event.listens_for(engine.sync_engine, "before_cursor_execute")
    def _bump(conn, cursor, statement, parameters, context, executemany):
        statement_count.set(statement_count.get() + 1)


# ---------------------------------------------------------------------------
# Middleware (pure ASGI, keeps ContextVar mutations visible to the wrapper)
# ---------------------------------------------------------------------------

class TimingMiddleware:
    """
    Pure ASGI middleware that adds two diagnostic response headers and
    writes one access-log line per request:

    - ``X-Response-Time-Ms``: wall-clock time for the entire request.
    - ``X-Query-Count``: total SQL statements executed during the request,
      counted by the listener ``count_statements`` installs.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Reset the per-request counter.
        statement_count.set(0)
        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                headers.append((b"x-query-count", str(statement_count.get()).encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "%s %s -> %d (%.2f ms, %d queries)",
                scope["method"],
                scope["path"],
                status_code,
                (time.perf_counter() - start) * 1000,
                statement_count.get(),
            )
