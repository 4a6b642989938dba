import threading
import time
from collections import defaultdict

from starlette.types import ASGIApp, Message, Receive, Scope, Send

# Path label for requests that matched no route.
UNMATCHED_PATH = "<unmatched>"

# ---------------------------------------------------------------------------
# Request metrics registry
# ---------------------------------------------------------------------------

class RequestMetrics:
    """
    In-process request counters keyed by (method, route path, status).

    One instance lives on ``app.state.metrics``; ``TimingMiddleware``
    records into it and the ``/metrics`` router reads a snapshot.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: dict[tuple[str, str, int], int] = defaultdict(int)
        self._durations: dict[tuple[str, str, int], float] = defaultdict(float)

    def record(self, method: str, path: str, status: int, duration_ms: float) -> None:
        key = (method, path, status)
        with self._lock:
            self._counts[key] += 1
            self._durations[key] += duration_ms

    def snapshot(self) -> dict:
        with self._lock:
            requests = [
                {
                    "method": method,
                    "path": path,
                    "status": status,
                    "count": count,
                    "avg_duration_ms": round(self._durations[(method, path, status)] / count, 2),
                }
                for (method, path, status), count in sorted(self._counts.items())
            ]
        return {
            "requests": requests,
            "total_requests": sum(r["count"] for r in requests),
        }


# ---------------------------------------------------------------------------
# Middleware (pure ASGI, no BaseHTTPMiddleware task per request)
# ---------------------------------------------------------------------------

class TimingMiddleware:
    """
    Pure ASGI middleware that:

    - adds ``X-Response-Time-Ms`` (wall-clock time up to the response
      start) to every HTTP response;
    - records method, route template, status and duration into
      *metrics* once the request finishes.

    The route template (``/api/v1/articles/{article_id}``) is read from
    ``scope["route"]``, which the router fills in on a match.  Unmatched
    requests all share the ``UNMATCHED_PATH`` label so arbitrary URLs
    cannot grow the registry.
    """

    def __init__(self, app: ASGIApp, metrics: RequestMetrics) -> None:
        self.app = app
        self.metrics = metrics

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(duration_ms).encode()))
                message["headers"] = headers
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            route = scope.get("route")
            path = getattr(route, "path", UNMATCHED_PATH)
            duration_ms = (time.perf_counter() - start) * 1000
            self.metrics.record(scope["method"], path, status_code, duration_ms)
