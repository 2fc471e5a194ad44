"""Timing utilities for performance tracking."""

import time
import uuid
from typing import Protocol

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logger import get_logger

logger = get_logger(__name__)


class Clock(Protocol):
    """Monotonic clock returning fractional seconds (e.g. time.perf_counter)."""

    def __call__(self) -> float: ...


class Stopwatch:
    """Measures elapsed time against a monotonic clock.

    Wall-clock adjustments never affect the reading as long as the clock is
    monotonic; inject a fake clock in tests.
    """

    def __init__(self, clock: Clock = time.perf_counter) -> None:
        self._clock = clock
        self._started_at = clock()

    @classmethod
    def start_new(cls, clock: Clock = time.perf_counter) -> "Stopwatch":
        return cls(clock)

    def elapsed_ms(self) -> int:
        """Whole milliseconds since the stopwatch was started."""
        return int((self._clock() - self._started_at) * 1000)


class RequestTimingMiddleware:
    """Adds duration/request-id headers and emits one log line per request.

    - x-request-duration-ms: time until response headers were sent
    - x-request-id: random id for correlating client reports with logs

    Unhandled exceptions are turned into a 500 by Starlette's outermost
    ServerErrorMiddleware, after this middleware has already seen the
    exception. Those responses carry neither header; the request is still
    logged once, with outcome="exception" and no status code.
    """

    def __init__(
        self,
        app: ASGIApp,
        service_name: str = "users-api",
        clock: Clock = time.perf_counter,
    ):
        self.app = app
        self.service_name = service_name
        self.clock = clock

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = self.clock()
        method = scope.get("method", "UNKNOWN")
        path = scope.get("path", "")
        request_id = str(uuid.uuid4())

        response_status: int | None = None

        async def send_wrapper(message: Message) -> None:
            nonlocal response_status

            if message.get("type") == "http.response.start":
                response_status = int(message.get("status", 0))
                headers: list[tuple[bytes, bytes]] = list(message.get("headers", []))
                duration_ms = (self.clock() - start_time) * 1000
                headers.append(
                    (b"x-request-duration-ms", f"{duration_ms:.2f}".encode())
                )
                headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = headers

            elif message.get("type") == "http.response.body" and not message.get(
                "more_body", False
            ):
                duration_ms = (self.clock() - start_time) * 1000
                route = scope.get("route")
                route_path = getattr(route, "path", None) or path

                logger.info(
                    "request.completed",
                    service_name=self.service_name,
                    request_id=request_id,
                    http_method=method,
                    http_route=route_path,
                    http_status_code=response_status,
                    duration_ms=round(duration_ms, 2),
                    outcome=(
                        "success"
                        if response_status and response_status < 400
                        else "error"
                    ),
                )

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as exc:
            duration_ms = (self.clock() - start_time) * 1000
            logger.info(
                "request.completed",
                service_name=self.service_name,
                request_id=request_id,
                http_method=method,
                http_route=path,
                duration_ms=round(duration_ms, 2),
                outcome="exception",
                exception_type=type(exc).__name__,
            )
            raise
