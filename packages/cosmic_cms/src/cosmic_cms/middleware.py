import logging
import uuid
from typing import Any, Awaitable, Callable, Final

from cosmic_core.logging import request_context
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER: Final[str] = "X-Request-ID"


class RequestIdMiddleware:
    """
    Tags every request with an id for log correlation.

    An incoming ``X-Request-ID`` is reused, otherwise a new one is generated.
    The id is scoped for the request's log records and echoed in the response.
    """

    def __init__(self, app: ASGIApp, header_name: str = REQUEST_ID_HEADER):
        self.app: Final[ASGIApp] = app
        self.header_name: Final[str] = header_name

    async def __call__(
        self,
        scope: dict[str, Any],
        receive: Callable[[], Awaitable[Any]],
        send,
    ) -> Any:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return None

        request_id = Headers(scope=scope).get(self.header_name) or uuid.uuid4().hex

        async def send_with_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                headers[self.header_name] = request_id
            await send(message)

        with request_context(request_id):
            logger.debug("%s %s", scope["method"], scope["path"])
            return await self.app(scope, receive, send_with_id)
