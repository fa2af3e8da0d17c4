import logging
import ssl
from typing import AsyncIterator

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, ConnectionClosedError, WebSocketException
from websockets.protocol import State

from taurus.core.models.events import Closed, Errored, Event, MessageReceived, Opened


class Connection:
    """
    A single outbound WebSocket connection, exposed as an ordered stream of
    tagged events.

    The connection is owned by whoever created it and is passed explicitly
    to the code that sends on it. Opening happens lazily when `events()` is
    iterated: the first event is either `Opened` or, if the connection could
    not be established, a single `Errored`. While open, every inbound frame
    yields a `MessageReceived` in arrival order. The stream ends with
    `Errored` (abnormal closure) followed by `Closed`.

    Transport errors are logged and turned into events, never raised to the
    consumer. Nothing is retried and no timeout is applied: a connection
    attempt waits until the transport resolves it.
    """
    def __init__(
        self,
        url: str,
        ssl_ctx: ssl.SSLContext | None = None,
        max_size: int | None = 1 * 1024 * 1024,
    ) -> None:
        self._url = url
        self._ssl_ctx = ssl_ctx
        self._max_size = max_size
        self._ws: ClientConnection | None = None
        self._logger = logging.getLogger("core.transport.connection")

    @property
    def url(self) -> str:
        return self._url

    @property
    def is_open(self) -> bool:
        return self._ws is not None and self._ws.state is State.OPEN

    async def events(self) -> AsyncIterator[Event]:
        kwargs = {}
        if self._ssl_ctx is not None:
            kwargs["ssl"] = self._ssl_ctx

        try:
            self._ws = await connect(
                self._url,
                open_timeout=None,
                max_size=self._max_size,
                **kwargs,
            )
        except (OSError, WebSocketException, TypeError, ValueError) as ex:
            # TypeError: ssl context given for a ws:// url
            # ValueError: port out of range or not a number
            self._logger.error(f"Unable to connect to {self._url}: {ex}")
            yield Errored(self._url, ex)
            return

        self._logger.info(f"Connected to {self._url}")
        yield Opened(self._url)

        ws = self._ws
        try:
            async for message in ws:
                if isinstance(message, bytes):
                    self._logger.warning(f"Binary frame received from {self._url}")
                    message = message.decode(errors="replace")
                yield MessageReceived(self._url, message)
        except ConnectionClosedError as ex:
            self._logger.error(f"WebSocket error on {self._url}: {ex}")
            yield Errored(self._url, ex)

        self._logger.info(f"Connection to {self._url} closed")
        yield Closed(self._url, ws.close_code, ws.close_reason or "")

    async def send(self, command: str) -> bool:
        """
        Send one command as a single text frame, unmodified.

        Returns False when the connection is already closed. Sending on a
        connection that was never opened is a programming error.
        """
        if self._ws is None:
            raise RuntimeError(f"Connection to {self._url} is not open")

        try:
            await self._ws.send(command)
        except ConnectionClosed as ex:
            self._logger.error(f"Unable to send to {self._url}: {ex}")
            return False

        self._logger.debug(f"Sent {command!r} to {self._url}")
        return True

    async def close(self) -> None:
        if self._ws is not None:
            await self._ws.close()
