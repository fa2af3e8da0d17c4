import asyncio
import logging
import threading
from concurrent.futures import CancelledError, Future
from typing import Protocol

from taurus.core.models.events import Event, EventSink, Opened
from taurus.core.transport.connection import Connection


class Session(Protocol):
    """What the interactive shell needs from a live connection."""

    @property
    def is_open(self) -> bool:
        ...

    def start(self) -> bool:
        ...

    def send(self, command: str) -> bool:
        ...

    def close(self) -> None:
        ...


class BackgroundSession:
    """
    Drives a Connection on an event loop running in a background thread.

    The interactive shell blocks the main thread on operator input, so the
    connection's events are consumed on a dedicated loop and forwarded to
    the sink as they arrive. Sends are marshalled onto that loop and wait
    for the frame to be written, never for a reply.

    `start()` blocks until the connection is either opened or has failed.
    """

    def __init__(self, connection: Connection, sink: EventSink) -> None:
        self._connection = connection
        self._sink = sink
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._loop.run_forever,
            name="taurusctl-session",
            daemon=True,
        )
        self._consumer: Future | None = None
        self._settled = threading.Event()
        self._opened = False
        self._logger = logging.getLogger("ctl.session")

    @property
    def is_open(self) -> bool:
        return self._connection.is_open

    def start(self) -> bool:
        self._thread.start()
        self._consumer = asyncio.run_coroutine_threadsafe(self._consume(), self._loop)
        self._settled.wait()
        return self._opened

    def send(self, command: str) -> bool:
        future = asyncio.run_coroutine_threadsafe(
            self._connection.send(command), self._loop
        )
        return future.result()

    def close(self) -> None:
        if not self._thread.is_alive():
            if not self._loop.is_closed():
                self._loop.close()
            return

        asyncio.run_coroutine_threadsafe(self._connection.close(), self._loop).result()
        if self._consumer is not None:
            if not self._opened and not self._consumer.done():
                # handshake still pending, nothing to close gracefully
                self._consumer.cancel()
                self._settled.wait()
            try:
                self._consumer.result()
            except CancelledError:
                self._logger.info(f"Connection attempt to {self._connection.url} abandoned")

        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join()
        self._loop.close()

    async def _consume(self) -> None:
        try:
            async for event in self._connection.events():
                self._dispatch(event)
        finally:
            self._settled.set()

    def _dispatch(self, event: Event) -> None:
        if isinstance(event, Opened):
            self._opened = True

        try:
            self._sink(event)
        except Exception as ex:
            self._logger.error(f"Unable to render {event}: {ex}", exc_info=ex)

        # The first event tells whether the connection could be opened.
        self._settled.set()
