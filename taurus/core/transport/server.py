import asyncio
import http
import logging
from urllib.parse import urlsplit

from websockets.asyncio.server import Server, ServerConnection, serve
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK
from websockets.http11 import Request, Response

from taurus.core.models.config import ServerConfig
from taurus.core.models.state import ServerState


class MessageServer:
    """
    Owns the lifecycle of a WebSocket server that accepts peer connections
    and runs the configured application once per connection.

    It binds to the configured host and port using the `websockets` asyncio
    server. For every connection it adapts the WebSocket into a pair of
    `receive`/`send` coroutines carrying plain text, and awaits the
    application with them. The connection is registered in the shared
    ServerState for as long as the application runs.

    Connections are independent: an exception raised by the application for
    one peer is logged and only closes that peer's connection.

    On shutdown, MessageServer closes the listening socket and every open
    connection, then waits for them to finish. If the graceful shutdown
    timeout is exceeded an error is logged.
    """
    def __init__(self, config: ServerConfig) -> None:
        self._config = config
        self.state = ServerState()
        self._logger = logging.getLogger("core.transport.server")

        self._server: Server | None = None

    @property
    def port(self) -> int:
        if self._server is None:
            raise RuntimeError("Server is not started")
        return self._server.sockets[0].getsockname()[1]

    @property
    def url(self) -> str:
        config = self._config
        return f"{config.scheme}://{config.host}:{self.port}{config.path or '/'}"

    async def start(self) -> None:
        config = self._config
        kwargs = {}
        if config.path is not None:
            kwargs["process_request"] = self._process_request
        if config.ssl_ctx is not None:
            kwargs["ssl"] = config.ssl_ctx

        self._server = await serve(
            self._handle,
            host=config.host,
            port=config.port,
            max_size=config.max_message_size,
            **kwargs,
        )

    async def shutdown(self) -> None:
        if self._server is None:
            return

        if self.state.connections:
            self._logger.info(
                f"Closing {len(self.state.connections)} client connection(s)."
            )

        self._server.close()
        try:
            await asyncio.wait_for(
                self._server.wait_closed(),
                timeout=self._config.timeout_graceful_shutdown
            )
        except asyncio.TimeoutError:
            self._logger.error(
                f"Timeout graceful shutdown exceeded, "
                f"{len(self.state.connections)} connection(s) still open"
            )

    def _process_request(
        self,
        connection: ServerConnection,
        request: Request,
    ) -> Response | None:
        path = urlsplit(request.path).path
        if path == self._config.path:
            return None

        self._logger.warning(
            f"Rejected connection from {connection.remote_address} "
            f"on unknown path '{path}'"
        )
        return connection.respond(http.HTTPStatus.NOT_FOUND, "Not Found\n")

    async def _handle(self, websocket: ServerConnection) -> None:
        peer = websocket.remote_address
        self.state.connections.add(websocket)
        self._logger.info(f"Connection accepted from {peer}")

        async def receive() -> str | None:
            try:
                message = await websocket.recv()
            except ConnectionClosedOK:
                return None
            except ConnectionClosed as ex:
                self._logger.warning(f"Connection error from {peer}: {ex}")
                return None

            if isinstance(message, bytes):
                self._logger.warning(f"Binary frame received from {peer}")
                return message.decode(errors="replace")
            return message

        async def send(message: str) -> None:
            await websocket.send(message)

        try:
            await self._config.app(receive, send)
        except ConnectionClosed as ex:
            self._logger.info(f"Connection with {peer} closed while sending: {ex}")
        except Exception as ex:
            self._logger.error(
                f"Error in application for {peer}: {ex}", exc_info=ex
            )
        finally:
            self.state.connections.discard(websocket)
            self._logger.info(f"{peer} disconnected")
