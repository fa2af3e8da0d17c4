import asyncio
import logging

from taurus.bootstrap.config.settings import TaurusConfig
from taurus.core.models.config import ServerConfig
from taurus.core.transport.application import Application
from taurus.core.transport.server import MessageServer


class GreeterService:
    """
    Runs the greeter's MessageServer from process start until a stop event.

    The service owns the event loop the server runs on, translates the
    validated settings into a ServerConfig, and shuts the server down once
    the stop event is set.
    """
    def __init__(self, config: TaurusConfig, app: Application) -> None:
        self._config = config
        self._app = app
        self._loop = self._create_event_loop()
        self._server = MessageServer(self._build_server_config())
        self._logger = logging.getLogger("taurus.service")

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop

    @property
    def server(self) -> MessageServer:
        return self._server

    async def start(self, stop_event: asyncio.Event) -> None:
        await self._server.start()
        self._logger.info(f"Greeter listening on {self._server.url}")

        await stop_event.wait()

        self._logger.info("Shutting down greeter")
        await self._server.shutdown()

    def _build_server_config(self) -> ServerConfig:
        server_config = self._config.server

        return ServerConfig(
            app=self._app,
            host=server_config.host,
            port=server_config.port,
            path=server_config.path,
            ssl_ctx=self._config.get_server_ssl_ctx(),
            max_message_size=server_config.max_message_size,
            timeout_graceful_shutdown=server_config.timeout_graceful_shutdown,
        )

    @staticmethod
    def _create_event_loop() -> asyncio.AbstractEventLoop:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        return loop
