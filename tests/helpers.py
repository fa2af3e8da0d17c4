import asyncio
import contextlib
import os
import socket
import ssl
from typing import AsyncIterator, Callable

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

from taurus.bootstrap.config.settings import TaurusConfig
from taurus.core.models.config import ServerConfig
from taurus.core.models.message import ReceiveMessage, SendMessage
from taurus.core.transport.application import Application
from taurus.core.transport.server import MessageServer


class FakeTaurusConfig(TaurusConfig):
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=os.environ["TEST_TAURUSCONFIG"]),
        )


class RecordingApplication:
    """
    Test double for the remote endpoint: optionally greets, then records
    every message. With an idle timeout it hangs up once the peer has been
    quiet for that long, which ends the client's event stream.
    """
    def __init__(self, greeting: str | None = None, idle_timeout: float | None = None) -> None:
        self.greeting = greeting
        self.idle_timeout = idle_timeout
        self.received: list[str] = []
        self.connections = 0

    async def __call__(self, receive: ReceiveMessage, send: SendMessage) -> None:
        self.connections += 1
        if self.greeting is not None:
            await send(self.greeting)

        while True:
            try:
                message = await asyncio.wait_for(receive(), self.idle_timeout)
            except asyncio.TimeoutError:
                break
            if message is None:
                break
            self.received.append(message)


@contextlib.asynccontextmanager
async def running_server(
    app: Application,
    path: str | None = None,
    ssl_ctx: ssl.SSLContext | None = None,
) -> AsyncIterator[MessageServer]:
    config = ServerConfig(
        app=app,
        host="127.0.0.1",
        port=0,
        path=path,
        ssl_ctx=ssl_ctx,
        timeout_graceful_shutdown=1.0,
    )
    server = MessageServer(config)
    await server.start()
    try:
        yield server
    finally:
        await server.shutdown()


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    async with asyncio.timeout(timeout):
        while not predicate():
            await asyncio.sleep(0.01)


def unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
