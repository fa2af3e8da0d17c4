import ssl
from dataclasses import dataclass

from taurus.core.transport.application import Application


@dataclass
class ServerConfig:
    """
    Static configuration for a MessageServer.

    This structure defines all parameters required to start a server:
    networking, optional TLS, message limits, and graceful shutdown behavior.
    """
    app: Application
    """
    The per-connection application coroutine with the signature:
        async def app(receive, send)
    """

    host: str
    """
    IP address or hostname on which the server listens.
    """

    port: int
    """
    TCP port to bind. If set to 0, the OS selects an available port.
    """

    path: str | None = None
    """
    Request path accepted by the server, e.g. "/lupus".
    None accepts every path.
    """

    ssl_ctx: ssl.SSLContext | None = None
    """
    TLS context used to serve wss:// connections. None serves plain ws://.
    """

    max_message_size: int | None = 1 * 1024 * 1024  # 1MB
    """
    Maximum size of an incoming message. None disables the limit.
    """

    timeout_graceful_shutdown: float = 5.0
    """
    Maximum time (in seconds) allowed for open connections to close
    during shutdown.
    """

    @property
    def scheme(self) -> str:
        return "ws" if self.ssl_ctx is None else "wss"
