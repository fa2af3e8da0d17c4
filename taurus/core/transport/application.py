from typing import Protocol

from taurus.core.models.message import ReceiveMessage, SendMessage


class Application(Protocol):
    """
    This interface defines the per-connection handler run by the MessageServer.

    An Application is an asynchronous callable that receives two functions:
    `receive`, which waits for and returns the next incoming text message (or
    None once the peer is gone), and `send`, which transmits a text message to
    the peer.

    The Application runs until it returns or raises an exception. When it
    exits, the underlying WebSocket connection is closed by the server.
    Handshake, framing and keepalive belong to the transport.
    """
    async def __call__(self, receive: ReceiveMessage, send: SendMessage) -> None:
        ...
