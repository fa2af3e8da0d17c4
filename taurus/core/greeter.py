import logging

from taurus.core.models.message import ReceiveMessage, SendMessage

DEFAULT_GREETING = "Hello! Message From Server!!"


class GreeterApplication:
    """
    Per-connection application of the greeter server.

    The greeting is sent once, as soon as the connection is accepted and
    before anything is read from the peer. Every inbound message is then
    logged as-is; nothing else is ever sent back.
    """

    def __init__(self, greeting: str = DEFAULT_GREETING) -> None:
        self._greeting = greeting
        self._logger = logging.getLogger("core.greeter")

    @property
    def greeting(self) -> str:
        return self._greeting

    async def __call__(self, receive: ReceiveMessage, send: SendMessage) -> None:
        await send(self._greeting)

        while True:
            message = await receive()
            if message is None:
                break

            self._logger.info(f"Received message => {message}")
