from typing import Awaitable, Callable


ReceiveMessage = Callable[[], Awaitable[str | None]]
"""
Coroutine provided to the application for receiving a text message.
It suspends until a message is available and returns None once the peer
has disconnected.
"""


SendMessage = Callable[[str], Awaitable[None]]
"""
Coroutine provided to the application for sending a text message to the peer.
"""
