from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class Opened:
    """The WebSocket handshake with `url` completed."""
    url: str

    def to_dict(self) -> dict[str, Any]:
        return {"event": "open", "url": self.url}


@dataclass(frozen=True)
class MessageReceived:
    """
    One inbound text frame.

    There is no correlation with any outbound command: the data is rendered
    to the operator exactly as received.
    """
    url: str
    data: str

    def to_dict(self) -> dict[str, Any]:
        return {"event": "message", "url": self.url, "data": self.data}


@dataclass(frozen=True)
class Errored:
    """
    A connection-level error: establishment failure or abnormal closure.

    An error is terminal for the connection that produced it.
    """
    url: str
    error: BaseException

    def to_dict(self) -> dict[str, Any]:
        return {"event": "error", "url": self.url, "error": str(self.error)}


@dataclass(frozen=True)
class Closed:
    url: str
    code: int | None = None
    reason: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": "close",
            "url": self.url,
            "code": self.code,
            "reason": self.reason,
        }


Event = Opened | MessageReceived | Errored | Closed


EventSink = Callable[[Event], None]
"""
Consumer of connection events. Events of one connection are delivered
one at a time, in arrival order.
"""
