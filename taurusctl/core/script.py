import logging
from collections.abc import Iterable

from taurus.core.models.events import EventSink, Opened
from taurus.core.transport.connection import Connection

logger = logging.getLogger("ctl.script")


async def run_script(
    connection: Connection,
    commands: Iterable[str],
    sink: EventSink,
) -> bool:
    """
    Send a fixed sequence of commands as soon as the connection opens.

    Commands are sent in order, one text frame each, without any change
    (the empty string included). Replies are not awaited between sends:
    every event is forwarded to `sink` until the connection closes.

    Returns True if the connection was opened.
    """
    opened = False

    async for event in connection.events():
        sink(event)

        if isinstance(event, Opened):
            opened = True
            for command in commands:
                if not await connection.send(command):
                    logger.error("Connection lost, remaining commands not sent")
                    break

    return opened
