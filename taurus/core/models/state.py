from dataclasses import dataclass, field

from websockets.asyncio.server import ServerConnection


@dataclass
class ServerState:
    """
    Shared runtime state for a MessageServer.

    This object is mutated by:
    - MessageServer: adds/removes a connection around each application run
    - MessageServer.shutdown(): waits for connections to drain
    """
    connections: set[ServerConnection] = field(default_factory=set)
    """
    Set of active peer connections. Peers are independent: nothing else is
    shared between them.
    """
