import sys
from typing import TextIO

from taurus.core.models.events import Errored, Event, MessageReceived
from taurusctl.core.ports.render import Renderer


class EventPrinter:
    """
    Console sink for connection events.

    Without a renderer inbound messages are printed verbatim, one per line,
    and connection errors go to the error stream; opening and closing are
    only logged. With a renderer every event is rendered on the output
    stream, which gives a machine-readable transcript.
    """

    def __init__(
        self,
        renderer: Renderer | None = None,
        stream: TextIO | None = None,
        err_stream: TextIO | None = None,
    ) -> None:
        self._renderer = renderer
        self._stream = stream
        self._err_stream = err_stream

    @classmethod
    def for_output(
        cls,
        output: str,
        renderer: Renderer,
        stream: TextIO | None = None,
        err_stream: TextIO | None = None,
    ) -> "EventPrinter":
        if output == "text":
            return cls(stream=stream, err_stream=err_stream)
        return cls(renderer, stream, err_stream)

    def __call__(self, event: Event) -> None:
        stream = self._stream or sys.stdout

        if self._renderer is not None:
            print(self._renderer.render(event.to_dict()), file=stream, flush=True)
        elif isinstance(event, MessageReceived):
            print(event.data, file=stream, flush=True)
        elif isinstance(event, Errored):
            print(
                f"error: {event.url}: {event.error}",
                file=self._err_stream or sys.stderr,
                flush=True,
            )
