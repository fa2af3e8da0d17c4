import asyncio
import contextlib
import functools
import importlib
import logging
import pkgutil
import signal
import sys
import threading
from collections.abc import Callable
from typing import Generator

SHUTDOWN_SIGNALS = (
    signal.SIGINT,
    signal.SIGTERM,
)

if sys.platform == "win32":
    SHUTDOWN_SIGNALS += (signal.SIGBREAK,)


@contextlib.contextmanager
def setup_signal_handler(
    loop: asyncio.AbstractEventLoop,
) -> Generator[asyncio.Event, None, None]:
    """
    Yield an event that is set when the process receives a shutdown signal.

    Handlers are installed on the given loop for the duration of the block
    and removed afterwards. Outside the main thread, the event is returned
    without any handler: the caller is responsible for setting it.
    """
    stop_event = asyncio.Event()

    if threading.current_thread() is not threading.main_thread():
        yield stop_event
        return

    installed: list[signal.Signals] = []
    for sig in SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loops have no add_signal_handler
            signal.signal(sig, lambda *_: loop.call_soon_threadsafe(stop_event.set))
        else:
            installed.append(sig)

    try:
        yield stop_event
    finally:
        for sig in installed:
            loop.remove_signal_handler(sig)


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s] : %(message)s',
    )
    # websockets logs every handshake failure with a traceback at ERROR,
    # our own loggers already report them.
    if level != "DEBUG":
        logging.getLogger("websockets").setLevel(logging.CRITICAL)


def scan(package: str):
    """
    Decorator that imports every module of `package` before calling the
    decorated function, so that command handlers register themselves.
    """
    def decorator(func: Callable):

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            py_package = importlib.import_module(package)

            for module_info in pkgutil.iter_modules(py_package.__path__):
                importlib.import_module(f"{package}.{module_info.name}")

            return func(*args, **kwargs)

        return wrapper

    return decorator
