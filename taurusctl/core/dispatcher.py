import argparse
import functools
from typing import Protocol

from taurusctl.core.loader import TaurusConfLoader
from taurusctl.core.ports.render import Renderer


class CommandHandler(Protocol):
    def __call__(
        self,
        loader: TaurusConfLoader,
        namespace: argparse.Namespace,
        renderer: Renderer,
    ) -> dict | None:
        ...


class CommandDispatcher:
    def __init__(self) -> None:
        self._commands: dict[tuple[str, ...], CommandHandler] = {}

    def dispatch(
        self,
        *arguments: str,
        loader: TaurusConfLoader,
        namespace: argparse.Namespace,
        renderer: Renderer,
    ) -> dict | None:
        command = self._commands.get(arguments)
        if command is None:
            raise RuntimeError(f"Unknown '{' '.join(arguments)}' Command")
        return command(loader, namespace, renderer)

    def command(self, *arguments: str):
        def decorator(func: CommandHandler):

            @functools.wraps(func)
            def wrapper(
                loader: TaurusConfLoader,
                namespace: argparse.Namespace,
                renderer: Renderer,
            ) -> dict | None:
                return func(loader, namespace, renderer)

            self._commands[arguments] = wrapper

            return wrapper

        return decorator
