import argparse
import asyncio
from collections.abc import Sequence

from taurus.core.transport.connection import Connection
from taurusctl.bootstrap.deps import get_dispatcher
from taurusctl.core.loader import TaurusConfLoader
from taurusctl.core.model import TargetConfig
from taurusctl.core.ports.render import Renderer
from taurusctl.core.printer import EventPrinter
from taurusctl.core.script import run_script
from taurusctl.core.utils import client_ssl_ctx, load_target

dispatcher = get_dispatcher()


@dispatcher.command("run")
def cmd_run(
    loader: TaurusConfLoader,
    namespace: argparse.Namespace,
    renderer: Renderer
) -> None:
    _, target = load_target(loader, namespace.target, namespace.url)
    execute(target, target.script, namespace.output, renderer)


@dispatcher.command("send")
def cmd_send(
    loader: TaurusConfLoader,
    namespace: argparse.Namespace,
    renderer: Renderer
) -> None:
    if not getattr(namespace, "commands", None):
        raise ValueError("at least one command is required.")

    _, target = load_target(loader, namespace.target, namespace.url)
    execute(target, namespace.commands, namespace.output, renderer)


def execute(
    target: TargetConfig,
    commands: Sequence[str],
    output: str,
    renderer: Renderer
) -> bool:
    connection = Connection(target.url, ssl_ctx=client_ssl_ctx(target))
    printer = EventPrinter.for_output(output, renderer)
    return asyncio.run(run_script(connection, commands, printer))
