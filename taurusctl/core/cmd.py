import argparse
import cmd
import logging
from collections.abc import Callable, Mapping
from typing import TextIO

from taurus.core.models.events import EventSink
from taurus.core.transport.connection import Connection
from taurusctl.core.dispatcher import CommandDispatcher
from taurusctl.core.loader import TaurusConfLoader
from taurusctl.core.ports.render import Renderer
from taurusctl.core.printer import EventPrinter
from taurusctl.core.session import BackgroundSession, Session
from taurusctl.core.utils import client_ssl_ctx, load_target

SessionFactory = Callable[[Connection, EventSink], Session]


class TaurusCmd(cmd.Cmd):
    """
    Command line front end of taurusctl.

    Without a subcommand it is an interactive shell bound to one connection:
    each line typed by the operator is sent as one command, exactly as
    typed, and the prompt comes back right away. Replies are printed by the
    session whenever they arrive. Only `exit`, `quit` and end of input are
    interpreted locally; everything else belongs to the remote vocabulary.

    With a subcommand, the matching handler is looked up in the dispatcher
    and its result rendered.
    """
    prompt = "enter a command: "
    RESERVED = ("exit", "quit", "EOF")

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        renderers: Mapping[str, Renderer],
        argv: list[str] | None = None,
        session_factory: SessionFactory = BackgroundSession,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False

        self._argparser = self._argparse(renderers)
        self._args = self._argparser.parse_args(argv)
        self._renderer = renderers[self._args.output]
        self._loader = TaurusConfLoader(self._args.taurusconf)
        self._dispatcher = dispatcher
        self._session_factory = session_factory
        self._session: Session | None = None
        self._logger = logging.getLogger("ctl.cmd")

    @property
    def args(self) -> argparse.Namespace:
        return self._args

    @property
    def interactive(self) -> bool:
        return self._args.namespace is None

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def handle(self, *arguments: str) -> None:
        try:
            result = self._dispatcher.dispatch(
                *arguments,
                loader=self._loader,
                namespace=self.args,
                renderer=self._renderer,
            )
        except (RuntimeError, ValueError, FileNotFoundError) as ex:
            print(str(ex), file=self.stdout)
            return

        if result is not None:
            print(self._renderer.render(result), file=self.stdout)

    def run_subcommand(self) -> None:
        namespace = self.args.namespace
        if namespace == "config":
            self.handle("config", self.args.config_cmd)
        else:
            self.handle(namespace)

    def connect(self) -> bool:
        """
        Open the session used by the interactive shell.

        Returns False if the connection could not be established; the
        error has already been reported by then.
        """
        try:
            name, target = load_target(self._loader, self.args.target, self.args.url)
        except FileNotFoundError as ex:
            print(f"{ex} (use --url to connect without one)", file=self.stdout)
            return False

        connection = Connection(target.url, ssl_ctx=client_ssl_ctx(target))
        printer = EventPrinter.for_output(self.args.output, self._renderer, self.stdout)
        self._session = self._session_factory(connection, printer)

        label = f"{name} ({target.url})" if name else target.url
        self.intro = f"Connected to {label}. Type 'exit' or 'quit' to leave."
        return self._session.start()

    def onecmd(self, line: str) -> bool:
        word = line.strip()
        if word in self.RESERVED:
            return super().onecmd(word)

        if not line:
            return self.emptyline()

        return self.default(line)

    def emptyline(self) -> bool:
        print("a command is required", file=self.stdout)
        return False

    def default(self, line: str) -> bool:
        if self._session is None or not self._session.is_open:
            self._logger.error("Connection is closed, leaving interactive mode")
            return True

        return not self._session.send(line)

    def do_exit(self, arg):
        return True

    def do_quit(self, arg):
        return True

    def do_EOF(self, arg):
        print(file=self.stdout)
        return True

    @staticmethod
    def _argparse(renderers: Mapping[str, Renderer]) -> argparse.ArgumentParser:
        global_opts = argparse.ArgumentParser(
            prog="taurusctl",
            description=(
                "Send text commands to a WebSocket endpoint.\n\n"
                "Without a subcommand, taurusctl prompts for one command at a\n"
                "time and prints every message the endpoint sends back."
            ),
            formatter_class=argparse.RawTextHelpFormatter,
        )
        global_opts.add_argument("--taurusconf")
        global_opts.add_argument("--target")
        global_opts.add_argument("--url")
        global_opts.add_argument(
            "-o", "--output",
            default="text",
            choices=sorted(renderers),
            help="text: messages verbatim, results as YAML. json: one JSON event per line."
        )
        global_opts.add_argument(
            "-l", "--log-level",
            default="WARNING",
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        )

        sub = global_opts.add_subparsers(dest="namespace")

        cfg = sub.add_parser("config")
        cfg_sub = cfg.add_subparsers(dest="config_cmd", required=True)
        cfg_sub.add_parser("current-target")
        cfg_sub.add_parser("get-targets")
        use_target = cfg_sub.add_parser("use-target")
        use_target.add_argument("name")

        sub.add_parser("run", help="send the target's script once connected")

        send = sub.add_parser("send", help="send the given commands once connected")
        send.add_argument("commands", nargs="+")

        return global_opts
