import argparse
import os
from functools import lru_cache
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taurus-greeter",
        description=(
            "Start a Taurus greeter server.\n\n"
            "The greeter accepts WebSocket connections, sends one greeting to\n"
            "every new peer and logs each text message it receives."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a Taurus configuration file"
    )

    parser.add_argument(
        "--host",
        type=str,
        help="Bind address, overrides server.host"
    )

    parser.add_argument(
        "-p", "--port",
        type=int,
        help="Listen port, overrides server.port"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity for the server.\n"
            "Choose among: DEBUG, INFO, WARNING, ERROR, CRITICAL.\n\n"
            "DEBUG    → verbose output, including the websockets library.\n"
            "INFO     → connections and received messages (default).\n"
            "WARNING  → only warnings and errors.\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    return parser


@lru_cache
def get_cli_args() -> argparse.Namespace:
    return build_parser().parse_args()


def find_configfile(explicit: str | None) -> Path | None:
    """
    Resolve the configuration file.

    Priority: CLI > ENV > 'taurus.yaml' in the current working directory.
    An explicitly requested file must exist; the default one is optional.
    """
    raw = explicit or os.getenv("TAURUSCONFIG")

    if raw is None:
        file = Path.cwd() / "taurus.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the TAURUSCONFIG environment variable\n"
            "  - Or place a 'taurus.yaml' file in the current working directory."
        )

    return file


@lru_cache
def get_configfile() -> Path | None:
    return find_configfile(get_cli_args().config)
