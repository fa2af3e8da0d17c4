from taurus.bootstrap.config.loader import get_cli_args
from taurus.bootstrap.deps import get_service
from taurus.core.helpers.utils import setup_signal_handler, setup_logging


def main():
    cli = get_cli_args()
    setup_logging(cli.log_level)

    service = get_service()
    loop = service.loop

    try:
        with setup_signal_handler(loop) as stop_event:
            loop.run_until_complete(service.start(stop_event))
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.run_until_complete(loop.shutdown_default_executor())
        finally:
            loop.close()


if __name__ == "__main__":
    main()
