from taurus.core.helpers.utils import scan, setup_logging
from taurusctl.bootstrap.deps import get_cli


@scan("taurusctl.bootstrap.commands")
def main():
    cli = get_cli()
    setup_logging(cli.args.log_level)

    try:
        if not cli.interactive:
            cli.run_subcommand()
        elif cli.connect():
            cli.cmdloop()
    except KeyboardInterrupt:
        print()
    finally:
        cli.close()


if __name__ == "__main__":
    main()
