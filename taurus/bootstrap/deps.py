import json
from functools import lru_cache

from pydantic import ValidationError

from taurus.bootstrap.config.loader import get_cli_args
from taurus.bootstrap.config.settings import TaurusConfig
from taurus.core.greeter import GreeterApplication
from taurus.core.service import GreeterService


@lru_cache
def get_service() -> GreeterService:
    config = get_config()
    return GreeterService(config=config, app=get_greeter_app())


@lru_cache
def get_greeter_app() -> GreeterApplication:
    config = get_config()
    return GreeterApplication(greeting=config.server.greeting)


def cli_overrides() -> dict:
    args = get_cli_args()
    server = {}
    if args.host is not None:
        server["host"] = args.host
    if args.port is not None:
        server["port"] = args.port
    return {"server": server} if server else {}


@lru_cache
def get_config() -> TaurusConfig:
    try:
        return TaurusConfig(**cli_overrides())
    except FileNotFoundError as ex:
        raise SystemExit(f"Provide a correct configuration file path: {ex}")
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
