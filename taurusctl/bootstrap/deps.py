from functools import lru_cache

from taurusctl.core.cmd import TaurusCmd
from taurusctl.core.dispatcher import CommandDispatcher
from taurusctl.infra.format_renderer import JsonRenderer, YamlRenderer


@lru_cache
def get_dispatcher() -> CommandDispatcher:
    return CommandDispatcher()


@lru_cache
def get_cli() -> TaurusCmd:
    renderers = {
        "text": YamlRenderer(),
        "json": JsonRenderer(),
    }
    return TaurusCmd(get_dispatcher(), renderers)
