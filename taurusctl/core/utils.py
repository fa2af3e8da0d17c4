import logging
import ssl

from taurusctl.core.loader import TaurusConfLoader
from taurusctl.core.model import TaurusConf, TargetConfig

FALLBACK_URL = "ws://localhost:7500/lupus"

logger = logging.getLogger("ctl.utils")


def resolve_target(
    conf: TaurusConf | None,
    target_override: str | None,
    url_override: str | None
) -> tuple[str, TargetConfig]:
    if conf is None:
        return "", TargetConfig(url=url_override or FALLBACK_URL)

    name = target_override or conf.current_target
    if name not in conf.targets:
        logger.warning(f"Unknown target '{name}', using fallback target.")
        fallback = TargetConfig(url=url_override or FALLBACK_URL)
        return "", fallback

    target = conf.targets[name]
    if url_override:
        # shallow copy
        target = TargetConfig(
            url=url_override,
            script=target.script,
            tls=target.tls,
        )

    return name, target


def load_target(
    loader: TaurusConfLoader,
    target_override: str | None,
    url_override: str | None
) -> tuple[str, TargetConfig]:
    """
    Resolve the target to talk to. A configuration file is only required
    when no URL is given on the command line.
    """
    if url_override and not loader.exists():
        return resolve_target(None, target_override, url_override)
    return resolve_target(loader.load(), target_override, url_override)


def client_ssl_ctx(target: TargetConfig) -> ssl.SSLContext | None:
    if not target.url.startswith("wss://"):
        return None

    ctx = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    if target.tls:
        ctx.load_verify_locations(cafile=target.tls.ca)
    return ctx
