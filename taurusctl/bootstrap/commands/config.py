import argparse

from taurusctl.bootstrap.deps import get_dispatcher
from taurusctl.core.loader import TaurusConfLoader
from taurusctl.core.ports.render import Renderer

dispatcher = get_dispatcher()


@dispatcher.command("config", "current-target")
def cmd_current_target(
    loader: TaurusConfLoader,
    namespace: argparse.Namespace,
    renderer: Renderer
) -> dict:
    _ = namespace, renderer
    conf = loader.load()
    return {"current_target": conf.current_target}


@dispatcher.command("config", "get-targets")
def cmd_get_targets(
    loader: TaurusConfLoader,
    namespace: argparse.Namespace,
    renderer: Renderer
) -> dict:
    _ = namespace, renderer
    conf = loader.load()
    return {
        "targets": {
            name: target.url
            for name, target in conf.targets.items()
        }
    }


@dispatcher.command("config", "use-target")
def cmd_use_target(
    loader: TaurusConfLoader,
    namespace: argparse.Namespace,
    renderer: Renderer
) -> dict:
    _ = renderer
    if not getattr(namespace, "name", None):
        raise ValueError("target name is required.")

    name = namespace.name
    conf = loader.load()
    if name not in conf.targets:
        raise ValueError(f"Unknown target: {name}")

    conf.current_target = name
    loader.save(conf)
    return {"message": f"Switched to target '{name}'"}
