import json

import yaml

from taurusctl.core.ports.render import Renderer


class JsonRenderer(Renderer):
    """One compact JSON document per line, suited to piping events."""

    def render(self, data: dict) -> str:
        return json.dumps(data, sort_keys=False)


class YamlRenderer(Renderer):
    def render(self, data: dict) -> str:
        return yaml.safe_dump(data, sort_keys=False).rstrip("\n")
