from pathlib import Path
import os
import yaml

from taurusctl.core.model import TaurusConf


class TaurusConfLoader:
    """
    Loads and saves the taurusctl configuration file (taurusconf.yaml).

    Resolution order for the config path:
      1. Explicit --taurusconf argument
      2. TAURUSCONF environment variable
      3. Default: ~/.taurus/taurusconf.yaml
    """

    DEFAULT_PATH = "~/.taurus/taurusconf.yaml"

    def __init__(self, cli_path: str | None = None):
        if cli_path:
            self.path = Path(cli_path).expanduser()
            return

        env_path = os.environ.get("TAURUSCONF")
        if env_path:
            self.path = Path(env_path).expanduser()
            return

        self.path = Path(self.DEFAULT_PATH).expanduser()

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> TaurusConf:
        if not self.path.exists():
            raise FileNotFoundError(f"taurusconf not found: {self.path}")

        data = yaml.safe_load(self.path.read_text())
        try:
            return TaurusConf.from_dict(data)
        except (KeyError, TypeError, ValueError, AttributeError) as ex:
            raise SystemExit(f"taurusconf format is invalid: {self.path.absolute()} ({ex})")

    def save(self, conf: TaurusConf) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        yaml_str = yaml.safe_dump(conf.to_dict(), sort_keys=False)
        self.path.write_text(yaml_str)
