from dataclasses import dataclass, field


@dataclass
class TLSConfig:
    ca: str


@dataclass
class TargetConfig:
    url: str
    script: list[str] = field(default_factory=list)
    tls: TLSConfig | None = None

    @staticmethod
    def from_dict(data: dict) -> "TargetConfig":
        script = data.get("script") or []
        for command in script:
            if not isinstance(command, str):
                raise ValueError(f"script commands must be strings, got {command!r}")

        tls = data.get("tls")
        return TargetConfig(
            url=data["url"],
            script=list(script),
            tls=TLSConfig(ca=tls["ca"]) if tls else None,
        )

    def to_dict(self) -> dict:
        data: dict = {"url": self.url, "script": list(self.script)}
        if self.tls is not None:
            data["tls"] = {"ca": self.tls.ca}
        return data


@dataclass
class TaurusConf:
    current_target: str
    targets: dict[str, TargetConfig]

    @staticmethod
    def from_dict(data: dict) -> "TaurusConf":
        targets = {
            name: TargetConfig.from_dict(target)
            for name, target in (data.get("targets") or {}).items()
        }
        return TaurusConf(
            current_target=data["current-target"],
            targets=targets,
        )

    def to_dict(self) -> dict:
        return {
            "current-target": self.current_target,
            "targets": {
                name: target.to_dict()
                for name, target in self.targets.items()
            },
        }
