import ssl
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from taurus.bootstrap.config.loader import get_configfile
from taurus.core.greeter import DEFAULT_GREETING


class TLSSettings(BaseModel):
    certfile: Annotated[
        Path,
        Field(
            description=(
                "Path to the server TLS certificate (PEM).\n"
                "When set, the greeter serves wss:// instead of ws://."
            ),
        )
    ]

    keyfile: Annotated[
        Path,
        Field(description="Path to the server TLS private key (PEM).")
    ]

    @field_validator("certfile", "keyfile")
    @classmethod
    def validate_path(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Path {v} does not exist.")
        return v


class ServerSettings(BaseModel):
    host: Annotated[
        str,
        Field(
            description="Bind address for the greeter.",
            default="127.0.0.1"
        )
    ]

    port: Annotated[
        int,
        Field(
            description="TCP port for incoming WebSocket connections.",
            default=8000
        )
    ]

    path: Annotated[
        str | None,
        Field(
            description=(
                "Request path accepted by the greeter, e.g. '/lupus'.\n"
                "Connections on any other path are rejected with HTTP 404.\n"
                "Unset accepts every path."
            ),
            default=None
        )
    ]

    greeting: Annotated[
        str,
        Field(
            description="Text message sent once to every newly connected peer.",
            default=DEFAULT_GREETING
        )
    ]

    tls: Annotated[
        TLSSettings | None,
        Field(description="Optional TLS configuration.", default=None)
    ]

    max_message_size: Annotated[
        int,
        Field(
            description="Maximum allowed size for a single incoming message.",
            default=1 * 1024 * 1024
        )
    ]

    timeout_graceful_shutdown: Annotated[
        float,
        Field(
            description="Maximum time allowed for open connections to close on shutdown.",
            default=5.0
        )
    ]

    @field_validator("path")
    @classmethod
    def validate_request_path(cls, v: str | None) -> str | None:
        if v is not None and not v.startswith("/"):
            raise ValueError("path must start with '/'")
        return v


class TaurusConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TAURUS_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    server: Annotated[
        ServerSettings,
        Field(
            description=(
                "Greeter server configuration.\n"
                "Controls where the server listens, the greeting it sends and\n"
                "the runtime limits applied to every connection."
            ),
            default_factory=ServerSettings
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)
        configfile = get_configfile()
        if configfile is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=configfile),)
        return sources

    def get_server_ssl_ctx(self) -> ssl.SSLContext | None:
        tls = self.server.tls
        if tls is None:
            return None

        ctx = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
        ctx.load_cert_chain(certfile=tls.certfile, keyfile=tls.keyfile)
        return ctx
