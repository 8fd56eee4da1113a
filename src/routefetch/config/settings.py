from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from routefetch.domain.errors import ConfigError

DEFAULT_BASE_URL = "http://localhost:3000/api"
DEFAULT_TIMEOUT_S = 60.0

ENV_PREFIX = "ROUTEFETCH_"
ENV_API_KEY = "ROUTEFETCH_API_KEY"
ENV_BASE_URL = "ROUTEFETCH_BASE_URL"
ENV_API_VERSION = "ROUTEFETCH_API_VERSION"
ENV_TIMEOUT = "ROUTEFETCH_TIMEOUT"


class ClientConfig(BaseModel):
    """Validated client settings, built once at startup and injected."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1)
    base_url: str = DEFAULT_BASE_URL
    version: Optional[str] = None  # e.g. "/v1"
    timeout_s: float = Field(default=DEFAULT_TIMEOUT_S, gt=0)

    @field_validator("api_key")
    @classmethod
    def _strip_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("api key must not be blank")
        return v

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base url must start with http:// or https://, got {v!r}")
        return v

    @property
    def api_base(self) -> str:
        if not self.version:
            return self.base_url
        return f"{self.base_url}/{self.version.strip('/')}"


class ConfigProvider(Protocol):
    """Source of the static credential and the optional client settings."""

    settings: Mapping[str, Any]

    def get_api_key(self) -> str:
        ...


class StaticConfigProvider:
    def __init__(self, api_key: str, **settings: Any) -> None:
        self._api_key = api_key
        self.settings: Mapping[str, Any] = settings

    def get_api_key(self) -> str:
        return self._api_key


class EnvSettings(BaseSettings, frozen=True):
    """ROUTEFETCH_* environment variables. Empty variables count as unset."""

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
    )

    api_key: Optional[SecretStr] = None
    base_url: Optional[str] = None
    api_version: Optional[str] = None
    timeout: Optional[float] = None


class EnvConfigProvider:
    """Config provider backed by ``EnvSettings``, read from the environment on first use."""

    def __init__(self, env: Optional[EnvSettings] = None) -> None:
        self._env = env

    @property
    def env(self) -> EnvSettings:
        if self._env is None:
            try:
                self._env = EnvSettings()
            except ValidationError as exc:
                raise ConfigError(f"Invalid environment: {_describe_errors(exc, ENV_PREFIX)}") from exc
        return self._env

    @property
    def settings(self) -> Mapping[str, Any]:
        env = self.env
        values = {"base_url": env.base_url, "version": env.api_version, "timeout_s": env.timeout}
        return {k: v for k, v in values.items() if v is not None}

    def get_api_key(self) -> str:
        key = self.env.api_key
        if key is None or not key.get_secret_value().strip():
            raise ConfigError(f"{ENV_API_KEY} is not set")
        return key.get_secret_value()


def load_config(provider: ConfigProvider, **overrides: Any) -> ClientConfig:
    """
    Build a ClientConfig from a provider. Explicit overrides win over provider
    settings; None overrides are ignored.

    Raises:
        ConfigError: if the credential is missing or any setting is invalid.
    """
    api_key = provider.get_api_key()

    values: dict[str, Any] = dict(provider.settings)
    values.update({k: v for k, v in overrides.items() if v is not None})
    values["api_key"] = api_key if api_key is not None else ""

    try:
        return ClientConfig(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid client configuration: {_describe_errors(exc)}") from exc


@dataclass(frozen=True)
class ConfigCheck:
    """Startup validation outcome; hosts check ``ok`` before serving requests."""

    ok: bool
    config: Optional[ClientConfig] = None
    error: Optional[str] = None


def validate_config(provider: ConfigProvider, **overrides: Any) -> ConfigCheck:
    try:
        config = load_config(provider, **overrides)
    except ConfigError as exc:
        return ConfigCheck(ok=False, error=str(exc))
    return ConfigCheck(ok=True, config=config)


def _describe_errors(exc: ValidationError, prefix: str = "") -> str:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"])
        if prefix:
            loc = f"{prefix}{loc}".upper()
        problems.append(f"{loc}: {err['msg']}")
    return "; ".join(problems)
