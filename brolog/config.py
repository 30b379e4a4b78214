"""Configuration loaded from a YAML file, then environment variables, then CLI flags."""

import dataclasses
import os
from dataclasses import dataclass, field

import yaml

from brolog.errors import ConfigError

CONFIG_ENV_VAR = "BROLOG_CONFIG"

# Environment variable -> AppConfig attribute
ENV_OVERRIDES = {
    "BRO_PATH": "bro_path",
    "OUT_PATH": "out_path",
    "LOG_FILE": "log_file",
    "LOG_LEVEL": "log_level",
    "WORKERS": "workers",
}


def load_yaml(path: str) -> dict:
    """Load the YAML document at *path* and return it as a dict."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from None

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping, got {type(data).__name__}")
    return data


def _section(d: dict, name: str) -> dict:
    value = d.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' section must be a mapping, got {type(value).__name__}")
    return value


def _parse_workers(value) -> int:
    try:
        workers = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"application.workers must be an integer, got {value!r}") from None
    if workers < 1:
        raise ConfigError(f"application.workers must be at least 1, got {workers}")
    return workers


@dataclass(frozen=True)
class AppConfig:
    bro_path: str = "./logs"
    out_path: str = "./summary"
    log_file: str | None = None
    log_level: str = "info"
    workers: int = 1
    summarize_by: dict[str, str] = field(default_factory=dict)
    bool_encoding: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, d: dict) -> "AppConfig":
        app = _section(d, "application")
        summarize = _section(d, "summarize_by")
        encodings = _section(d, "bool_encoding")
        log_file = app.get("log_file", cls.log_file)

        return cls(
            bro_path=str(app.get("bro_path", cls.bro_path)),
            out_path=str(app.get("out_path", cls.out_path)),
            log_file=str(log_file) if log_file else None,
            log_level=str(app.get("log_level", cls.log_level)),
            workers=_parse_workers(app.get("workers", cls.workers)),
            summarize_by={str(k): str(v) for k, v in summarize.items()},
            bool_encoding={str(k): str(v) for k, v in encodings.items()},
        )

    def get(self, name: str, default=None):
        """Look up an option by dotted name, e.g. ``application.bro_path``
        or ``summarize_by.conn``."""
        section, _, key = name.partition(".")
        if section == "application" and key in ENV_OVERRIDES.values():
            return getattr(self, key)
        if section == "summarize_by":
            return self.summarize_by.get(key, default)
        if section == "bool_encoding":
            return self.bool_encoding.get(key, default)
        return default

    def with_overrides(self, **overrides) -> "AppConfig":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "workers" in changes:
            changes["workers"] = _parse_workers(changes["workers"])
        return dataclasses.replace(self, **changes)


def env_overrides(environ=None) -> dict:
    environ = os.environ if environ is None else environ
    return {
        attr: environ[var]
        for var, attr in ENV_OVERRIDES.items()
        if environ.get(var)
    }


def load_config(path: str | None = None, environ=None) -> AppConfig:
    """Build AppConfig from *path* (or $BROLOG_CONFIG), then the environment.

    With no file at all the dataclass defaults are used.
    """
    environ = os.environ if environ is None else environ
    path = path or environ.get(CONFIG_ENV_VAR)
    base = AppConfig.from_dict(load_yaml(path)) if path else AppConfig()
    return base.with_overrides(**env_overrides(environ))
