"""Application configuration loaded from and saved to TOML files."""

from __future__ import annotations

import copy
import tomllib
from dataclasses import asdict, dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Callable

import tomli_w

from epcis_kg.errors import ConfigError, IoError

_LOG_LEVELS = ("trace", "debug", "info", "warn", "error")
_PROFILES = ("el", "ql", "rl")
_U16_MAX = 0xFFFF


def _value(table: dict[str, Any], key: str) -> Any:
    if key not in table:
        raise ConfigError(f"missing field `{key}`")
    return table[key]


def _str(table: dict[str, Any], key: str) -> str:
    value = _value(table, key)
    if not isinstance(value, str):
        raise ConfigError(f"invalid type for `{key}`: expected a string")
    return value


def _bool(table: dict[str, Any], key: str) -> bool:
    value = _value(table, key)
    if not isinstance(value, bool):
        raise ConfigError(f"invalid type for `{key}`: expected a boolean")
    return value


def _uint(table: dict[str, Any], key: str, maximum: int | None = None) -> int:
    value = _value(table, key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"invalid type for `{key}`: expected an integer")
    if value < 0 or (maximum is not None and value > maximum):
        raise ConfigError(f"invalid value for `{key}`: {value} is out of range")
    return value


def _str_list(table: dict[str, Any], key: str) -> list[str]:
    value = _value(table, key)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"invalid type for `{key}`: expected a list of strings")
    return list(value)


def _table(table: dict[str, Any], key: str) -> dict[str, Any]:
    value = _value(table, key)
    if not isinstance(value, dict):
        raise ConfigError(f"invalid type for `{key}`: expected a table")
    return value


@dataclass
class ReasoningConfig:
    default_profile: str = "el"
    enable_inference: bool = True
    max_inference_time: int = 30


@dataclass
class SparqlConfig:
    max_query_time: int = 60
    max_results: int = 1000
    enable_updates: bool = True


@dataclass
class ServerConfig:
    enable_cors: bool = True
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    request_timeout: int = 30


@dataclass
class PersistenceConfig:
    auto_save: bool = True
    save_interval: int = 300
    backup_on_startup: bool = True


@dataclass
class AppConfig:
    database_path: str = "./data"
    server_port: int = 8080
    log_level: str = "info"
    ontology_paths: list[str] = field(
        default_factory=lambda: ["ontologies/epcis2.ttl", "ontologies/cbv.ttl"]
    )
    reasoning: ReasoningConfig = field(default_factory=ReasoningConfig)
    sparql: SparqlConfig = field(default_factory=SparqlConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        """Build a configuration from a mapping; every field is required."""
        reasoning = _table(data, "reasoning")
        sparql = _table(data, "sparql")
        server = _table(data, "server")
        persistence = _table(data, "persistence")
        return cls(
            database_path=_str(data, "database_path"),
            server_port=_uint(data, "server_port", _U16_MAX),
            log_level=_str(data, "log_level"),
            ontology_paths=_str_list(data, "ontology_paths"),
            reasoning=ReasoningConfig(
                default_profile=_str(reasoning, "default_profile"),
                enable_inference=_bool(reasoning, "enable_inference"),
                max_inference_time=_uint(reasoning, "max_inference_time"),
            ),
            sparql=SparqlConfig(
                max_query_time=_uint(sparql, "max_query_time"),
                max_results=_uint(sparql, "max_results"),
                enable_updates=_bool(sparql, "enable_updates"),
            ),
            server=ServerConfig(
                enable_cors=_bool(server, "enable_cors"),
                cors_origins=_str_list(server, "cors_origins"),
                request_timeout=_uint(server, "request_timeout"),
            ),
            persistence=PersistenceConfig(
                auto_save=_bool(persistence, "auto_save"),
                save_interval=_uint(persistence, "save_interval"),
                backup_on_startup=_bool(persistence, "backup_on_startup"),
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as nested plain dictionaries."""
        return asdict(self)

    @classmethod
    def from_file(cls, path: str | PathLike[str]) -> AppConfig:
        """Load a configuration from a TOML file."""
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise IoError(exc) from exc
        try:
            data = tomllib.loads(content)
            return cls.from_dict(data)
        except (tomllib.TOMLDecodeError, ConfigError) as exc:
            detail = exc.detail if isinstance(exc, ConfigError) else exc
            raise ConfigError(
                f"Failed to parse configuration file: {detail}"
            ) from exc

    @classmethod
    def from_file_or_default(cls, path: str | PathLike[str]) -> AppConfig:
        """Load a configuration from a file, or the defaults if it is absent."""
        if Path(path).exists():
            return cls.from_file(path)
        return cls()

    def to_file(self, path: str | PathLike[str]) -> None:
        """Write the configuration to a TOML file."""
        try:
            content = tomli_w.dumps(self.to_dict())
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Failed to serialize configuration: {exc}") from exc
        try:
            Path(path).write_text(content, encoding="utf-8")
        except OSError as exc:
            raise IoError(exc) from exc

    def validate(self) -> None:
        """Raise ConfigError if any setting is out of bounds."""
        if not self.database_path:
            raise ConfigError("Database path cannot be empty")
        if self.server_port == 0:
            raise ConfigError("Server port must be greater than 0")
        if self.log_level not in _LOG_LEVELS:
            raise ConfigError(
                f"Invalid log level: {self.log_level}. "
                "Must be one of: trace, debug, info, warn, error"
            )
        if self.reasoning.default_profile not in _PROFILES:
            raise ConfigError(
                f"Invalid reasoning profile: {self.reasoning.default_profile}. "
                "Must be one of: el, ql, rl"
            )
        if self.reasoning.max_inference_time == 0:
            raise ConfigError("Max inference time must be greater than 0")
        if self.sparql.max_query_time == 0:
            raise ConfigError("Max query time must be greater than 0")
        if self.server.request_timeout == 0:
            raise ConfigError("Request timeout must be greater than 0")
        if self.persistence.save_interval == 0:
            raise ConfigError("Save interval must be greater than 0")

    def with_overrides(self, overrides: Callable[[AppConfig], None]) -> AppConfig:
        """Return a copy of this configuration changed by ``overrides``."""
        updated = copy.deepcopy(self)
        overrides(updated)
        return updated