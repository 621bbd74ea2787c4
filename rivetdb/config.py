"""Application configuration loaded from a file and environment variables."""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

ENV_PREFIX = "RIVETDB"
ENV_SEPARATOR = "_"

_READERS = {
    ".toml": lambda text: tomllib.loads(text),
    ".json": lambda text: json.loads(text),
    ".yaml": lambda text: yaml.safe_load(text),
    ".yml": lambda text: yaml.safe_load(text),
}


class ConfigError(Exception):
    """Configuration could not be loaded or is invalid."""


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 3000


@dataclass
class CatalogConfig:
    catalog_type: str
    host: str | None = None
    port: int | None = None
    database: str | None = None
    user: str | None = None
    password: str | None = None


@dataclass
class StorageConfig:
    storage_type: str
    bucket: str | None = None
    region: str | None = None
    endpoint: str | None = None


@dataclass
class PathsConfig:
    cache_dir: str | None = None
    state_dir: str | None = None


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise ConfigError(f"invalid type for '{key}': expected a table")
    return value


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, (Mapping, list)):
        raise ConfigError(f"invalid type for '{key}': expected a string")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _req_str(data: Mapping[str, Any], key: str, section: str) -> str:
    value = _opt_str(data, key)
    if value is None:
        raise ConfigError(f"missing field '{section}.{key}'")
    return value


def _opt_port(data: Mapping[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(f"invalid type for '{key}': expected a port number")
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as exc:
            raise ConfigError(f"invalid port for '{key}': {value!r}") from exc
    if not isinstance(value, int) or not 0 <= value <= 65535:
        raise ConfigError(f"invalid port for '{key}': {value!r}")
    return value


def _parse_env_value(raw: str) -> Any:
    lowered = raw.lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    for convert in (int, float):
        try:
            return convert(raw)
        except ValueError:
            pass
    return raw


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    prefix = (ENV_PREFIX + ENV_SEPARATOR).lower()
    overrides: dict[str, Any] = {}
    for key, raw in environ.items():
        lowered = key.lower()
        if not lowered.startswith(prefix) or len(lowered) == len(prefix):
            continue
        *parents, leaf = lowered[len(prefix):].split(ENV_SEPARATOR)
        node = overrides
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[leaf] = _parse_env_value(raw)
    return overrides


def _deep_merge(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            merged[key] = _deep_merge(dict(current), value)
        else:
            merged[key] = value
    return merged


def _find_config_file(config_path: str) -> Path:
    path = Path(config_path)
    if path.suffix.lower() in _READERS and path.is_file():
        return path
    for suffix in _READERS:
        candidate = Path(f"{config_path}{suffix}")
        if candidate.is_file():
            return candidate
    raise ConfigError(f"configuration file \"{config_path}\" not found")


def _read_config_file(config_path: str) -> dict[str, Any]:
    path = _find_config_file(config_path)
    reader = _READERS[path.suffix.lower()]
    try:
        data = reader(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a table")
    return data


@dataclass
class AppConfig:
    """The whole application configuration."""

    server: ServerConfig
    catalog: CatalogConfig
    storage: StorageConfig
    paths: PathsConfig = field(default_factory=PathsConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AppConfig:
        """Build a configuration from nested mappings."""
        server = _section(data, "server")
        catalog = _section(data, "catalog")
        storage = _section(data, "storage")
        paths = _section(data, "paths") or {}
        for name, section in (("server", server), ("catalog", catalog), ("storage", storage)):
            if section is None:
                raise ConfigError(f"missing field '{name}'")

        port = _opt_port(server, "port")
        return cls(
            server=ServerConfig(
                host=_opt_str(server, "host") or ServerConfig.host,
                port=ServerConfig.port if port is None else port,
            ),
            catalog=CatalogConfig(
                catalog_type=_req_str(catalog, "type", "catalog"),
                host=_opt_str(catalog, "host"),
                port=_opt_port(catalog, "port"),
                database=_opt_str(catalog, "database"),
                user=_opt_str(catalog, "user"),
                password=_opt_str(catalog, "password"),
            ),
            storage=StorageConfig(
                storage_type=_req_str(storage, "type", "storage"),
                bucket=_opt_str(storage, "bucket"),
                region=_opt_str(storage, "region"),
                endpoint=_opt_str(storage, "endpoint"),
            ),
            paths=PathsConfig(
                cache_dir=_opt_str(paths, "cache_dir"),
                state_dir=_opt_str(paths, "state_dir"),
            ),
        )

    @classmethod
    def load(cls, config_path: str, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Load a config file, overlaid with RIVETDB_* environment variables."""
        if environ is None:
            environ = os.environ
        try:
            data = _deep_merge(_read_config_file(config_path), _env_overrides(environ))
        except ConfigError as exc:
            raise ConfigError(f"Failed to build configuration: {exc}") from exc
        try:
            return cls.from_dict(data)
        except ConfigError as exc:
            raise ConfigError(f"Failed to deserialize configuration: {exc}") from exc

    def validate(self) -> None:
        """Check that the catalog and storage sections are complete."""
        catalog = self.catalog
        if catalog.catalog_type == "postgres":
            for name in ("host", "database", "user", "password"):
                if getattr(catalog, name) is None:
                    raise ConfigError(f"Postgres catalog requires '{name}'")
        elif catalog.catalog_type != "sqlite":
            raise ConfigError(f"Invalid catalog type: {catalog.catalog_type}")

        storage = self.storage
        if storage.storage_type == "s3":
            if storage.bucket is None:
                raise ConfigError("S3 storage requires 'bucket'")
        elif storage.storage_type != "filesystem":
            raise ConfigError(f"Invalid storage type: {storage.storage_type}")