"""Persistent settings for sitepager.

Settings live in ``~/.sitepager/config.yaml``. Its ``pagination`` section
holds the defaults for a pagination pass and accepts the camelCase option
names (``perPage``) as well as field names (``per_page``). The options of a
run are resolved in three layers: the file, ``SITEPAGER_<FIELD>`` environment
variables (``SITEPAGER_PER_PAGE=5``) and the overrides given for that run.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import (
    CLIOptions,
    LoggingSettings,
    PaginationOptions,
    SitepagerBaseModel,
    SitepagerConfig,
)

DEFAULT_CONFIG_PATH = Path("~/.sitepager/config.yaml")
ENV_PREFIX = "SITEPAGER_"
LOG_LEVEL_ENV = f"{ENV_PREFIX}LOG_LEVEL"

_SECTIONS: dict[str, type[SitepagerBaseModel]] = {
    "pagination": PaginationOptions,
    "logging": LoggingSettings,
    "cli": CLIOptions,
}
_CONFIG_HEADER = (
    "# sitepager configuration file\n"
    "# Change values with `sitepager config set KEY VALUE` or `sitepager config edit`.\n"
)


class ConfigManager:
    """Read, validate and persist sitepager settings."""

    def __init__(
        self,
        config_path: Path | None = None,
        *,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self.config_path = (config_path or DEFAULT_CONFIG_PATH).expanduser()
        self.env = os.environ if env is None else env

    def ensure_exists(self) -> Path:
        """Write a file holding the default settings unless one exists."""
        if not self.config_path.exists():
            self._write(SitepagerConfig().model_dump(mode="python"))
        return self.config_path

    def read_text(self) -> str:
        if not self.config_path.exists():
            return ""
        return self.config_path.read_text(encoding="utf-8")

    def read_settings(self) -> dict[str, Any]:
        """Return the settings stored on disk, pagination keys as field names.

        Raises:
            ConfigError: If the file is not a YAML mapping of sections.
        """
        if not self.config_path.exists():
            return {}
        return self._parse(self.read_text())

    def load(
        self,
        *,
        overrides: Mapping[str, Any] | None = None,
        include_env: bool = True,
    ) -> SitepagerConfig:
        """Return the effective settings for a run.

        Args:
            overrides: Pagination options for this run, by field name or alias.
                They win over the environment, which wins over the file.
            include_env: Whether ``SITEPAGER_*`` variables are applied.

        Returns:
            SitepagerConfig: Validated settings.

        Raises:
            ConfigError: If the file cannot be parsed or a value is invalid.
        """
        settings = self.read_settings()
        pagination = settings.setdefault("pagination", {})
        if include_env:
            pagination.update(self._pagination_from_env())
            level = self.env.get(LOG_LEVEL_ENV)
            if level:
                settings.setdefault("logging", {})["level"] = level
        if overrides:
            pagination.update(PaginationOptions.canonical_keys(overrides))
        return _validate(settings)

    def set_value(self, key: str, raw_value: str) -> tuple[Any, Any]:
        """Store a YAML literal under ``key`` and return the old and new values.

        ``key`` is ``section.field``; a bare field name such as ``perPage``
        refers to the pagination section. The file is only rewritten when the
        value changes.

        Raises:
            ConfigError: If the key is unknown or the value is invalid.
        """
        section, name = _split_key(key)
        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Unable to parse value for {key}: {exc}") from exc

        settings = self.read_settings()
        previous = getattr(getattr(_validate(settings), section), name)
        settings.setdefault(section, {})[name] = value
        current = getattr(getattr(_validate(settings), section), name)
        if current != previous:
            self._write(settings)
        return previous, current

    def replace_text(self, text: str) -> SitepagerConfig:
        """Validate ``text`` and store it verbatim as the configuration file.

        Raises:
            ConfigError: If ``text`` does not hold valid settings.
        """
        config = _validate(self._parse(text))
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(text, encoding="utf-8")
        return config

    def _parse(self, text: str) -> dict[str, Any]:
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Failed to parse configuration file: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level.")

        settings: dict[str, Any] = {}
        for section, values in raw.items():
            if values is None:
                values = {}
            if not isinstance(values, dict):
                raise ConfigError(f"Section {section!r} must be a mapping.")
            if section == "pagination":
                values = PaginationOptions.canonical_keys(values)
            settings[section] = dict(values)
        return settings

    def _pagination_from_env(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name in PaginationOptions.model_fields:
            raw_value = self.env.get(f"{ENV_PREFIX}{name.upper()}")
            if raw_value is None:
                continue
            try:
                values[name] = yaml.safe_load(raw_value)
            except yaml.YAMLError:
                values[name] = raw_value
        return values

    def _write(self, settings: Mapping[str, Any]) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        body = yaml.safe_dump(dict(settings), sort_keys=False)
        self.config_path.write_text(_CONFIG_HEADER + body, encoding="utf-8")


def _split_key(key: str) -> tuple[str, str]:
    section, _, name = key.rpartition(".")
    section = section or "pagination"
    model = _SECTIONS.get(section)
    if model is None:
        raise ConfigError(f"Unknown configuration section {section!r}.")
    if model is PaginationOptions:
        name = PaginationOptions.field_name(name)
    if name not in model.model_fields:
        raise ConfigError(f"Unknown configuration key {key!r}.")
    return section, name


def _validate(settings: Mapping[str, Any]) -> SitepagerConfig:
    try:
        return SitepagerConfig.model_validate(settings)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


__all__ = [
    "CLIOptions",
    "ConfigError",
    "ConfigManager",
    "DEFAULT_CONFIG_PATH",
    "ENV_PREFIX",
    "LoggingSettings",
    "PaginationOptions",
    "SitepagerConfig",
]
