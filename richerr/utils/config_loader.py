"""
Configuration loader for richerr.

Settings can be provided as dictionaries, JSON/YAML files, YAML strings or
OmegaConf objects and are merged on top of the packaged defaults declared in
``configs/config_default.yaml``.  The result is frozen into an
:class:`ErrorSettings` value that construction and rendering functions accept
explicitly; nothing here is process-wide mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping, Optional, Union

import yaml
from loguru import logger
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from richerr.exceptions import RichErrConfigError

from .config_reference import CONFIG_SCHEMA, defaults
from .profiles import get_profile

ConfigLike = Union[str, Path, Mapping[str, Any], DictConfig]


@dataclass(frozen=True)
class ErrorSettings:
    """Resolved, immutable settings consumed by the rest of the package."""

    stack_depth: int = 32
    details_max_stack_lines: int = 5
    details_short_paths: bool = False
    log_level: str = "ERROR"
    log_max_stack_lines: int = 10


@dataclass
class LoadedConfig:
    """Container that exposes both OmegaConf and plain-dict views."""

    data: DictConfig

    def to_dict(self) -> Dict[str, Any]:
        return OmegaConf.to_container(self.data, resolve=True)  # type: ignore[return-value]

    def __getitem__(self, item: str) -> Any:
        return self.data[item]

    def to_settings(self) -> ErrorSettings:
        conf = self.to_dict()
        stack_depth = int(conf["stack"]["depth"])
        if stack_depth < 0:
            raise RichErrConfigError(
                "stack.depth must not be negative.", context={"stack.depth": stack_depth}
            )
        level = str(conf["logging"]["level"]).upper()
        try:
            logger.level(level)
        except ValueError as exc:
            raise RichErrConfigError(
                f"Unknown logging level '{level}'.", context={"logging.level": level}
            ) from exc
        return ErrorSettings(
            stack_depth=stack_depth,
            details_max_stack_lines=max(0, int(conf["details"]["max_stack_lines"])),
            details_short_paths=bool(conf["details"]["short_paths"]),
            log_level=level,
            log_max_stack_lines=max(0, int(conf["logging"]["max_stack_lines"])),
        )


class ConfigLoader:
    """
    Load and merge richerr configuration sources.

    Parameters
    ----------
    global_config : Optional[ConfigLike]
        Optional path or mapping merged over the packaged defaults.
    """

    def __init__(self, global_config: Optional[ConfigLike] = None) -> None:
        self._global_conf = OmegaConf.create(defaults())
        if global_config is not None:
            self._global_conf = OmegaConf.merge(self._global_conf, self._coerce(global_config))

    def _coerce(self, source: ConfigLike) -> DictConfig:
        """Convert arbitrary config-like inputs into an OmegaConf instance."""
        if isinstance(source, DictConfig):
            return source
        if isinstance(source, Mapping):
            return OmegaConf.create(dict(source))
        if isinstance(source, Path):
            return self._load_path(source)
        if isinstance(source, str):
            potential_path = Path(source)
            if potential_path.suffix and potential_path.exists():
                return self._load_path(potential_path)
            try:
                parsed = yaml.safe_load(source)
            except yaml.YAMLError as exc:
                raise RichErrConfigError(f"Failed to parse configuration string: {exc}") from exc
            if not isinstance(parsed, MutableMapping):
                raise RichErrConfigError("Configuration string must evaluate to a mapping.")
            return OmegaConf.create(dict(parsed))
        raise TypeError(f"Unsupported configuration source: {type(source)!r}")

    def _load_path(self, path: Path) -> DictConfig:
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        suffix = path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            return OmegaConf.load(path)
        if suffix == ".json":
            return OmegaConf.create(yaml.safe_load(path.read_text(encoding="utf-8")))
        raise RichErrConfigError(
            f"Unsupported configuration file format: '{suffix}'. Expected YAML or JSON.",
            context={"path": str(path)},
        )

    @staticmethod
    def _validate(conf: DictConfig) -> None:
        for section, entries in conf.items():
            if section not in CONFIG_SCHEMA:
                raise RichErrConfigError(
                    f"Unknown configuration section '{section}'.", context={"section": section}
                )
            if not isinstance(entries, DictConfig):
                raise RichErrConfigError(
                    f"Configuration section '{section}' must be a mapping.", context={"section": section}
                )
            for key in entries:
                if key not in CONFIG_SCHEMA[section]:
                    raise RichErrConfigError(
                        f"Unknown configuration key '{section}.{key}'.",
                        context={"key": f"{section}.{key}"},
                    )

    def load(
        self,
        config: Optional[ConfigLike] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        profile: Optional[str] = None,
    ) -> LoadedConfig:
        """Merge defaults, an optional profile, configuration and overrides."""

        merged = self._global_conf.copy()
        layers = []

        if profile is not None:
            layers.append(get_profile(profile))

        if config is not None:
            layers.append(self._coerce(config))

        if overrides:
            layers.append(dict(overrides))

        try:
            for layer in layers:
                merged = OmegaConf.merge(merged, layer)
        except OmegaConfBaseException as exc:
            raise RichErrConfigError(f"Failed to merge configuration: {exc}") from exc

        self._validate(merged)
        return LoadedConfig(merged)


def load_settings(
    config: Optional[ConfigLike] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    profile: Optional[str] = None,
) -> ErrorSettings:
    """Shortcut returning :class:`ErrorSettings` for the given sources."""

    return ConfigLoader().load(config, overrides=overrides, profile=profile).to_settings()


DEFAULT_SETTINGS: ErrorSettings = load_settings()
