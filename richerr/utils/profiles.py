"""
Predefined configuration profiles for richerr.

Profiles are shortcuts for common deployment modes.  They are merged on top
of the packaged defaults before user configuration and overrides are applied.
"""

from __future__ import annotations

from typing import Dict

from omegaconf import OmegaConf

from richerr.exceptions import RichErrConfigError

PROFILES: Dict[str, Dict[str, object]] = {
    "production": {
        "stack": {
            "depth": 16,
        },
        "details": {
            "max_stack_lines": 5,
            "short_paths": True,
        },
        "logging": {
            "level": "ERROR",
            "max_stack_lines": 5,
        },
    },
    "debug": {
        "stack": {
            "depth": 64,
        },
        "details": {
            "max_stack_lines": 64,
            "short_paths": False,
        },
        "logging": {
            "level": "DEBUG",
            "max_stack_lines": 64,
        },
    },
    "minimal": {
        "stack": {
            "depth": 1,
        },
        "details": {
            "max_stack_lines": 1,
        },
        "logging": {
            "max_stack_lines": 1,
        },
    },
}


def list_profiles() -> Dict[str, Dict[str, object]]:
    """Return a copy of the registered profiles."""

    return {name: OmegaConf.to_container(OmegaConf.create(conf), resolve=True) for name, conf in PROFILES.items()}


def get_profile(name: str) -> Dict[str, object]:
    """Return a profile configuration by name."""

    if name not in PROFILES:
        raise RichErrConfigError(
            f"Unknown profile '{name}'. Available profiles: {list(PROFILES)}",
            context={"profile": name},
        )
    return OmegaConf.to_container(OmegaConf.create(PROFILES[name]), resolve=True)
