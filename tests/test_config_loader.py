"""Tests covering the richerr configuration loader behaviour."""

import dataclasses
from pathlib import Path

import pytest

from richerr import DEFAULT_SETTINGS, RichErrConfigError
from richerr.utils import ConfigLoader, ErrorSettings, load_settings
from richerr.utils.profiles import get_profile, list_profiles


def test_defaults_match_packaged_schema() -> None:
    assert DEFAULT_SETTINGS == ErrorSettings(
        stack_depth=32,
        details_max_stack_lines=5,
        details_short_paths=False,
        log_level="ERROR",
        log_max_stack_lines=10,
    )


def test_config_loader_accepts_dict_overrides() -> None:
    loader = ConfigLoader({"stack": {"depth": 8}})
    config = loader.load(overrides={"details": {"max_stack_lines": 2}}).to_dict()
    assert config["stack"]["depth"] == 8
    assert config["details"]["max_stack_lines"] == 2
    assert config["logging"]["level"] == "ERROR"


def test_config_loader_reads_yaml_file(tmp_path: Path) -> None:
    path = tmp_path / "errors.yaml"
    path.write_text("stack:\n  depth: 4\nlogging:\n  level: warning\n", encoding="utf-8")
    settings = ConfigLoader().load(path).to_settings()
    assert settings.stack_depth == 4
    assert settings.log_level == "WARNING"


def test_config_loader_reads_json_file(tmp_path: Path) -> None:
    path = tmp_path / "errors.json"
    path.write_text('{"details": {"short_paths": true}}', encoding="utf-8")
    assert ConfigLoader().load(path).to_settings().details_short_paths is True


def test_config_loader_parses_yaml_string() -> None:
    settings = load_settings("stack: {depth: 3}")
    assert settings.stack_depth == 3


def test_config_loader_unknown_section_raises() -> None:
    loader = ConfigLoader()
    with pytest.raises(RichErrConfigError) as err:
        loader.load(overrides={"unknown_section": {"foo": 1}})
    assert "unknown_section" in str(err.value)


def test_config_loader_unknown_key_raises() -> None:
    loader = ConfigLoader()
    with pytest.raises(RichErrConfigError) as err:
        loader.load(overrides={"stack": {"invalid_key": 1}})
    assert "stack.invalid_key" in str(err.value)
    assert err.value.context == {"key": "stack.invalid_key"}


def test_unsupported_file_format_raises(tmp_path: Path) -> None:
    path = tmp_path / "errors.toml"
    path.write_text("[stack]\ndepth = 1\n", encoding="utf-8")
    with pytest.raises(RichErrConfigError):
        ConfigLoader().load(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ConfigLoader().load(tmp_path / "absent.yaml")


def test_non_mapping_string_raises() -> None:
    with pytest.raises(RichErrConfigError):
        load_settings("- just\n- a list\n")


def test_negative_depth_raises() -> None:
    with pytest.raises(RichErrConfigError):
        load_settings(overrides={"stack": {"depth": -1}})


def test_unknown_log_level_raises() -> None:
    with pytest.raises(RichErrConfigError):
        load_settings(overrides={"logging": {"level": "LOUD"}})


def test_profile_is_applied_before_overrides() -> None:
    settings = load_settings(profile="debug", overrides={"stack": {"depth": 10}})
    assert settings.stack_depth == 10
    assert settings.log_level == "DEBUG"
    assert settings.details_max_stack_lines == 64


def test_unknown_profile_raises() -> None:
    with pytest.raises(RichErrConfigError) as err:
        get_profile("chaotic")
    assert "production" in str(err.value)


def test_list_profiles_returns_copies() -> None:
    profiles = list_profiles()
    assert {"production", "debug", "minimal"} <= set(profiles)
    profiles["production"]["stack"]["depth"] = 1000
    assert get_profile("production")["stack"]["depth"] == 16


def test_settings_are_frozen() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_SETTINGS.stack_depth = 1  # type: ignore[misc]


def test_section_must_be_a_mapping() -> None:
    with pytest.raises(RichErrConfigError):
        load_settings(overrides={"stack": 5})
