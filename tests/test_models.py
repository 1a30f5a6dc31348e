"""Tests for goenv_switch.models."""

import pytest

from goenv_switch.models import SETTING_NAMES, Configuration, Profile, ProfileSummary


def test_profile_frozen(profile_a: Profile) -> None:
    with pytest.raises(Exception):  # ValidationError or TypeError depending on pydantic version
        profile_a.proxy_url_list = "changed"  # type: ignore[misc]


def test_profile_defaults_to_empty_strings() -> None:
    profile = Profile()
    assert profile.display_name == ""
    assert [value for _, value in profile.settings()] == ["", "", "", "", ""]


def test_profile_accepts_yaml_keys() -> None:
    profile = Profile.model_validate({"name": "Work", "goproxy": "https://p", "gonosumdb": "x.com"})
    assert profile.display_name == "Work"
    assert profile.proxy_url_list == "https://p"
    assert profile.no_checksum_db_pattern == "x.com"


def test_profile_null_becomes_empty() -> None:
    profile = Profile.model_validate({"name": None, "gosumdb": None})
    assert profile.display_name == ""
    assert profile.checksum_db_mode == ""


def test_settings_order_matches_setting_names(profile_a: Profile) -> None:
    assert [name for name, _ in profile_a.settings()] == list(SETTING_NAMES)
    assert profile_a.settings() == [
        ("GOPRIVATE", "git.a.com"),
        ("GOPROXY", "https://proxy.a.com,direct"),
        ("GOSUMDB", "off"),
        ("GONOPROXY", "git.a.com"),
        ("GONOSUMDB", "git.a.com"),
    ]


def test_configuration_defaults() -> None:
    config = Configuration()
    assert config.profiles == {}
    assert config.default_profile_key == ""


def test_configuration_null_entries() -> None:
    config = Configuration.model_validate({"environments": {"empty": None}, "default_env": None})
    assert config.profiles["empty"] == Profile()
    assert config.default_profile_key == ""


def test_configuration_default_not_validated() -> None:
    config = Configuration.model_validate({"environments": {}, "default_env": "missing"})
    assert config.default_profile_key == "missing"


def test_summary_frozen() -> None:
    summary = ProfileSummary(key="a", display_name="A", is_default=True)
    with pytest.raises(Exception):
        summary.key = "b"  # type: ignore[misc]
