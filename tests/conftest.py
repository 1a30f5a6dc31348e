"""Shared test fixtures."""

from pathlib import Path

import pytest

from goenv_switch.errors import ExternalToolFailure
from goenv_switch.models import Configuration, Profile
from goenv_switch.toolchain.base import ToolchainAdapter

SAMPLE_CONFIG = """\
environments:
  a:
    name: "Profile A"
    goprivate: "git.a.com"
    goproxy: "https://proxy.a.com,direct"
    gosumdb: "off"
    gonoproxy: "git.a.com"
    gonosumdb: "git.a.com"
  b:
    name: "Profile B"
    goprivate: ""
    goproxy: "https://goproxy.io,direct"
    gosumdb: "sum.golang.org"
    gonoproxy: ""
    gonosumdb: ""
default_env: a
"""


class RecordingToolchain(ToolchainAdapter):
    """In-memory toolchain that records every call.

    fail_on names a key whose set/get raises ExternalToolFailure.
    """

    def __init__(self, values: dict[str, str] | None = None, fail_on: str | None = None) -> None:
        self.values = dict(values or {})
        self.fail_on = fail_on
        self.set_calls: list[tuple[str, str]] = []
        self.get_calls: list[str] = []

    def set(self, key: str, value: str) -> None:
        self.set_calls.append((key, value))
        if key == self.fail_on:
            raise ExternalToolFailure(key, "go: permission denied")
        self.values[key] = value

    def get(self, key: str) -> str:
        self.get_calls.append(key)
        if key == self.fail_on:
            raise ExternalToolFailure(key, "go: not found")
        return self.values.get(key, "")


@pytest.fixture
def profile_a() -> Profile:
    return Profile(
        display_name="Profile A",
        private_pattern="git.a.com",
        proxy_url_list="https://proxy.a.com,direct",
        checksum_db_mode="off",
        no_proxy_pattern="git.a.com",
        no_checksum_db_pattern="git.a.com",
    )


@pytest.fixture
def profile_b() -> Profile:
    return Profile(
        display_name="Profile B",
        proxy_url_list="https://goproxy.io,direct",
        checksum_db_mode="sum.golang.org",
    )


@pytest.fixture
def configuration(profile_a: Profile, profile_b: Profile) -> Configuration:
    return Configuration(profiles={"a": profile_a, "b": profile_b}, default_profile_key="a")


@pytest.fixture
def toolchain() -> RecordingToolchain:
    return RecordingToolchain()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(SAMPLE_CONFIG)
    return path
