"""Config file resolution, YAML loading, and tool settings."""

import logging
from collections.abc import Hashable, Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from goenv_switch.errors import ConfigParseError, ConfigReadError, ConfigWriteError
from goenv_switch.models import Configuration

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.yaml"
USER_CONFIG_PATH = Path.home() / ".goenv-switch" / CONFIG_FILENAME

DEFAULT_CONFIG_TEMPLATE = """\
# goenv-switch configuration

environments:
  # Company intranet
  company:
    name: "Company network"
    goprivate: "git.company.com"
    goproxy: "https://goproxy.company.com,direct"
    gosumdb: "off"
    gonoproxy: "git.company.com"
    gonosumdb: "git.company.com"

  # Public internet
  public:
    name: "Public network"
    goprivate: ""
    goproxy: "https://goproxy.cn,https://goproxy.io,direct"
    gosumdb: "sum.golang.org"
    gonoproxy: ""
    gonosumdb: ""

# Profile marked as default in `goenv-switch list`
default_env: public
"""


class SwitchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GOENV_SWITCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    go_binary: str = "go"
    command_timeout: float | None = None  # seconds; None waits forever


def get_settings() -> SwitchSettings:
    return SwitchSettings()


_KEPT_RESOLVERS = ("tag:yaml.org,2002:null", "tag:yaml.org,2002:merge")


class _StringScalarLoader(yaml.SafeLoader):
    """SafeLoader that resolves only null and merge keys implicitly; every other plain scalar stays a string.

    Keeps `gosumdb: off` as "off" instead of YAML 1.1's boolean False.
    Repeated keys in one mapping are rejected.
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen: set = set()
            for key_node, _ in node.value:
                # keys pulled in by <<: may be overridden, only the mapping's own keys must be unique
                if key_node.tag == "tag:yaml.org,2002:merge":
                    continue
                key = self.construct_object(key_node, deep=True)
                if not isinstance(key, Hashable):
                    continue
                if key in seen:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


_StringScalarLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag in _KEPT_RESOLVERS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def resolve_path(explicit: Path | None = None) -> Path:
    """Return the config file to load.

    Precedence:
    1. explicit path (-c/--config), returned verbatim
    2. ./config.yaml
    3. ~/.goenv-switch/config.yaml
    Falls back to ./config.yaml so a later load error names a sensible path.
    """
    if explicit is not None:
        return explicit
    local = Path(CONFIG_FILENAME)
    for candidate in (local, USER_CONFIG_PATH):
        if candidate.exists():
            return candidate
    return local


def parse_config(text: str, source: str = "<string>") -> Configuration:
    try:
        data = yaml.load(text, Loader=_StringScalarLoader)
    except yaml.YAMLError as exc:
        raise ConfigParseError(f"Failed to parse {source}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigParseError(f"Failed to parse {source}: top level must be a mapping")

    try:
        return Configuration.model_validate(data)
    except ValidationError as exc:
        raise ConfigParseError(f"Failed to parse {source}: {exc}") from exc


def load_config(path: Path) -> Configuration:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigParseError(f"Failed to parse {path}: not valid UTF-8") from exc
    except OSError as exc:
        raise ConfigReadError(f"Failed to read config file {path}: {exc.strerror or exc}") from exc

    config = parse_config(text, source=str(path))
    logger.debug("loaded %d profile(s) from %s", len(config.profiles), path)
    return config


def read_template(path: Path) -> str:
    """Read a config file as raw text for `init` to copy."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigReadError(f"Failed to read template {path}: {exc}") from exc


def write_default_config(path: Path, content: str = DEFAULT_CONFIG_TEMPLATE) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ConfigWriteError(f"Failed to write config file {path}: {exc.strerror or exc}") from exc
    logger.debug("wrote %d bytes to %s", len(content), path)
