"""Shared pydantic models: the contract between settings.py, manager.py and main.py."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Order in which a profile is applied and read back.
SETTING_NAMES = ("GOPRIVATE", "GOPROXY", "GOSUMDB", "GONOPROXY", "GONOSUMDB")


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    display_name: str = Field("", alias="name")
    private_pattern: str = Field("", alias="goprivate")  # GOPRIVATE
    proxy_url_list: str = Field("", alias="goproxy")  # GOPROXY
    checksum_db_mode: str = Field("", alias="gosumdb")  # GOSUMDB
    no_proxy_pattern: str = Field("", alias="gonoproxy")  # GONOPROXY
    no_checksum_db_pattern: str = Field("", alias="gonosumdb")  # GONOSUMDB

    @field_validator("*", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: object) -> object:
        # null means unset; explicitly tagged scalars (!!int 1) keep their literal text
        if value is None:
            return ""
        if isinstance(value, (bool, int, float)):
            return str(value)
        return value

    def settings(self) -> list[tuple[str, str]]:
        """Return the five (GO_NAME, value) pairs in SETTING_NAMES order."""
        return [
            ("GOPRIVATE", self.private_pattern),
            ("GOPROXY", self.proxy_url_list),
            ("GOSUMDB", self.checksum_db_mode),
            ("GONOPROXY", self.no_proxy_pattern),
            ("GONOSUMDB", self.no_checksum_db_pattern),
        ]


class Configuration(BaseModel):
    """The whole config file: named profiles plus an informational default key."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    profiles: dict[str, Profile] = Field(default_factory=dict, alias="environments")
    default_profile_key: str = Field("", alias="default_env")  # not checked against profiles

    @field_validator("profiles", mode="before")
    @classmethod
    def _empty_profiles(cls, value: object) -> object:
        if value is None or value == "":
            return {}
        if isinstance(value, dict):
            return {k: ({} if v is None else v) for k, v in value.items()}
        return value

    @field_validator("default_profile_key", mode="before")
    @classmethod
    def _null_default(cls, value: object) -> object:
        return "" if value is None else value


class ProfileSummary(BaseModel):
    """One row of `list` output."""

    model_config = ConfigDict(frozen=True)

    key: str
    display_name: str
    is_default: bool = False
