"""Profile operations over a loaded Configuration."""

import re
from collections.abc import Callable, Sequence

from goenv_switch.errors import InvalidSelection, NoProfilesConfigured, ProfileNotFound
from goenv_switch.models import SETTING_NAMES, Configuration, Profile, ProfileSummary
from goenv_switch.toolchain.base import ToolchainAdapter

AppliedCallback = Callable[[str, str], None]

_INTEGER_RE = re.compile(r"[+-]?\d+")


def parse_selection(text: str, keys: Sequence[str]) -> str:
    """Turn one line of interactive input into a profile key.

    An integer is a 1-based index into keys. Anything else must be one of
    keys verbatim.
    """
    choice = text.strip()
    if not choice:
        raise InvalidSelection(choice, len(keys))
    if _INTEGER_RE.fullmatch(choice):
        index = int(choice)
        if not 1 <= index <= len(keys):
            raise InvalidSelection(choice, len(keys))
        return keys[index - 1]
    if choice not in keys:
        raise ProfileNotFound(choice)
    return choice


class ProfileManager:
    def __init__(self, config: Configuration, toolchain: ToolchainAdapter) -> None:
        self.config = config
        self.toolchain = toolchain

    def list_profiles(self) -> list[ProfileSummary]:
        default = self.config.default_profile_key
        return [
            ProfileSummary(key=key, display_name=profile.display_name, is_default=key == default)
            for key, profile in self.config.profiles.items()
        ]

    def show(self, key: str) -> Profile:
        try:
            return self.config.profiles[key]
        except KeyError:
            raise ProfileNotFound(key) from None

    def switch(self, key: str, on_applied: AppliedCallback | None = None) -> Profile:
        """Apply every setting of profile key through the toolchain.

        Settings are written one at a time in SETTING_NAMES order. The first
        failure propagates and earlier writes stay applied: there is no
        rollback, so a failed switch can leave the toolchain partially updated.
        """
        profile = self.show(key)
        for name, value in profile.settings():
            self.toolchain.set(name, value)
            if on_applied is not None:
                on_applied(name, value)
        return profile

    def current(self) -> list[tuple[str, str]]:
        return [(name, self.toolchain.get(name)) for name in SETTING_NAMES]

    def interactive_switch(
        self,
        choose: Callable[[list[ProfileSummary]], str],
        on_applied: AppliedCallback | None = None,
    ) -> str:
        """Ask choose() for one line of input, resolve it, and switch. Returns the selected key."""
        summaries = self.list_profiles()
        if not summaries:
            raise NoProfilesConfigured()
        text = choose(summaries)
        key = parse_selection(text, [s.key for s in summaries])
        self.switch(key, on_applied=on_applied)
        return key
