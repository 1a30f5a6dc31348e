"""Error taxonomy. Library code raises these; main.py maps them to exit status 1."""


class GoEnvSwitchError(RuntimeError):
    pass


class ConfigReadError(GoEnvSwitchError):
    pass


class ConfigParseError(GoEnvSwitchError):
    pass


class ConfigWriteError(GoEnvSwitchError):
    pass


class ProfileNotFound(GoEnvSwitchError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Profile '{key}' not found")


class NoProfilesConfigured(GoEnvSwitchError):
    def __init__(self) -> None:
        super().__init__("No profiles configured")


class InvalidSelection(GoEnvSwitchError):
    def __init__(self, choice: str, count: int) -> None:
        self.choice = choice
        super().__init__(f"Invalid selection '{choice}': enter a number from 1 to {count} or a profile key")


class ExternalToolFailure(GoEnvSwitchError):
    """A `go env` invocation failed to start or exited non-zero."""

    def __init__(self, key: str, output: str) -> None:
        self.key = key
        self.output = output
        super().__init__(f"{key}: {output}")
