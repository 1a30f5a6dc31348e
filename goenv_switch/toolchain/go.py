"""Go toolchain adapter backed by `go env`."""

import logging
import shlex
import subprocess

from goenv_switch.errors import ExternalToolFailure
from goenv_switch.settings import SwitchSettings
from goenv_switch.toolchain.base import ToolchainAdapter

logger = logging.getLogger(__name__)


class GoToolchain(ToolchainAdapter):
    def __init__(self, settings: SwitchSettings) -> None:
        self._binary = settings.go_binary
        self._timeout = settings.command_timeout

    def _run(self, key: str, *args: str) -> str:
        """Run `go env <args>` and return stdout; any failure raises ExternalToolFailure for key."""
        cmd = [self._binary, "env", *args]
        logger.debug("running %s", shlex.join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise ExternalToolFailure(key, f"{self._binary} timed out after {self._timeout}s") from exc
        except OSError as exc:
            raise ExternalToolFailure(key, f"cannot run {self._binary}: {exc.strerror or exc}") from exc

        if result.returncode != 0:
            output = f"{result.stdout or ''}{result.stderr or ''}".strip()
            raise ExternalToolFailure(key, output or f"{self._binary} exited with status {result.returncode}")
        return result.stdout

    def set(self, key: str, value: str) -> None:
        # An empty value is written as KEY= which go records as explicitly empty.
        self._run(key, "-w", f"{key}={value}")

    def get(self, key: str) -> str:
        return self._run(key, key).rstrip()
