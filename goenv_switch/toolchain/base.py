"""Abstract base class for toolchain settings adapters."""

from abc import ABC, abstractmethod


class ToolchainAdapter(ABC):
    @abstractmethod
    def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    def get(self, key: str) -> str: ...
