"""Base classes shared by every tool exposed by the virtual shell server."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

ToolCallArguments = dict[str, Any]


class ToolError(Exception):
    """Raised by tool handlers when an operation cannot be completed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class ToolExecResult:
    """The outcome of a tool call, as returned to the server layer."""

    output: str | None = None
    error: str | None = None
    error_code: int = 0
    data: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolParameter:
    """A single parameter in a tool's input schema."""

    name: str
    type: str | list[str]
    description: str
    enum: list[str] | None = None
    required: bool = False


class Tool(ABC):
    """Abstract tool with a name, a description, a parameter schema and an async entry point."""

    @abstractmethod
    def get_name(self) -> str:
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass

    @abstractmethod
    def get_parameters(self) -> list[ToolParameter]:
        pass

    @abstractmethod
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        pass

