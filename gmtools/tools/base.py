"""
Base classes for tool adapters.

Provides the abstract interface the MCP server and the CLI use to list and
invoke tools, independent of how each tool is implemented.
"""

from abc import ABC, abstractmethod
from typing import Any


class UnknownToolError(ValueError):
    """No tool with the requested name exists."""

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class InvalidArgumentsError(ValueError):
    """Tool arguments are missing or have the wrong type."""

    def __init__(self, tool_name: str, message: str):
        super().__init__(f"Invalid arguments for {tool_name}: {message}")
        self.tool_name = tool_name


class ToolAdapter(ABC):
    """
    Abstract base class for tool adapters.

    Tool adapters provide a uniform interface for listing and calling tools,
    whatever sits behind them.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the tool adapter.

        This may involve opening HTTP clients or other connections.
        """
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """
        Cleanly shut down the tool adapter and release its resources.
        """
        pass

    @abstractmethod
    async def call(self, tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        """
        Call a tool with the given arguments.

        Args:
            tool_name: Name of the tool to invoke
            arguments: Tool-specific arguments

        Returns:
            Tool execution result as a JSON-ready dictionary

        Raises:
            UnknownToolError: If tool_name is unknown
            InvalidArgumentsError: If arguments are missing or mistyped
        """
        pass

    @abstractmethod
    def list_tools(self) -> list[dict[str, Any]]:
        """
        List all available tools from this adapter.

        Returns:
            List of tool schemas. Each schema includes name, description,
            and input schema.

        Example:
            [
                {
                    "name": "generate_treasure",
                    "description": "Generate treasure based on challenge rating",
                    "input_schema": {
                        "type": "object",
                        "properties": {
                            "cr": {"type": "integer", "minimum": 0, "maximum": 30},
                            "type": {"type": "string", "enum": ["individual", "hoard"]}
                        },
                        "required": ["cr"]
                    }
                }
            ]
        """
        pass

    async def __aenter__(self):
        """Context manager entry - initialize the adapter."""
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - shutdown the adapter."""
        await self.shutdown()
        return False
