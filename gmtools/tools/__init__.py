"""
Tool Integration Layer.

Maps externally invokable tool names (generate_encounter, generate_treasure, ...)
onto the generator engine, with the JSON schemas clients use to call them.
"""

from gmtools.tools.base import InvalidArgumentsError, ToolAdapter, UnknownToolError
from gmtools.tools.generator_tool import GeneratorToolAdapter

__all__ = [
    "GeneratorToolAdapter",
    "InvalidArgumentsError",
    "ToolAdapter",
    "UnknownToolError",
]
