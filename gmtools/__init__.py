"""
gmtools - tabletop RPG game-master generators served over MCP.

This package fetches reference tables (encounters, names, treasure, weather, ...)
from a static JSON data store and turns them into randomized results that an
MCP client, such as an LLM assistant, can request as tools.
"""

__version__ = "1.0.0"
