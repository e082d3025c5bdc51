"""
Shared fixtures: sample table documents and an in-memory table fetcher.

The sample documents mirror the layout of the real data store: every table is
wrapped in a top-level key named after it, except traits, whose five lists sit
at the document root.
"""

from typing import Any

import pytest

from gmtools.data.fetcher import DataUnavailable, TableFetcher


class StaticTableFetcher(TableFetcher):
    """TableFetcher serving documents from a dict, recording each request."""

    def __init__(self, documents: dict[str, Any]):
        self.documents = documents
        self.requests: list[str] = []

    async def fetch(self, table: str) -> Any:
        self.requests.append(table)
        if table not in self.documents:
            raise DataUnavailable(table, "HTTP 404 Not Found")
        return self.documents[table]


@pytest.fixture
def documents() -> dict[str, Any]:
    return {
        "encounters": {
            "encounters": {
                "forest": {
                    "medium": [
                        {
                            "name": "Wolf Pack",
                            "monsters": ["wolf", "wolf", "dire wolf"],
                            "description": "Hungry wolves circle the camp.",
                        },
                        {
                            "name": "Bandit Ambush",
                            "monsters": ["bandit captain", "bandit", "bandit"],
                            "description": "Archers fire from the treeline.",
                        },
                    ],
                    "easy": [],
                },
                "dungeon": {
                    "hard": [
                        {"name": "Gelatinous Cube", "monsters": ["gelatinous cube"]},
                    ],
                },
            }
        },
        "names": {
            "names": {
                "elf": {
                    "female": ["Arwen", "Naivara", "Shava"],
                    "male": ["Aelar"],
                },
                "dwarf": {"male": []},
            }
        },
        "locations": {
            "locations": {
                "tavern": {
                    "prefixes": ["The Prancing", "The Rusty"],
                    "suffixes": ["Pony", "Dragon", "Tankard"],
                },
                "temple": {"prefixes": [], "suffixes": ["Sanctum"]},
            }
        },
        "traits": {
            "traits": ["Brave", "Curious"],
            "ideals": ["Honor"],
            "bonds": ["Loyal to kin"],
            "flaws": ["Greedy"],
            "quirks": ["Hums constantly"],
        },
        "treasure": {
            "treasure": {
                "individual": {
                    "cr0-4": {
                        "cp": {"dice": "5d6", "multiplier": 1},
                        "sp": {"dice": "4d6", "multiplier": 1},
                    },
                    "cr5-10": {"gp": {"dice": "2d6", "multiplier": 10}},
                    "cr11-16": {"gp": {"dice": "4d6", "multiplier": 100}},
                    "cr17+": {"pp": {"dice": "8d6", "multiplier": 100}},
                },
                "hoard": {
                    "cr0-4": {
                        "gp": {"dice": "6d6", "multiplier": 10},
                        "items": "Roll on Magic Item Table A",
                    },
                    "cr5-10": {"gp": {"dice": "2d6", "multiplier": 100}},
                    "cr11-16": {"gp": {"dice": "4d6", "multiplier": 1000}},
                    "cr17+": {"pp": {"dice": "8d6", "multiplier": 1000}},
                },
                "items": {
                    "magic_medium": ["Bag of Holding", "Cloak of Elvenkind"],
                    "magic_major": ["Vorpal Sword", "Staff of Power", "Ring of Three Wishes"],
                },
            }
        },
        "weather": {
            "weather": {
                "desert": {
                    "any": ["Scorching sun", "Sandstorm on the horizon"],
                    "summer": ["Blistering heat"],
                },
                "temperate": {"spring": ["Light rain"], "winter": []},
                "arctic": {"winter": ["Blizzard"]},
            }
        },
        "plot_hooks": {
            "plot_hooks": {
                "mystery": [
                    "A merchant vanished from a locked room.",
                    "Strange lights dance over the marsh at night.",
                ],
                "horror": [],
            }
        },
    }


@pytest.fixture
def fetcher(documents) -> StaticTableFetcher:
    return StaticTableFetcher(documents)
