"""
Generator Engine - the seven randomized generators.

Every generator has the same shape:

    fetch one table  →  walk a fixed lookup path with the caller's keys
                              ↓
        non-empty?  →  pick / roll / compose  →  result record
        empty?      →  NotFound (a normal return value, not an exception)

A DataUnavailable raised while fetching or parsing the table propagates
unchanged: "the data store is down" and "this combination has no content"
stay distinguishable for the caller.

The engine is stateless between calls. Each generator performs exactly one
fetch, never mutates the fetched table, and draws all randomness from the
injected RandomSource.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from gmtools.config.logging import get_logger
from gmtools.data.fetcher import TableFetcher
from gmtools.generators.dice import cr_bucket
from gmtools.generators.models import (
    EncounterResult,
    LocationNameResult,
    NotFound,
    NpcNameResult,
    PersonalityResult,
    PlotHookResult,
    TreasureResult,
    WeatherResult,
)
from gmtools.generators.random_source import RandomSource, SystemRandomSource
from gmtools.generators.tables import (
    EncounterTable,
    LocationTable,
    NameTable,
    PlotHookTable,
    TableT,
    TraitTable,
    TreasureTable,
    WeatherTable,
)

logger = get_logger(__name__)

# Hoards at or above these challenge ratings carry magic items
HOARD_ITEMS_MIN_CR = 5
HOARD_MAJOR_ITEMS_MIN_CR = 11
# A hoard holds between 1 and this many items
HOARD_MAX_ITEMS = 3


class GeneratorEngine:
    """
    Runs the generators against a table fetcher.

    Args:
        fetcher: Source of reference tables
        rng: Source of uniform draws (default: an unseeded SystemRandomSource)
    """

    def __init__(self, fetcher: TableFetcher, rng: RandomSource | None = None):
        self._fetcher = fetcher
        self._rng = rng if rng is not None else SystemRandomSource()

    async def _load(self, table_type: type[TableT]) -> TableT:
        document = await self._fetcher.fetch(table_type.table_name)
        return table_type.from_document(document)

    def _pick(self, candidates: Sequence[Any]) -> Any:
        return candidates[self._rng.randbelow(len(candidates))]

    def _not_found(self, message: str) -> NotFound:
        logger.info(message)
        return NotFound(error=message)

    async def generate_encounter(
        self, level: int, environment: str, difficulty: str = "medium"
    ) -> EncounterResult | NotFound:
        """Pick one encounter for an environment and difficulty."""
        table = await self._load(EncounterTable)
        encounters = table.encounters(environment, difficulty)
        if not encounters:
            return self._not_found(f"No encounters found for {environment} / {difficulty}")

        encounter = self._pick(encounters)
        return EncounterResult.model_validate(
            {
                **encounter,
                "environment": environment,
                "difficulty": difficulty,
                "partyLevel": level,
            }
        )

    async def generate_npc_name(self, race: str, gender: str) -> NpcNameResult | NotFound:
        table = await self._load(NameTable)
        names = table.names(race, gender)
        if not names:
            return self._not_found(f"No names found for {race} / {gender}")
        return NpcNameResult(name=self._pick(names), race=race, gender=gender)

    async def generate_location_name(self, type: str) -> LocationNameResult | NotFound:
        """Join a random prefix and a random suffix for a location type."""
        table = await self._load(LocationTable)
        parts = table.parts(type)
        if parts is None or not parts.prefixes or not parts.suffixes:
            return self._not_found(f"No location type found: {type}")

        prefix = self._pick(parts.prefixes)
        suffix = self._pick(parts.suffixes)
        return LocationNameResult(name=f"{prefix} {suffix}", type=type)

    async def generate_personality(self, count: int = 4) -> PersonalityResult:
        """
        Draw up to ``count`` distinct traits from all five trait categories.

        The loop makes exactly ``min(count, pool size)`` draws from the full
        pool and drops repeats without redrawing, so a result can hold fewer
        than ``count`` traits.
        """
        table = await self._load(TraitTable)
        pool = table.pool()

        selected: list[str] = []
        for _ in range(min(count, len(pool))):
            trait = self._pick(pool)
            if trait not in selected:
                selected.append(trait)
        return PersonalityResult(traits=selected)

    async def generate_treasure(self, cr: int, type: str = "individual") -> TreasureResult:
        """
        Roll coins for a challenge rating, plus magic items for larger hoards.

        Coin kinds are rolled in table order. An unknown type or bucket yields
        no coins rather than an error.
        """
        table = await self._load(TreasureTable)
        bucket_name = cr_bucket(cr)
        bucket = table.bucket(type, bucket_name)

        coins: dict[str, int | float] = {}
        if bucket is None:
            logger.info(f"No treasure bucket {type} / {bucket_name}; rolling no coins")
        else:
            for coin, roll in bucket.coins.items():
                coins[coin] = roll.dice.roll(self._rng) * roll.multiplier

        items: list[Any] = []
        if type == "hoard" and cr >= HOARD_ITEMS_MIN_CR:
            pool = table.item_pool(major=cr >= HOARD_MAJOR_ITEMS_MIN_CR)
            if pool:
                item_count = self._rng.randbelow(HOARD_MAX_ITEMS) + 1
                items = [self._pick(pool) for _ in range(item_count)]
            else:
                logger.info(f"Empty magic item pool for CR {cr} hoard")

        return TreasureResult(challenge_rating=cr, type=type, coins=coins, items=items)

    async def generate_weather(
        self, climate: str, season: str | None = None
    ) -> WeatherResult | NotFound:
        """Describe the weather, falling back to the climate's "any" season."""
        table = await self._load(WeatherTable)
        descriptions = table.descriptions(climate, season)
        if not descriptions:
            return self._not_found(f"No weather found for {climate} / {season}")
        return WeatherResult(
            climate=climate, season=season, description=self._pick(descriptions)
        )

    async def generate_plot_hook(
        self, theme: str, level: int | None = None
    ) -> PlotHookResult | NotFound:
        table = await self._load(PlotHookTable)
        hooks = table.hooks(theme)
        if not hooks:
            return self._not_found(f"No plot hooks found for theme: {theme}")
        return PlotHookResult(theme=theme, suggested_level=level, hook=self._pick(hooks))
