"""
Generator tools - the dispatcher in front of GeneratorEngine.

Each tool is declared once as a pydantic argument model. The model does two
jobs: it coerces incoming arguments to the declared types (``"5"`` becomes
``5``), and its JSON schema is what ``list_tools()`` advertises. Enums and
integer ranges in the schema are advisory hints for clients; only types and
required keys are enforced here.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gmtools.config.logging import get_logger
from gmtools.data.fetcher import TableFetcher
from gmtools.generators.engine import GeneratorEngine
from gmtools.generators.random_source import RandomSource
from gmtools.tools.base import InvalidArgumentsError, ToolAdapter, UnknownToolError

logger = get_logger(__name__)


def _advisory(**schema: Any) -> dict[str, Any]:
    return {"json_schema_extra": schema}


class ToolArguments(BaseModel):
    """Base class for tool argument models."""

    model_config = ConfigDict(extra="ignore")


class EncounterArgs(ToolArguments):
    level: int = Field(description="Party level", **_advisory(minimum=1, maximum=20))
    environment: str = Field(
        description="Where the encounter takes place",
        **_advisory(enum=["forest", "dungeon", "city", "mountain", "swamp"]),
    )
    difficulty: str = Field(
        default="medium",
        description="Encounter difficulty",
        **_advisory(enum=["easy", "medium", "hard", "deadly"]),
    )


class NpcNameArgs(ToolArguments):
    race: str = Field(
        description="Character race",
        **_advisory(enum=[
            "human", "elf", "dwarf", "halfling", "gnome", "half-elf",
            "half-orc", "tiefling", "dragonborn", "orc", "goblin",
        ]),
    )
    gender: str = Field(description="Character gender", **_advisory(enum=["male", "female"]))


class LocationNameArgs(ToolArguments):
    type: str = Field(
        description="Kind of location",
        **_advisory(enum=[
            "tavern", "inn", "city", "town", "village",
            "dungeon", "castle", "shop", "guild", "temple",
        ]),
    )


class PersonalityArgs(ToolArguments):
    count: int = Field(
        default=4, description="Number of traits to draw", **_advisory(minimum=1, maximum=10)
    )


class TreasureArgs(ToolArguments):
    cr: int = Field(description="Challenge rating", **_advisory(minimum=0, maximum=30))
    type: str = Field(
        default="individual",
        description="Individual treasure or a hoard",
        **_advisory(enum=["individual", "hoard"]),
    )


class WeatherArgs(ToolArguments):
    climate: str = Field(
        description="Climate zone",
        **_advisory(enum=["temperate", "arctic", "tropical", "desert", "mountain"]),
    )
    season: str | None = Field(
        default=None,
        description="Season; falls back to all-season weather when omitted",
        **_advisory(enum=["spring", "summer", "autumn", "winter"]),
    )


class PlotHookArgs(ToolArguments):
    theme: str = Field(
        description="Adventure theme",
        **_advisory(enum=[
            "mystery", "combat", "intrigue", "exploration",
            "horror", "comedy", "romance", "rescue",
        ]),
    )
    level: int | None = Field(
        default=None, description="Suggested party level", **_advisory(minimum=1, maximum=20)
    )


class ToolSpec(BaseModel):
    """One tool: its public name, description and argument model."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    arguments: type[ToolArguments]

    def input_schema(self) -> dict[str, Any]:
        """JSON schema for the tool's arguments, without pydantic's titles."""
        schema = self.arguments.model_json_schema()
        schema.pop("title", None)
        for prop in schema.get("properties", {}).values():
            prop.pop("title", None)
        return schema


TOOL_SPECS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="generate_encounter",
        description="Generate a random encounter for a TTRPG session",
        arguments=EncounterArgs,
    ),
    ToolSpec(
        name="generate_npc_name",
        description="Generate an NPC name for a fantasy character",
        arguments=NpcNameArgs,
    ),
    ToolSpec(
        name="generate_location_name",
        description="Generate a name for a location",
        arguments=LocationNameArgs,
    ),
    ToolSpec(
        name="generate_personality",
        description="Generate personality traits for an NPC",
        arguments=PersonalityArgs,
    ),
    ToolSpec(
        name="generate_treasure",
        description="Generate treasure based on challenge rating",
        arguments=TreasureArgs,
    ),
    ToolSpec(
        name="generate_weather",
        description="Generate weather conditions",
        arguments=WeatherArgs,
    ),
    ToolSpec(
        name="generate_plot_hook",
        description="Generate adventure hooks and quest ideas",
        arguments=PlotHookArgs,
    ),
)


class GeneratorToolAdapter(ToolAdapter):
    """
    Exposes the GeneratorEngine methods as named tools.

    Tool names match the engine's method names, so dispatch is a lookup in
    TOOL_SPECS followed by a call to the method of the same name.

    Args:
        fetcher: Table source handed to the engine; its lifecycle follows
                 initialize()/shutdown()
        rng: Optional random source for the engine
    """

    def __init__(self, fetcher: TableFetcher, rng: RandomSource | None = None):
        self._fetcher = fetcher
        self._engine = GeneratorEngine(fetcher, rng)
        self._specs = {spec.name: spec for spec in TOOL_SPECS}

    async def initialize(self) -> None:
        await self._fetcher.initialize()

    async def shutdown(self) -> None:
        await self._fetcher.shutdown()

    def list_tools(self) -> list[dict[str, Any]]:
        return [
            {
                "name": spec.name,
                "description": spec.description,
                "input_schema": spec.input_schema(),
            }
            for spec in self._specs.values()
        ]

    async def call(self, tool_name: str, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """
        Validate arguments and run one generator.

        Returns:
            The generator's payload. A NotFound outcome is returned as
            ``{"error": ...}``, not raised.

        Raises:
            UnknownToolError: If tool_name is unknown
            InvalidArgumentsError: If arguments fail validation
            DataUnavailable: If the generator's table cannot be fetched
        """
        spec = self._specs.get(tool_name)
        if spec is None:
            logger.warning(f"Unknown tool requested: {tool_name!r}")
            raise UnknownToolError(tool_name)

        try:
            args = spec.arguments.model_validate(arguments or {})
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            )
            raise InvalidArgumentsError(tool_name, details) from e

        logger.debug(f"Calling {tool_name} with {args.model_dump()}")
        generator = getattr(self._engine, spec.name)
        result = await generator(**args.model_dump())
        return result.to_payload()
