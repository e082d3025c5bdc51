"""
Result records returned by the generators.

Field names are snake_case in Python; the wire names (``partyLevel``,
``challengeRating``, ``suggestedLevel``) are pydantic aliases, so
``to_payload()`` produces the JSON shape MCP clients receive.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GeneratorResult(BaseModel):
    """Base class for everything a generator can return."""

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON-ready dict sent to clients."""
        return self.model_dump(by_alias=True, mode="json")


class NotFound(GeneratorResult):
    """
    Soft "no content" outcome.

    The table was fetched fine but holds nothing for the requested category.
    This is a normal result value, not an exception; compare DataUnavailable.
    """

    error: str


class EncounterResult(GeneratorResult):
    """An encounter record with the request's context merged in.

    Every key of the chosen record is kept as an extra field; ``environment``,
    ``difficulty`` and ``partyLevel`` always echo the request.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    environment: str
    difficulty: str
    party_level: int = Field(alias="partyLevel")


class NpcNameResult(GeneratorResult):
    name: str
    race: str
    gender: str


class LocationNameResult(GeneratorResult):
    name: str
    type: str


class PersonalityResult(GeneratorResult):
    traits: list[str] = Field(default_factory=list)


class TreasureResult(GeneratorResult):
    challenge_rating: int | float = Field(alias="challengeRating")
    type: str
    coins: dict[str, int | float] = Field(default_factory=dict)
    items: list[Any] = Field(default_factory=list)


class WeatherResult(GeneratorResult):
    climate: str
    # Echoes the requested season, even when the "any" list was used
    season: str | None = None
    description: Any


class PlotHookResult(GeneratorResult):
    theme: str
    suggested_level: int | None = Field(default=None, alias="suggestedLevel")
    hook: Any
