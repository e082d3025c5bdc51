"""
Typed views over the reference table documents.

Each table document is wrapped in a small pydantic model with an accessor for
the one lookup path its generator needs. Only the outer container is checked
when a document is loaded; the categories under it stay raw until an accessor
walks into one. A bad entry in a category nobody asked for therefore never
affects a lookup elsewhere in the same table.

Accessors never raise for a missing key: an absent category comes back as an
empty tuple (or None where a whole sub-structure is looked up), which the
engine turns into a NotFound result. When the walked path is present but does
not have the expected shape (a string where a list belongs, a malformed dice
spec) the accessor raises DataUnavailable.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

from gmtools.data.fetcher import DataUnavailable
from gmtools.generators.dice import DiceSpec

EMPTY: tuple = ()

_MAPPING = TypeAdapter(dict[str, Any])
_RECORDS = TypeAdapter(list[dict[str, Any]])
_STRINGS = TypeAdapter(list[str])
_VALUES = TypeAdapter(list[Any])


class Table(BaseModel):
    """Base class for parsed reference tables."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # File name in the data store
    table_name: ClassVar[str]
    # Top-level key the table's content sits under; None means the document root
    document_key: ClassVar[str | None] = None

    @classmethod
    def from_document(cls, document: Any):
        """
        Wrap a fetched document in this table type.

        Raises:
            DataUnavailable: If the document or the table's top-level container
                is not a JSON object
        """
        if not isinstance(document, dict):
            raise DataUnavailable(
                cls.table_name, f"expected a JSON object, got {type(document).__name__}"
            )
        content = document if cls.document_key is None else document.get(cls.document_key)
        try:
            return cls.model_validate(cls._wrap(content or {}))
        except ValidationError as e:
            raise DataUnavailable(
                cls.table_name,
                f"unexpected table format ({e.error_count()} validation errors)",
                cause=e,
            ) from e

    @classmethod
    def _wrap(cls, content: Any) -> Any:
        """Shape the raw content into this model's field layout."""
        return content

    def _read(self, adapter: TypeAdapter, value: Any, path: str) -> Any:
        """
        Validate one sub-structure reached by an accessor.

        Raises:
            DataUnavailable: Naming the path when the value has the wrong shape
        """
        try:
            return adapter.validate_python(value)
        except ValidationError as e:
            raise DataUnavailable(
                self.table_name,
                f"unexpected format at {path} ({e.error_count()} validation errors)",
                cause=e,
            ) from e

    def _child(self, mapping: Any, key: str, path: str) -> Any:
        """mapping[key] after checking that mapping is an object; None when absent."""
        if mapping is None:
            return None
        return self._read(_MAPPING, mapping, path).get(key)


TableT = TypeVar("TableT", bound=Table)


class EncounterTable(Table):
    """environment -> difficulty -> encounter records."""

    table_name: ClassVar[str] = "encounters"
    document_key: ClassVar[str | None] = "encounters"

    environments: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def _wrap(cls, content: Any) -> Any:
        return {"environments": content}

    def encounters(self, environment: str, difficulty: str) -> tuple[dict[str, Any], ...]:
        """Encounter records for one environment/difficulty pair, or EMPTY."""
        records = self._child(self.environments.get(environment), difficulty, environment)
        if records is None:
            return EMPTY
        return tuple(self._read(_RECORDS, records, f"{environment}.{difficulty}"))


class NameTable(Table):
    """race -> gender -> names."""

    table_name: ClassVar[str] = "names"
    document_key: ClassVar[str | None] = "names"

    races: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def _wrap(cls, content: Any) -> Any:
        return {"races": content}

    def names(self, race: str, gender: str) -> tuple[str, ...]:
        names = self._child(self.races.get(race), gender, race)
        if names is None:
            return EMPTY
        return tuple(self._read(_STRINGS, names, f"{race}.{gender}"))


class LocationParts(BaseModel):
    """Name fragments for one location type."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    prefixes: list[str] = Field(default_factory=list)
    suffixes: list[str] = Field(default_factory=list)


_LOCATION_PARTS = TypeAdapter(LocationParts)


class LocationTable(Table):
    """location type -> prefixes and suffixes."""

    table_name: ClassVar[str] = "locations"
    document_key: ClassVar[str | None] = "locations"

    types: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def _wrap(cls, content: Any) -> Any:
        return {"types": content}

    def parts(self, location_type: str) -> LocationParts | None:
        """Fragments for a location type, or None if the type is unknown."""
        raw = self.types.get(location_type)
        if raw is None:
            return None
        return self._read(_LOCATION_PARTS, raw, location_type)


class TraitTable(Table):
    """Five flat trait lists at the document root."""

    table_name: ClassVar[str] = "traits"

    CATEGORIES: ClassVar[tuple[str, ...]] = ("traits", "ideals", "bonds", "flaws", "quirks")

    traits: Any = None
    ideals: Any = None
    bonds: Any = None
    flaws: Any = None
    quirks: Any = None

    def pool(self) -> tuple[str, ...]:
        """All five categories concatenated, in a fixed order."""
        pool: list[str] = []
        for category in self.CATEGORIES:
            values = getattr(self, category)
            if values is not None:
                pool.extend(self._read(_STRINGS, values, category))
        return tuple(pool)


class CoinRoll(BaseModel):
    """How much of one coin kind a treasure bucket yields."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    dice: DiceSpec
    multiplier: int | float = 1

    @field_validator("dice", mode="before")
    @classmethod
    def _parse_dice(cls, value: Any) -> Any:
        if isinstance(value, str):
            return DiceSpec.parse(value)
        return value


class TreasureBucket(BaseModel):
    """
    Coin rolls for one treasure type and CR bucket.

    In the source document the coin kinds sit next to an optional ``items``
    note; the note is dropped here so ``coins`` only ever holds coin kinds.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    coins: dict[str, CoinRoll] = Field(default_factory=dict)

    @classmethod
    def split_source(cls, data: Any) -> Any:
        """Keep only the coin kinds of a raw bucket mapping."""
        if not isinstance(data, dict):
            return data
        return {"coins": {key: value for key, value in data.items() if key != "items"}}


_TREASURE_BUCKET = TypeAdapter(TreasureBucket)


class TreasureTable(Table):
    """treasure type -> CR bucket -> coin rolls, plus shared item pools."""

    table_name: ClassVar[str] = "treasure"
    document_key: ClassVar[str | None] = "treasure"

    MEDIUM_POOL: ClassVar[str] = "magic_medium"
    MAJOR_POOL: ClassVar[str] = "magic_major"

    kinds: dict[str, Any] = Field(default_factory=dict)
    items: Any = None

    @classmethod
    def _wrap(cls, content: Any) -> Any:
        if not isinstance(content, dict):
            return {"kinds": content}
        kinds = {key: value for key, value in content.items() if key != "items"}
        return {"kinds": kinds, "items": content.get("items")}

    def bucket(self, treasure_type: str, bucket: str) -> TreasureBucket | None:
        """Coin rolls for a type/bucket pair, or None if either is missing."""
        raw = self._child(self.kinds.get(treasure_type), bucket, treasure_type)
        if raw is None:
            return None
        return self._read(
            _TREASURE_BUCKET, TreasureBucket.split_source(raw), f"{treasure_type}.{bucket}"
        )

    def item_pool(self, major: bool) -> tuple[Any, ...]:
        """The major or medium magic item pool, or EMPTY when it is absent."""
        name = self.MAJOR_POOL if major else self.MEDIUM_POOL
        pool = self._child(self.items, name, "items")
        if pool is None:
            return EMPTY
        return tuple(self._read(_VALUES, pool, f"items.{name}"))


class WeatherTable(Table):
    """climate -> season (or "any") -> descriptions."""

    table_name: ClassVar[str] = "weather"
    document_key: ClassVar[str | None] = "weather"

    FALLBACK_SEASON: ClassVar[str] = "any"

    climates: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def _wrap(cls, content: Any) -> Any:
        return {"climates": content}

    def descriptions(self, climate: str, season: str | None) -> tuple[Any, ...]:
        """
        Descriptions for the season when it has any, else the climate's "any" list.

        Returns EMPTY when neither exists.
        """
        seasons = self.climates.get(climate)
        if seasons is None:
            return EMPTY
        if season:
            seasonal = self._child(seasons, season, climate)
            if seasonal:
                return tuple(self._read(_VALUES, seasonal, f"{climate}.{season}"))
        fallback = self._child(seasons, self.FALLBACK_SEASON, climate)
        if fallback is None:
            return EMPTY
        return tuple(self._read(_VALUES, fallback, f"{climate}.{self.FALLBACK_SEASON}"))


class PlotHookTable(Table):
    """theme -> hooks."""

    table_name: ClassVar[str] = "plot_hooks"
    document_key: ClassVar[str | None] = "plot_hooks"

    themes: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def _wrap(cls, content: Any) -> Any:
        return {"themes": content}

    def hooks(self, theme: str) -> tuple[Any, ...]:
        hooks = self.themes.get(theme)
        if hooks is None:
            return EMPTY
        return tuple(self._read(_VALUES, hooks, theme))
