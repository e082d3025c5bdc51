"""
Dice notation and challenge-rating helpers used by the treasure generator.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

from gmtools.generators.random_source import RandomSource

DICE_PATTERN = re.compile(r"^\s*(\d+)\s*[dD]\s*(\d+)\s*$")

# Highest threshold first; the first bucket whose threshold cr reaches wins.
CR_BUCKETS: tuple[tuple[int, str], ...] = (
    (17, "cr17+"),
    (11, "cr11-16"),
    (5, "cr5-10"),
)
LOWEST_CR_BUCKET = "cr0-4"


class DiceSpec(BaseModel):
    """A plain ``NdM`` roll: ``count`` dice with ``sides`` faces each."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0, description="Number of dice rolled")
    sides: int = Field(ge=1, description="Faces per die")

    @classmethod
    def parse(cls, notation: str) -> DiceSpec:
        """
        Parse ``"<N>d<M>"`` notation, e.g. ``"2d6"``.

        Raises:
            ValueError: If the notation is not of that form or M is zero
        """
        match = DICE_PATTERN.match(notation)
        if match is None:
            raise ValueError(f"Invalid dice notation: {notation!r} (expected NdM)")
        if int(match.group(2)) == 0:
            raise ValueError(f"Invalid dice notation: {notation!r} (dice need at least one side)")
        return cls(count=int(match.group(1)), sides=int(match.group(2)))

    def roll(self, rng: RandomSource) -> int:
        """Sum ``count`` independent uniform draws over ``[1, sides]``."""
        return sum(rng.randbelow(self.sides) + 1 for _ in range(self.count))

    def __str__(self) -> str:
        return f"{self.count}d{self.sides}"


def cr_bucket(cr: int | float) -> str:
    """Map a challenge rating to the treasure table bucket that covers it."""
    for threshold, bucket in CR_BUCKETS:
        if cr >= threshold:
            return bucket
    return LOWEST_CR_BUCKET
