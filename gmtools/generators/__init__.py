"""
Generator Engine.

Seven randomized generators (encounter, NPC name, location name, personality,
treasure, weather, plot hook), each consuming one reference table:

    TableFetcher.fetch(table)  →  typed table  →  GeneratorEngine.generate_*()
                                                        ↓
                                          result record  |  NotFound
"""

from gmtools.generators.engine import GeneratorEngine
from gmtools.generators.models import GeneratorResult, NotFound
from gmtools.generators.random_source import (
    RandomSource,
    SequenceRandomSource,
    SystemRandomSource,
)

__all__ = [
    "GeneratorEngine",
    "GeneratorResult",
    "NotFound",
    "RandomSource",
    "SequenceRandomSource",
    "SystemRandomSource",
]
