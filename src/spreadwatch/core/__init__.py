"""Core data model and sample storage."""

from spreadwatch.core.store import SampleStore
from spreadwatch.core.types import (
    INSTRUMENTS,
    InstrumentPair,
    Observation,
    SpreadDirection,
    StatSummary,
)


__all__ = [
    "INSTRUMENTS",
    "InstrumentPair",
    "Observation",
    "SampleStore",
    "SpreadDirection",
    "StatSummary",
]
