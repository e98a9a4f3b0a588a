"""Public layout package interface.

Procedural dungeon layouts: recursive partitioning, wall and door synthesis,
connectivity-preserving pruning and rasterisation into placement requests.
"""

from .config import ConfigError, LayoutConfig
from .pipeline import (
    PHASES,
    Checkpoint,
    GenerationAborted,
    LayoutResult,
    generate,
    iter_generation,
    new_seed,
)
from .placement import PlacementRequest, PlacementSink, RecordingSink

__all__ = [
    "ConfigError",
    "LayoutConfig",
    "PHASES",
    "Checkpoint",
    "GenerationAborted",
    "LayoutResult",
    "generate",
    "iter_generation",
    "new_seed",
    "PlacementRequest",
    "PlacementSink",
    "RecordingSink",
]
