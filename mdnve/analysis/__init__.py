"""Observable estimation and block averaging."""

from .blocking import BlockAccumulator, BlockAverages, RunAverages
from .properties import (
    DISPLAYED,
    OBSERVABLE_NAMES,
    Observable,
    PropertyEstimator,
    configurational_temperature,
    kinetic_temperature,
)

__all__ = [
    "Observable",
    "PropertyEstimator",
    "OBSERVABLE_NAMES",
    "DISPLAYED",
    "kinetic_temperature",
    "configurational_temperature",
    "BlockAccumulator",
    "BlockAverages",
    "RunAverages",
]
