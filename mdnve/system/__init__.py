"""System state and box management."""

from .box import Box, minimum_image, wrap
from .builder import fcc_positions, random_velocities
from .state import SimulationState

__all__ = [
    "Box",
    "SimulationState",
    "wrap",
    "minimum_image",
    "fcc_positions",
    "random_velocities",
]
