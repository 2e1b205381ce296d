"""Base interface for integrators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..forcefields import ForceBundle
    from ..system import SimulationState


class Integrator(ABC):
    """
    Abstract base class for time integration algorithms.

    Integrators advance the particle state in place and return the scalar
    results of the force evaluation made at the new configuration.
    """

    @abstractmethod
    def initialize(self, state: SimulationState) -> ForceBundle:
        """
        Evaluate forces at the starting configuration.

        Must be called once before the first :meth:`step`.

        Args:
            state: Current state; its forces are overwritten.

        Returns:
            ForceBundle at the starting configuration.
        """
        ...

    @abstractmethod
    def step(self, state: SimulationState) -> ForceBundle:
        """
        Advance the system by one time step.

        Args:
            state: Current state, mutated in place.

        Returns:
            ForceBundle at the new configuration.
        """
        ...

    @property
    @abstractmethod
    def timestep(self) -> float:
        """Return the integration timestep."""
        ...
