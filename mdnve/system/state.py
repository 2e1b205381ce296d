"""Particle ensemble state for constant-energy dynamics."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .box import Box


@dataclass
class SimulationState:
    """
    Single source of truth for the particle ensemble.

    Positions are stored in box units, wrapped into [-0.5, 0.5). All
    particles have unit mass, so velocities double as momenta.

    Attributes:
        positions: Box-scaled positions, shape (N, 3).
        velocities: Velocities, shape (N, 3).
        forces: Forces from the last force evaluation, shape (N, 3).
        box: Simulation box.
        step: Number of integration steps taken.
    """

    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    forces: NDArray[np.floating]
    box: Box
    step: int = 0

    def __post_init__(self) -> None:
        """Validate and convert arrays."""
        self.positions = np.asarray(self.positions, dtype=np.float64)
        self.velocities = np.asarray(self.velocities, dtype=np.float64)
        self.forces = np.asarray(self.forces, dtype=np.float64)

        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            raise ValueError(
                f"positions must have shape (N, 3), got {self.positions.shape}"
            )
        n = len(self.positions)
        if self.velocities.shape != (n, 3):
            raise ValueError(
                f"velocities shape {self.velocities.shape} incompatible with "
                f"{n} particles"
            )
        if self.forces.shape != (n, 3):
            raise ValueError(
                f"forces shape {self.forces.shape} incompatible with {n} particles"
            )

    @classmethod
    def from_physical(
        cls,
        positions: ArrayLike,
        velocities: ArrayLike,
        box: Box,
        remove_drift: bool = True,
    ) -> SimulationState:
        """
        Build a state from positions in physical units.

        Positions are divided by the box length and wrapped; unless
        ``remove_drift`` is False the centre-of-mass velocity is set to zero.

        Args:
            positions: Physical positions, shape (N, 3).
            velocities: Velocities, shape (N, 3).
            box: Simulation box.
            remove_drift: Zero the total momentum.

        Returns:
            New SimulationState with zero forces.
        """
        scaled = box.to_box_units(positions)
        state = cls(
            positions=scaled,
            velocities=np.array(velocities, dtype=np.float64),
            forces=np.zeros_like(scaled),
            box=box,
        )
        if remove_drift:
            state.remove_com_velocity()
        return state

    @property
    def n_particles(self) -> int:
        """Return number of particles."""
        return len(self.positions)

    @property
    def density(self) -> float:
        """Return number density N / V."""
        return self.box.density(self.n_particles)

    @property
    def physical_positions(self) -> NDArray[np.floating]:
        """Return positions in simulation (physical) units."""
        return self.box.to_physical(self.positions)

    @property
    def kinetic_energy(self) -> float:
        """Compute total kinetic energy: 0.5 * sum(v^2) for unit masses."""
        return 0.5 * float(np.sum(self.velocities**2))

    @property
    def total_momentum(self) -> NDArray[np.floating]:
        """Return total momentum, shape (3,)."""
        return np.sum(self.velocities, axis=0)

    def remove_com_velocity(self) -> None:
        """Subtract the centre-of-mass velocity from every particle."""
        self.velocities -= np.mean(self.velocities, axis=0)

    def copy(self) -> SimulationState:
        """Create a deep copy of this state."""
        return SimulationState(
            positions=self.positions.copy(),
            velocities=self.velocities.copy(),
            forces=self.forces.copy(),
            box=self.box,  # Box is immutable
            step=self.step,
        )
