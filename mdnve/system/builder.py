"""Starting configurations: lattices and velocity assignment."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

# Basis of the face-centred cubic unit cell, in unit-cell units
FCC_BASIS = np.array(
    [
        [0.25, 0.25, 0.25],
        [0.25, 0.75, 0.75],
        [0.75, 0.75, 0.25],
        [0.75, 0.25, 0.75],
    ]
)


def fcc_positions(n_cells: int, box_length: float) -> NDArray[np.floating]:
    """
    Create a face-centred cubic lattice filling a cubic box.

    Args:
        n_cells: Unit cells along each edge; gives 4 * n_cells**3 particles.
        box_length: Box edge length in simulation units.

    Returns:
        Physical positions centred on the origin, shape (4 * n_cells**3, 3).
    """
    if n_cells < 1:
        raise ValueError(f"n_cells must be positive, got {n_cells}")

    cell = box_length / n_cells
    grid = np.array(
        [
            [ix, iy, iz]
            for ix in range(n_cells)
            for iy in range(n_cells)
            for iz in range(n_cells)
        ],
        dtype=np.float64,
    )
    positions = (grid[:, np.newaxis, :] + FCC_BASIS[np.newaxis, :, :]).reshape(-1, 3)
    return (positions - 0.5 * n_cells) * cell


def random_velocities(
    n_particles: int,
    temperature: float,
    rng: np.random.Generator | None = None,
) -> NDArray[np.floating]:
    """
    Draw Gaussian velocities with zero total momentum.

    The velocities are rescaled so that the kinetic temperature, computed
    with 3N - 3 degrees of freedom, equals ``temperature`` exactly.

    Args:
        n_particles: Number of particles (at least 2).
        temperature: Target kinetic temperature in reduced units.
        rng: Random generator (default: fresh ``default_rng()``).

    Returns:
        Velocities, shape (n_particles, 3).
    """
    if n_particles < 2:
        raise ValueError("At least two particles are needed to fix the momentum")
    if rng is None:
        rng = np.random.default_rng()

    velocities = rng.standard_normal((n_particles, 3))
    velocities -= np.mean(velocities, axis=0)

    n_dof = 3 * n_particles - 3
    current = np.sum(velocities**2) / n_dof
    if current > 0:
        velocities *= np.sqrt(temperature / current)
    return velocities
