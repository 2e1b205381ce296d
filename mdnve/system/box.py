"""Cubic periodic box and minimum-image convention."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


def nearest_integer(values: ArrayLike) -> NDArray[np.floating]:
    """
    Round to the nearest integer, halves rounded up.

    Both +0.5 and -0.5 round so that ``x - nearest_integer(x)`` equals -0.5.
    Every periodic operation in the package uses this rounding.
    """
    return np.floor(np.asarray(values, dtype=np.float64) + 0.5)


def wrap(positions: ArrayLike) -> NDArray[np.floating]:
    """
    Wrap box-scaled coordinates into the primary image.

    Args:
        positions: Coordinates in box units, any shape.

    Returns:
        Coordinates with every component in [-0.5, 0.5).
    """
    positions = np.asarray(positions, dtype=np.float64)
    wrapped = positions - nearest_integer(positions)
    # floor(p + 0.5) can round across the boundary for p just below 0.5
    wrapped = np.where(wrapped >= 0.5, wrapped - 1.0, wrapped)
    wrapped = np.where(wrapped < -0.5, wrapped + 1.0, wrapped)
    return wrapped


def minimum_image(displacements: ArrayLike) -> NDArray[np.floating]:
    """
    Apply the minimum-image convention to box-scaled displacements.

    Args:
        displacements: Displacement vectors in box units, shape (..., 3).

    Returns:
        Shortest periodic displacement for each vector.
    """
    displacements = np.asarray(displacements, dtype=np.float64)
    return displacements - nearest_integer(displacements)


@dataclass(frozen=True)
class Box:
    """
    Cubic simulation box.

    Positions held by the simulation are dimensionless (box-scaled); the box
    converts between those and physical coordinates.

    Attributes:
        length: Box edge length in simulation units.
    """

    length: float

    def __post_init__(self) -> None:
        """Validate the edge length."""
        length = float(self.length)
        if not np.isfinite(length) or length <= 0.0:
            raise ValueError(f"Box length must be positive, got {self.length}")
        # Use object.__setattr__ since dataclass is frozen
        object.__setattr__(self, "length", length)

    @property
    def volume(self) -> float:
        """Return box volume."""
        return self.length**3

    def density(self, n_particles: int) -> float:
        """Return number density for ``n_particles`` in this box."""
        return n_particles / self.volume

    def to_box_units(self, positions: ArrayLike) -> NDArray[np.floating]:
        """Convert physical coordinates to box units and wrap them."""
        return wrap(np.asarray(positions, dtype=np.float64) / self.length)

    def to_physical(self, positions: ArrayLike) -> NDArray[np.floating]:
        """Convert box-unit coordinates to physical coordinates."""
        return np.asarray(positions, dtype=np.float64) * self.length

    def wrap(self, positions: ArrayLike) -> NDArray[np.floating]:
        """Wrap box-unit positions into [-0.5, 0.5)."""
        return wrap(positions)

    def minimum_image(
        self, r1: NDArray[np.floating], r2: NDArray[np.floating]
    ) -> NDArray[np.floating]:
        """
        Compute minimum image displacement r1 - r2 in box units.

        Args:
            r1: First position(s), shape (3,) or (N, 3).
            r2: Second position(s), shape (3,) or (N, 3).

        Returns:
            Displacement vector(s) under minimum image convention.
        """
        return minimum_image(np.asarray(r1) - np.asarray(r2))

    def minimum_image_distance(
        self, r1: NDArray[np.floating], r2: NDArray[np.floating]
    ) -> float | NDArray[np.floating]:
        """Minimum image distance between box-unit positions, in physical units."""
        dr = self.minimum_image(r1, r2)
        return np.linalg.norm(dr, axis=-1) * self.length
