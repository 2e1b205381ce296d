"""Base interface for force models."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..system import Box


@dataclass(frozen=True)
class ForceBundle:
    """
    Scalar results of one force evaluation.

    Attributes:
        pot: Potential energy, cut and shifted.
        cut: Potential energy, cut but not shifted.
        vir: Virial.
        lap: Laplacian of the potential.
        ovr: True if any pair is closer than the overlap threshold.
    """

    pot: float = 0.0
    cut: float = 0.0
    vir: float = 0.0
    lap: float = 0.0
    ovr: bool = False

    def __add__(self, other: ForceBundle) -> ForceBundle:
        """Combine contributions, e.g. from separate sets of pairs."""
        return ForceBundle(
            pot=self.pot + other.pot,
            cut=self.cut + other.cut,
            vir=self.vir + other.vir,
            lap=self.lap + other.lap,
            ovr=self.ovr or other.ovr,
        )


class ForceModel(ABC):
    """
    Abstract base class for pairwise interaction models.

    Positions passed in are in box units; everything returned is in
    simulation units of the model (e.g. sigma = epsilon = 1 for
    Lennard-Jones). Implementations must use the minimum-image convention
    from :mod:`mdnve.system.box`.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Model name for reports."""
        ...

    @abstractmethod
    def evaluate(
        self, positions: NDArray[np.floating], cutoff: float, box: Box
    ) -> tuple[NDArray[np.floating], ForceBundle]:
        """
        Compute forces and the scalar bundle.

        Args:
            positions: Box-scaled positions, shape (N, 3).
            cutoff: Potential cutoff distance in simulation units.
            box: Simulation box.

        Returns:
            Tuple of (forces array of shape (N, 3), ForceBundle).
        """
        ...

    @abstractmethod
    def potential_lrc(self, density: float, cutoff: float) -> float:
        """Long-range correction to the potential energy per particle."""
        ...

    @abstractmethod
    def pressure_lrc(self, density: float, cutoff: float) -> float:
        """Long-range correction to the pressure."""
        ...

    @abstractmethod
    def hessian(
        self,
        positions: NDArray[np.floating],
        forces: NDArray[np.floating],
        box: Box,
        cutoff: float,
    ) -> float:
        """
        Total Hessian term for the 1/N correction to configurational temperature.

        Args:
            positions: Box-scaled positions, shape (N, 3).
            forces: Forces at those positions, shape (N, 3).
            box: Simulation box.
            cutoff: Potential cutoff distance.

        Returns:
            Sum over pairs of f·H·f contributions.
        """
        ...

    def describe(self) -> list[str]:
        """Lines of text introducing the model in run reports."""
        return [self.name]
