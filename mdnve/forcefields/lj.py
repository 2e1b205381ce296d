"""Lennard-Jones force model, cut and shifted."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from ..system.box import minimum_image
from .base import ForceBundle, ForceModel

if TYPE_CHECKING:
    from ..system import Box


class LennardJonesModel(ForceModel):
    """
    Lennard-Jones 12-6 potential in reduced units.

    V(r) = 4 * [(1/r)^12 - (1/r)^6], sigma = epsilon = 1

    The potential is cut at the cutoff distance and shifted so that it
    vanishes there; the force is not shifted. The unshifted (cut) potential
    is reported as well so that long-range corrections can be applied to it.

    Attributes:
        overlap_sr2: Threshold on (sigma/r)^2 above which a pair overlaps.
    """

    def __init__(self, overlap_sr2: float = 1.77) -> None:
        """
        Initialize Lennard-Jones model.

        Args:
            overlap_sr2: Overlap threshold on (sigma/r)^2; 1.77 is r < ~0.75.
        """
        self.overlap_sr2 = overlap_sr2

    @property
    def name(self) -> str:
        """Model name."""
        return "Lennard-Jones"

    def describe(self) -> list[str]:
        """Introduction lines for the run report."""
        return [
            "Lennard-Jones potential",
            "Cut-and-shifted version for dynamics",
            "Cut (but not shifted) version also calculated",
            "Diameter, sigma = 1",
            "Well depth, epsilon = 1",
        ]

    @staticmethod
    def _pairs_within_cutoff(
        positions: NDArray[np.floating], cutoff: float, box: Box
    ) -> tuple[NDArray[np.integer], NDArray[np.integer], NDArray[np.floating]]:
        """
        Find pairs closer than the cutoff.

        Returns:
            Tuple of (i indices, j indices, physical displacements r_i - r_j).
        """
        n = len(positions)
        i_indices, j_indices = np.triu_indices(n, k=1)

        rij = minimum_image(positions[i_indices] - positions[j_indices])
        rij_sq = np.sum(rij**2, axis=1)

        # Compare in box units before converting
        r_cut_box = cutoff / box.length
        mask = rij_sq < r_cut_box**2

        return i_indices[mask], j_indices[mask], rij[mask] * box.length

    def evaluate(
        self, positions: NDArray[np.floating], cutoff: float, box: Box
    ) -> tuple[NDArray[np.floating], ForceBundle]:
        """
        Compute Lennard-Jones forces and the scalar bundle.

        Args:
            positions: Box-scaled positions, shape (N, 3).
            cutoff: Cutoff distance in units of sigma.
            box: Simulation box.

        Returns:
            Tuple of (forces, ForceBundle).
        """
        positions = np.asarray(positions, dtype=np.float64)
        forces = np.zeros_like(positions)

        i_indices, j_indices, rij = self._pairs_within_cutoff(positions, cutoff, box)
        if len(i_indices) == 0:
            return forces, ForceBundle()

        # Value of the (unscaled) potential at the cutoff, used for shifting
        rc6 = (1.0 / cutoff**2) ** 3
        pot_cut = rc6**2 - rc6

        sr2 = 1.0 / np.sum(rij**2, axis=1)
        overlap = bool(np.any(sr2 > self.overlap_sr2))
        sr6 = sr2**3
        sr12 = sr6**2

        cut = sr12 - sr6
        vir = cut + sr12
        lap = (22.0 * sr12 - 5.0 * sr6) * sr2
        pot = cut - pot_cut

        # Newton's third law
        fij = rij * (vir * sr2)[:, np.newaxis]
        np.add.at(forces, i_indices, fij)
        np.add.at(forces, j_indices, -fij)

        # Numerical factors are applied once, after summation
        bundle = ForceBundle(
            pot=4.0 * float(np.sum(pot)),
            cut=4.0 * float(np.sum(cut)),
            vir=24.0 * float(np.sum(vir)) / 3.0,
            lap=24.0 * 2.0 * float(np.sum(lap)),
            ovr=overlap,
        )
        return 24.0 * forces, bundle

    def potential_lrc(self, density: float, cutoff: float) -> float:
        """Potential energy per particle beyond the cutoff."""
        sr3 = 1.0 / cutoff**3
        return math.pi * ((8.0 / 9.0) * sr3**3 - (8.0 / 3.0) * sr3) * density

    def pressure_lrc(self, density: float, cutoff: float) -> float:
        """Pressure contribution from interactions beyond the cutoff."""
        sr3 = 1.0 / cutoff**3
        return math.pi * ((32.0 / 9.0) * sr3**3 - (16.0 / 3.0) * sr3) * density**2

    def hessian(
        self,
        positions: NDArray[np.floating],
        forces: NDArray[np.floating],
        box: Box,
        cutoff: float,
    ) -> float:
        """
        Total Hessian term, sum over pairs of f_ij . H_ij . f_ij.

        Only meaningful in a constant-energy ensemble, where it supplies the
        1/N correction to the configurational temperature. ``forces`` must be
        the forces already evaluated at ``positions``.
        """
        positions = np.asarray(positions, dtype=np.float64)
        forces = np.asarray(forces, dtype=np.float64)

        i_indices, j_indices, rij = self._pairs_within_cutoff(positions, cutoff, box)
        if len(i_indices) == 0:
            return 0.0

        fij = forces[i_indices] - forces[j_indices]
        sr2 = 1.0 / np.sum(rij**2, axis=1)
        sr6 = sr2**3
        sr8 = sr6 * sr2
        sr10 = sr8 * sr2

        rf = np.sum(rij * fij, axis=1)
        ff = np.sum(fij * fij, axis=1)
        v1 = 24.0 * (1.0 - 2.0 * sr6) * sr8
        v2 = 96.0 * (7.0 * sr6 - 2.0) * sr10

        return float(np.sum(v1 * ff + v2 * rf**2))
