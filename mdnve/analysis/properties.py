"""Thermodynamic observables for the constant-energy ensemble."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from ..forcefields import ForceBundle, ForceModel
    from ..system import SimulationState


@dataclass(frozen=True)
class Observable:
    """
    A named instantaneous value.

    Attributes:
        name: Column heading, e.g. "T:kinetic".
        value: Instantaneous value.
        msd: Whether block accumulation should report the mean-squared
            deviation instead of the mean.
    """

    name: str
    value: float
    msd: bool = False


#: Column headings, in report order
OBSERVABLE_NAMES = (
    "E/N:cut&shifted",
    "P:cut&shifted",
    "E/N:full",
    "P:full",
    "T:kinetic",
    "T:config",
    "PE/sqrt(N):MSD",
    "E:MSD",
)

#: Number of leading observables shown in console tables
DISPLAYED = 6


def kinetic_temperature(kinetic: float, n_particles: int) -> float:
    """
    Kinetic temperature with three degrees of freedom removed.

    The total momentum is fixed at zero, so 3N - 3 degrees of freedom remain.
    """
    return 2.0 * kinetic / (3 * n_particles - 3)


def configurational_temperature(fsq: float, lap: float, hes: float) -> float:
    """
    Configurational temperature with the 1/N Hessian correction.

    T = fsq / (lap - 2 * hes / fsq). No guard is applied: when ``fsq`` is
    zero the result is nan rather than an exception.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        fsq = np.float64(fsq)
        return float(fsq / (lap - (2.0 * hes / fsq)))


class PropertyEstimator:
    """
    Computes the per-step observables from state and force bundle.

    Observables, in order:
    - E/N:cut&shifted: (KE + pot) / N
    - P:cut&shifted: rho * T_kin + vir / V
    - E/N:full: LRC + (KE + cut) / N
    - P:full: LRC + rho * T_kin + vir / V
    - T:kinetic: 2 KE / (3N - 3)
    - T:config: fsq / (lap - 2 hes / fsq)
    - PE/sqrt(N):MSD: pot / sqrt(N), fluctuation tracked (gives Cv)
    - E:MSD: KE + pot, the conserved quantity, fluctuation tracked

    Attributes:
        force_model: Supplies the long-range corrections and the Hessian.
        cutoff: Potential cutoff distance.
    """

    def __init__(self, force_model: ForceModel, cutoff: float) -> None:
        self.force_model = force_model
        self.cutoff = cutoff

    @property
    def names(self) -> tuple[str, ...]:
        """Observable names in report order."""
        return OBSERVABLE_NAMES

    def calculate(
        self, state: SimulationState, total: ForceBundle
    ) -> list[Observable]:
        """
        Calculate all observables for the current configuration.

        Args:
            state: Current state, with forces belonging to its positions.
            total: ForceBundle from the same force evaluation.

        Returns:
            List of Observables in report order.
        """
        n = state.n_particles
        box = state.box
        vol = box.volume
        rho = n / vol
        kin = state.kinetic_energy
        tmp = kinetic_temperature(kin, n)
        fsq = float(np.sum(state.forces**2))
        hes = self.force_model.hessian(state.positions, state.forces, box, self.cutoff)

        potential_lrc = self.force_model.potential_lrc(rho, self.cutoff)
        pressure_lrc = self.force_model.pressure_lrc(rho, self.cutoff)

        return [
            Observable("E/N:cut&shifted", (kin + total.pot) / n),
            Observable("P:cut&shifted", rho * tmp + total.vir / vol),
            Observable("E/N:full", potential_lrc + (kin + total.cut) / n),
            Observable("P:full", pressure_lrc + rho * tmp + total.vir / vol),
            Observable("T:kinetic", tmp),
            Observable("T:config", configurational_temperature(fsq, total.lap, hes)),
            Observable("PE/sqrt(N):MSD", total.pot / math.sqrt(n), msd=True),
            Observable("E:MSD", kin + total.pot, msd=True),
        ]
