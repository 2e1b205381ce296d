"""
Simple high-level simulation API.

Runs a complete constant-energy Lennard-Jones simulation from an fcc
lattice without any input files.

Example:
    >>> from mdnve import simulate
    >>> result = simulate.lj_fluid(n_cells=3, nblock=5, nstep=200)
    >>> print(result.averages["T:kinetic"])
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from .analysis import PropertyEstimator, RunAverages
from .config import RunParameters
from .engines import ConsoleReporter, HistoryReporter, NVEEngine
from .forcefields import LennardJonesModel
from .integrators import VelocityVerletIntegrator
from .io import CheckpointWriter
from .system import Box, SimulationState, fcc_positions, random_velocities


@dataclass
class SimulationResult:
    """Results from a simulation run."""

    params: RunParameters
    averages: dict[str, float]
    errors: dict[str, float]

    # Block values, shape (nblock, n_observables)
    names: tuple[str, ...] = ()
    block_values: NDArray[np.floating] = field(default_factory=lambda: np.array([]))

    initial: dict[str, float] = field(default_factory=dict)
    final: dict[str, float] = field(default_factory=dict)
    final_state: SimulationState | None = None

    def series(self, name: str) -> NDArray[np.floating]:
        """Block values of one observable."""
        return self.block_values[:, self.names.index(name)]


def lj_state(
    n_cells: int = 3,
    density: float = 0.75,
    temperature: float = 1.0,
    seed: int | None = 42,
) -> SimulationState:
    """
    Build an fcc Lennard-Jones state with random velocities.

    Args:
        n_cells: fcc unit cells per edge (4 * n_cells**3 particles).
        density: Number density in reduced units.
        temperature: Initial kinetic temperature.
        seed: Random seed for the velocities.

    Returns:
        New SimulationState with zero total momentum.
    """
    n = 4 * n_cells**3
    box = Box((n / density) ** (1.0 / 3.0))
    rng = np.random.default_rng(seed)
    return SimulationState.from_physical(
        fcc_positions(n_cells, box.length),
        random_velocities(n, temperature, rng),
        box,
    )


def lj_fluid(
    n_cells: int = 3,
    density: float = 0.75,
    temperature: float = 1.0,
    nblock: int = 10,
    nstep: int = 1000,
    r_cut: float = 2.5,
    dt: float = 0.005,
    seed: int | None = 42,
    directory: str | Path | None = None,
    verbose: bool = True,
) -> SimulationResult:
    """
    Run a constant-energy Lennard-Jones simulation from an fcc lattice.

    Args:
        n_cells: fcc unit cells per edge.
        density: Number density in reduced units.
        temperature: Initial kinetic temperature.
        nblock: Number of blocks.
        nstep: Steps per block.
        r_cut: Potential cutoff; must not exceed half the box length.
        dt: Timestep.
        seed: Random seed for the velocities.
        directory: If given, checkpoints are written there.
        verbose: Print the run report to stdout.

    Returns:
        SimulationResult with run averages and block history.
    """
    params = RunParameters(nblock=nblock, nstep=nstep, r_cut=r_cut, dt=dt)
    state = lj_state(n_cells, density, temperature, seed)
    if r_cut > 0.5 * state.box.length:
        raise ValueError(
            f"Cutoff {r_cut} exceeds half the box length {state.box.length:.4f}"
        )

    model = LennardJonesModel()
    engine = NVEEngine(
        state=state,
        integrator=VelocityVerletIntegrator(dt, model, r_cut),
        estimator=PropertyEstimator(model, r_cut),
        checkpoint_writer=CheckpointWriter(directory) if directory else None,
    )
    history = HistoryReporter()
    engine.add_reporter(history)
    if verbose:
        engine.add_reporter(ConsoleReporter(sys.stdout))

    run: RunAverages = engine.run(params)

    return SimulationResult(
        params=params,
        averages=run.as_dict(),
        errors={name: float(e) for name, e in zip(run.names, run.errors)},
        names=history.names,
        block_values=history.values,
        initial=history.snapshots.get("Initial values", {}),
        final=history.snapshots.get("Final values", {}),
        final_state=engine.state,
    )
