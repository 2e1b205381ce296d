"""Velocity Verlet integrator implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import OverlapError
from ..system.box import wrap
from .base import Integrator

if TYPE_CHECKING:
    from ..forcefields import ForceBundle, ForceModel
    from ..system import SimulationState


class VelocityVerletIntegrator(Integrator):
    """
    Velocity Verlet integrator (kick-drift-kick formulation).

    Algorithm, unit masses, positions in box units:
        v(t + dt/2) = v(t) + 0.5 * dt * f(t)             # First kick
        r(t + dt) = wrap(r(t) + dt * v(t + dt/2) / L)    # Drift
        f(t + dt) = force(r(t + dt))                     # Force evaluation
        v(t + dt) = v(t + dt/2) + 0.5 * dt * f(t + dt)   # Second kick

    Properties:
    - Symplectic and time-reversible
    - Second-order accurate in positions and velocities
    - Conserves total momentum for pairwise antisymmetric forces

    One force evaluation per step: the forces stored on the state are always
    those of the current configuration, so the overlap check sits directly
    after the evaluation.

    Attributes:
        force_model: Pairwise interaction model.
        cutoff: Potential cutoff distance.
    """

    def __init__(self, dt: float, force_model: ForceModel, cutoff: float) -> None:
        """
        Initialize Velocity Verlet integrator.

        Args:
            dt: Integration timestep.
            force_model: Model providing forces and scalar bundle.
            cutoff: Potential cutoff distance.
        """
        if dt <= 0:
            raise ValueError(f"Timestep must be positive, got {dt}")
        self._dt = dt
        self.force_model = force_model
        self.cutoff = cutoff

    @property
    def timestep(self) -> float:
        """Return the integration timestep."""
        return self._dt

    def evaluate(self, state: SimulationState, phase: str) -> ForceBundle:
        """
        Evaluate forces at the current configuration and check for overlap.

        Args:
            state: Current state; forces are stored on it.
            phase: Reported in the OverlapError: "initial", "mid-run" or "final".

        Returns:
            ForceBundle at the current configuration.

        Raises:
            OverlapError: If the force model flags an overlap.
        """
        forces, total = self.force_model.evaluate(
            state.positions, self.cutoff, state.box
        )
        state.forces = forces
        if total.ovr:
            step = state.step if phase == "mid-run" else None
            raise OverlapError(phase, step=step)
        return total

    def initialize(self, state: SimulationState) -> ForceBundle:
        """Evaluate and check forces at the starting configuration."""
        return self.evaluate(state, "initial")

    def step(self, state: SimulationState) -> ForceBundle:
        """
        Perform one velocity Verlet step in place.

        Args:
            state: State whose forces belong to its current positions.

        Returns:
            ForceBundle at the new configuration.

        Raises:
            OverlapError: If the new configuration contains an overlap.
        """
        dt = self._dt

        # Kick half-step
        state.velocities += 0.5 * dt * state.forces

        # Drift step, positions in box = 1 units
        state.positions = wrap(
            state.positions + dt * state.velocities / state.box.length
        )
        state.step += 1

        total = self.evaluate(state, "mid-run")

        # Kick half-step
        state.velocities += 0.5 * dt * state.forces

        return total
