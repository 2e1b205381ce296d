"""Constant-energy simulation engine."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from ..analysis import BlockAccumulator
from ..config import RunParameters
from ..io.checkpoint import FINAL_NAME, checkpoint_name
from .reporters import Reporter, ReporterGroup

if TYPE_CHECKING:
    from ..analysis import Observable, PropertyEstimator, RunAverages
    from ..integrators import VelocityVerletIntegrator
    from ..io import CheckpointWriter
    from ..system import SimulationState

logger = logging.getLogger(__name__)


class NVEEngine:
    """
    Molecular dynamics run controller for the NVE ensemble.

    Orchestrates a run of ``nblock`` blocks of ``nstep`` steps:
    - initial force evaluation and overlap check
    - state propagation (integrator)
    - observable calculation and block averaging
    - a checkpoint at the end of every block
    - run averages, final overlap check and final checkpoint

    Any OverlapError raised by the integrator ends the run immediately.

    Example usage:
        model = LennardJonesModel()
        engine = NVEEngine(
            state=read_state("cnf.inp"),
            integrator=VelocityVerletIntegrator(0.002, model, cutoff=2.5),
            estimator=PropertyEstimator(model, cutoff=2.5),
            checkpoint_writer=CheckpointWriter("."),
        )
        engine.add_reporter(ConsoleReporter())
        engine.run(RunParameters(nblock=10, nstep=1000))

    Attributes:
        state: Particle state, owned and mutated by the engine.
        integrator: Time integration algorithm.
        estimator: Observable calculator.
        accumulator: Block averaging of observables.
    """

    def __init__(
        self,
        state: SimulationState,
        integrator: VelocityVerletIntegrator,
        estimator: PropertyEstimator,
        accumulator: BlockAccumulator | None = None,
        checkpoint_writer: CheckpointWriter | None = None,
    ) -> None:
        """
        Initialize NVE engine.

        Args:
            state: Initial state; the engine works on this object directly.
            integrator: Time integrator holding the force model and cutoff.
            estimator: Property estimator.
            accumulator: Block accumulator (default: a fresh one).
            checkpoint_writer: Optional writer for block and final checkpoints.
        """
        self.state = state
        self.integrator = integrator
        self.estimator = estimator
        if accumulator is None:
            accumulator = BlockAccumulator()
        self.accumulator = accumulator
        self.checkpoint_writer = checkpoint_writer

        self._reporters = ReporterGroup()
        self._wall_time = 0.0

    def add_reporter(self, reporter: Reporter) -> None:
        """Add a reporter."""
        self._reporters.add(reporter)

    def remove_reporter(self, reporter: Reporter) -> None:
        """Remove a reporter."""
        self._reporters.remove(reporter)

    @property
    def wall_time(self) -> float:
        """Wall-clock seconds spent in :meth:`run`."""
        return self._wall_time

    def _checkpoint(self, filename: str) -> None:
        if self.checkpoint_writer is not None:
            self.checkpoint_writer.save(self.state, filename)

    def calculate(self, phase: str) -> list[Observable]:
        """
        Evaluate forces with an overlap check and return instantaneous values.

        Args:
            phase: "initial" or "final", used in the overlap error.
        """
        total = self.integrator.evaluate(self.state, phase)
        return self.estimator.calculate(self.state, total)

    def run_block(self, nstep: int) -> None:
        """Integrate ``nstep`` steps and accumulate their observables."""
        self.accumulator.begin_block()
        for _ in range(nstep):
            total = self.integrator.step(self.state)
            self.accumulator.add(self.estimator.calculate(self.state, total))

    def run(self, params: RunParameters | None = None) -> RunAverages:
        """
        Run the whole simulation.

        Args:
            params: Run parameters; ``nblock`` and ``nstep`` are used here,
                ``r_cut`` and ``dt`` are expected to match the integrator.

        Returns:
            Run averages and error estimates.

        Raises:
            OverlapError: On overlap in the initial, any intermediate or the
                final configuration.
        """
        if params is None:
            params = RunParameters()

        start_time = time.perf_counter()
        try:
            self._reporters.run_begin(
                params, self.state, self.integrator.force_model.describe()
            )

            initial = self.calculate("initial")
            self._reporters.instantaneous("Initial values", initial)

            self.accumulator.run_begin(initial)
            self._reporters.blocks_begin(self.accumulator.names)

            for blk in range(1, params.nblock + 1):
                self.run_block(params.nstep)
                averages = self.accumulator.end_block()
                self._reporters.block_end(averages)
                self._checkpoint(checkpoint_name(blk, params.nblock))
                logger.debug("Block %d of %d complete", blk, params.nblock)

            run_averages = self.accumulator.end_run()
            self._reporters.run_end(run_averages)

            final = self.calculate("final")
            self._reporters.instantaneous("Final values", final)
            self._checkpoint(FINAL_NAME)
            self._reporters.finalize(self.state)
        finally:
            self._wall_time += time.perf_counter() - start_time

        logger.info(
            "Run of %d blocks x %d steps finished in %.2f s",
            params.nblock,
            params.nstep,
            self._wall_time,
        )
        return run_averages
