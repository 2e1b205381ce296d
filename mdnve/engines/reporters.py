"""Reporter implementations for run output."""

from __future__ import annotations

import sys
import time
from abc import ABC
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, TextIO

import numpy as np

from ..analysis.properties import DISPLAYED

if TYPE_CHECKING:
    from ..analysis import BlockAverages, Observable, RunAverages
    from ..config import RunParameters
    from ..system import SimulationState


class Reporter(ABC):
    """
    Base class for run reporters.

    The engine calls these hooks at fixed points of a run; every hook is a
    no-op by default so subclasses override only what they need.
    """

    def run_begin(
        self,
        params: RunParameters,
        state: SimulationState,
        model_description: Sequence[str] = (),
    ) -> None:
        """Called once after the initial configuration is loaded."""
        pass

    def instantaneous(self, label: str, observables: Sequence[Observable]) -> None:
        """Called with instantaneous values ("Initial values", "Final values")."""
        pass

    def blocks_begin(self, names: Sequence[str]) -> None:
        """Called before the first block, with the observable names."""
        pass

    def block_end(self, averages: BlockAverages) -> None:
        """Called after every block."""
        pass

    def run_end(self, averages: RunAverages) -> None:
        """Called after the last block."""
        pass

    def finalize(self, state: SimulationState) -> None:
        """Called at the very end of a run."""
        pass


class ReporterGroup:
    """Collection of reporters called in order."""

    def __init__(self, reporters: list[Reporter] | None = None) -> None:
        """
        Initialize reporter group.

        Args:
            reporters: List of reporters to manage.
        """
        self._reporters: list[Reporter] = reporters if reporters else []

    def add(self, reporter: Reporter) -> None:
        """Add a reporter to the group."""
        self._reporters.append(reporter)

    def remove(self, reporter: Reporter) -> None:
        """Remove a reporter from the group."""
        self._reporters.remove(reporter)

    def run_begin(
        self,
        params: RunParameters,
        state: SimulationState,
        model_description: Sequence[str] = (),
    ) -> None:
        for reporter in self._reporters:
            reporter.run_begin(params, state, model_description)

    def instantaneous(self, label: str, observables: Sequence[Observable]) -> None:
        for reporter in self._reporters:
            reporter.instantaneous(label, observables)

    def blocks_begin(self, names: Sequence[str]) -> None:
        for reporter in self._reporters:
            reporter.blocks_begin(names)

    def block_end(self, averages: BlockAverages) -> None:
        for reporter in self._reporters:
            reporter.block_end(averages)

    def run_end(self, averages: RunAverages) -> None:
        for reporter in self._reporters:
            reporter.run_end(averages)

    def finalize(self, state: SimulationState) -> None:
        for reporter in self._reporters:
            reporter.finalize(state)


class ConsoleReporter(Reporter):
    """
    Human-readable run report.

    Writes a banner, the run parameters, a table of block averages, run
    averages with errors and the initial/final instantaneous values. Only
    the first ``displayed`` observables appear in tables; the remaining
    fluctuation observables are still accumulated.
    """

    def __init__(
        self,
        file: TextIO | None = None,
        displayed: int = DISPLAYED,
        width: int = 15,
    ) -> None:
        """
        Initialize console reporter.

        Args:
            file: Output stream (defaults to stdout).
            displayed: Number of leading observables shown in tables.
            width: Column width.
        """
        self._file = file if file is not None else sys.stdout
        self._displayed = displayed
        self._width = width
        self._cpu_start = time.process_time()

    def _write(self, line: str = "") -> None:
        self._file.write(line + "\n")

    def _field(self, label: str, value: int | float) -> None:
        if isinstance(value, (int, np.integer)):
            self._write(f"{label:<39s}{value:{self._width}d}")
        else:
            self._write(f"{label:<39s}{value:{self._width}.5f}")

    def _row(self, label: str, values: Sequence[float]) -> None:
        cells = "".join(f"{v:{self._width}.6f}" for v in values[: self._displayed])
        self._write(f"{label:>{self._width}s}{cells}")

    def time_stamp(self) -> None:
        """Write the wall-clock date and CPU time used so far."""
        now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        cpu = time.process_time() - self._cpu_start
        self._write(f"{'Date:':<10s}{now}")
        self._write(f"{'CPU time:':<10s}{cpu:.3f} s")

    def run_begin(
        self,
        params: RunParameters,
        state: SimulationState,
        model_description: Sequence[str] = (),
    ) -> None:
        self._write("md_nve")
        self._write("Molecular dynamics, constant-NVE ensemble")
        self._write("Particle mass=1 throughout")
        for line in model_description:
            self._write(line)
        self.time_stamp()
        self._field("Number of blocks", params.nblock)
        self._field("Number of steps per block", params.nstep)
        self._field("Potential cutoff distance", params.r_cut)
        self._field("Time step", params.dt)
        self._field("Number of particles", state.n_particles)
        self._field("Simulation box length", state.box.length)
        self._field("Density", state.density)
        self._file.flush()

    def instantaneous(self, label: str, observables: Sequence[Observable]) -> None:
        self._write(label)
        for obs in observables[: self._displayed]:
            self._field(obs.name, obs.value)
        self._file.flush()

    def blocks_begin(self, names: Sequence[str]) -> None:
        line = "=" * (self._width * (min(self._displayed, len(names)) + 1))
        width = self._width
        headings = "".join(f"{name:>{width}s}" for name in names[: self._displayed])
        self._write(line)
        self._write(f"{'Block':>{self._width}s}{headings}")
        self._write(line)

    def block_end(self, averages: BlockAverages) -> None:
        self._row(str(averages.block), averages.values)
        self._file.flush()

    def run_end(self, averages: RunAverages) -> None:
        line = "=" * (self._width * (min(self._displayed, len(averages.names)) + 1))
        self._write(line)
        self._row("Run averages", averages.averages)
        self._row("Run errors", averages.errors)
        self._write(line)
        self._file.flush()

    def finalize(self, state: SimulationState) -> None:
        self.time_stamp()
        self._write("Program ends")
        self._file.flush()


class HistoryReporter(Reporter):
    """
    Reporter that keeps block values in memory.

    Used for plotting and for checking drift of the conserved energy.
    """

    def __init__(self) -> None:
        """Initialize an empty history."""
        self.clear()

    def blocks_begin(self, names: Sequence[str]) -> None:
        self._names = tuple(names)

    def instantaneous(self, label: str, observables: Sequence[Observable]) -> None:
        self.snapshots[label] = {obs.name: obs.value for obs in observables}

    def block_end(self, averages: BlockAverages) -> None:
        if not self._names:
            self._names = averages.names
        self._blocks.append(averages.values.copy())

    def run_end(self, averages: RunAverages) -> None:
        self.run = averages

    @property
    def names(self) -> tuple[str, ...]:
        """Observable names."""
        return self._names

    @property
    def n_blocks(self) -> int:
        """Return number of stored blocks."""
        return len(self._blocks)

    @property
    def values(self) -> np.ndarray:
        """Return block values as (n_blocks, n_observables) array."""
        return np.array(self._blocks)

    def series(self, name: str) -> np.ndarray:
        """Return the block values of one observable."""
        if not self._blocks:
            return np.array([])
        return self.values[:, self._names.index(name)]

    def clear(self) -> None:
        """Clear stored data."""
        self._names: tuple[str, ...] = ()
        self._blocks: list[np.ndarray] = []
        self.snapshots: dict[str, dict[str, float]] = {}
        self.run: RunAverages | None = None
