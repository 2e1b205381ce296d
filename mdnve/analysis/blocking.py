"""Block averaging of per-step observables."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .properties import Observable


@dataclass(frozen=True)
class BlockAverages:
    """
    Results of one completed block.

    Attributes:
        block: Block number, counting from 1.
        n_steps: Number of steps accumulated in the block.
        names: Observable names in report order.
        values: Block value per observable: the mean, or for msd-flagged
            observables the mean-squared deviation within the block.
        means: Plain block mean per observable.
    """

    block: int
    n_steps: int
    names: tuple[str, ...]
    values: NDArray[np.floating]
    means: NDArray[np.floating]

    def as_dict(self) -> dict[str, float]:
        """Block values keyed by name."""
        return {name: float(v) for name, v in zip(self.names, self.values)}


@dataclass(frozen=True)
class RunAverages:
    """
    Results of a whole run.

    Attributes:
        n_blocks: Number of blocks averaged.
        names: Observable names in report order.
        averages: Mean of the block values.
        errors: Estimated statistical error of each average.
    """

    n_blocks: int
    names: tuple[str, ...]
    averages: NDArray[np.floating]
    errors: NDArray[np.floating]

    def as_dict(self) -> dict[str, float]:
        """Run averages keyed by name."""
        return {name: float(v) for name, v in zip(self.names, self.averages)}

    def __getitem__(self, name: str) -> float:
        return float(self.averages[self.names.index(name)])


class BlockAccumulator:
    """
    Accumulates observables into block averages and run averages.

    Every block contributes with equal weight to the run averages, so blocks
    should contain equal numbers of steps. The schema (names, order and msd
    flags) is fixed by the first observables added.

    Example:
        accumulator = BlockAccumulator()
        for blk in range(nblock):
            accumulator.begin_block()
            for stp in range(nstep):
                accumulator.add(estimator.calculate(state, total))
            block = accumulator.end_block()
        run = accumulator.end_run()
    """

    def __init__(self) -> None:
        """Initialize an empty accumulator."""
        self.reset()

    def reset(self) -> None:
        """Forget the schema and all run statistics."""
        self._names: tuple[str, ...] | None = None
        self._msd: NDArray[np.bool_] | None = None
        self._blk_sum: NDArray[np.floating] | None = None
        self._blk_sq: NDArray[np.floating] | None = None
        self._blk_nrm = 0
        self._run_sum: NDArray[np.floating] | None = None
        self._run_sq: NDArray[np.floating] | None = None
        self._run_nrm = 0

    @property
    def names(self) -> tuple[str, ...]:
        """Observable names, empty before the first observables arrive."""
        return self._names or ()

    @property
    def n_blocks(self) -> int:
        """Number of completed blocks."""
        return self._run_nrm

    @property
    def n_steps(self) -> int:
        """Number of steps accumulated in the current block."""
        return self._blk_nrm

    def run_begin(self, observables: Sequence[Observable]) -> None:
        """
        Fix the schema from a sample set of observables and zero run sums.

        Args:
            observables: Observables with the names and flags to expect.
        """
        self._names = tuple(obs.name for obs in observables)
        if len(set(self._names)) != len(self._names):
            raise ValueError(f"Duplicate observable names: {self._names}")
        self._msd = np.array([obs.msd for obs in observables], dtype=bool)
        size = len(self._names)
        self._run_sum = np.zeros(size)
        self._run_sq = np.zeros(size)
        self._run_nrm = 0
        self.begin_block()

    def begin_block(self) -> None:
        """Zero the block sums."""
        size = len(self._names) if self._names is not None else 0
        self._blk_sum = np.zeros(size)
        self._blk_sq = np.zeros(size)
        self._blk_nrm = 0

    def add(self, observables: Sequence[Observable]) -> None:
        """
        Fold one step's observables into the block sums.

        Args:
            observables: Observables in the fixed order.

        Raises:
            ValueError: If names or order differ from the schema.
        """
        if self._names is None:
            self.run_begin(observables)

        names = tuple(obs.name for obs in observables)
        if names != self._names:
            raise ValueError(f"Observable schema changed: {names} != {self._names}")

        values = np.array([obs.value for obs in observables], dtype=np.float64)
        self._blk_sum += values
        self._blk_sq += np.where(self._msd, values**2, 0.0)
        self._blk_nrm += 1

    def end_block(self) -> BlockAverages:
        """
        Normalize the block sums and fold the block into the run sums.

        Returns:
            BlockAverages for the finished block.

        Raises:
            RuntimeError: If no steps were added to the block.
        """
        if self._blk_nrm == 0 or self._names is None:
            raise RuntimeError("Cannot end a block with no accumulated steps")

        means = self._blk_sum / self._blk_nrm
        msd = self._blk_sq / self._blk_nrm - means**2
        values = np.where(self._msd, msd, means)

        self._run_sum += values
        self._run_sq += values**2
        self._run_nrm += 1

        result = BlockAverages(
            block=self._run_nrm,
            n_steps=self._blk_nrm,
            names=self._names,
            values=values,
            means=means,
        )
        self.begin_block()
        return result

    def end_run(self) -> RunAverages:
        """
        Average the block values over all completed blocks.

        Returns:
            RunAverages with means and error estimates.

        Raises:
            RuntimeError: If no blocks were completed.
        """
        if self._run_nrm == 0 or self._names is None:
            raise RuntimeError("Cannot end a run with no completed blocks")

        averages = self._run_sum / self._run_nrm
        variance = self._run_sq / self._run_nrm - averages**2
        # Guard against roundoff giving small negative variances
        errors = np.sqrt(np.maximum(variance, 0.0) / self._run_nrm)

        return RunAverages(
            n_blocks=self._run_nrm,
            names=self._names,
            averages=averages,
            errors=errors,
        )
