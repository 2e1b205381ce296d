"""Configuration checkpoints written during and after a run."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .config import ConfigurationWriter

if TYPE_CHECKING:
    from ..system import SimulationState

logger = logging.getLogger(__name__)

PREFIX = "cnf."
INPUT_NAME = PREFIX + "inp"
FINAL_NAME = PREFIX + "out"
SAVE_NAME = PREFIX + "sav"

# Above this many blocks, every block overwrites the same checkpoint
NUMBERED_BLOCK_LIMIT = 1000


def checkpoint_name(block: int, nblock: int) -> str:
    """
    Name of the checkpoint written at the end of a block.

    Args:
        block: Block number, counting from 1.
        nblock: Total number of blocks in the run.

    Returns:
        "cnf.NNN" when nblock < 1000, otherwise "cnf.sav".
    """
    if nblock < NUMBERED_BLOCK_LIMIT:
        return f"{PREFIX}{block:03d}"
    return SAVE_NAME


class CheckpointWriter:
    """
    Writes the particle state as configuration files.

    Positions are rescaled from box units back to simulation units.

    Example:
        writer = CheckpointWriter("run/")
        writer.save(state, checkpoint_name(blk, nblock))
        writer.save(state, FINAL_NAME)
    """

    def __init__(self, directory: str | Path = ".", precision: int = 10) -> None:
        """
        Initialize checkpoint writer.

        Args:
            directory: Directory for checkpoint files, created if needed.
            precision: Decimal places written.
        """
        self.directory = Path(directory)
        self.precision = precision
        self.written: list[Path] = []

        self.directory.mkdir(parents=True, exist_ok=True)

    def save(self, state: SimulationState, filename: str) -> Path:
        """
        Write the current state to ``filename`` inside the directory.

        Returns:
            Path to the written file.
        """
        writer = ConfigurationWriter(self.directory / filename, self.precision)
        path = writer.write(
            state.n_particles,
            state.box.length,
            state.physical_positions,
            state.velocities,
        )
        self.written.append(path)
        logger.debug("Checkpoint written to %s", path)
        return path
