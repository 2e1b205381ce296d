"""Particle configuration files.

Plain text format, all in simulation units:
    N
    box_length
    x y z vx vy vz      (one line per particle)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from ..exceptions import ConfigurationFileError
from ..system import Box, SimulationState

logger = logging.getLogger(__name__)


class ConfigurationReader:
    """
    Reader for particle configuration files.

    Example:
        reader = ConfigurationReader("cnf.inp")
        n, box = reader.read_header()
        frame = reader.read()
    """

    def __init__(self, filename: str | Path) -> None:
        """
        Initialize configuration reader.

        Args:
            filename: Input file path.
        """
        self.filename = Path(filename)

    def _lines(self) -> list[str]:
        try:
            text = self.filename.read_text()
        except OSError as exc:
            raise ConfigurationFileError(
                f"Cannot read configuration {self.filename}: {exc}"
            ) from exc
        return [line for line in text.splitlines() if line.strip()]

    @staticmethod
    def _parse_header(lines: list[str], filename: Path) -> tuple[int, float]:
        if len(lines) < 2:
            raise ConfigurationFileError(f"Missing header in {filename}")
        try:
            n = int(lines[0].split()[0])
            box = float(lines[1].split()[0])
        except (ValueError, IndexError) as exc:
            raise ConfigurationFileError(f"Malformed header in {filename}") from exc
        # 3N - 3 degrees of freedom need at least two particles
        if n < 2 or not np.isfinite(box) or box <= 0:
            raise ConfigurationFileError(
                f"Invalid header in {filename}: n={n}, box={box}"
            )
        return n, box

    def read_header(self) -> tuple[int, float]:
        """
        Read only the particle count and box length.

        Returns:
            Tuple of (n_particles, box_length).
        """
        return self._parse_header(self._lines(), self.filename)

    def read(self) -> dict[str, Any]:
        """
        Read the whole configuration.

        Returns:
            Dictionary with 'n_particles', 'box', 'positions' and 'velocities'
            (physical units, shape (N, 3) each).

        Raises:
            ConfigurationFileError: If the file is missing or malformed.
        """
        lines = self._lines()
        n, box = self._parse_header(lines, self.filename)

        body = lines[2:]
        if len(body) < n:
            raise ConfigurationFileError(
                f"Expected {n} particle lines in {self.filename}, found {len(body)}"
            )

        data = np.zeros((n, 6))
        for i, line in enumerate(body[:n]):
            parts = line.split()
            if len(parts) < 6:
                raise ConfigurationFileError(
                    f"Particle {i + 1} in {self.filename} needs 6 values"
                )
            try:
                data[i] = [float(x) for x in parts[:6]]
            except ValueError as exc:
                raise ConfigurationFileError(
                    f"Malformed particle {i + 1} in {self.filename}"
                ) from exc

        logger.info("Read %d particles from %s", n, self.filename)
        return {
            "n_particles": n,
            "box": box,
            "positions": data[:, :3],
            "velocities": data[:, 3:],
        }


class ConfigurationWriter:
    """Writer for particle configuration files."""

    def __init__(self, filename: str | Path, precision: int = 10) -> None:
        """
        Initialize configuration writer.

        Args:
            filename: Output file path.
            precision: Decimal places for coordinates and velocities.
        """
        self.filename = Path(filename)
        self.precision = precision

    def write(
        self,
        n: int,
        box: float,
        positions: ArrayLike,
        velocities: ArrayLike,
    ) -> Path:
        """
        Write a configuration, replacing any existing file.

        Args:
            n: Number of particles.
            box: Box length.
            positions: Physical positions, shape (n, 3).
            velocities: Velocities, shape (n, 3).

        Returns:
            Path of the written file.
        """
        positions = np.asarray(positions, dtype=np.float64)
        velocities = np.asarray(velocities, dtype=np.float64)
        if positions.shape != (n, 3) or velocities.shape != (n, 3):
            raise ValueError(
                f"positions {positions.shape} and velocities {velocities.shape} "
                f"must both be ({n}, 3)"
            )

        width = self.precision + 6
        fmt = " ".join([f"{{:{width}.{self.precision}f}}"] * 6) + "\n"
        with self.filename.open("w") as f:
            f.write(f"{n:15d}\n")
            f.write(f"{box:15.8f}\n")
            for r, v in zip(positions, velocities):
                f.write(fmt.format(*r, *v))

        return self.filename


def read_state(filename: str | Path) -> SimulationState:
    """
    Load a configuration file as a simulation state.

    Positions are converted to box units and wrapped; the centre-of-mass
    velocity is set to zero.
    """
    frame = ConfigurationReader(filename).read()
    return SimulationState.from_physical(
        frame["positions"], frame["velocities"], Box(frame["box"])
    )
