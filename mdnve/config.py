"""Run parameters: defaults, validation and loading."""

from __future__ import annotations

import io
import logging
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, TextIO

import yaml

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunParameters:
    """
    Parameters controlling one constant-energy run.

    Attributes:
        nblock: Number of blocks.
        nstep: Number of steps per block.
        r_cut: Potential cutoff distance.
        dt: Integration timestep.
    """

    nblock: int = 10
    nstep: int = 50000
    r_cut: float = 2.5
    dt: float = 0.002

    def __post_init__(self) -> None:
        """Validate types and ranges."""
        for name in ("nblock", "nstep"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        for name in ("r_cut", "dt"):
            value = getattr(self, name)
            # YAML reads exponents without a dot, such as 2e-3, as strings
            if isinstance(value, str):
                try:
                    value = float(value)
                except ValueError:
                    raise ConfigurationError(
                        f"{name} must be a number, got {value!r}"
                    ) from None
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not value > 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
            # Use object.__setattr__ since dataclass is frozen
            object.__setattr__(self, name, float(value))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> RunParameters:
        """
        Build parameters from a mapping, filling in defaults.

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Run parameters must be a mapping, got {type(data).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ConfigurationError(f"Unknown run parameters: {', '.join(unknown)}")

        return cls(**dict(data))

    def as_dict(self) -> dict[str, Any]:
        """Return parameters as a plain dictionary."""
        return asdict(self)


def load_parameters(source: str | Path | TextIO | None = None) -> RunParameters:
    """
    Load run parameters from YAML (or JSON) text.

    An empty document accepts all defaults. Keys may appear at the top level
    or under a single ``nml`` section.

    Args:
        source: A path, an open text stream, a string of YAML, or None for
            defaults.

    Returns:
        Validated RunParameters.

    Raises:
        ConfigurationError: If the input cannot be read, parsed or validated.
    """
    if source is None:
        return RunParameters()

    if isinstance(source, Path):
        try:
            text = source.read_text()
        except OSError as exc:
            raise ConfigurationError(f"Cannot read run parameters: {exc}") from exc
    elif isinstance(source, io.IOBase) or hasattr(source, "read"):
        text = source.read()
    else:
        text = str(source)

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Error reading run parameters: {exc}") from exc

    if isinstance(data, Mapping) and set(data) == {"nml"}:
        data = data["nml"]

    params = RunParameters.from_mapping(data)
    logger.debug("Run parameters: %s", params.as_dict())
    return params
