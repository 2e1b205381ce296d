"""Exception hierarchy for the NVE engine."""

from __future__ import annotations


class MDError(Exception):
    """Base class for all fatal simulation errors."""


class ConfigurationError(MDError):
    """Run parameters are missing, malformed or out of range."""


class ConfigurationFileError(MDError):
    """A particle configuration file could not be parsed."""


class OverlapError(MDError):
    """
    Two particles are closer than the force model's hard-core threshold.

    Attributes:
        phase: Where the overlap was detected: "initial", "mid-run" or "final".
        step: Integration step at which it happened, when known.
    """

    PHASES = ("initial", "mid-run", "final")

    def __init__(self, phase: str, step: int | None = None) -> None:
        if phase not in self.PHASES:
            raise ValueError(f"Unknown overlap phase {phase!r}")
        self.phase = phase
        self.step = step
        if phase == "initial":
            message = "Overlap in initial configuration"
        elif phase == "final":
            message = "Overlap in final configuration"
        else:
            message = "Overlap in configuration"
            if step is not None:
                message = f"{message} at step {step}"
        super().__init__(message)
