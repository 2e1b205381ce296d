"""Simulation engine and reporters."""

from .engine import NVEEngine
from .reporters import ConsoleReporter, HistoryReporter, Reporter, ReporterGroup

__all__ = [
    "NVEEngine",
    "Reporter",
    "ReporterGroup",
    "ConsoleReporter",
    "HistoryReporter",
]
