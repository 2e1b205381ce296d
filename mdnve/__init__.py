"""
mdnve - Constant-energy (NVE) molecular dynamics.

Velocity Verlet dynamics of unit-mass particles in a cubic periodic box,
with block-averaged energies, pressures and kinetic and configurational
temperatures.

Quick Start:
    >>> from mdnve import simulate
    >>> result = simulate.lj_fluid(n_cells=3, nblock=5, nstep=500)
    >>> print(f"Mean temperature: {result.averages['T:kinetic']:.3f}")
"""

__version__ = "0.1.0"

# High-level APIs
from . import simulate
from .analysis import BlockAccumulator, Observable, PropertyEstimator
from .config import RunParameters, load_parameters
from .engines import NVEEngine
from .exceptions import ConfigurationError, MDError, OverlapError
from .forcefields import ForceBundle, ForceModel, LennardJonesModel
from .integrators import VelocityVerletIntegrator

# Core components for advanced users
from .system import Box, SimulationState

__all__ = [
    "simulate",
    "Box",
    "SimulationState",
    "ForceBundle",
    "ForceModel",
    "LennardJonesModel",
    "VelocityVerletIntegrator",
    "PropertyEstimator",
    "Observable",
    "BlockAccumulator",
    "NVEEngine",
    "RunParameters",
    "load_parameters",
    "MDError",
    "ConfigurationError",
    "OverlapError",
]
