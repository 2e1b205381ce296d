"""Integrator implementations."""

from .base import Integrator
from .velocity_verlet import VelocityVerletIntegrator

__all__ = ["Integrator", "VelocityVerletIntegrator"]
