"""Shared fixtures for the test suite."""

import numpy as np
import pytest

from mdnve.forcefields.lj import LennardJonesModel
from mdnve.simulate import lj_state
from mdnve.system.box import Box
from mdnve.system.state import SimulationState


@pytest.fixture
def lj_model():
    """Lennard-Jones model with the default overlap threshold."""
    return LennardJonesModel()


@pytest.fixture
def fcc_state():
    """108-particle fcc state at density 0.75 and temperature 1.0."""
    return lj_state(n_cells=3, density=0.75, temperature=1.0, seed=1)


@pytest.fixture
def pair_state():
    """Factory for two particles on the x axis in a box of length 10."""

    def make(separation, velocity=0.0, box_length=10.0):
        box = Box(box_length)
        positions = np.array(
            [[-0.5 * separation, 0.0, 0.0], [0.5 * separation, 0.0, 0.0]]
        )
        velocities = np.array([[velocity, 0.0, 0.0], [-velocity, 0.0, 0.0]])
        return SimulationState.from_physical(positions, velocities, box)

    return make
