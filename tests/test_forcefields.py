"""Tests for force models."""

import math

import numpy as np
import pytest

from mdnve.forcefields.base import ForceBundle
from mdnve.forcefields.lj import LennardJonesModel
from mdnve.system.box import Box


def lj_pair(r, r_cut=2.5):
    """Reference values for one Lennard-Jones pair at distance r."""
    cut = 4.0 * (r**-12 - r**-6)
    shift = 4.0 * (r_cut**-12 - r_cut**-6)
    w = 24.0 * (2.0 * r**-12 - r**-6)  # r * (-dV/dr)
    lap = 2.0 * 24.0 * (22.0 * r**-14 - 5.0 * r**-8)
    return {"pot": cut - shift, "cut": cut, "vir": w / 3.0, "lap": lap, "f": w / r}


class TestForceBundle:
    """Test the scalar bundle."""

    def test_defaults(self):
        """An empty bundle is all zeros without overlap."""
        bundle = ForceBundle()
        assert bundle.pot == 0.0
        assert not bundle.ovr

    def test_addition(self):
        """Bundles add component-wise and overlap flags combine."""
        a = ForceBundle(pot=1.0, cut=2.0, vir=3.0, lap=4.0, ovr=False)
        b = ForceBundle(pot=0.5, cut=0.5, vir=0.5, lap=0.5, ovr=True)
        total = a + b
        assert total == ForceBundle(pot=1.5, cut=2.5, vir=3.5, lap=4.5, ovr=True)


class TestLennardJonesPair:
    """Test Lennard-Jones values for a single pair."""

    @pytest.mark.parametrize("r", [0.95, 1.12, 1.5, 2.2])
    def test_pair_values(self, lj_model, r):
        """Bundle and forces match hand-computed pair values."""
        box = Box(10.0)
        positions = np.array([[0.0, 0.0, 0.0], [r / 10.0, 0.0, 0.0]])

        forces, bundle = lj_model.evaluate(positions, 2.5, box)
        ref = lj_pair(r)

        assert bundle.pot == pytest.approx(ref["pot"])
        assert bundle.cut == pytest.approx(ref["cut"])
        assert bundle.vir == pytest.approx(ref["vir"])
        assert bundle.lap == pytest.approx(ref["lap"])
        assert not bundle.ovr
        # Particle 0 sits at lower x: a repulsive force pushes it towards -x
        assert forces[0, 0] == pytest.approx(-ref["f"])
        assert np.allclose(forces[0], -forces[1])
        assert np.allclose(forces[:, 1:], 0.0)

    def test_shifted_potential_vanishes_at_cutoff(self, lj_model):
        """Just inside the cutoff the shifted potential is close to zero."""
        box = Box(10.0)
        positions = np.array([[0.0, 0.0, 0.0], [0.2499999, 0.0, 0.0]])
        _, bundle = lj_model.evaluate(positions, 2.5, box)
        assert abs(bundle.pot) < 1e-6
        assert bundle.cut == pytest.approx(4.0 * (2.5**-12 - 2.5**-6), rel=1e-5)

    def test_beyond_cutoff(self, lj_model):
        """Pairs beyond the cutoff do not interact."""
        box = Box(10.0)
        positions = np.array([[0.0, 0.0, 0.0], [0.3, 0.0, 0.0]])
        forces, bundle = lj_model.evaluate(positions, 2.5, box)
        assert np.all(forces == 0.0)
        assert bundle == ForceBundle()

    def test_minimum_image_pair(self, lj_model):
        """Particles either side of the boundary interact across it."""
        box = Box(10.0)
        positions = np.array([[-0.45, 0.0, 0.0], [0.45, 0.0, 0.0]])
        _, bundle = lj_model.evaluate(positions, 2.5, box)
        assert bundle.cut == pytest.approx(0.0)  # r = 1 exactly
        assert bundle.vir == pytest.approx(8.0)

    def test_overlap_flag(self, lj_model):
        """Pairs closer than the threshold set the overlap flag."""
        box = Box(10.0)
        positions = np.array([[0.0, 0.0, 0.0], [0.05, 0.0, 0.0]])
        _, bundle = lj_model.evaluate(positions, 2.5, box)
        assert bundle.ovr

    def test_overlap_threshold_configurable(self):
        """A stricter threshold flags pairs the default accepts."""
        box = Box(10.0)
        positions = np.array([[0.0, 0.0, 0.0], [0.09, 0.0, 0.0]])
        assert not LennardJonesModel().evaluate(positions, 2.5, box)[1].ovr
        assert LennardJonesModel(overlap_sr2=1.1).evaluate(positions, 2.5, box)[1].ovr


class TestLennardJonesSystem:
    """Test many-particle properties."""

    def test_forces_sum_to_zero(self, lj_model, fcc_state):
        """Pair forces are antisymmetric, so the total force vanishes."""
        rng = np.random.default_rng(5)
        positions = fcc_state.positions + rng.normal(scale=0.01, size=(108, 3))
        forces, _ = lj_model.evaluate(positions, 2.5, fcc_state.box)
        assert np.allclose(np.sum(forces, axis=0), 0.0, atol=1e-9)

    def test_forces_are_negative_gradient(self, lj_model, fcc_state):
        """Forces agree with a central finite difference of the potential."""
        rng = np.random.default_rng(11)
        box = fcc_state.box
        positions = fcc_state.positions + rng.normal(scale=0.01, size=(108, 3))
        forces, _ = lj_model.evaluate(positions, 2.5, box)

        h = 1e-6
        for i, k in [(0, 0), (17, 1), (63, 2)]:
            plus = positions.copy()
            minus = positions.copy()
            plus[i, k] += h / box.length
            minus[i, k] -= h / box.length
            e_plus = lj_model.evaluate(plus, 2.5, box)[1].pot
            e_minus = lj_model.evaluate(minus, 2.5, box)[1].pot
            numerical = -(e_plus - e_minus) / (2.0 * h)
            assert numerical == pytest.approx(forces[i, k], rel=1e-4, abs=1e-4)

    def test_hessian_is_second_derivative_along_force(self, lj_model, fcc_state):
        """hessian() equals f.H.f from a finite difference along the forces."""
        rng = np.random.default_rng(13)
        box = fcc_state.box
        positions = fcc_state.positions + rng.normal(scale=0.02, size=(108, 3))
        forces, bundle = lj_model.evaluate(positions, 2.5, box)
        hes = lj_model.hessian(positions, forces, box, 2.5)

        norm = np.linalg.norm(forces)
        direction = forces / norm
        s = 1e-4
        e_plus = lj_model.evaluate(positions + s * direction / box.length, 2.5, box)[1]
        e_minus = lj_model.evaluate(positions - s * direction / box.length, 2.5, box)[1]
        curvature = (e_plus.pot - 2.0 * bundle.pot + e_minus.pot) / s**2

        assert hes == pytest.approx(curvature * norm**2, rel=1e-3)

    def test_hessian_pair(self, lj_model):
        """Two-particle Hessian matches the closed form."""
        box = Box(10.0)
        r = 1.2
        positions = np.array([[0.0, 0.0, 0.0], [r / 10.0, 0.0, 0.0]])
        forces, _ = lj_model.evaluate(positions, 2.5, box)
        hes = lj_model.hessian(positions, forces, box, 2.5)

        # Along the pair axis only the second derivative V''(r) contributes
        fij = forces[0, 0] - forces[1, 0]
        v2 = 4.0 * (156.0 * r**-14 - 42.0 * r**-8)
        assert hes == pytest.approx(v2 * fij**2)

    def test_empty_hessian(self, lj_model):
        """No pairs inside the cutoff gives a zero Hessian."""
        positions = np.array([[0.0, 0.0, 0.0], [0.4, 0.0, 0.0]])
        assert lj_model.hessian(positions, np.zeros((2, 3)), Box(10.0), 2.5) == 0.0


class TestLongRangeCorrections:
    """Test analytic tail corrections."""

    def test_potential_lrc(self, lj_model):
        """Potential LRC at rho = 1, r_cut = 2.5."""
        expected = math.pi * ((8.0 / 9.0) * 2.5**-9 - (8.0 / 3.0) * 2.5**-3)
        assert lj_model.potential_lrc(1.0, 2.5) == pytest.approx(expected)
        assert lj_model.potential_lrc(1.0, 2.5) == pytest.approx(-0.5354, rel=1e-3)

    def test_lrc_density_scaling(self, lj_model):
        """Energy LRC is linear and pressure LRC quadratic in density."""
        assert lj_model.potential_lrc(0.5, 2.5) == pytest.approx(
            0.5 * lj_model.potential_lrc(1.0, 2.5)
        )
        assert lj_model.pressure_lrc(0.5, 2.5) == pytest.approx(
            0.25 * lj_model.pressure_lrc(1.0, 2.5)
        )
        assert lj_model.pressure_lrc(0.8, 2.5) < 0.0

    def test_describe(self, lj_model):
        """Model introduction lines mention the potential."""
        assert lj_model.describe()[0] == "Lennard-Jones potential"
        assert lj_model.name == "Lennard-Jones"
