"""Tests for the command-line entry point."""

import io

import numpy as np
import pytest

from mdnve.cli import build_parser, main
from mdnve.io import ConfigurationWriter


@pytest.fixture
def run_dir(tmp_path, fcc_state):
    """Directory holding cnf.inp and a short parameter file."""
    ConfigurationWriter(tmp_path / "cnf.inp").write(
        fcc_state.n_particles,
        fcc_state.box.length,
        fcc_state.physical_positions,
        fcc_state.velocities,
    )
    params = tmp_path / "run.yaml"
    params.write_text("nml:\n  nblock: 2\n  nstep: 3\n  r_cut: 2.5\n  dt: 0.005\n")
    return tmp_path


class TestParser:
    """Test argument parsing."""

    def test_defaults(self):
        """Parameters default to standard input and the current directory."""
        args = build_parser().parse_args([])
        assert args.params is None
        assert args.input is None
        assert str(args.directory) == "."
        assert args.log_level == "WARNING"


class TestMain:
    """Test complete command-line runs."""

    def test_successful_run(self, run_dir, capsys):
        """A run exits 0, reports and writes checkpoints."""
        code = main([str(run_dir / "run.yaml"), "-d", str(run_dir)])

        assert code == 0
        out = capsys.readouterr().out
        assert "Run averages" in out
        assert "Program ends" in out
        for name in ["cnf.001", "cnf.002", "cnf.out"]:
            assert (run_dir / name).exists()

    def test_explicit_input(self, run_dir, tmp_path_factory):
        """--input reads the configuration from elsewhere."""
        out_dir = tmp_path_factory.mktemp("out")
        code = main(
            [
                str(run_dir / "run.yaml"),
                "-i",
                str(run_dir / "cnf.inp"),
                "-d",
                str(out_dir),
            ]
        )
        assert code == 0
        assert (out_dir / "cnf.out").exists()

    def test_parameters_from_stdin(self, run_dir, monkeypatch):
        """Parameters are read from standard input when no file is given."""
        monkeypatch.setattr("sys.stdin", io.StringIO("nblock: 1\nnstep: 2\n"))
        assert main(["-d", str(run_dir)]) == 0
        assert (run_dir / "cnf.001").exists()
        assert not (run_dir / "cnf.002").exists()

    def test_bad_parameters(self, run_dir):
        """Invalid parameters exit 1 before anything is written."""
        params = run_dir / "bad.yaml"
        params.write_text("nblock: 0\n")

        assert main([str(params), "-d", str(run_dir)]) == 1
        assert sorted(p.name for p in run_dir.iterdir()) == [
            "bad.yaml",
            "cnf.inp",
            "run.yaml",
        ]

    def test_missing_configuration(self, tmp_path):
        """A missing cnf.inp exits 1."""
        params = tmp_path / "run.yaml"
        params.write_text("nblock: 1\nnstep: 1\n")
        assert main([str(params), "-d", str(tmp_path)]) == 1

    def test_initial_overlap(self, tmp_path, caplog):
        """Overlapping input exits 1 without checkpoints and logs one error."""
        positions = np.array([[0.0, 0.0, 0.0], [0.5, 0.0, 0.0]])
        ConfigurationWriter(tmp_path / "cnf.inp").write(
            2, 10.0, positions, np.zeros((2, 3))
        )
        params = tmp_path / "run.yaml"
        params.write_text("nblock: 1\nnstep: 1\n")

        assert main([str(params), "-d", str(tmp_path)]) == 1
        assert not (tmp_path / "cnf.001").exists()
        assert not (tmp_path / "cnf.out").exists()

        errors = [r for r in caplog.records if r.levelname == "ERROR"]
        assert len(errors) == 1
        assert "Overlap in initial configuration" in errors[0].getMessage()

    @pytest.mark.parametrize(
        "header",
        ["1\n10.0\n0 0 0 0 0 0\n", "2\nnan\n0 0 0 0 0 0\n1 0 0 0 0 0\n"],
    )
    def test_unusable_configuration(self, tmp_path, header):
        """A single particle or a non-finite box exits 1 without checkpoints."""
        (tmp_path / "cnf.inp").write_text(header)
        params = tmp_path / "run.yaml"
        params.write_text("nblock: 1\nnstep: 1\n")

        assert main([str(params), "-d", str(tmp_path)]) == 1
        assert not (tmp_path / "cnf.001").exists()
        assert not (tmp_path / "cnf.out").exists()

    def test_exponent_timestep(self, run_dir):
        """A JSON parameter file with an exponent timestep runs."""
        params = run_dir / "run.json"
        params.write_text('{"nblock": 1, "nstep": 2, "dt": 5e-3}')
        assert main([str(params), "-d", str(run_dir)]) == 0
        assert (run_dir / "cnf.out").exists()
