#!/usr/bin/env python
"""
Example: the file-driven workflow.

Writes an fcc lattice to ``run/cnf.inp`` and a parameter file, then runs
the simulation component by component, the same way the ``mdnve`` command
does. Block checkpoints (cnf.001, ...) and cnf.out land in ``run/``.

Equivalent command line:
    mdnve run/params.yaml -d run

Usage:
    python examples/run_from_files.py
"""

import sys
from pathlib import Path

from mdnve.analysis import PropertyEstimator
from mdnve.config import load_parameters
from mdnve.engines import ConsoleReporter, NVEEngine
from mdnve.forcefields import LennardJonesModel
from mdnve.integrators import VelocityVerletIntegrator
from mdnve.io import INPUT_NAME, CheckpointWriter, ConfigurationWriter, read_state
from mdnve.logging_config import setup_logging
from mdnve.simulate import lj_state

PARAMS = """\
nml:
  nblock: 5
  nstep: 200
  r_cut: 2.5
  dt: 0.005
"""


def prepare(directory: Path) -> Path:
    """Write a starting configuration and parameter file."""
    directory.mkdir(exist_ok=True)
    state = lj_state(n_cells=4, density=0.75, temperature=1.0)
    ConfigurationWriter(directory / INPUT_NAME).write(
        state.n_particles,
        state.box.length,
        state.physical_positions,
        state.velocities,
    )
    params = directory / "params.yaml"
    params.write_text(PARAMS)
    return params


def main():
    setup_logging()
    directory = Path("run")
    params = load_parameters(prepare(directory))

    model = LennardJonesModel()
    engine = NVEEngine(
        state=read_state(directory / INPUT_NAME),
        integrator=VelocityVerletIntegrator(params.dt, model, params.r_cut),
        estimator=PropertyEstimator(model, params.r_cut),
        checkpoint_writer=CheckpointWriter(directory),
    )
    engine.add_reporter(ConsoleReporter(sys.stdout))
    engine.run(params)

    names = [path.name for path in engine.checkpoint_writer.written]
    print(f"\nCheckpoints: {', '.join(names)}")


if __name__ == "__main__":
    main()
