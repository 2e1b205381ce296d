#!/usr/bin/env python
"""
Quick start example - the simplest way to run a simulation.

Runs a short constant-energy Lennard-Jones simulation from an fcc lattice
and plots the block averages if matplotlib is installed.

Usage:
    python examples/quickstart.py
"""

from mdnve import plotting, simulate


def main():
    print("=" * 60)
    print("NVE Quick Start")
    print("=" * 60)

    result = simulate.lj_fluid(
        n_cells=3,
        density=0.75,
        temperature=1.0,
        nblock=5,
        nstep=500,
        dt=0.005,
    )

    print("\nSummary:")
    print("-" * 40)
    for name in ("E/N:cut&shifted", "T:kinetic", "T:config"):
        mean, error = result.averages[name], result.errors[name]
        print(f"   {name:<20s} {mean:10.5f} +/- {error:.5f}")

    if plotting.HAS_MATPLOTLIB:
        plotting.block_averages(result, show=False)
        plotting.save("block_averages.png")
        print("\nBlock averages plotted to block_averages.png")


if __name__ == "__main__":
    main()
