"""Walk simulation module: trace types, lattices, oracle, and trace building."""

from walkscale.walk.lattice import LATTICES, Lattice, get_lattice
from walkscale.walk.oracle import (
    LatticeWalkOracle,
    OracleError,
    SimulationOracle,
    simulate_displacements,
)
from walkscale.walk.trace import build_trace, sample_bucket
from walkscale.walk.types import Trace, TraceSample, sample_stderr

__all__ = [
    "LATTICES",
    "Lattice",
    "get_lattice",
    "LatticeWalkOracle",
    "OracleError",
    "SimulationOracle",
    "simulate_displacements",
    "build_trace",
    "sample_bucket",
    "Trace",
    "TraceSample",
    "sample_stderr",
]
