"""Tests for lattice geometry and the bundled walk oracle.

Covers lattice step vectors, displacement shapes, reproducibility,
no-immediate-return constraints, bucketed sampling, and argument errors.
"""

import numpy as np
import pytest

from walkscale.config import GridType, WalkType
from walkscale.walk import (
    LATTICES,
    LatticeWalkOracle,
    OracleError,
    get_lattice,
    simulate_displacements,
)


class TestLattices:
    """Step vectors are unit length and reversal offsets undo a step."""

    @pytest.mark.parametrize("grid_type", list(GridType))
    def test_unit_vectors(self, grid_type):
        lattice = get_lattice(grid_type)
        norms = np.linalg.norm(lattice.vectors, axis=1)
        np.testing.assert_allclose(norms, 1.0)

    def test_coordination(self):
        assert LATTICES[GridType.SQUARE].coordination == 4
        assert LATTICES[GridType.TRIANGULAR].coordination == 6
        assert LATTICES[GridType.HEXAGONAL].coordination == 3

    @pytest.mark.parametrize("grid_type", [GridType.SQUARE, GridType.TRIANGULAR])
    def test_reverse_offset_cancels(self, grid_type):
        lattice = get_lattice(grid_type)
        z = lattice.coordination
        for h in range(z):
            back = (h + lattice.reverse_offset) % z
            np.testing.assert_allclose(
                lattice.vectors[h] + lattice.vectors[back], 0.0, atol=1e-12
            )

    def test_hexagonal_bonds(self):
        lattice = get_lattice(GridType.HEXAGONAL)
        assert lattice.alternating
        assert lattice.reverse_offset == 0
        # The three A-site bonds sum to zero
        np.testing.assert_allclose(lattice.vectors.sum(axis=0), 0.0, atol=1e-12)

    def test_hexagonal_two_step_distances(self):
        """Two honeycomb steps end at the origin or a next-nearest site."""
        rng = np.random.default_rng(5)
        d = simulate_displacements(
            get_lattice(GridType.HEXAGONAL), WalkType.SIMPLE, 2000, 2, 2, rng
        )
        on_origin = np.isclose(d, 0.0, atol=1e-9)
        on_second_shell = np.isclose(d, np.sqrt(3.0))
        assert np.all(on_origin | on_second_shell)
        assert on_origin.any()

    def test_no_return_turns_exclude_reverse(self):
        square = get_lattice(GridType.SQUARE)
        assert list(square.no_return_turns) == [0, 1, 3]
        hexagonal = get_lattice(GridType.HEXAGONAL)
        assert list(hexagonal.no_return_turns) == [1, 2]


class TestSimulateDisplacements:
    """Vectorized walk simulation."""

    def test_shape_and_non_negative(self):
        rng = np.random.default_rng(0)
        d = simulate_displacements(
            get_lattice(GridType.SQUARE), WalkType.SIMPLE, 200, 30, 8, rng
        )
        assert d.shape == (200,)
        assert d.dtype == np.float64
        assert np.all(d >= 0)

    def test_single_step_has_unit_length(self):
        for grid_type in GridType:
            rng = np.random.default_rng(1)
            d = simulate_displacements(
                get_lattice(grid_type), WalkType.SIMPLE, 50, 1, 4, rng
            )
            np.testing.assert_allclose(d, 1.0)

    def test_simple_square_two_steps_can_return(self):
        rng = np.random.default_rng(2)
        d = simulate_displacements(
            get_lattice(GridType.SQUARE), WalkType.SIMPLE, 2000, 2, 2, rng
        )
        assert np.any(np.isclose(d, 0.0))

    @pytest.mark.parametrize("grid_type", list(GridType))
    @pytest.mark.parametrize("chunk_steps", [1, 2, 5])
    def test_no_return_never_reverses(self, grid_type, chunk_steps):
        """Two-step no-return walks never end at the origin."""
        rng = np.random.default_rng(3)
        d = simulate_displacements(
            get_lattice(grid_type), WalkType.NO_IMMEDIATE_RETURN, 2000, 2,
            chunk_steps, rng,
        )
        assert np.all(d > 1e-9)

    def test_chunk_size_does_not_change_shape(self):
        lattice = get_lattice(GridType.TRIANGULAR)
        for chunk in (1, 7, 64):
            rng = np.random.default_rng(4)
            d = simulate_displacements(
                lattice, WalkType.NO_IMMEDIATE_RETURN, 100, 50, chunk, rng
            )
            assert d.shape == (100,)


class TestLatticeWalkOracle:
    """Oracle contract: (mean, population variance) per call."""

    def test_returns_mean_and_variance(self):
        oracle = LatticeWalkOracle()
        mean, variance = oracle.run_walks(
            42, WalkType.SIMPLE, GridType.SQUARE, 500, 100
        )
        assert isinstance(mean, float)
        assert isinstance(variance, float)
        assert mean > 0
        assert variance > 0

    def test_deterministic_per_arguments(self):
        oracle = LatticeWalkOracle()
        a = oracle.run_walks(7, WalkType.SIMPLE, GridType.TRIANGULAR, 300, 40)
        b = oracle.run_walks(7, WalkType.SIMPLE, GridType.TRIANGULAR, 300, 40)
        c = oracle.run_walks(8, WalkType.SIMPLE, GridType.TRIANGULAR, 300, 40)
        assert a == b
        assert a != c

    def test_negative_seed_accepted(self):
        oracle = LatticeWalkOracle()
        mean, _ = oracle.run_walks(-5, WalkType.SIMPLE, GridType.SQUARE, 100, 10)
        assert mean > 0

    def test_mean_grows_like_sqrt_steps(self):
        """Simple square walks: mean displacement ~ sqrt(pi * n / 4)."""
        oracle = LatticeWalkOracle()
        short, _ = oracle.run_walks(1, WalkType.SIMPLE, GridType.SQUARE, 4000, 100)
        long, _ = oracle.run_walks(1, WalkType.SIMPLE, GridType.SQUARE, 4000, 1600)
        assert long > short
        assert long / short == pytest.approx(4.0, rel=0.1)
        assert short == pytest.approx(np.sqrt(np.pi * 100 / 4), rel=0.1)

    def test_no_return_walks_spread_faster(self):
        oracle = LatticeWalkOracle()
        simple, _ = oracle.run_walks(3, WalkType.SIMPLE, GridType.SQUARE, 4000, 400)
        nirw, _ = oracle.run_walks(
            3, WalkType.NO_IMMEDIATE_RETURN, GridType.SQUARE, 4000, 400
        )
        assert nirw > simple

    def test_bucketed_call(self):
        oracle = LatticeWalkOracle()
        mean, variance = oracle.run_walks_bucketed(
            11, WalkType.SIMPLE, GridType.HEXAGONAL, 500, 10, 20
        )
        assert mean > 0
        assert variance > 0

    def test_bucketed_matches_direct_scale(self):
        oracle = LatticeWalkOracle()
        direct, _ = oracle.run_walks(5, WalkType.SIMPLE, GridType.SQUARE, 4000, 400)
        bucketed, _ = oracle.run_walks_bucketed(
            5, WalkType.SIMPLE, GridType.SQUARE, 4000, 8, 50
        )
        assert bucketed == pytest.approx(direct, rel=0.1)

    def test_too_few_walks(self):
        with pytest.raises(OracleError, match="num_walks"):
            LatticeWalkOracle().run_walks(1, WalkType.SIMPLE, GridType.SQUARE, 1, 10)

    def test_zero_steps(self):
        with pytest.raises(OracleError, match="num_steps"):
            LatticeWalkOracle().run_walks(1, WalkType.SIMPLE, GridType.SQUARE, 10, 0)

    def test_bad_bucket_arguments(self):
        with pytest.raises(OracleError, match="steps_per_bucket"):
            LatticeWalkOracle().run_walks_bucketed(
                1, WalkType.SIMPLE, GridType.SQUARE, 10, 5, 0
            )

    def test_unsupported_grid(self):
        with pytest.raises(OracleError, match="Unsupported"):
            LatticeWalkOracle().run_walks(1, WalkType.SIMPLE, "cubic", 10, 5)

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError, match="chunk_steps"):
            LatticeWalkOracle(chunk_steps=0)
