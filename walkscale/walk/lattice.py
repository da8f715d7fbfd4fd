"""Lattice geometry for the bundled walk oracle.

Each lattice is described by its unit step vectors indexed by heading.
Reversing a step means moving to heading (h + reverse_offset) mod z. On
the honeycomb lattice the two sublattices use opposite bond vectors, so a
walker alternates sign every step and reverses by repeating its heading.
"""

from dataclasses import dataclass

import numpy as np

from walkscale.config.experiment import GridType


@dataclass(frozen=True)
class Lattice:
    """Step vectors and reversal rule of a 2D lattice."""

    grid_type: GridType
    vectors: np.ndarray  # float64 array of shape (z, 2), unit length
    reverse_offset: int  # heading offset that undoes the previous step
    alternating: bool = False  # step vectors flip sign every step

    @property
    def coordination(self) -> int:
        return int(self.vectors.shape[0])

    @property
    def no_return_turns(self) -> np.ndarray:
        """Heading offsets allowed when immediate reversal is forbidden."""
        return np.array(
            [t for t in range(self.coordination) if t != self.reverse_offset],
            dtype=np.int64,
        )


def _unit_vectors(angles: np.ndarray) -> np.ndarray:
    return np.stack([np.cos(angles), np.sin(angles)], axis=1)


SQUARE = Lattice(
    grid_type=GridType.SQUARE,
    vectors=_unit_vectors(np.arange(4) * np.pi / 2),
    reverse_offset=2,
)

TRIANGULAR = Lattice(
    grid_type=GridType.TRIANGULAR,
    vectors=_unit_vectors(np.arange(6) * np.pi / 3),
    reverse_offset=3,
)

# Bonds leaving an A site; B sites use the negated vectors.
HEXAGONAL = Lattice(
    grid_type=GridType.HEXAGONAL,
    vectors=_unit_vectors(np.pi / 2 + np.arange(3) * 2 * np.pi / 3),
    reverse_offset=0,
    alternating=True,
)

LATTICES: dict[GridType, Lattice] = {
    GridType.SQUARE: SQUARE,
    GridType.TRIANGULAR: TRIANGULAR,
    GridType.HEXAGONAL: HEXAGONAL,
}


def get_lattice(grid_type: GridType) -> Lattice:
    """Look up the lattice for a grid type.

    Raises:
        KeyError: If the grid type has no lattice definition.
    """
    return LATTICES[grid_type]
