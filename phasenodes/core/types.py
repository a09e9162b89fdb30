"""Node, segment and bound records shared by all variable sets."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional
import numpy as np
from numpy.typing import NDArray


class Dx(IntEnum):
    """Derivative kind of a trajectory quantity."""
    POS = 0
    VEL = 1
    ACC = 2


class Dim(IntEnum):
    """Cartesian dimension. Z is the vertical axis."""
    X = 0
    Y = 1
    Z = 2


class Side(IntEnum):
    """Boundary role of a node within a polynomial segment."""
    START = 0
    END = 1


# Node derivatives that are stored and optimized over
NODE_DERIVATIVES = (Dx.POS, Dx.VEL)


@dataclass
class Node:
    """Position and velocity of one physical node."""

    pos: Optional[NDArray]
    vel: Optional[NDArray] = None

    def at(self, deriv: Dx) -> NDArray:
        if deriv == Dx.POS:
            return self.pos
        if deriv == Dx.VEL:
            return self.vel
        raise ValueError(f"Nodes store only position and velocity, not {deriv!r}")

    @classmethod
    def from_array(cls, values: NDArray) -> "Node":
        """Build from a (2, n_dim) array ordered like NODE_DERIVATIVES."""
        return cls(pos=np.array(values[Dx.POS]), vel=np.array(values[Dx.VEL]))


@dataclass
class StateLin:
    """Position, velocity and acceleration at one instant."""

    pos: NDArray
    vel: NDArray
    acc: NDArray

    def at(self, deriv: Dx) -> NDArray:
        return (self.pos, self.vel, self.acc)[deriv]


@dataclass(frozen=True)
class PolyInfo:
    """Where a polynomial segment sits inside its phase."""

    phase: int
    poly_id_in_phase: int
    num_polys_in_phase: int
    is_constant: bool


@dataclass(frozen=True)
class NodeInfo:
    """One (node, derivative, dimension) value addressed by an optimization index."""

    id: int
    deriv: Dx
    dim: int


@dataclass(frozen=True)
class Bound:
    """Closed interval [lower, upper] for one optimization variable."""

    lower: float
    upper: float

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper


NO_BOUND = Bound(-np.inf, np.inf)
EQUALITY_BOUND = Bound(0.0, 0.0)
