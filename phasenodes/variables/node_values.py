"""Physical nodes of a piecewise cubic trajectory and their optimization view."""

import logging
from typing import Sequence
import numpy as np
import scipy.sparse
from numpy.typing import NDArray

from phasenodes.core.component import Component
from phasenodes.core.types import (
    Dx,
    Side,
    Node,
    NodeInfo,
    PolyInfo,
    StateLin,
    NODE_DERIVATIVES,
)
from phasenodes.polynomials.cubic_hermite import CubicHermitePolynomial
from phasenodes.polynomials.timing import get_local_time

logger = logging.getLogger(__name__)


class NodeValues(Component):
    """
    Nodes joined by cubic Hermite polynomials, exposed as optimization variables.

    Polynomial i runs from node i to node i+1. Nodes joined by a constant
    polynomial share one optimization block, so a run of constant
    polynomials is represented by a single set of values. Each block holds
    position and velocity of every dimension:

        index = block * (2 * n_dim) + deriv * n_dim + dim
    """

    def __init__(
        self,
        initial_value: Node,
        poly_infos: Sequence[PolyInfo],
        name: str,
    ):
        """
        Initialize all nodes to the same value.

        Args:
            initial_value: Value given to every node; fixes the dimension
            poly_infos: Placement of each polynomial inside its phase
            name: Identifier used by the solver to route values
        """
        super().__init__(-1, name)

        if initial_value.pos is None:
            raise ValueError(f"Initial value of '{name}' has no position")
        if len(poly_infos) == 0:
            raise ValueError(f"'{name}' needs at least one polynomial")

        pos = np.atleast_1d(np.asarray(initial_value.pos, dtype=float))
        if initial_value.vel is None:
            vel = np.zeros_like(pos)
        else:
            vel = np.atleast_1d(np.asarray(initial_value.vel, dtype=float))
        if pos.ndim != 1 or vel.shape != pos.shape:
            raise ValueError(
                f"Position {pos.shape} and velocity {vel.shape} of '{name}' "
                "must be vectors of equal size"
            )

        self._n_dim = pos.size
        self._poly_infos = list(poly_infos)
        self._durations = np.zeros(len(self._poly_infos))

        # (node, derivative, dimension)
        n_nodes = len(self._poly_infos) + 1
        self._values = np.tile(np.stack([pos, vel]), (n_nodes, 1, 1))
        self._polys = [
            CubicHermitePolynomial(self._n_dim) for _ in self._poly_infos
        ]

        self._opt_to_nodes: list[list[int]] = []
        self._node_to_opt: list[int] = []
        self._set_node_mappings()
        self.set_rows(len(self._opt_to_nodes) * self._n_values_per_block)

        self.update_polynomials()

        logger.debug(
            "Initialized '%s': %d polynomials, %d nodes, %d blocks, %d rows",
            name, len(self._polys), n_nodes, len(self._opt_to_nodes), self.rows,
        )

    @property
    def n_dim(self) -> int:
        return self._n_dim

    @property
    def _n_values_per_block(self) -> int:
        return len(NODE_DERIVATIVES) * self._n_dim

    @property
    def n_polys(self) -> int:
        return len(self._polys)

    @property
    def n_nodes(self) -> int:
        return self._values.shape[0]

    @property
    def durations(self) -> NDArray:
        return self._durations.copy()

    @property
    def total_time(self) -> float:
        return float(np.sum(self._durations))

    def _set_node_mappings(self) -> None:
        opt_id = 0
        self._opt_to_nodes = [[]]
        for i, info in enumerate(self._poly_infos):
            self._opt_to_nodes[opt_id].append(self.get_node_id(i, Side.START))
            # end node shares the block if the polynomial is constant
            if not info.is_constant:
                opt_id += 1
                self._opt_to_nodes.append([])

        last_node_id = len(self._poly_infos)
        self._opt_to_nodes[opt_id].append(last_node_id)

        self._node_to_opt = [0] * (last_node_id + 1)
        for block, node_ids in enumerate(self._opt_to_nodes):
            for node_id in node_ids:
                self._node_to_opt[node_id] = block

    def get_node_id(self, poly_id: int, side: Side) -> int:
        return poly_id + int(side)

    def get_poly_infos(self) -> list[PolyInfo]:
        return list(self._poly_infos)

    def get_nodes(self) -> list[Node]:
        """Copies of all physical nodes."""
        return [Node.from_array(v) for v in self._values]

    def get_node_info(self, opt_index: int) -> list[NodeInfo]:
        """
        Physical values set by one optimization variable.

        More than one entry is returned exactly when the variable is shared
        by a run of constant polynomials.
        """
        if not 0 <= opt_index < self.rows:
            raise IndexError(
                f"Optimization index {opt_index} outside [0, {self.rows}) of '{self.name}'"
            )
        block, internal_id = divmod(opt_index, self._n_values_per_block)
        deriv, dim = divmod(internal_id, self._n_dim)

        return [
            NodeInfo(id=node_id, deriv=Dx(deriv), dim=dim)
            for node_id in self._opt_to_nodes[block]
        ]

    def get_opt_index(self, node_id: int, deriv: Dx, dim: int) -> int:
        """Optimization index that sets one value of a physical node."""
        if not 0 <= node_id < self.n_nodes:
            raise IndexError(f"Node {node_id} outside [0, {self.n_nodes})")
        if deriv not in NODE_DERIVATIVES or not 0 <= dim < self._n_dim:
            raise IndexError(f"Node has no value ({deriv!r}, dim {dim})")
        block = self._node_to_opt[node_id]
        return block * self._n_values_per_block + int(deriv) * self._n_dim + dim

    def get_opt_indices(self, node_id: int) -> list[int]:
        """All optimization indices that affect a physical node."""
        return [
            self.get_opt_index(node_id, deriv, dim)
            for deriv in NODE_DERIVATIVES
            for dim in range(self._n_dim)
        ]

    def get_values(self) -> NDArray:
        x = np.zeros(self.rows)
        for idx in range(self.rows):
            for info in self.get_node_info(idx):
                x[idx] = self._values[info.id, info.deriv, info.dim]
        return x

    def set_values(self, x: NDArray) -> None:
        x = np.asarray(x, dtype=float)
        if x.shape != (self.rows,):
            raise ValueError(
                f"'{self.name}' expects {self.rows} values, got shape {x.shape}"
            )
        for idx in range(self.rows):
            for info in self.get_node_info(idx):
                self._values[info.id, info.deriv, info.dim] = x[idx]

        self.update_polynomials()

    def set_durations(self, durations: Sequence[float]) -> None:
        """Set the duration of every polynomial directly."""
        durations = np.asarray(durations, dtype=float)
        if durations.shape != self._durations.shape:
            raise ValueError(
                f"'{self.name}' has {self.n_polys} polynomials, "
                f"got {durations.size} durations"
            )
        self._durations = durations.copy()
        self.update_polynomials()

    def update_polynomials(self) -> None:
        """Refit every polynomial to the current nodes and durations."""
        for i, poly in enumerate(self._polys):
            poly.set_nodes(
                Node.from_array(self._values[self.get_node_id(i, Side.START)]),
                Node.from_array(self._values[self.get_node_id(i, Side.END)]),
                self._durations[i],
            )

    def does_var_affect_current_state(self, poly_vars: str, t_current: float) -> bool:
        return poly_vars == self.name

    def get_point(self, t_global: float) -> StateLin:
        poly_id, t_local = get_local_time(t_global, self._durations)
        return self._polys[poly_id].get_point(t_local)

    def get_jacobian(self, t_global: float, dxdt: Dx) -> scipy.sparse.csr_matrix:
        """
        Derivative of the dxdt quantity at t_global w.r.t. all variables.

        Args:
            t_global: Time since the start of the trajectory
            dxdt: Differentiated quantity (pos, vel or acc)

        Returns:
            Sparse matrix of shape (n_dim, rows)
        """
        poly_id, t_local = get_local_time(t_global, self._durations)
        return self.get_jacobian_of_poly(poly_id, t_local, dxdt)

    def get_jacobian_of_poly(
        self, poly_id: int, t_local: float, dxdt: Dx
    ) -> scipy.sparse.csr_matrix:
        if not 0 <= poly_id < self.n_polys:
            raise IndexError(f"Polynomial {poly_id} outside [0, {self.n_polys})")

        poly = self._polys[poly_id]
        rows, cols, vals = [], [], []
        for side in (Side.START, Side.END):
            node_id = self.get_node_id(poly_id, side)
            for deriv in NODE_DERIVATIVES:
                val = poly.get_derivative_of(dxdt, side, deriv, t_local)
                for dim in range(self._n_dim):
                    rows.append(dim)
                    cols.append(self.get_opt_index(node_id, deriv, dim))
                    vals.append(val)

        # duplicate entries are summed: both ends of a constant polynomial
        # map to the same variables
        return scipy.sparse.csr_matrix(
            (vals, (rows, cols)), shape=(self._n_dim, self.rows)
        )

    def get_derivative_of_pos_wrt_phase_duration(self, t_global: float) -> NDArray:
        """
        d x(t_global) / d(duration of the phase containing t_global).

        Every polynomial in the phase lasts phase_duration / n_polys, so the
        polynomial's own duration and the start time of every earlier
        polynomial in the phase scale with the phase duration.
        """
        poly_id, t_local = get_local_time(t_global, self._durations)
        info = self._poly_infos[poly_id]
        poly = self._polys[poly_id]

        percent_of_phase = 1.0 / info.num_polys_in_phase
        inner_derivative = percent_of_phase
        vel = poly.get_point(t_local).vel
        dxdT = poly.get_derivative_of_pos_wrt_duration(t_local)

        return inner_derivative * dxdT - info.poly_id_in_phase * percent_of_phase * vel
