"""Node values laid out according to a contact schedule."""

import logging
from typing import Sequence
import scipy.sparse
from numpy.typing import NDArray

from phasenodes.core.component import Component
from phasenodes.core.types import Dx, Node, NodeInfo, PolyInfo, StateLin
from phasenodes.polynomials.timing import get_local_time
from phasenodes.variables.node_values import NodeValues

logger = logging.getLogger(__name__)


def build_poly_infos(
    contact_schedule: Sequence[bool],
    is_constant_during_contact: bool,
    n_polys_in_changing_phase: int,
) -> list[PolyInfo]:
    """
    Polynomials for each phase of a contact schedule.

    A phase whose contact flag equals is_constant_during_contact gets one
    constant polynomial; every other phase is split into
    n_polys_in_changing_phase polynomials of equal duration.
    """
    if len(contact_schedule) == 0:
        raise ValueError("Contact schedule must contain at least one phase")
    if n_polys_in_changing_phase < 1:
        raise ValueError(
            f"Need at least one polynomial per phase, got {n_polys_in_changing_phase}"
        )

    infos = []
    for phase, in_contact in enumerate(contact_schedule):
        if bool(in_contact) == is_constant_during_contact:
            infos.append(PolyInfo(phase, 0, 1, True))
        else:
            for j in range(n_polys_in_changing_phase):
                infos.append(PolyInfo(phase, j, n_polys_in_changing_phase, False))
    return infos


class PhaseNodes(Component):
    """
    Node values whose polynomials are driven by phase durations.

    The node mapping itself lives in a NodeValues instance; this class
    decides its layout from the contact schedule and converts phase
    durations into polynomial durations.
    """

    def __init__(
        self,
        initial_value: Node,
        contact_schedule: Sequence[bool],
        name: str,
        is_constant_during_contact: bool,
        n_polys_in_changing_phase: int,
    ):
        """
        Args:
            initial_value: Value of every node before optimization
            contact_schedule: Contact flag of each phase
            name: Identifier of this variable set
            is_constant_during_contact: Contact flag of the phases that
                collapse to one constant value
            n_polys_in_changing_phase: Polynomials in every other phase
        """
        self._contact_schedule = [bool(c) for c in contact_schedule]
        poly_infos = build_poly_infos(
            self._contact_schedule,
            is_constant_during_contact,
            n_polys_in_changing_phase,
        )
        self.nodes = NodeValues(initial_value, poly_infos, name)
        super().__init__(self.nodes.rows, name)

    @property
    def contact_schedule(self) -> list[bool]:
        return list(self._contact_schedule)

    @property
    def n_phases(self) -> int:
        return len(self._contact_schedule)

    @property
    def n_dim(self) -> int:
        return self.nodes.n_dim

    @property
    def n_polys(self) -> int:
        return self.nodes.n_polys

    @property
    def n_nodes(self) -> int:
        return self.nodes.n_nodes

    @property
    def durations(self) -> NDArray:
        return self.nodes.durations

    @property
    def total_time(self) -> float:
        return self.nodes.total_time

    def update_durations(self, phase_durations: Sequence[float]) -> None:
        """Split each phase duration evenly over the polynomials of that phase."""
        if len(phase_durations) != self.n_phases:
            raise ValueError(
                f"'{self.name}' has {self.n_phases} phases, "
                f"got {len(phase_durations)} durations"
            )
        durations = [
            phase_durations[info.phase] / info.num_polys_in_phase
            for info in self.nodes.get_poly_infos()
        ]
        self.nodes.set_durations(durations)
        logger.debug("Updated '%s' to total time %.4f", self.name, self.total_time)

    def get_phase_of(self, t_global: float) -> int:
        """Index of the phase active at t_global."""
        poly_id, _ = get_local_time(t_global, self.nodes.durations)
        return self.nodes.get_poly_infos()[poly_id].phase

    def get_values(self) -> NDArray:
        return self.nodes.get_values()

    def set_values(self, x: NDArray) -> None:
        self.nodes.set_values(x)

    def get_node_info(self, opt_index: int) -> list[NodeInfo]:
        return self.nodes.get_node_info(opt_index)

    def get_opt_index(self, node_id: int, deriv: Dx, dim: int) -> int:
        return self.nodes.get_opt_index(node_id, deriv, dim)

    def get_opt_indices(self, node_id: int) -> list[int]:
        return self.nodes.get_opt_indices(node_id)

    def get_nodes(self) -> list[Node]:
        return self.nodes.get_nodes()

    def get_poly_infos(self) -> list[PolyInfo]:
        return self.nodes.get_poly_infos()

    def set_durations(self, durations: Sequence[float]) -> None:
        """Set polynomial durations directly, bypassing the phase split."""
        self.nodes.set_durations(durations)

    def get_jacobian_of_poly(
        self, poly_id: int, t_local: float, dxdt: Dx
    ) -> scipy.sparse.csr_matrix:
        return self.nodes.get_jacobian_of_poly(poly_id, t_local, dxdt)

    def get_point(self, t_global: float) -> StateLin:
        return self.nodes.get_point(t_global)

    def get_jacobian(self, t_global: float, dxdt: Dx) -> scipy.sparse.csr_matrix:
        return self.nodes.get_jacobian(t_global, dxdt)

    def get_derivative_of_pos_wrt_phase_duration(self, t_global: float) -> NDArray:
        return self.nodes.get_derivative_of_pos_wrt_phase_duration(t_global)

    def does_var_affect_current_state(self, poly_vars: str, t_current: float) -> bool:
        return self.nodes.does_var_affect_current_state(poly_vars, t_current)
