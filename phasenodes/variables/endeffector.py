"""Motion and force variables of a single end-effector."""

from typing import Sequence

from phasenodes.core.config import DEFAULT_MAX_FORCE
from phasenodes.core.types import (
    Bound,
    Dim,
    Dx,
    Node,
    NO_BOUND,
    EQUALITY_BOUND,
)
from phasenodes.variables.phase_nodes import PhaseNodes


def ee_motion_name(ee: int) -> str:
    return f"ee_motion_{ee}"


def ee_force_name(ee: int) -> str:
    return f"ee_force_{ee}"


def _check_has_vertical_axis(initial_value: Node, what: str) -> None:
    if initial_value.pos is None:
        raise ValueError(f"{what} initial value has no position")
    if len(initial_value.pos) <= Dim.Z:
        raise ValueError(f"{what} needs at least {Dim.Z + 1} dimensions")


class EEMotionNodes(PhaseNodes):
    """
    End-effector position, held constant while in contact.

    Each stance phase collapses to one shared block whose velocity is zero
    and whose height is the ground height (zero).
    """

    def __init__(
        self,
        initial_value: Node,
        contact_schedule: Sequence[bool],
        polys_per_swing_phase: int,
        ee: int,
    ):
        _check_has_vertical_axis(initial_value, "End-effector motion")
        super().__init__(
            initial_value,
            contact_schedule,
            ee_motion_name(ee),
            True,
            polys_per_swing_phase,
        )
        self.ee = ee

    def get_bounds(self) -> list[Bound]:
        bounds = [NO_BOUND] * self.rows

        for idx in range(self.rows):
            infos = self.get_node_info(idx)
            is_stance = len(infos) > 1
            if is_stance:
                if infos[0].deriv == Dx.VEL:
                    bounds[idx] = EQUALITY_BOUND
                if infos[0].dim == Dim.Z:
                    bounds[idx] = EQUALITY_BOUND  # ground is at zero height

        return bounds


class EEForcesNodes(PhaseNodes):
    """
    End-effector contact force, held at zero while in the air.

    Each swing phase collapses to one shared block fixed at zero; during
    stance the force is free within a box and can only push on the ground.
    """

    def __init__(
        self,
        initial_force: Node,
        contact_schedule: Sequence[bool],
        polys_per_stance_phase: int,
        ee: int,
        max_force: float = DEFAULT_MAX_FORCE,
    ):
        if max_force <= 0:
            raise ValueError(f"max_force must be positive, got {max_force}")
        _check_has_vertical_axis(initial_force, "End-effector force")
        super().__init__(
            initial_force,
            contact_schedule,
            ee_force_name(ee),
            False,
            polys_per_stance_phase,
        )
        self.ee = ee
        self.max_force = max_force

    def get_bounds(self) -> list[Bound]:
        bounds = [NO_BOUND] * self.rows

        for idx in range(self.rows):
            infos = self.get_node_info(idx)

            # no force or force rate during swing
            if len(infos) > 1:
                bounds[idx] = EQUALITY_BOUND
                continue

            n0 = infos[0]
            if n0.deriv == Dx.POS:
                if n0.dim in (Dim.X, Dim.Y):
                    bounds[idx] = Bound(-self.max_force, self.max_force)
                # unilateral contact, pulling on the ground is not possible
                if n0.dim == Dim.Z:
                    bounds[idx] = Bound(0.0, self.max_force)

            if n0.deriv == Dx.VEL and n0.dim == Dim.Z:
                bounds[idx] = EQUALITY_BOUND

        return bounds
