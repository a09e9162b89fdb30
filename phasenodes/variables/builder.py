"""Construction of all end-effector variable sets."""

import logging
from typing import Optional, Sequence
import numpy as np
from numpy.typing import NDArray

from phasenodes.core.component import Composite
from phasenodes.core.config import NodeParameters
from phasenodes.core.types import Node
from phasenodes.variables.endeffector import EEMotionNodes, EEForcesNodes

logger = logging.getLogger(__name__)


def build_endeffector_variables(
    initial_ee_positions: Sequence[NDArray],
    contact_schedules: Sequence[Sequence[bool]],
    phase_durations: Sequence[Sequence[float]],
    params: Optional[NodeParameters] = None,
    name: str = "variables",
) -> Composite:
    """
    Motion and force variables for every end-effector.

    Args:
        initial_ee_positions: Initial position of each end-effector
        contact_schedules: Contact flag of each phase, per end-effector
        phase_durations: Duration of each phase, per end-effector
        params: Discretization and force limits (defaults if not provided)
        name: Name of the returned composite

    Returns:
        Composite holding, per end-effector, motion then force variables
    """
    if params is None:
        params = NodeParameters()
    params.validate()

    n_ee = len(initial_ee_positions)
    if len(contact_schedules) != n_ee or len(phase_durations) != n_ee:
        raise ValueError(
            f"Got {n_ee} end-effectors, {len(contact_schedules)} schedules "
            f"and {len(phase_durations)} duration lists"
        )

    variables = Composite(name)
    for ee in range(n_ee):
        pos = np.asarray(initial_ee_positions[ee], dtype=float)

        motion = EEMotionNodes(
            Node(pos=pos, vel=np.zeros_like(pos)),
            contact_schedules[ee],
            params.polys_per_swing_phase,
            ee,
        )
        force = EEForcesNodes(
            Node(pos=np.zeros_like(pos), vel=np.zeros_like(pos)),
            contact_schedules[ee],
            params.polys_per_stance_phase,
            ee,
            max_force=params.max_force,
        )
        motion.update_durations(phase_durations[ee])
        force.update_durations(phase_durations[ee])

        variables.add_component(motion)
        variables.add_component(force)
        logger.debug(
            "End-effector %d: %d motion and %d force variables",
            ee, motion.rows, force.rows,
        )

    return variables
