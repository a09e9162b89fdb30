"""Node-based optimization variables."""

from phasenodes.variables.node_values import NodeValues
from phasenodes.variables.phase_nodes import PhaseNodes, build_poly_infos
from phasenodes.variables.endeffector import (
    EEMotionNodes,
    EEForcesNodes,
    ee_motion_name,
    ee_force_name,
)
from phasenodes.variables.builder import build_endeffector_variables

__all__ = [
    "NodeValues",
    "PhaseNodes",
    "build_poly_infos",
    "EEMotionNodes",
    "EEForcesNodes",
    "ee_motion_name",
    "ee_force_name",
    "build_endeffector_variables",
]
