"""
Phasenodes: phase-based spline variables for trajectory optimization.

A trajectory is a chain of cubic Hermite polynomials whose boundary nodes
are the optimization variables. This library provides:
- The mapping between a compact optimization vector and the nodes
- Collapsing of constant phases into shared variables
- Sparse analytic Jacobians of the trajectory w.r.t. the variables
- Bounds for end-effector motion and contact force
"""

__version__ = "0.1.0"

from phasenodes.core.types import Dx, Dim, Node, Bound
from phasenodes.core.component import Component, Composite
from phasenodes.core.config import NodeParameters
from phasenodes.variables.node_values import NodeValues
from phasenodes.variables.phase_nodes import PhaseNodes
from phasenodes.variables.endeffector import EEMotionNodes, EEForcesNodes
from phasenodes.variables.builder import build_endeffector_variables

__all__ = [
    "Dx",
    "Dim",
    "Node",
    "Bound",
    "Component",
    "Composite",
    "NodeParameters",
    "NodeValues",
    "PhaseNodes",
    "EEMotionNodes",
    "EEForcesNodes",
    "build_endeffector_variables",
]
