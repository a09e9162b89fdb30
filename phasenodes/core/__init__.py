"""Core abstractions for node-based optimization variables."""

from phasenodes.core.types import (
    Dx,
    Dim,
    Side,
    Node,
    StateLin,
    PolyInfo,
    NodeInfo,
    Bound,
    NO_BOUND,
    EQUALITY_BOUND,
)
from phasenodes.core.component import Component, Composite
from phasenodes.core.config import NodeParameters, DEFAULT_MAX_FORCE

__all__ = [
    "Dx",
    "Dim",
    "Side",
    "Node",
    "StateLin",
    "PolyInfo",
    "NodeInfo",
    "Bound",
    "NO_BOUND",
    "EQUALITY_BOUND",
    "Component",
    "Composite",
    "NodeParameters",
    "DEFAULT_MAX_FORCE",
]
