"""Polynomial segments and segment timing."""

from phasenodes.polynomials.cubic_hermite import CubicHermitePolynomial
from phasenodes.polynomials.timing import get_local_time, TIME_EPS

__all__ = [
    "CubicHermitePolynomial",
    "get_local_time",
    "TIME_EPS",
]
