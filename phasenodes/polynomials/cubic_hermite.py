"""Cubic Hermite polynomial segment."""

import numpy as np
from numpy.typing import NDArray

from phasenodes.core.types import Dx, Side, Node, StateLin


def _time_basis(dxdt: Dx, t: float) -> NDArray:
    """Row mapping the coefficients (a, b, c, d) to the dxdt quantity at t."""
    if dxdt == Dx.POS:
        return np.array([1.0, t, t**2, t**3])
    if dxdt == Dx.VEL:
        return np.array([0.0, 1.0, 2 * t, 3 * t**2])
    if dxdt == Dx.ACC:
        return np.array([0.0, 0.0, 2.0, 6 * t])
    raise ValueError(f"Unsupported derivative {dxdt!r}")


class CubicHermitePolynomial:
    """
    Cubic polynomial fixed by position and velocity at both ends.

    x(t) = a + b t + c t^2 + d t^3 on t in [0, T] with
    a = x0, b = v0,
    c = -(3 (x0 - x1) + T (2 v0 + v1)) / T^2,
    d = (2 (x0 - x1) + T (v0 + v1)) / T^3.
    """

    def __init__(self, n_dim: int):
        self.n_dim = n_dim
        self._x0 = np.zeros(n_dim)
        self._v0 = np.zeros(n_dim)
        self._x1 = np.zeros(n_dim)
        self._v1 = np.zeros(n_dim)
        self._T = 0.0

    @property
    def duration(self) -> float:
        return self._T

    def set_nodes(self, start: Node, end: Node, duration: float) -> None:
        """Fix the boundary conditions of the segment."""
        self._x0 = np.asarray(start.pos, dtype=float)
        self._v0 = np.asarray(start.vel, dtype=float)
        self._x1 = np.asarray(end.pos, dtype=float)
        self._v1 = np.asarray(end.vel, dtype=float)
        self._T = float(duration)

    def _check_duration(self) -> None:
        if self._T <= 0.0:
            raise ValueError(
                f"Polynomial queried with non-positive duration {self._T}"
            )

    def _coefficients(self) -> NDArray:
        """Coefficients (a, b, c, d), shape (4, n_dim)."""
        self._check_duration()
        T = self._T
        dx = self._x0 - self._x1
        a = self._x0
        b = self._v0
        c = -(3 * dx + T * (2 * self._v0 + self._v1)) / T**2
        d = (2 * dx + T * (self._v0 + self._v1)) / T**3
        return np.array([a, b, c, d])

    def get_point(self, t_local: float) -> StateLin:
        coeffs = self._coefficients()
        return StateLin(
            pos=_time_basis(Dx.POS, t_local) @ coeffs,
            vel=_time_basis(Dx.VEL, t_local) @ coeffs,
            acc=_time_basis(Dx.ACC, t_local) @ coeffs,
        )

    def get_derivative_of(
        self, dxdt: Dx, side: Side, node_deriv: Dx, t_local: float
    ) -> float:
        """
        Derivative of the dxdt quantity at t_local w.r.t. one boundary value.

        The result is the same for every dimension, since dimensions are
        interpolated independently.

        Args:
            dxdt: Quantity being differentiated (pos, vel or acc)
            side: Which boundary node
            node_deriv: Position or velocity of that node
            t_local: Time since the start of the segment

        Returns:
            Scalar partial derivative
        """
        self._check_duration()
        T = self._T

        if side == Side.START and node_deriv == Dx.POS:
            dcoeffs = np.array([1.0, 0.0, -3 / T**2, 2 / T**3])
        elif side == Side.START and node_deriv == Dx.VEL:
            dcoeffs = np.array([0.0, 1.0, -2 / T, 1 / T**2])
        elif side == Side.END and node_deriv == Dx.POS:
            dcoeffs = np.array([0.0, 0.0, 3 / T**2, -2 / T**3])
        elif side == Side.END and node_deriv == Dx.VEL:
            dcoeffs = np.array([0.0, 0.0, -1 / T, 1 / T**2])
        else:
            raise ValueError(f"Nodes have no {node_deriv!r} value")

        return float(_time_basis(dxdt, t_local) @ dcoeffs)

    def get_derivative_of_pos_wrt_duration(self, t_local: float) -> NDArray:
        """d x(t_local) / dT with the boundary nodes held fixed."""
        self._check_duration()
        T = self._T
        x0, x1, v0, v1 = self._x0, self._x1, self._v0, self._v1
        t2, t3 = t_local**2, t_local**3

        dc_dT = -(2 * v0 + v1) / T**2 + 2 * (3 * (x0 - x1) + T * (2 * v0 + v1)) / T**3
        dd_dT = (v0 + v1) / T**3 - 3 * (2 * (x0 - x1) + T * (v0 + v1)) / T**4

        return t2 * dc_dT + t3 * dd_dT
