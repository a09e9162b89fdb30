"""Optimization variable blocks."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional
import numpy as np
import scipy.optimize
from numpy.typing import NDArray

from phasenodes.core.types import Bound, NO_BOUND


class Component(ABC):
    """
    A named slice of the optimization vector.

    The solver addresses blocks by name and treats every block uniformly
    through values, bounds and the row count.
    """

    def __init__(self, rows: int = -1, name: str = "component") -> None:
        self._rows = rows
        self._name = name

    @property
    def rows(self) -> int:
        """Number of optimization variables in this block."""
        return self._rows

    def set_rows(self, rows: int) -> None:
        self._rows = rows

    @property
    def name(self) -> str:
        return self._name

    def set_name(self, name: str) -> None:
        self._name = name

    @abstractmethod
    def get_values(self) -> NDArray:
        """Current values of all variables, shape (rows,)."""
        ...

    @abstractmethod
    def set_values(self, x: NDArray) -> None:
        """Overwrite all variables from a vector of shape (rows,)."""
        ...

    def get_bounds(self) -> list[Bound]:
        """Bounds of every variable; unbounded unless overridden."""
        return [NO_BOUND] * self.rows


class Composite(Component):
    """Ordered collection of components forming one optimization vector."""

    def __init__(
        self,
        name: str = "composite",
        components: Optional[Iterable[Component]] = None,
    ) -> None:
        super().__init__(0, name)
        self._components: list[Component] = []
        for c in components or []:
            self.add_component(c)

    def add_component(self, component: Component) -> None:
        if any(c.name == component.name for c in self._components):
            raise ValueError(f"Component '{component.name}' already exists")
        self._components.append(component)
        self.set_rows(self.rows + component.rows)

    def get_component(self, name: str) -> Component:
        for c in self._components:
            if c.name == name:
                return c
        raise KeyError(f"No component named '{name}' in '{self.name}'")

    @property
    def components(self) -> list[Component]:
        return list(self._components)

    def get_values(self) -> NDArray:
        if not self._components:
            return np.zeros(0)
        return np.concatenate([c.get_values() for c in self._components])

    def set_values(self, x: NDArray) -> None:
        """
        Split x into consecutive slices, one per component.

        Slices follow the order in which components were added, so x must
        be laid out like get_values().
        """
        x = np.asarray(x, dtype=float)
        if x.shape != (self.rows,):
            raise ValueError(
                f"Expected vector of length {self.rows}, got shape {x.shape}"
            )
        row = 0
        for c in self._components:
            c.set_values(x[row:row + c.rows])
            row += c.rows

    def get_bounds(self) -> list[Bound]:
        bounds: list[Bound] = []
        for c in self._components:
            bounds.extend(c.get_bounds())
        return bounds

    def scipy_bounds(self) -> scipy.optimize.Bounds:
        """Bounds in the form expected by scipy.optimize.minimize."""
        bounds = self.get_bounds()
        lower = np.array([b.lower for b in bounds])
        upper = np.array([b.upper for b in bounds])
        return scipy.optimize.Bounds(lower, upper)
