"""Parameters for building end-effector variable sets."""

from dataclasses import dataclass


DEFAULT_MAX_FORCE = 10000.0


@dataclass
class NodeParameters:
    """Discretization and force limits of the end-effector variables."""

    polys_per_swing_phase: int = 2   # motion polynomials in each swing phase
    polys_per_stance_phase: int = 3  # force polynomials in each stance phase
    max_force: float = DEFAULT_MAX_FORCE  # [N]

    def validate(self) -> None:
        """Raise ValueError if any parameter is out of range."""
        if self.polys_per_swing_phase < 1:
            raise ValueError(
                f"polys_per_swing_phase must be >= 1, got {self.polys_per_swing_phase}"
            )
        if self.polys_per_stance_phase < 1:
            raise ValueError(
                f"polys_per_stance_phase must be >= 1, got {self.polys_per_stance_phase}"
            )
        if self.max_force <= 0:
            raise ValueError(f"max_force must be positive, got {self.max_force}")
