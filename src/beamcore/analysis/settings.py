from __future__ import annotations

from dataclasses import dataclass


@dataclass
class SolverSettings:
    points_per_segment: int = 20
    condition_limit: float = 1e12
    equilibrium_tol: float = 1e-6
    force_stiffness: bool = False

    def validate(self) -> None:
        if self.points_per_segment < 1:
            raise ValueError("points_per_segment must be at least 1")
        if not self.condition_limit > 1.0:
            raise ValueError("condition_limit must be greater than 1")
        if self.equilibrium_tol <= 0.0:
            raise ValueError("equilibrium_tol must be positive")
