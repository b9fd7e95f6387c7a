from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple

import numpy as np

from beamcore.model.loads import Load

Reaction = Tuple[float, float, float]  # (Fx, Fy, Mz), Fy up, Mz counter-clockwise


@dataclass
class Result:
    """
    Wraps a sampled distribution (x, values) to provide convenient accessors.
    Used for shear, moment, rotation and deflection along the span.
    """
    _x: np.ndarray
    _values: np.ndarray

    def __iter__(self):
        return zip(self._x.tolist(), self._values.tolist())

    def __getitem__(self, idx):
        if isinstance(idx, slice):
            return list(self)[idx]
        return (self._x[idx], self._values[idx])

    def __len__(self) -> int:
        return int(self._x.shape[0])

    @property
    def max(self) -> float:
        return float(np.max(self._values))

    @property
    def min(self) -> float:
        return float(np.min(self._values))

    @property
    def abs_max(self) -> float:
        return float(np.max(np.abs(self._values)))

    @property
    def peak(self) -> Tuple[float, float]:
        """(x, signed value) at the sample with the largest magnitude."""
        return peak(self._x, self._values)

    def at(self, x_loc: float) -> float:
        """Interpolate the value at a specific position (right limit at jumps)."""
        x = self._x
        idx = int(np.searchsorted(x, x_loc, side="right"))
        if idx <= 0:
            return float(self._values[0])
        if idx >= x.shape[0]:
            return float(self._values[-1])
        x0, x1 = x[idx - 1], x[idx]
        v0, v1 = self._values[idx - 1], self._values[idx]
        if x1 == x0:
            return float(v1)
        return float(v0 + (v1 - v0) * (x_loc - x0) / (x1 - x0))


def peak(x: np.ndarray, values: np.ndarray) -> Tuple[float, float]:
    if values.size == 0:
        return (0.0, 0.0)
    idx = int(np.argmax(np.abs(values)))
    return (float(x[idx]), float(values[idx]))


def position_key(x: float) -> str:
    """String key for a support position; 12 significant digits keep nearby supports apart."""
    return f"{x:.12g}"


def _frozen(values: np.ndarray) -> np.ndarray:
    arr = np.array(values, dtype=float)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class AnalysisResult:
    """Snapshot of one solve: sampled diagrams, support reactions and peak values.

    Sign conventions: shear positive when the resultant left of the cut acts upward,
    sagging moment positive, deflection and rotation positive upward/counter-clockwise.
    """

    span: float
    x_values: np.ndarray
    shear_force: np.ndarray
    bending_moment: np.ndarray
    deflection: np.ndarray
    rotation: np.ndarray
    normal_force: np.ndarray
    reactions: Mapping[float, Reaction]
    loads: Tuple[Load, ...] = ()
    method: str = "stiffness"
    max_shear: Tuple[float, float] = field(init=False)
    max_bending: Tuple[float, float] = field(init=False)
    max_deflection: Tuple[float, float] = field(init=False)

    def __post_init__(self) -> None:
        for name in ("x_values", "shear_force", "bending_moment", "deflection", "rotation", "normal_force"):
            object.__setattr__(self, name, _frozen(getattr(self, name)))
        object.__setattr__(self, "reactions", MappingProxyType(dict(self.reactions)))
        object.__setattr__(self, "loads", tuple(self.loads))
        object.__setattr__(self, "max_shear", peak(self.x_values, self.shear_force))
        object.__setattr__(self, "max_bending", peak(self.x_values, self.bending_moment))
        object.__setattr__(self, "max_deflection", peak(self.x_values, self.deflection))

    def shear(self) -> Result:
        return Result(self.x_values, self.shear_force)

    def bending(self) -> Result:
        return Result(self.x_values, self.bending_moment)

    def deflection_result(self) -> Result:
        return Result(self.x_values, self.deflection)

    def rotation_result(self) -> Result:
        return Result(self.x_values, self.rotation)

    def reaction_at(self, position: float, tol: float = 1e-9) -> Reaction:
        scale = max(abs(self.span), 1.0)
        for x, reaction in self.reactions.items():
            if abs(x - position) <= tol * scale:
                return reaction
        raise KeyError(f"no support at x={position}")

    def reactions_dict(self) -> Dict[str, List[float]]:
        return {position_key(x): list(reaction) for x, reaction in sorted(self.reactions.items())}

    def residuals(self) -> Tuple[float, float]:
        """(sum Fy, sum M about x=0) over reactions and applied loads; both ~0 when in equilibrium."""
        sum_fy = 0.0
        sum_m = 0.0
        for x, (_, fy, mz) in sorted(self.reactions.items()):
            sum_fy += fy
            sum_m += fy * x + mz
        for load in self.loads:
            sum_fy -= load.resultant()
            sum_m -= load.first_moment(0.0)
        return sum_fy, sum_m
