from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence, Tuple

from beamcore.errors import InvalidGeometry, UnstableStructure
from beamcore.model.loads import Load
from beamcore.model.supports import Support

# Positions closer than this (relative to span) are treated as coincident.
POSITION_TOL = 1e-9


@dataclass(frozen=True)
class BeamGeometry:
    """Span, stiffness and supports of a straight beam plus the loads acting on it.

    E in Pa, I in m^4, A in m^2, span in m. Supports are kept sorted by position.
    """

    span: float
    E: float
    I: float
    A: float
    supports: Tuple[Support, ...] = ()
    loads: Tuple[Load, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "span", float(self.span))
        object.__setattr__(self, "E", float(self.E))
        object.__setattr__(self, "I", float(self.I))
        object.__setattr__(self, "A", float(self.A))
        supports = tuple(sorted(self.supports, key=lambda s: s.position))
        object.__setattr__(self, "supports", supports)
        object.__setattr__(self, "loads", tuple(self.loads))
        self.validate()

    @property
    def tol(self) -> float:
        return POSITION_TOL * max(self.span, 1.0)

    @property
    def EI(self) -> float:
        return self.E * self.I

    def validate(self) -> None:
        if not self.span > 0.0:
            raise InvalidGeometry(f"span must be positive, got {self.span}")
        for label, value in (("E", self.E), ("I", self.I)):
            if not value > 0.0:
                raise InvalidGeometry(f"{label} must be positive, got {value}", kind="section")
        if self.A < 0.0:
            raise InvalidGeometry(f"A must be non-negative, got {self.A}", kind="section")

        tol = self.tol
        for support in self.supports:
            if support.position > self.span + tol:
                raise InvalidGeometry(
                    f"support at {support.position} lies outside the span [0, {self.span}]"
                )
        for left, right in zip(self.supports, self.supports[1:]):
            if right.position - left.position <= tol:
                raise InvalidGeometry(
                    f"duplicate support position {right.position}", kind="duplicate_support"
                )
        for load in self.loads:
            if load.end > self.span + tol:
                raise InvalidGeometry(
                    f"load {load.name or load.type!r} at {list(load.position)} lies outside the span [0, {self.span}]",
                    kind="load",
                )

    def check_stability(self) -> None:
        """Raise UnstableStructure when the supports allow rigid-body motion."""
        restraining = [s for s in self.supports if s.fixity != "free"]
        if not restraining:
            raise UnstableStructure("beam has no supports")
        if len(restraining) == 1 and restraining[0].fixity != "fixed":
            raise UnstableStructure(
                f"a single {restraining[0].fixity} support at {restraining[0].position} cannot restrain the beam; "
                "a lone support must be fixed"
            )
        has_fixed = any(s.restrains_rotation for s in restraining)
        vertical = [s for s in restraining if s.restrains_vertical]
        if not has_fixed and len(vertical) < 2:
            raise UnstableStructure("beam needs two vertical restraints or a fixed support")

    def with_loads(self, loads: Iterable[Load]) -> "BeamGeometry":
        return replace(self, loads=tuple(loads))

    def restraining_supports(self) -> List[Support]:
        return [s for s in self.supports if s.fixity != "free"]

    def is_determinate(self) -> bool:
        """Exactly two pinned/roller supports and nothing else restraining."""
        restraining = self.restraining_supports()
        return len(restraining) == 2 and all(s.fixity in ("pinned", "roller") for s in restraining)

    def key_positions(self) -> List[float]:
        """Sorted, de-duplicated node positions: ends, supports and load boundaries."""
        raw: List[float] = [0.0, self.span]
        raw.extend(s.position for s in self.supports)
        for load in self.loads:
            raw.extend(load.position)
        return merge_positions(raw, self.tol, upper=self.span)


def merge_positions(values: Sequence[float], tol: float, upper: float) -> List[float]:
    out: List[float] = []
    for value in sorted(min(max(float(v), 0.0), upper) for v in values):
        if out and value - out[-1] <= tol:
            continue
        out.append(value)
    if out and upper - out[-1] <= tol:
        out[-1] = upper
    return out
