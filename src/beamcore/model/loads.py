from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Literal, Optional, Tuple

from beamcore.errors import InvalidGeometry

LoadType = Literal["udl", "point", "trapezoidal"]
LOAD_TYPES: Tuple[LoadType, ...] = ("udl", "point", "trapezoidal")

_TYPE_ALIASES = {
    "udl": "udl",
    "point": "point",
    "point load": "point",
    "pointload": "point",
    "trapezoidal": "trapezoidal",
    "trapezoidal load": "trapezoidal",
    "trapezoidalload": "trapezoidal",
}

# Number of (positions, magnitudes) each load type carries.
_ARITY = {
    "point": (1, 1),
    "udl": (2, 1),
    "trapezoidal": (2, 2),
}

LOAD_CASE_TYPES: Tuple[str, ...] = (
    "Dead",
    "Live",
    "Snow",
    "Wind",
    "Seismic",
    "Rain",
    "Construction",
    "Temperature",
    "Settlement",
    "Other",
)


def normalize_load_type(value: str) -> LoadType:
    key = str(value).strip().lower().replace("_", " ")
    if key not in _TYPE_ALIASES:
        raise InvalidGeometry(f"unknown load type {value!r}; expected one of {LOAD_TYPES}", kind="load")
    return _TYPE_ALIASES[key]  # type: ignore[return-value]


def magnitude_count(load_type: LoadType) -> int:
    return _ARITY[load_type][1]


def _floats(values: Iterable, label: str) -> Tuple[float, ...]:
    if isinstance(values, (int, float, str)):
        values = (values,)
    try:
        out = tuple(float(v) for v in values)
    except (TypeError, ValueError) as exc:
        raise InvalidGeometry(f"{label} must be numeric, got {values!r}", kind="load") from exc
    if any(v != v for v in out):
        raise InvalidGeometry(f"{label} must not contain NaN", kind="load")
    return out


def _check_positions(load_type: LoadType, position: Tuple[float, ...]) -> None:
    n_pos = _ARITY[load_type][0]
    if len(position) != n_pos:
        raise InvalidGeometry(f"{load_type} load needs {n_pos} position(s), got {len(position)}", kind="load")
    if any(p < 0.0 for p in position):
        raise InvalidGeometry(f"load positions must be non-negative, got {list(position)}", kind="load")
    if n_pos == 2 and not position[1] > position[0]:
        raise InvalidGeometry(
            f"{load_type} load end ({position[1]}) must be greater than its start ({position[0]})", kind="load"
        )


@dataclass(frozen=True, slots=True)
class Load:
    """A resolved vertical load, magnitudes positive downward (N or N/m).

    point:       position=(x,),      magnitude=(P,)
    udl:         position=(x0, x1),  magnitude=(w,)
    trapezoidal: position=(x0, x1),  magnitude=(w0, w1)
    """

    type: LoadType
    magnitude: Tuple[float, ...]
    position: Tuple[float, ...]
    name: str = ""

    def __post_init__(self) -> None:
        load_type = normalize_load_type(self.type)
        object.__setattr__(self, "type", load_type)
        magnitude = _floats(self.magnitude, "magnitude")
        position = _floats(self.position, "position")
        if len(magnitude) != _ARITY[load_type][1]:
            raise InvalidGeometry(
                f"{load_type} load needs {_ARITY[load_type][1]} magnitude(s), got {len(magnitude)}", kind="load"
            )
        _check_positions(load_type, position)
        object.__setattr__(self, "magnitude", magnitude)
        object.__setattr__(self, "position", position)

    @property
    def start(self) -> float:
        return self.position[0]

    @property
    def end(self) -> float:
        return self.position[-1]

    @property
    def is_distributed(self) -> bool:
        return self.type != "point"

    def intensities(self) -> Tuple[float, float]:
        """(start, end) intensity of a distributed load."""
        if self.type == "point":
            raise ValueError("point loads have no intensity")
        if self.type == "udl":
            return self.magnitude[0], self.magnitude[0]
        return self.magnitude[0], self.magnitude[1]

    def resultant(self) -> float:
        """Total downward force."""
        if self.type == "point":
            return self.magnitude[0]
        w0, w1 = self.intensities()
        return 0.5 * (w0 + w1) * (self.end - self.start)

    def centroid(self) -> float:
        if self.type == "point":
            return self.position[0]
        w0, w1 = self.intensities()
        length = self.end - self.start
        if abs(w0 + w1) <= 1e-300:
            return 0.5 * (self.start + self.end)
        return self.start + length * (w0 + 2.0 * w1) / (3.0 * (w0 + w1))

    def first_moment(self, about: float = 0.0) -> float:
        """Moment of the downward load about `about`, exact for sign-changing trapezoids."""
        if self.type == "point":
            return self.magnitude[0] * (self.position[0] - about)
        w0, w1 = self.intensities()
        length = self.end - self.start
        return (self.start - about) * self.resultant() + length * length * (w0 + 2.0 * w1) / 6.0

    def is_zero(self, tol: float = 0.0) -> bool:
        return all(abs(m) <= tol for m in self.magnitude)


@dataclass(frozen=True, slots=True)
class Force:
    """One load case's magnitude(s) inside an applied load."""

    magnitude: Tuple[float, ...]
    load_case: str = "Dead"

    def __post_init__(self) -> None:
        object.__setattr__(self, "magnitude", _floats(self.magnitude, "force magnitude"))
        if not self.magnitude:
            raise InvalidGeometry("force magnitude must have at least one component", kind="load")
        object.__setattr__(self, "load_case", str(self.load_case).strip())


@dataclass(frozen=True)
class AppliedLoad:
    """A load geometry carrying one force per load case (Dead, Live, Wind, ...)."""

    type: LoadType
    position: Tuple[float, ...]
    forces: List[Force] = field(default_factory=list)
    description: Optional[str] = None

    def __post_init__(self) -> None:
        load_type = normalize_load_type(self.type)
        object.__setattr__(self, "type", load_type)
        position = _floats(self.position, "position")
        _check_positions(load_type, position)
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "forces", list(self.forces))

    def load_cases(self) -> List[str]:
        seen: List[str] = []
        for force in self.forces:
            if force.load_case not in seen:
                seen.append(force.load_case)
        return seen

    def as_load(self, magnitude: Tuple[float, ...], name: str = "") -> Load:
        return Load(type=self.type, magnitude=magnitude, position=self.position, name=name)
