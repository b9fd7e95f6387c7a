from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

from beamcore.errors import InvalidGeometry

Fixity = Literal["pinned", "roller", "fixed", "free"]
FIXITIES: Tuple[Fixity, ...] = ("pinned", "roller", "fixed", "free")

# (x, y, rotation) restraint triple per fixity.
RESTRAINTS = {
    "pinned": (True, True, False),
    "roller": (False, True, False),
    "fixed": (True, True, True),
    "free": (False, False, False),
}


def normalize_fixity(value: str) -> Fixity:
    key = str(value).strip().lower()
    if key not in RESTRAINTS:
        raise InvalidGeometry(f"unknown support fixity {value!r}; expected one of {FIXITIES}")
    return key  # type: ignore[return-value]


def fixity_from_restraints(triple) -> Fixity:
    values = tuple(bool(int(v)) for v in triple)
    if len(values) != 3:
        raise InvalidGeometry(f"fixity restraint triple must have 3 entries, got {list(triple)}")
    for name, restraint in RESTRAINTS.items():
        if restraint == values:
            return name  # type: ignore[return-value]
    raise InvalidGeometry(f"fixity restraint triple {list(triple)} does not match a supported fixity")


@dataclass(frozen=True, slots=True)
class Support:
    """A support at `position` (m from the left end).

    Pinned and roller both restrain vertical translation only as far as the
    solver is concerned; fixed also restrains rotation. A free support adds a
    node without any restraint.
    """

    position: float
    fixity: Fixity = "pinned"

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", float(self.position))
        object.__setattr__(self, "fixity", normalize_fixity(self.fixity))
        if self.position != self.position:
            raise InvalidGeometry("support position must be a real number")
        if self.position < 0.0:
            raise InvalidGeometry(f"support position must be non-negative, got {self.position}")

    @property
    def restrains_vertical(self) -> bool:
        return RESTRAINTS[self.fixity][1]

    @property
    def restrains_rotation(self) -> bool:
        return RESTRAINTS[self.fixity][2]
