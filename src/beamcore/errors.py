from __future__ import annotations

from typing import Literal

GeometryErrorKind = Literal["position", "duplicate_support", "load", "section", "unstable"]


class BeamcoreError(Exception):
    """Base class for every error raised by beamcore."""


class InvalidGeometry(BeamcoreError, ValueError):
    """Bad span, support or load description (a precondition failure)."""

    def __init__(self, message: str, kind: GeometryErrorKind = "position") -> None:
        super().__init__(message)
        self.kind: GeometryErrorKind = kind


class UnstableStructure(InvalidGeometry):
    """Supports do not prevent rigid-body motion of the beam."""

    def __init__(self, message: str) -> None:
        super().__init__(message, kind="unstable")


class NumericalInstability(BeamcoreError, ArithmeticError):
    """The reduced stiffness system is ill-conditioned or produced non-finite values."""

    def __init__(self, message: str, condition_number: float = float("inf")) -> None:
        super().__init__(message)
        self.condition_number = float(condition_number)


class UnresolvedSection(BeamcoreError, LookupError):
    """A section name has no matching properties."""

    def __init__(self, name: str | None) -> None:
        label = "<none>" if name is None else repr(name)
        super().__init__(f"section {label} could not be resolved to section properties")
        self.name = name


class UndefinedCombination(BeamcoreError):
    """A combination has nothing to analyse: no active factors, reaction-only, or all-zero loads.

    This is a "nothing to show" state, not a design failure.
    """

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"combination {name!r} is undefined: {reason}")
        self.name = name
        self.reason = reason
