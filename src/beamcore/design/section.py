from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Dict, Iterable, Iterator, Mapping, Optional

from beamcore.errors import InvalidGeometry, UnresolvedSection

if TYPE_CHECKING:
    from sectiony import Section

MM = 1e-3
MPA = 1e6


@dataclass(frozen=True)
class SectionProperties:
    """Cross-section and material strengths in SI (m, m^2, m^3, m^4, Pa).

    Zx/Zy are elastic section moduli; Sx is the optional plastic modulus about x.
    """

    name: str
    d: float
    b: float
    Ix: float
    Zx: float
    A: float
    E: float
    Iy: float = 0.0
    Zy: float = 0.0
    material: str = "timber"
    shape: Optional[str] = None
    grade: Optional[str] = None
    Sx: Optional[float] = None
    t_w: Optional[float] = None
    fb: Optional[float] = None
    fs: Optional[float] = None
    fy: Optional[float] = None

    def __post_init__(self) -> None:
        for label in ("Ix", "Zx", "A", "E"):
            value = float(getattr(self, label))
            if not value > 0.0:
                raise InvalidGeometry(f"section {self.name!r}: {label} must be positive, got {value}", kind="section")
        for label in ("d", "b", "Iy", "Zy"):
            if float(getattr(self, label)) < 0.0:
                raise InvalidGeometry(f"section {self.name!r}: {label} must be non-negative", kind="section")

    @property
    def web_area(self) -> float:
        if self.t_w:
            return self.t_w * self.d
        return self.A

    def scaled(self, count: int) -> "SectionProperties":
        """Properties of `count` identical members acting together."""
        if int(count) != count or count < 1:
            raise InvalidGeometry(f"section count must be a positive integer, got {count}", kind="section")
        if count == 1:
            return self
        return replace(
            self,
            Ix=self.Ix * count,
            Zx=self.Zx * count,
            A=self.A * count,
            Sx=None if self.Sx is None else self.Sx * count,
        )

    @classmethod
    def from_mm(
        cls,
        name: str,
        d: float,
        b: float,
        Ix: float,
        Zx: float,
        A: float,
        E: float,
        Iy: float = 0.0,
        Zy: float = 0.0,
        Sx: Optional[float] = None,
        t_w: Optional[float] = None,
        fb: Optional[float] = None,
        fs: Optional[float] = None,
        fy: Optional[float] = None,
        **kwargs,
    ) -> "SectionProperties":
        """Build from library values tabulated in mm, mm^2, mm^3, mm^4 and MPa."""

        def mpa(value: Optional[float]) -> Optional[float]:
            return None if value is None else float(value) * MPA

        return cls(
            name=name,
            d=float(d) * MM,
            b=float(b) * MM,
            Ix=float(Ix) * MM**4,
            Iy=float(Iy) * MM**4,
            Zx=float(Zx) * MM**3,
            Zy=float(Zy) * MM**3,
            A=float(A) * MM**2,
            E=float(E) * MPA,
            Sx=None if Sx is None else float(Sx) * MM**3,
            t_w=None if t_w is None else float(t_w) * MM,
            fb=mpa(fb),
            fs=mpa(fs),
            fy=mpa(fy),
            **kwargs,
        )

    @classmethod
    def from_sectiony(
        cls,
        section: "Section",
        E: float,
        name: Optional[str] = None,
        axis: str = "y",
        **kwargs,
    ) -> "SectionProperties":
        """Properties from a sectiony section (SI units assumed); `axis` is the bending axis."""
        other = "z" if axis == "y" else "y"
        # extreme fibre distances measured perpendicular to the bending axis give the depth
        half_depth = getattr(section, f"{other}_max", None) or 0.0
        half_width = getattr(section, f"{axis}_max", None) or 0.0
        ix = float(getattr(section, f"I{axis}"))
        zx = getattr(section, f"S{axis}", None) or (ix / abs(half_depth) if half_depth else 0.0)
        return cls(
            name=name or getattr(section, "name", None) or "sectiony section",
            d=2.0 * abs(half_depth),
            b=2.0 * abs(half_width),
            Ix=ix,
            Iy=float(getattr(section, f"I{other}")),
            Zx=float(zx),
            Zy=float(getattr(section, f"S{other}", None) or 0.0),
            A=float(section.A),
            E=float(E),
            **kwargs,
        )


class SectionLibrary:
    """Name to SectionProperties lookup."""

    def __init__(self, sections: Iterable[SectionProperties] = ()) -> None:
        self._sections: Dict[str, SectionProperties] = {}
        for section in sections:
            self.add(section)

    def add(self, section: SectionProperties) -> None:
        self._sections[section.name] = section

    def resolve(self, name: Optional[str]) -> SectionProperties:
        if name is None or name not in self._sections:
            raise UnresolvedSection(name)
        return self._sections[name]

    def __contains__(self, name: object) -> bool:
        return name in self._sections

    def __len__(self) -> int:
        return len(self._sections)

    def __iter__(self) -> Iterator[SectionProperties]:
        return iter(self._sections.values())

    @classmethod
    def from_mm_records(cls, records: Iterable[Mapping]) -> "SectionLibrary":
        return cls(SectionProperties.from_mm(**dict(record)) for record in records)
