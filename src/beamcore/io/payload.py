from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Union

from beamcore.analysis.results import AnalysisResult
from beamcore.errors import InvalidGeometry
from beamcore.model.geometry import BeamGeometry
from beamcore.model.loads import Load, normalize_load_type
from beamcore.model.supports import RESTRAINTS, Support, fixity_from_restraints, normalize_fixity

SCHEMA_VERSION = "0.1.0"

# Vertical load type names used by the design service payloads.
_SERVICE_LOAD_TYPES = {
    "udl_vert": "udl",
    "pointload_vert": "point",
    "trapezoidal_vert": "trapezoidal",
    "trapezoidalload_vert": "trapezoidal",
}


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _floats(value: Any, label: str) -> List[float]:
    try:
        return [float(v) for v in _as_list(value)]
    except (TypeError, ValueError) as exc:
        raise InvalidGeometry(f"invalid {label} {value!r}", kind="load") from exc


def _load_type(value: str) -> str:
    key = str(value).strip().lower()
    if key in _SERVICE_LOAD_TYPES:
        return _SERVICE_LOAD_TYPES[key]
    return normalize_load_type(value)


def _support_from_dict(data: Mapping[str, Any]) -> Support:
    if "position" not in data:
        raise InvalidGeometry("invalid support: missing position")
    fixity_raw = data["fixity"] if "fixity" in data else "pinned"
    if isinstance(fixity_raw, (list, tuple)):
        fixity = fixity_from_restraints(fixity_raw)
    else:
        fixity = normalize_fixity(fixity_raw)
    return Support(position=float(data["position"]), fixity=fixity)


def load_from_dict(data: Mapping[str, Any], downward_negative: bool = False) -> Load:
    """One load entry; `downward_negative` flips payloads that use negative-down magnitudes."""
    if "type" not in data or "magnitude" not in data or "position" not in data:
        raise InvalidGeometry("invalid load: needs type, magnitude and position", kind="load")
    magnitude = _floats(data["magnitude"], "magnitude")
    if downward_negative:
        magnitude = [-m for m in magnitude]
    return Load(
        type=_load_type(data["type"]),  # type: ignore[arg-type]
        magnitude=tuple(magnitude),
        position=tuple(_floats(data["position"], "position")),
        name=str(data["name"]) if "name" in data else "",
    )


def geometry_from_dict(data: Mapping[str, Any], downward_negative: bool = False) -> BeamGeometry:
    for key in ("span", "E", "I"):
        if key not in data:
            raise InvalidGeometry(f"invalid beam payload: missing {key}")
    supports = [_support_from_dict(s) for s in (data["supports"] if "supports" in data else [])]
    loads = [load_from_dict(item, downward_negative) for item in (data["loads"] if "loads" in data else [])]
    return BeamGeometry(
        span=float(data["span"]),
        E=float(data["E"]),
        I=float(data["I"]),
        A=float(data["A"]) if "A" in data else 0.0,
        supports=tuple(supports),
        loads=tuple(loads),
    )


def _compact(values: Sequence[float]) -> Union[float, List[float]]:
    return values[0] if len(values) == 1 else list(values)


def geometry_to_dict(
    geometry: BeamGeometry,
    downward_negative: bool = False,
    fixity_as_restraints: bool = False,
) -> Dict[str, Any]:
    sign = -1.0 if downward_negative else 1.0
    return {
        "schema": SCHEMA_VERSION,
        "span": geometry.span,
        "E": geometry.E,
        "I": geometry.I,
        "A": geometry.A,
        "supports": [
            {
                "position": s.position,
                "fixity": [int(r) for r in RESTRAINTS[s.fixity]] if fixity_as_restraints else s.fixity,
            }
            for s in geometry.supports
        ],
        "loads": [
            {
                "type": load.type,
                "magnitude": _compact([sign * m for m in load.magnitude]),
                "position": _compact(load.position),
                **({"name": load.name} if load.name else {}),
            }
            for load in geometry.loads
        ],
    }


def result_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    """Beam analysis output: sampled diagrams, reactions keyed by position string, peaks as [x, value]."""
    return {
        "schema": SCHEMA_VERSION,
        "x_values": result.x_values.tolist(),
        "shear_force": result.shear_force.tolist(),
        "bending_moment": result.bending_moment.tolist(),
        "deflection": result.deflection.tolist(),
        "rotation": result.rotation.tolist(),
        "normal_force": result.normal_force.tolist(),
        "reactions": result.reactions_dict(),
        "max_shear": list(result.max_shear),
        "max_bending": list(result.max_bending),
        "max_deflection": list(result.max_deflection),
    }
