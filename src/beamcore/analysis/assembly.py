from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from beamcore.analysis.elements import (
    beam_stiffness,
    element_dofs,
    linear_fixed_end_forces,
    point_fixed_end_forces,
)
from beamcore.analysis.model import AnalysisModel
from beamcore.model.geometry import BeamGeometry
from beamcore.model.loads import Load


@dataclass
class AssemblyResult:
    k_full: np.ndarray
    f_full: np.ndarray
    free_dofs: List[int]
    restrained_dofs: List[int]
    mask: List[bool]


def load_intensity(load: Load, x: float) -> float:
    """Upward intensity of a distributed load at x (positive-down magnitudes are negated)."""
    w0, w1 = load.intensities()
    t = (x - load.start) / (load.end - load.start)
    t = min(max(t, 0.0), 1.0)
    return -(w0 + (w1 - w0) * t)


def clip_load(load: Load, lo: float, hi: float) -> Optional[Tuple[float, float, float, float]]:
    """Part of a distributed load inside [lo, hi] as (start, end, w_start, w_end), upward."""
    a = max(load.start, lo)
    b = min(load.end, hi)
    if b <= a:
        return None
    return a, b, load_intensity(load, a), load_intensity(load, b)


def _add_static(f_full: np.ndarray, node: int, force: float, moment: float) -> None:
    # Overhang loads: resultant force plus its counter-clockwise moment about the node.
    f_full[2 * node] += force
    f_full[2 * node + 1] += moment


def _point_load(model: AnalysisModel, f_full: np.ndarray, x: float, force: float) -> None:
    node = model.find_node(x)
    if node is not None:
        f_full[2 * node] += force
        return
    first, last = model.nodes[0], model.nodes[-1]
    if x < first.x:
        _add_static(f_full, first.id, force, force * (x - first.x))
        return
    if x > last.x:
        _add_static(f_full, last.id, force, force * (x - last.x))
        return
    for element in model.elements:
        x_i = model.nodes[element.node_i].x
        if x_i < x < model.nodes[element.node_j].x:
            dofs = element_dofs(element.node_i, element.node_j)
            f_full[dofs] += point_fixed_end_forces(force, x - x_i, element.length)
            return


def _distributed_load(model: AnalysisModel, f_full: np.ndarray, load: Load, span: float) -> None:
    first, last = model.nodes[0], model.nodes[-1]
    for node, lo, hi in ((first, 0.0, first.x), (last, last.x, span)):
        part = clip_load(load, lo, hi)
        if part is None:
            continue
        a, b, w_a, w_b = part
        length = b - a
        force = 0.5 * (w_a + w_b) * length
        moment = (a - node.x) * force + length * length * (w_a + 2.0 * w_b) / 6.0
        _add_static(f_full, node.id, force, moment)

    for element in model.elements:
        x_i = model.nodes[element.node_i].x
        part = clip_load(load, x_i, model.nodes[element.node_j].x)
        if part is None:
            continue
        a, b, w_a, w_b = part
        dofs = element_dofs(element.node_i, element.node_j)
        f_full[dofs] += linear_fixed_end_forces(w_a, w_b, a - x_i, b - x_i, element.length)


def assemble_global_system(model: AnalysisModel, geometry: BeamGeometry) -> AssemblyResult:
    total_dofs = model.n_dofs
    mask = [False for _ in range(total_dofs)]

    # Apply supports
    for support in geometry.restraining_supports():
        base = 2 * model.node_at(support.position)
        if support.restrains_vertical:
            mask[base] = True
        if support.restrains_rotation:
            mask[base + 1] = True

    k_full = np.zeros((total_dofs, total_dofs), dtype=float)
    f_full = np.zeros(total_dofs, dtype=float)

    for element in model.elements:
        dofs = element_dofs(element.node_i, element.node_j)
        k_full[np.ix_(dofs, dofs)] += beam_stiffness(element.ei, element.length)

    for load in geometry.loads:
        if load.is_distributed:
            _distributed_load(model, f_full, load, geometry.span)
        else:
            _point_load(model, f_full, load.position[0], -load.magnitude[0])

    free_dofs = [i for i, restrained in enumerate(mask) if not restrained]
    restrained_dofs = [i for i, restrained in enumerate(mask) if restrained]

    return AssemblyResult(
        k_full=k_full,
        f_full=f_full,
        free_dofs=free_dofs,
        restrained_dofs=restrained_dofs,
        mask=mask,
    )
