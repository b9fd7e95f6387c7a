from __future__ import annotations

import numpy as np


def beam_stiffness(ei: float, length: float) -> np.ndarray:
    """Euler-Bernoulli bending stiffness for dofs (v_i, theta_i, v_j, theta_j)."""
    L = float(length)
    L2 = L * L
    c = ei / (L2 * L)
    return c * np.array(
        [
            [12.0, 6.0 * L, -12.0, 6.0 * L],
            [6.0 * L, 4.0 * L2, -6.0 * L, 2.0 * L2],
            [-12.0, -6.0 * L, 12.0, -6.0 * L],
            [6.0 * L, 2.0 * L2, -6.0 * L, 4.0 * L2],
        ],
        dtype=float,
    )


# Three Gauss points integrate a cubic shape function times a linear intensity exactly.
_GAUSS_POINTS, _GAUSS_WEIGHTS = np.polynomial.legendre.leggauss(3)


def hermite_shape(s: float, length: float) -> np.ndarray:
    """Cubic Hermite shape functions at local coordinate s in [0, length]."""
    L = float(length)
    xi = s / L
    xi2 = xi * xi
    xi3 = xi2 * xi
    return np.array(
        [
            1.0 - 3.0 * xi2 + 2.0 * xi3,
            L * (xi - 2.0 * xi2 + xi3),
            3.0 * xi2 - 2.0 * xi3,
            L * (xi3 - xi2),
        ],
        dtype=float,
    )


def point_fixed_end_forces(force: float, a: float, length: float) -> np.ndarray:
    """Equivalent nodal loads of an upward point force at distance a from node i."""
    L = float(length)
    b = L - a
    L2 = L * L
    return force * np.array(
        [
            b * b * (3.0 * a + b) / (L2 * L),
            a * b * b / L2,
            a * a * (a + 3.0 * b) / (L2 * L),
            -a * a * b / L2,
        ],
        dtype=float,
    )


def linear_fixed_end_forces(w_a: float, w_b: float, a: float, b: float, length: float) -> np.ndarray:
    """Equivalent nodal loads of an upward intensity varying w_a -> w_b over local [a, b]."""
    half = 0.5 * (b - a)
    mid = 0.5 * (a + b)
    out = np.zeros(4, dtype=float)
    for point, weight in zip(_GAUSS_POINTS, _GAUSS_WEIGHTS):
        t = 0.5 * (point + 1.0)
        w = w_a + (w_b - w_a) * t
        out += weight * half * w * hermite_shape(mid + half * point, length)
    return out


def element_dofs(node_i: int, node_j: int) -> list[int]:
    return [2 * node_i, 2 * node_i + 1, 2 * node_j, 2 * node_j + 1]
