from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class AnalysisNode:
    id: int
    x: float


@dataclass(frozen=True, slots=True)
class AnalysisElement:
    id: int
    node_i: int
    node_j: int
    length: float
    youngs_modulus: float
    i_z: float

    @property
    def ei(self) -> float:
        return self.youngs_modulus * self.i_z


@dataclass
class AnalysisModel:
    """Index-based arena of beam nodes and the flexural elements joining them."""

    nodes: List[AnalysisNode] = field(default_factory=list)
    elements: List[AnalysisElement] = field(default_factory=list)
    tol: float = 1e-9

    @property
    def n_dofs(self) -> int:
        return 2 * len(self.nodes)

    def add_node(self, x: float) -> int:
        node_id = len(self.nodes)
        self.nodes.append(AnalysisNode(node_id, float(x)))
        return node_id

    def add_element(self, node_i: int, node_j: int, youngs_modulus: float, i_z: float) -> int:
        length = self.nodes[node_j].x - self.nodes[node_i].x
        if length <= 0.0:
            raise ValueError(f"element between nodes {node_i} and {node_j} has non-positive length {length}")
        element_id = len(self.elements)
        self.elements.append(
            AnalysisElement(
                id=element_id,
                node_i=node_i,
                node_j=node_j,
                length=length,
                youngs_modulus=youngs_modulus,
                i_z=i_z,
            )
        )
        return element_id

    def find_node(self, x: float) -> Optional[int]:
        for node in self.nodes:
            if abs(node.x - x) <= self.tol:
                return node.id
        return None

    def node_at(self, x: float) -> int:
        node_id = self.find_node(x)
        if node_id is None:
            raise ValueError(f"no analysis node at x={x}")
        return node_id
