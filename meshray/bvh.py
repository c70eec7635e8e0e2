"""Bounding volume hierarchy over the triangles of a mesh.

Nodes are stored in depth-first order: an interior node's left child is the
node right after it, and its ``index`` names the right child.  A leaf's
``index`` is the position of its first triangle in :attr:`BVH.triangles`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from meshray.geometry import BBox, Vector3

LEAF_SIZE = 4


@dataclass(frozen=True)
class Triangle:
    """Three vertex indices."""

    indices: tuple[int, int, int]

    def bbox(self, vertices: Sequence[Vector3]) -> BBox:
        """Bounding box of the triangle's three vertices."""
        box = BBox.from_point(vertices[self.indices[0]])
        box.expand(vertices[self.indices[1]])
        box.expand(vertices[self.indices[2]])
        return box


@dataclass
class Node:
    """A BVH node; ``nb_triangles`` is 0 for interior nodes."""

    bbox: BBox
    nb_triangles: int
    index: int

    def is_leaf(self) -> bool:
        return self.nb_triangles > 0


class BVH:
    """Hierarchy built by mid-point splitting, falling back to the median."""

    def __init__(self, vertices: Sequence[Sequence[float]],
                 faces: Sequence[Sequence[int]]) -> None:
        if not faces:
            raise ValueError("cannot build a hierarchy without faces")
        self._vertices = [Vector3(float(p[0]), float(p[1]), float(p[2]))
                          for p in vertices]
        self._triangles: list[Triangle] = []
        for face in faces:
            indices = (int(face[0]), int(face[1]), int(face[2]))
            if any(not 0 <= i < len(self._vertices) for i in indices):
                raise IndexError(f"face {tuple(face)} refers to a missing vertex")
            self._triangles.append(Triangle(indices))
        self._nodes: list[Node] = []
        self._build()

    @property
    def nodes(self) -> list[Node]:
        return self._nodes

    @property
    def triangles(self) -> list[Triangle]:
        return self._triangles

    def _centroid(self, triangle: Triangle, dim: int) -> float:
        return triangle.bbox(self._vertices).centroid()[dim]

    def _build(self) -> None:
        # Each task is (start, end, parent whose right-child index to set).
        tasks: list[tuple[int, int, int]] = [(0, len(self._triangles), -1)]
        while tasks:
            start, end, parent = tasks.pop()
            node_index = len(self._nodes)
            if parent >= 0:
                self._nodes[parent].index = node_index

            bbox = BBox.empty()
            for triangle in self._triangles[start:end]:
                bbox.expand(triangle.bbox(self._vertices))

            count = end - start
            if count <= LEAF_SIZE:
                self._nodes.append(Node(bbox, count, start))
                continue

            dim = bbox.max_dimension()
            mid_coord = bbox.centroid()[dim]
            chunk = self._triangles[start:end]
            below = [t for t in chunk if self._centroid(t, dim) < mid_coord]
            above = [t for t in chunk if not self._centroid(t, dim) < mid_coord]
            self._triangles[start:end] = below + above
            middle = start + len(below)

            if middle in (start, end):
                middle = (start + end) // 2
                self._triangles[start:end] = sorted(
                    self._triangles[start:end],
                    key=lambda t: self._centroid(t, dim))

            self._nodes.append(Node(bbox, 0, 0))
            tasks.append((middle, end, node_index))
            tasks.append((start, middle, -1))