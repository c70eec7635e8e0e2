"""Geometry the renderer draws besides the model: a ground disc and a screen quad."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

Vec4 = tuple[float, float, float, float]
Vec2 = tuple[float, float]

_GROUND_NORMAL: Vec4 = (0.0, 1.0, 0.0, 0.0)
_GROUND_COLOR: Vec4 = (0.6, 0.85, 0.9, 1.0)
# The disc reaches this many bounding-sphere radii from the model's center.
_GROUND_EXTENT = 5.0


@dataclass(frozen=True)
class GroundMesh:
    """A disc of rings and spokes below the model.

    Vertex ``i + j * num_r`` lies on ring ``i`` and spoke ``j``.  ``indices``
    holds triangles, three entries each.
    """

    vertices: list[Vec4]
    normals: list[Vec4]
    colors: list[Vec4]
    texcoords: list[Vec2]
    indices: list[int]

    @property
    def num_points(self) -> int:
        return len(self.vertices)

    @property
    def num_indices(self) -> int:
        return len(self.indices)


@dataclass(frozen=True)
class ScreenQuad:
    """Two triangles covering the whole viewport in clip space."""

    vertices: list[Vec4]
    normals: list[Vec4]
    colors: list[Vec4]
    texcoords: list[Vec2]
    indices: list[int]

    @property
    def num_faces(self) -> int:
        return len(self.indices) // 3


def ground_geometry(center: Sequence[float], radius: float,
                    ground_distance: float, num_r: int = 10,
                    num_th: int = 20) -> GroundMesh:
    """Build the ground disc under a model bounded by a sphere.

    The disc is centred below ``center`` at a depth of
    ``ground_distance * radius`` and extends to five radii.  Texture
    coordinates span the same disc with a unit radius of one.
    """
    if num_r < 1 or num_th < 1:
        raise ValueError("the ground needs at least one ring and one spoke")
    if len(center) not in (3, 4):
        raise ValueError("center must have 3 or 4 components")
    cx, cy, cz = (float(c) for c in center[:3])
    cw = float(center[3]) if len(center) == 4 else 1.0
    height = cy - ground_distance * radius

    count = num_r * num_th
    vertices: list[Vec4] = [(0.0, 0.0, 0.0, 0.0)] * count
    texcoords: list[Vec2] = [(0.0, 0.0)] * count
    for j in range(num_th):
        theta = j * 2.0 * math.pi / num_th
        cos_t, sin_t = math.cos(theta), math.sin(theta)
        for i in range(num_r):
            p = i + j * num_r
            fraction = i / num_r
            rad = _GROUND_EXTENT * radius * fraction
            vertices[p] = (cx + rad * cos_t, height, cz + rad * sin_t, cw)
            tex_rad = _GROUND_EXTENT * fraction
            texcoords[p] = (tex_rad * cos_t, tex_rad * sin_t)

    indices: list[int] = []
    for i in range(num_r - 1):
        for j in range(num_th):
            j1 = (j + 1) % num_th
            indices += (
                i + j * num_r, i + 1 + j1 * num_r, i + 1 + j * num_r,
                i + j * num_r, i + j1 * num_r, i + 1 + j1 * num_r,
            )

    return GroundMesh(
        vertices=vertices,
        normals=[_GROUND_NORMAL] * count,
        colors=[_GROUND_COLOR] * count,
        texcoords=texcoords,
        indices=indices,
    )


def gpgpu_quad() -> ScreenQuad:
    """The full-screen quad a fragment shader draws a computed image onto."""
    return ScreenQuad(
        vertices=[(-1.0, -1.0, 0.0, 1.0), (-1.0, 1.0, 0.0, 1.0),
                  (1.0, -1.0, 0.0, 1.0), (1.0, 1.0, 0.0, 1.0)],
        normals=[(0.0, 0.0, -1.0, 0.0)] * 4,
        colors=[(0.0, 0.0, 1.0, 1.0)] * 4,
        texcoords=[(0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0)],
        indices=[0, 2, 1, 1, 2, 3],
    )


def normalized_mouse(x: float, y: float, width: float, height: float,
                     screen_size: float) -> Vec2:
    """Mouse position relative to the window centre, scaled by the larger
    window dimension so the longer axis spans -1..1."""
    if screen_size <= 0:
        raise ValueError("screen size must be positive")
    scale = 2.0 / screen_size
    return scale * (x - 0.5 * width), scale * (y - 0.5 * height)