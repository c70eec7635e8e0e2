# meshray

Pure-Python building blocks for rendering triangle meshes with a ray tracer:

- `meshray.linalg` – small dense solvers: LU decomposition (`ludcmp`, `lubksb`),
  LDLᵀ decomposition (`ldltdc`, `ldltsl`) and symmetric eigen-decomposition
  (`eigdc`, `eigmult`). Singular or non-positive-definite systems raise
  `SingularMatrixError`. Inputs are never modified.
- `meshray.xform` – `XForm`, a 4×4 column-major transform with translation,
  rotation, scaling, orthographic and frustum constructors, inversion,
  transposition, `rot_only`, `trans_only`, `norm_xf`, `orthogonalized`, and
  reading/writing of text `.xf` files (`XForm.parse`, `XForm.read`,
  `XForm.write`; `xfname` gives the `.xf` name for a scan file).
- `meshray.geometry` – the immutable `Vector3` and the axis-aligned `BBox`.
- `meshray.bvh` – `BVH`, a bounding volume hierarchy over mesh faces,
  flattened into a depth-first list of `Node`s and a reordered list of
  `Triangle`s, ready for upload to a GPU. Leaves hold at most four triangles.
- `meshray.ground` – `ground_geometry()` for the disc-shaped ground under a
  model, `gpgpu_quad()` for the full-screen quad used to display a computed
  image, and `normalized_mouse()` for trackball coordinates.
- `meshray.shading` – `ShadingSettings` (light intensity, Phong exponent,
  index of refraction, specular model, transparency), plus `next_power2`,
  `perspective_for_size` and `dispatch_size`.
- `meshray.strutil` – `replace_ext` and case-insensitive `begins_with` /
  `ends_with`.

## Installation

```
pip install .
```

## Examples

Build a BVH over a mesh:

```python
from meshray.bvh import BVH

vertices = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)]
faces = [(0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3)]
bvh = BVH(vertices, faces)
root = bvh.nodes[0]
print(root.is_leaf(), len(bvh.triangles))
```

Compose and invert transforms:

```python
import math
from meshray.xform import XForm

xf = XForm.trans(1, 2, 3) * XForm.rot(math.pi / 2, 0, 0, 1)
print(xf.inverse() * xf)
```

Work out compute dispatch and projection for a window:

```python
from meshray.shading import dispatch_size, perspective_for_size

print(dispatch_size(640, 480))            # (128, 64)
print(perspective_for_size(640, 480, 1.0))
```

## What this package does not do

It has no command-line program and no viewer window: it does not open an
OpenGL context, load mesh or image files, compile shaders or draw anything.
It does not compute bounding spheres or noise textures. It supplies the
geometry, transforms and settings such a renderer works with.

## Tests

```
pip install .[test]
pytest
```