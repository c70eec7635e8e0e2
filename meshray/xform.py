"""4x4 homogeneous transformations stored in column-major (OpenGL) order."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Union

from meshray.linalg import SingularMatrixError, lubksb, ludcmp
from meshray.strutil import replace_ext

_IDENTITY = (1.0, 0.0, 0.0, 0.0,
             0.0, 1.0, 0.0, 0.0,
             0.0, 0.0, 1.0, 0.0,
             0.0, 0.0, 0.0, 1.0)

Key = Union[int, tuple[int, int]]


def _index(key: Key) -> int:
    if isinstance(key, tuple):
        row, col = key
        if not (0 <= row < 4 and 0 <= col < 4):
            raise IndexError("row and column must be in 0..3")
        return row + 4 * col
    if not -16 <= key < 16:
        raise IndexError("index must be in 0..15")
    return key % 16


class XForm:
    """A 4x4 matrix; element ``(r, c)`` lives at flat index ``r + 4 * c``.

    ``XForm()`` is the identity, ``XForm(m0, ..., m15)`` takes sixteen values
    in column-major order, and ``XForm(iterable)`` takes them from any
    iterable of sixteen numbers.
    """

    __slots__ = ("_m",)

    def __init__(self, *args) -> None:
        if not args:
            values = list(_IDENTITY)
        elif len(args) == 1:
            values = [float(x) for x in args[0]]
        else:
            values = [float(x) for x in args]
        if len(values) != 16:
            raise ValueError("an XForm needs exactly 16 values")
        self._m = values

    # --- element access -------------------------------------------------

    def __getitem__(self, key: Key) -> float:
        return self._m[_index(key)]

    def __setitem__(self, key: Key, value: float) -> None:
        self._m[_index(key)] = float(value)

    def __iter__(self) -> Iterator[float]:
        return iter(self._m)

    def __len__(self) -> int:
        return 16

    def __repr__(self) -> str:
        return f"XForm({', '.join(repr(x) for x in self._m)})"

    # --- arithmetic -----------------------------------------------------

    def __add__(self, other: XForm) -> XForm:
        if not isinstance(other, XForm):
            return NotImplemented
        return XForm(a + b for a, b in zip(self._m, other._m))

    def __sub__(self, other: XForm) -> XForm:
        if not isinstance(other, XForm):
            return NotImplemented
        return XForm(a - b for a, b in zip(self._m, other._m))

    def __mul__(self, other):
        """Matrix product with an XForm, or the image of a 4-vector."""
        m = self._m
        if isinstance(other, XForm):
            o = other._m
            return XForm(
                sum(m[r + 4 * k] * o[k + 4 * c] for k in range(4))
                for c in range(4) for r in range(4)
            )
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            if len(other) != 4:
                raise ValueError("only 4-component vectors can be transformed")
            v = [float(x) for x in other]
            return tuple(
                sum(m[r + 4 * k] * v[k] for k in range(4)) for r in range(4)
            )
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, XForm):
            return NotImplemented
        return self._m == other._m

    __hash__ = None  # mutable

    def _format(self, precision: int) -> str:
        return "".join(
            " ".join(format(self._m[r + 4 * c], f".{precision}g") for c in range(4))
            + "\n"
            for r in range(4)
        )

    def __str__(self) -> str:
        return self._format(6)

    # --- constructors ---------------------------------------------------

    @classmethod
    def identity(cls) -> XForm:
        return cls()

    @classmethod
    def trans(cls, tx, ty=None, tz=None) -> XForm:
        """Translation by ``(tx, ty, tz)`` or by a 3-sequence passed as ``tx``."""
        if ty is None and tz is None:
            tx, ty, tz = tx[0], tx[1], tx[2]
        return cls(1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, tx, ty, tz, 1)

    @classmethod
    def rot(cls, angle, rx, ry=None, rz=None) -> XForm:
        """Rotation by ``angle`` radians about an axis (components or a sequence)."""
        if ry is None and rz is None:
            rx, ry, rz = rx[0], rx[1], rx[2]
        length = math.sqrt(rx * rx + ry * ry + rz * rz)
        if length == 0.0:
            return cls()
        x, y, z = rx / length, ry / length, rz / length
        s, c = math.sin(angle), math.cos(angle)
        xs, ys, zs, c1 = x * s, y * s, z * s, 1.0 - c
        xx, yy, zz = c1 * x * x, c1 * y * y, c1 * z * z
        xy, xz, yz = c1 * x * y, c1 * x * z, c1 * y * z
        return cls(xx + c, xy + zs, xz - ys, 0,
                   xy - zs, yy + c, yz + xs, 0,
                   xz + ys, yz - xs, zz + c, 0,
                   0, 0, 0, 1)

    @classmethod
    def rot_into(cls, d1: Sequence[float], d2: Sequence[float]) -> XForm:
        """Rotation taking direction ``d1`` onto direction ``d2``."""
        l1 = math.sqrt(sum(x * x for x in d1[:3]))
        l2 = math.sqrt(sum(x * x for x in d2[:3]))
        if l1 == 0.0 or l2 == 0.0:
            return cls()
        ax, ay, az = (x / l1 for x in d1[:3])
        bx, by, bz = (x / l2 for x in d2[:3])
        c = ax * bx + ay * by + az * bz
        r1c = 1.0 / (1.0 + c)
        sx = ay * bz - az * by
        sy = az * bx - ax * bz
        sz = ax * by - ay * bx
        return cls(sx * sx * r1c + c, sx * sy * r1c + sz, sx * sz * r1c - sy, 0,
                   sx * sy * r1c - sz, sy * sy * r1c + c, sy * sz * r1c + sx, 0,
                   sx * sz * r1c + sy, sy * sz * r1c - sx, sz * sz * r1c + c, 0,
                   0, 0, 0, 1)

    @classmethod
    def scale(cls, *args) -> XForm:
        """Scaling: ``scale(s)``, ``scale(sx, sy, sz)``, ``scale(s, direction)``
        or ``scale(s, dx, dy, dz)`` (scale by ``s`` along a direction only)."""
        if len(args) == 1:
            s = args[0]
            return cls(s, 0, 0, 0, 0, s, 0, 0, 0, 0, s, 0, 0, 0, 0, 1)
        if len(args) == 3:
            sx, sy, sz = args
            return cls(sx, 0, 0, 0, 0, sy, 0, 0, 0, 0, sz, 0, 0, 0, 0, 1)
        if len(args) == 2:
            s, direction = args
            dx, dy, dz = direction[0], direction[1], direction[2]
        elif len(args) == 4:
            s, dx, dy, dz = args
        else:
            raise TypeError("scale takes 1, 2, 3 or 4 arguments")
        s1 = (s - 1.0) / (dx * dx + dy * dy + dz * dz)
        return cls(1 + s1 * dx * dx, s1 * dx * dy, s1 * dx * dz, 0,
                   s1 * dx * dy, 1 + s1 * dy * dy, s1 * dy * dz, 0,
                   s1 * dx * dz, s1 * dy * dz, 1 + s1 * dz * dz, 0,
                   0, 0, 0, 1)

    @classmethod
    def ortho(cls, l, r, b, t, n, f) -> XForm:
        """Orthographic projection, as glOrtho."""
        rrl, rtb, rfn = 1.0 / (r - l), 1.0 / (t - b), 1.0 / (f - n)
        return cls(2 * rrl, 0, 0, 0,
                   0, 2 * rtb, 0, 0,
                   0, 0, -2 * rfn, 0,
                   -(r + l) * rrl, -(t + b) * rtb, -(f + n) * rfn, 1)

    @classmethod
    def frustum(cls, l, r, b, t, n, f) -> XForm:
        """Perspective projection, as glFrustum."""
        rrl, rtb, rfn = 1.0 / (r - l), 1.0 / (t - b), 1.0 / (f - n)
        return cls(2 * n * rrl, 0, 0, 0,
                   0, 2 * n * rtb, 0, 0,
                   (r + l) * rrl, (t + b) * rtb, -(f + n) * rfn, -1,
                   0, 0, -2 * f * n * rfn, 0)

    @classmethod
    def outer(cls, y: Sequence[float], x: Sequence[float]) -> XForm:
        """Upper 3x3 holds ``y * x^T``; the rest is the identity."""
        result = cls()
        for i in range(3):
            for j in range(3):
                result[4 * i + j] = x[i] * y[j]
        return result

    @classmethod
    def from_array(cls, rows: Sequence[Sequence[float]]) -> XForm:
        """Build from a 3x3 or 4x4 row-major nested sequence."""
        size = len(rows)
        if size not in (3, 4) or any(len(row) != size for row in rows):
            raise ValueError("expected a 3x3 or 4x4 array")
        result = cls()
        for r in range(size):
            for c in range(size):
                result[r, c] = rows[r][c]
        return result

    # --- derived matrices ----------------------------------------------

    def _rows(self) -> list[list[float]]:
        return [[self._m[r + 4 * c] for c in range(4)] for r in range(4)]

    def _is_singular(self) -> bool:
        try:
            ludcmp(self._rows())
        except SingularMatrixError:
            return True
        return False

    def inverse(self) -> XForm:
        """Matrix inverse; a singular matrix yields the identity."""
        try:
            lu, indx, _ = ludcmp(self._rows())
        except SingularMatrixError:
            return XForm()
        columns = [
            lubksb(lu, indx, [1.0 if k == i else 0.0 for k in range(4)])
            for i in range(4)
        ]
        return XForm(x for column in columns for x in column)

    def transposed(self) -> XForm:
        """Transpose; like :meth:`inverse`, a singular matrix yields the identity."""
        if self._is_singular():
            return XForm()
        m = self._m
        return XForm(m[c + 4 * r] for r in range(4) for c in range(4))

    def rot_only(self) -> XForm:
        """Only the upper 3x3 part."""
        m = self._m
        return XForm(m[0], m[1], m[2], 0,
                     m[4], m[5], m[6], 0,
                     m[8], m[9], m[10], 0,
                     0, 0, 0, 1)

    def trans_only(self) -> XForm:
        """Only the translation part."""
        m = self._m
        return XForm(1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, m[12], m[13], m[14], 1)

    def norm_xf(self) -> XForm:
        """Inverse transpose without translation, for transforming normals."""
        result = self.inverse()
        result[12] = result[13] = result[14] = 0.0
        for a, b in ((1, 4), (2, 8), (6, 9)):
            result[a], result[b] = result[b], result[a]
        return result

    def orthogonalized(self) -> XForm:
        """Nearest rigid motion, recovered through its quaternion."""
        m = list(self._m)
        if m[15] == 0.0:
            m[15] = 1.0
        q0 = m[0] + m[5] + m[10] + m[15]
        q1 = m[6] - m[9]
        q2 = m[8] - m[2]
        q3 = m[1] - m[4]
        length = math.sqrt(q0 * q0 + q1 * q1 + q2 * q2 + q3 * q3)
        cosine = max(-1.0, min(1.0, q0 / length))
        result = XForm.rot(2.0 * math.acos(cosine), q1, q2, q3)
        result[12] = m[12] / m[15]
        result[13] = m[13] / m[15]
        result[14] = m[14] / m[15]
        return result

    # --- text I/O -------------------------------------------------------

    @classmethod
    def parse(cls, text: str) -> XForm:
        """Parse whitespace-separated numbers written row by row.

        Three rows are required; a missing or incomplete fourth row is taken
        as ``0 0 0 1``.
        """
        numbers: list[float] = []
        for token in text.split():
            try:
                numbers.append(float(token))
            except ValueError:
                break
            if len(numbers) == 16:
                break
        if len(numbers) < 12:
            raise ValueError("a transformation needs at least three rows of four numbers")
        result = cls()
        for i in range(3):
            for j in range(4):
                result[i + 4 * j] = numbers[4 * i + j]
        if len(numbers) == 16:
            for j in range(4):
                result[3 + 4 * j] = numbers[12 + j]
        return result

    @classmethod
    def read(cls, path: Union[str, Path]) -> XForm:
        """Read a transformation from a file."""
        return cls.parse(Path(path).read_text())

    def write(self, path: Union[str, Path]) -> None:
        """Write the transformation to a file with full precision."""
        Path(path).write_text(self._format(17))


def xfname(filename: str) -> str:
    """The ``.xf`` file name belonging to a scan file."""
    return replace_ext(filename, "xf")