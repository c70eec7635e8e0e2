"""Small dense linear-algebra routines: LU and LDL^T solves, symmetric eigensystems.

Matrices are given as sequences of rows.  Inputs are never modified; every
routine works on a float copy and returns its results.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Sequence

Matrix = list[list[float]]


class SingularMatrixError(ValueError):
    """Raised when a decomposition meets a singular (or non-definite) matrix."""


def _square_copy(a: Sequence[Sequence[float]]) -> Matrix:
    rows = [[float(x) for x in row] for row in a]
    n = len(rows)
    if n == 0 or any(len(row) != n for row in rows):
        raise ValueError("matrix must be square and non-empty")
    return rows


def ludcmp(a: Sequence[Sequence[float]]) -> tuple[Matrix, list[int], float]:
    """LU-decompose ``a`` with partial pivoting.

    Returns ``(lu, indx, parity)`` where ``parity`` is +1 or -1 depending on
    the number of row interchanges.
    """
    lu = _square_copy(a)
    n = len(lu)
    parity = 1.0

    scaling = []
    for row in lu:
        big = max(abs(x) for x in row)
        if big == 0.0:
            raise SingularMatrixError("matrix has a zero row")
        scaling.append(1.0 / big)

    indx = [0] * n
    for j in range(n):
        for i in range(j):
            total = lu[i][j]
            for k in range(i):
                total -= lu[i][k] * lu[k][j]
            lu[i][j] = total
        big = 0.0
        imax = j
        for i in range(j, n):
            total = lu[i][j]
            for k in range(j):
                total -= lu[i][k] * lu[k][j]
            lu[i][j] = total
            candidate = scaling[i] * abs(total)
            if candidate > big:
                big = candidate
                imax = i
        if imax != j:
            lu[imax], lu[j] = lu[j], lu[imax]
            parity = -parity
            scaling[imax] = scaling[j]
        indx[j] = imax
        if lu[j][j] == 0.0:
            raise SingularMatrixError("matrix is singular")
        if j != n - 1:
            inv_pivot = 1.0 / lu[j][j]
            for i in range(j + 1, n):
                lu[i][j] *= inv_pivot
    return lu, indx, parity


def lubksb(lu: Sequence[Sequence[float]], indx: Sequence[int],
           b: Sequence[float]) -> list[float]:
    """Solve ``A x = b`` given the output of :func:`ludcmp`."""
    n = len(lu)
    x = [float(v) for v in b]
    if len(x) != n:
        raise ValueError("right-hand side has the wrong length")
    first = -1
    for i in range(n):
        ip = indx[i]
        total = x[ip]
        x[ip] = x[i]
        if first != -1:
            for j in range(first, i):
                total -= lu[i][j] * x[j]
        elif total:
            first = i
        x[i] = total
    for i in reversed(range(n)):
        total = x[i]
        for j in range(i + 1, n):
            total -= lu[i][j] * x[j]
        x[i] = total / lu[i][i]
    return x


def ldltdc(a: Sequence[Sequence[float]]) -> tuple[Matrix, list[float]]:
    """LDL^T-decompose a symmetric positive-definite matrix.

    Returns ``(factored, rdiag)``; the lower triangle of ``factored`` holds
    the factor and ``rdiag`` the reciprocals of the diagonal.
    """
    m = _square_copy(a)
    n = len(m)
    rdiag = [0.0] * n
    for i in range(n):
        v = [m[i][k] * rdiag[k] for k in range(i)]
        for j in range(i, n):
            total = m[i][j]
            for k in range(i):
                total -= v[k] * m[j][k]
            if i == j:
                if total <= 0.0:
                    raise SingularMatrixError("matrix is not positive definite")
                rdiag[i] = 1.0 / total
            else:
                m[j][i] = total
    return m, rdiag


def ldltsl(a: Sequence[Sequence[float]], rdiag: Sequence[float],
           b: Sequence[float]) -> list[float]:
    """Solve ``A x = b`` given the output of :func:`ldltdc`."""
    n = len(a)
    if len(b) != n:
        raise ValueError("right-hand side has the wrong length")
    x = [0.0] * n
    for i in range(n):
        total = float(b[i])
        for k in range(i):
            total -= a[i][k] * x[k]
        x[i] = total * rdiag[i]
    for i in reversed(range(n)):
        total = 0.0
        for k in range(i + 1, n):
            total += a[k][i] * x[k]
        x[i] -= total * rdiag[i]
    return x


def eigdc(a: Sequence[Sequence[float]]) -> tuple[list[float], Matrix]:
    """Eigen-decompose a real symmetric matrix (Householder + QL).

    Returns ``(eigenvalues, vectors)`` with eigenvalues sorted ascending and
    the columns of ``vectors`` holding the matching eigenvectors.
    """
    m = _square_copy(a)
    n = len(m)

    d = list(m[n - 1])
    e = [0.0] * n
    for i in range(n - 1, 0, -1):
        scale = sum(abs(d[k]) for k in range(i))
        if scale == 0.0:
            e[i] = d[i - 1]
            for j in range(i):
                d[j] = m[i - 1][j]
                m[i][j] = 0.0
                m[j][i] = 0.0
            d[i] = 0.0
            continue
        h = 0.0
        inv_scale = 1.0 / scale
        for k in range(i):
            d[k] *= inv_scale
            h += d[k] * d[k]
        f = d[i - 1]
        g = -math.sqrt(h) if f > 0.0 else math.sqrt(h)
        e[i] = scale * g
        h -= f * g
        d[i - 1] = f - g
        for j in range(i):
            e[j] = 0.0
        for j in range(i):
            f = d[j]
            m[j][i] = f
            g = e[j] + f * m[j][j]
            for k in range(j + 1, i):
                g += m[k][j] * d[k]
                e[k] += m[k][j] * f
            e[j] = g
        f = 0.0
        inv_h = 1.0 / h
        for j in range(i):
            e[j] *= inv_h
            f += e[j] * d[j]
        hh = f / (h + h)
        for j in range(i):
            e[j] -= hh * d[j]
        for j in range(i):
            f = d[j]
            g = e[j]
            for k in range(j, i):
                m[k][j] -= f * e[k] + g * d[k]
            d[j] = m[i - 1][j]
            m[i][j] = 0.0
        d[i] = h

    for i in range(n - 1):
        m[n - 1][i] = m[i][i]
        m[i][i] = 1.0
        h = d[i + 1]
        if h != 0.0:
            inv_h = 1.0 / h
            for k in range(i + 1):
                d[k] = m[k][i + 1] * inv_h
            for j in range(i + 1):
                g = 0.0
                for k in range(i + 1):
                    g += m[k][i + 1] * m[k][j]
                for k in range(i + 1):
                    m[k][j] -= g * d[k]
        for k in range(i + 1):
            m[k][i + 1] = 0.0
    for j in range(n):
        d[j] = m[n - 1][j]
        m[n - 1][j] = 0.0
    m[n - 1][n - 1] = 1.0

    e = e[1:] + [0.0]
    f = 0.0
    tol = 0.0
    eps = sys.float_info.epsilon
    for l in range(n):
        tol = max(tol, abs(d[l]) + abs(e[l]))
        k_end = l
        while k_end < n and abs(e[k_end]) > eps * tol:
            k_end += 1
        if k_end > l:
            while True:
                g = d[l]
                p = (d[l + 1] - g) / (e[l] + e[l])
                r = math.hypot(p, 1.0)
                if p < 0.0:
                    r = -r
                d[l] = e[l] / (p + r)
                d[l + 1] = e[l] * (p + r)
                dl1 = d[l + 1]
                h = g - d[l]
                for i in range(l + 2, n):
                    d[i] -= h
                f += h
                p = d[k_end]
                c = c2 = c3 = 1.0
                el1 = e[l + 1]
                s = s2 = 0.0
                for i in range(k_end - 1, l - 1, -1):
                    c3 = c2
                    c2 = c
                    s2 = s
                    g = c * e[i]
                    h = c * p
                    r = math.hypot(p, e[i])
                    e[i + 1] = s * r
                    s = e[i] / r
                    c = p / r
                    p = c * d[i] - s * g
                    d[i + 1] = h + s * (c * g + s * d[i])
                    for row in m:
                        h = row[i + 1]
                        row[i + 1] = s * row[i] + c * h
                        row[i] = c * row[i] - s * h
                p = -s * s2 * c3 * el1 * e[l] / dl1
                e[l] = s * p
                d[l] = c * p
                if abs(e[l]) <= eps * tol:
                    break
        d[l] += f
        e[l] = 0.0

    for i in range(n - 1):
        k = i
        p = d[i]
        for j in range(i + 1, n):
            if d[j] < p:
                k = j
                p = d[j]
        if k == i:
            continue
        d[k] = d[i]
        d[i] = p
        for row in m:
            row[i], row[k] = row[k], row[i]
    return d, m


def eigmult(a: Sequence[Sequence[float]], d: Sequence[float],
            b: Sequence[float]) -> list[float]:
    """Return ``A * diag(d) * A^T * b``."""
    n = len(a)
    e = [d[i] * sum(a[j][i] * b[j] for j in range(n)) for i in range(n)]
    return [sum(a[i][j] * e[j] for j in range(n)) for i in range(n)]