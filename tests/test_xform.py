import math

import pytest

from meshray.xform import XForm, xfname


def approx_xf(xf, tol=1e-9):
    return pytest.approx(list(xf), abs=tol)


def sample():
    return XForm.trans(1.5, -2.0, 0.25) * XForm.rot(0.7, 1.0, 2.0, -0.5) * XForm.scale(1.3, 0.8, 2.1)


def test_default_is_identity():
    assert list(XForm()) == [1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1]
    assert XForm() == XForm.identity()
    assert len(XForm()) == 16


def test_row_column_access_matches_column_major():
    xf = XForm(*range(16))
    for r in range(4):
        for c in range(4):
            assert xf[r, c] == xf[r + 4 * c]


def test_setitem_roundtrip():
    xf = XForm()
    xf[1, 2] = 3.0
    xf[4] = 5.0
    assert xf[9] == 3.0
    assert xf[0, 1] == 5.0


def test_constructor_from_iterable():
    values = [float(i) for i in range(16)]
    assert list(XForm(values)) == values


def test_wrong_value_count_rejected():
    with pytest.raises(ValueError):
        XForm(1, 2, 3)


def test_translation_moves_point():
    xf = XForm.trans(1.0, 2.0, 3.0)
    assert xf * (0.0, 0.0, 0.0, 1.0) == (1.0, 2.0, 3.0, 1.0)
    assert XForm.trans((1.0, 2.0, 3.0)) == xf


def test_translation_leaves_directions_alone():
    xf = XForm.trans(4.0, 5.0, 6.0)
    assert xf * (1.0, 2.0, 3.0, 0.0) == (1.0, 2.0, 3.0, 0.0)


def test_rotation_preserves_length_and_inverts():
    r = XForm.rot(0.9, 0.3, -1.0, 2.0)
    v = r * (1.0, 2.0, 3.0, 0.0)
    assert math.sqrt(sum(x * x for x in v[:3])) == pytest.approx(math.sqrt(14.0))
    back = XForm.rot(-0.9, (0.3, -1.0, 2.0)) * r
    assert list(back) == approx_xf(XForm())


def test_rotation_about_zero_axis_is_identity():
    assert XForm.rot(1.0, 0.0, 0.0, 0.0) == XForm()


def test_rot_into_maps_direction():
    d1, d2 = (1.0, 2.0, 2.0), (0.0, -3.0, 4.0)
    v = XForm.rot_into(d1, d2) * (1.0 / 3, 2.0 / 3, 2.0 / 3, 0.0)
    assert list(v) == pytest.approx([0.0, -0.6, 0.8, 0.0], abs=1e-12)


def test_uniform_scale():
    assert XForm.scale(2.0) * (1.0, 2.0, 3.0, 1.0) == (2.0, 4.0, 6.0, 1.0)
    assert XForm.scale(2.0, 3.0, 4.0) * (1.0, 1.0, 1.0, 1.0) == (2.0, 3.0, 4.0, 1.0)


def test_directional_scale():
    xf = XForm.scale(3.0, (0.0, 0.0, 2.0))
    assert xf * (0.0, 0.0, 1.0, 0.0) == pytest.approx((0.0, 0.0, 3.0, 0.0))
    assert xf * (1.0, 1.0, 0.0, 0.0) == pytest.approx((1.0, 1.0, 0.0, 0.0))
    assert XForm.scale(3.0, 0.0, 0.0, 2.0) == xf


def test_scale_bad_arity():
    with pytest.raises(TypeError):
        XForm.scale(1, 2, 3, 4, 5)


def test_ortho_maps_box_corners_to_cube():
    l, r, b, t, n, f = -2.0, 3.0, -1.0, 4.0, 0.5, 10.0
    xf = XForm.ortho(l, r, b, t, n, f)
    assert xf * (l, b, -n, 1.0) == pytest.approx((-1.0, -1.0, -1.0, 1.0))
    assert xf * (r, t, -f, 1.0) == pytest.approx((1.0, 1.0, 1.0, 1.0))


def test_frustum_maps_near_corner_to_cube():
    l, r, b, t, n, f = -1.0, 2.0, -0.5, 1.5, 1.0, 20.0
    x, y, z, w = XForm.frustum(l, r, b, t, n, f) * (l, b, -n, 1.0)
    assert (x / w, y / w, z / w) == pytest.approx((-1.0, -1.0, -1.0))
    x, y, z, w = XForm.frustum(l, r, b, t, n, f) * (r * f / n, t * f / n, -f, 1.0)
    assert (x / w, y / w, z / w) == pytest.approx((1.0, 1.0, 1.0))


def test_outer_product():
    y, x = (1.0, 2.0, 3.0), (4.0, 5.0, 6.0)
    xf = XForm.outer(y, x)
    for i in range(3):
        for j in range(3):
            assert xf[4 * i + j] == x[i] * y[j]
    assert xf[15] == 1.0


def test_from_array():
    rows3 = [[1, 2, 3], [4, 5, 6], [7, 8, 9]]
    xf = XForm.from_array(rows3)
    for r in range(3):
        for c in range(3):
            assert xf[r, c] == rows3[r][c]
    assert xf[3, 3] == 1.0 and xf[0, 3] == 0.0
    rows4 = [[float(4 * r + c) for c in range(4)] for r in range(4)]
    xf4 = XForm.from_array(rows4)
    assert all(xf4[r, c] == rows4[r][c] for r in range(4) for c in range(4))
    with pytest.raises(ValueError):
        XForm.from_array([[1, 2], [3, 4]])


def test_inverse():
    xf = sample()
    assert list(xf * xf.inverse()) == approx_xf(XForm())
    assert list(xf.inverse() * xf) == approx_xf(XForm())


def test_singular_inverse_is_identity():
    assert XForm(*([0.0] * 16)).inverse() == XForm()


def test_rot_only_and_trans_only_recompose():
    xf = sample()
    assert list(xf.trans_only() * xf.rot_only()) == approx_xf(xf)
    assert xf.rot_only()[12] == 0.0
    assert xf.trans_only()[12] == xf[12]


def test_norm_xf_of_rotation_is_rotation():
    r = XForm.rot(1.1, 1.0, 1.0, 0.0)
    assert list((XForm.trans(3.0, 2.0, 1.0) * r).norm_xf()) == approx_xf(r)


def test_orthogonalized_recovers_rigid_motion():
    rigid = XForm.trans(1.0, -2.0, 3.0) * XForm.rot(0.6, 0.2, 0.5, 1.0)
    assert list(rigid.orthogonalized()) == approx_xf(rigid)


def test_add_sub():
    a, b = sample(), XForm.rot(0.3, 0.0, 1.0, 0.0)
    assert list((a + b) - b) == approx_xf(a)


def test_multiply_rejects_wrong_vector_size():
    with pytest.raises(ValueError):
        XForm() * (1.0, 2.0, 3.0)
    with pytest.raises(TypeError):
        XForm() * 2.0


def test_str_parse_roundtrip():
    xf = XForm.trans(1.0, 2.0, 3.0) * XForm.scale(2.0)
    assert XForm.parse(str(xf)) == xf
    assert str(XForm()).splitlines()[0] == "1 0 0 0"


def test_parse_three_rows_completes_last_row():
    xf = XForm.parse("1 2 3 4\n5 6 7 8\n9 10 11 12\n")
    assert [xf[3, c] for c in range(4)] == [0.0, 0.0, 0.0, 1.0]
    assert [xf[0, c] for c in range(4)] == [1.0, 2.0, 3.0, 4.0]


def test_parse_too_short_raises():
    with pytest.raises(ValueError):
        XForm.parse("1 2 3 4 5 6")


def test_write_read_roundtrip(tmp_path):
    xf = sample()
    path = tmp_path / "scan.xf"
    xf.write(path)
    assert XForm.read(path) == xf


def test_read_missing_file(tmp_path):
    with pytest.raises(OSError):
        XForm.read(tmp_path / "absent.xf")


def test_xfname():
    assert xfname("file.ply") == "file.xf"
    assert xfname("noext") == "noext.xf"