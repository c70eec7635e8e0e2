import math

import pytest

from meshray.ground import ground_geometry, gpgpu_quad, normalized_mouse


@pytest.fixture
def ground():
    return ground_geometry((1.0, 2.0, 3.0), 2.0, 0.78)


def test_ground_default_counts(ground):
    assert ground.num_points == 10 * 20
    assert ground.num_indices == 6 * 9 * 20
    assert len(ground.normals) == len(ground.colors) == len(ground.texcoords) == ground.num_points


def test_ground_indices_in_range(ground):
    assert min(ground.indices) == 0
    assert max(ground.indices) < ground.num_points
    assert ground.num_indices % 3 == 0


def test_ground_is_flat_below_center(ground):
    expected_y = 2.0 - 0.78 * 2.0
    assert all(v[1] == pytest.approx(expected_y) for v in ground.vertices)


def test_ground_first_ring_is_center(ground):
    for j in range(20):
        x, _, z, w = ground.vertices[j * 10]
        assert (x, z, w) == pytest.approx((1.0, 3.0, 1.0))
        assert ground.texcoords[j * 10] == pytest.approx((0.0, 0.0))


def test_ground_stays_within_five_radii(ground):
    for x, _, z, _ in ground.vertices:
        assert math.hypot(x - 1.0, z - 3.0) < 5.0 * 2.0


def test_ground_rings_grow_outward(ground):
    distances = [math.hypot(ground.vertices[i][0] - 1.0, ground.vertices[i][2] - 3.0)
                 for i in range(10)]
    assert distances == sorted(distances)
    assert len(set(round(d, 9) for d in distances)) == 10


def test_ground_normals_and_colors(ground):
    assert set(ground.normals) == {(0.0, 1.0, 0.0, 0.0)}
    assert set(ground.colors) == {(0.6, 0.85, 0.9, 1.0)}


def test_ground_keeps_center_w():
    mesh = ground_geometry((0.0, 0.0, 0.0, 0.5), 1.0, 1.0, num_r=3, num_th=4)
    assert all(v[3] == 0.5 for v in mesh.vertices)
    assert mesh.num_points == 12


def test_ground_single_ring_has_no_triangles():
    mesh = ground_geometry((0.0, 0.0, 0.0), 1.0, 1.0, num_r=1, num_th=5)
    assert mesh.indices == []


@pytest.mark.parametrize("num_r, num_th", [(0, 20), (10, 0)])
def test_ground_rejects_empty_grid(num_r, num_th):
    with pytest.raises(ValueError):
        ground_geometry((0.0, 0.0, 0.0), 1.0, 1.0, num_r, num_th)


def test_ground_rejects_bad_center():
    with pytest.raises(ValueError):
        ground_geometry((0.0, 0.0), 1.0, 1.0)


def test_quad_layout():
    quad = gpgpu_quad()
    assert quad.num_faces == 2
    assert quad.indices == [0, 2, 1, 1, 2, 3]
    assert quad.vertices[0] == (-1.0, -1.0, 0.0, 1.0)
    assert quad.vertices[3] == (1.0, 1.0, 0.0, 1.0)
    assert quad.texcoords == [(0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0)]
    assert set(quad.normals) == {(0.0, 0.0, -1.0, 0.0)}
    assert set(quad.colors) == {(0.0, 0.0, 1.0, 1.0)}


def test_mouse_at_center_is_origin():
    assert normalized_mouse(320, 240, 640, 480, 640) == pytest.approx((0.0, 0.0))


def test_mouse_corner_of_square_window():
    assert normalized_mouse(0, 0, 500, 500, 500) == pytest.approx((-1.0, -1.0))
    assert normalized_mouse(500, 500, 500, 500, 500) == pytest.approx((1.0, 1.0))


def test_mouse_rejects_zero_screen():
    with pytest.raises(ValueError):
        normalized_mouse(1, 1, 10, 10, 0)