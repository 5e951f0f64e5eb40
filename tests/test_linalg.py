import math

import pytest

from railengine import linalg
from railengine.structs import Matrix4x4, Vector2, Vector3

TOL = 1e-9


def assert_vec_close(actual, expected, tol=TOL):
    assert tuple(actual) == pytest.approx(tuple(expected), abs=tol)


def flat(matrix):
    return [value for row in matrix.m for value in row]


def assert_mat_close(actual, expected, tol=TOL):
    assert flat(actual) == pytest.approx(flat(expected), abs=tol)


A = Vector3(1.5, -2.0, 3.25)
B = Vector3(-0.5, 4.0, 2.0)


def sample_matrix():
    return linalg.make_affine_matrix(
        Vector3(2.0, 3.0, 4.0), Vector3(0.3, -0.7, 1.1), Vector3(5.0, -6.0, 7.0)
    )


def test_add_subtract_round_trip():
    assert_vec_close(linalg.subtract(linalg.add(A, B), B), A)
    assert linalg.add(A, B) == linalg.add(B, A)


def test_add_vector2_with_zero():
    v = Vector2(3.0, -1.0)
    assert linalg.add(v, Vector2()) == v


def test_matrix_add_and_subtract():
    m = sample_matrix()
    assert linalg.add(m, Matrix4x4.zero()) == m
    assert linalg.subtract(m, m) == Matrix4x4.zero()


def test_mismatched_types_raise():
    with pytest.raises(TypeError):
        linalg.add(A, Vector2())
    with pytest.raises(TypeError):
        linalg.subtract(Vector2(), Vector2())
    with pytest.raises(TypeError):
        linalg.multiply(Vector2(), 2.0)


def test_scalar_multiply_both_orders():
    assert linalg.multiply(2.0, A) == linalg.multiply(A, 2.0)
    assert linalg.multiply(A, 2.0) == linalg.add(A, A)


def test_componentwise_multiply():
    assert linalg.multiply(A, B) == linalg.multiply(B, A)
    assert linalg.multiply(A, Vector3(1.0, 1.0, 1.0)) == A


def test_matrix_multiply_identity():
    m = sample_matrix()
    assert_mat_close(linalg.multiply(m, linalg.make_identity4x4()), m)
    assert_mat_close(linalg.multiply(linalg.make_identity4x4(), m), m)


def test_dot_and_length():
    assert linalg.dot(A, A) == pytest.approx(linalg.length(A) ** 2)
    assert linalg.dot(A, B) == linalg.dot(B, A)
    assert linalg.length(-3.5) == 3.5


def test_clamp():
    assert linalg.clamp(1.5) == 1.0
    assert linalg.clamp(-0.5) == 0.0
    assert linalg.clamp(0.25) == 0.25
    assert linalg.clamp(9.0, 2.0, 4.0) == 4.0
    # When the bounds cross, the lower bound is applied last and wins.
    assert linalg.clamp(3.0, 5.0, 1.0) == 5.0


def test_distance():
    assert linalg.distance(A, A) == 0.0
    assert linalg.distance(A, B) == pytest.approx(linalg.distance(B, A))
    assert linalg.distance(A, B) == pytest.approx(linalg.length(linalg.subtract(A, B)))


def test_normalize():
    assert linalg.length(linalg.normalize(A)) == pytest.approx(1.0)
    assert linalg.normalize(Vector3()) == Vector3()
    assert linalg.length(linalg.cross(linalg.normalize(A), A)) == pytest.approx(0.0, abs=TOL)


def test_lerp_weights_first_argument_by_t():
    assert_vec_close(linalg.lerp(A, B, 1.0), A)
    assert_vec_close(linalg.lerp(A, B, 0.0), B)


def test_bezier_endpoints():
    p2 = Vector3(7.0, 0.0, -1.0)
    assert_vec_close(linalg.bezier(A, B, p2, 1.0), A)
    assert_vec_close(linalg.bezier(A, B, p2, 0.0), p2)


def test_cross_is_orthogonal():
    c = linalg.cross(A, B)
    assert linalg.dot(c, A) == pytest.approx(0.0, abs=TOL)
    assert linalg.dot(c, B) == pytest.approx(0.0, abs=TOL)
    assert linalg.cross(A, A) == Vector3()


def test_project():
    p = linalg.project(A, B)
    assert linalg.length(linalg.cross(p, B)) == pytest.approx(0.0, abs=TOL)
    assert_vec_close(linalg.project(B, B), B)


def test_reflect():
    n = linalg.normalize(Vector3(0.2, 1.0, -0.4))
    r = linalg.reflect(A, n)
    assert linalg.length(r) == pytest.approx(linalg.length(A))
    assert_vec_close(linalg.reflect(r, n), A)


@pytest.mark.parametrize("v", [A, Vector3(0.0, 0.0, 2.0), Vector3(0.0, 3.0, 0.0)])
def test_perpendicular(v):
    p = linalg.perpendicular(v)
    assert linalg.dot(p, v) == pytest.approx(0.0, abs=TOL)
    assert linalg.length(p) == pytest.approx(linalg.length(Vector3(v.x, v.y, 0.0)) or linalg.length(v))


def test_identity():
    assert linalg.make_identity4x4() == Matrix4x4.identity()


def test_translate_and_scale_matrices():
    assert_vec_close(linalg.transform(A, linalg.make_translate_matrix(B)), linalg.add(A, B))
    assert_vec_close(linalg.transform(A, linalg.make_scale_matrix(B)), linalg.multiply(A, B))


@pytest.mark.parametrize(
    "maker",
    [linalg.make_rotate_x_matrix, linalg.make_rotate_y_matrix, linalg.make_rotate_z_matrix],
)
def test_rotations_are_orthonormal(maker):
    assert_mat_close(maker(0.0), Matrix4x4.identity())
    r = maker(0.83)
    assert_mat_close(linalg.multiply(r, linalg.transpose(r)), Matrix4x4.identity())
    assert linalg.length(linalg.transform(A, r)) == pytest.approx(linalg.length(A))


def test_rotate_z_quarter_turn():
    result = linalg.transform(Vector3(1.0, 0.0, 0.0), linalg.make_rotate_z_matrix(math.pi / 2))
    assert_vec_close(result, Vector3(0.0, 1.0, 0.0))


def test_inverse():
    m = sample_matrix()
    assert_mat_close(linalg.multiply(m, linalg.inverse(m)), Matrix4x4.identity())
    assert_mat_close(linalg.inverse(linalg.inverse(m)), m)


def test_inverse_of_singular_matrix_raises():
    with pytest.raises(ValueError):
        linalg.inverse(Matrix4x4.zero())


def test_transpose():
    m = sample_matrix()
    t = linalg.transpose(m)
    assert t.m[0][3] == m.m[3][0]
    assert linalg.transpose(t) == m


def test_affine_matrix():
    scale, translate = Vector3(2.0, 3.0, 4.0), Vector3(5.0, -6.0, 7.0)
    expected = linalg.multiply(
        linalg.make_scale_matrix(scale), linalg.make_translate_matrix(translate)
    )
    assert_mat_close(linalg.make_affine_matrix(scale, Vector3(), translate), expected)
    assert sample_matrix().m[3][:3] == list(translate)


def test_orthographic_round_trip():
    ortho = linalg.make_orthographic_matrix(-4.0, 3.0, 6.0, -2.0, 0.5, 50.0)
    projected = linalg.transform(A, ortho)
    assert_vec_close(linalg.transform(projected, linalg.inverse(ortho)), A)


def test_perspective_depth_range():
    near, far = 0.1, 100.0
    proj = linalg.make_perspective_fov_matrix(0.45, 1280 / 720, near, far)
    assert proj.m[2][3] == 1.0
    assert proj.m[3][3] == 0.0
    assert linalg.transform(Vector3(0.0, 0.0, near), proj).z == pytest.approx(0.0, abs=1e-6)
    assert linalg.transform(Vector3(0.0, 0.0, far), proj).z == pytest.approx(1.0)


def test_viewport_maps_corners():
    left, top, width, height, min_d, max_d = 10.0, 20.0, 1280.0, 720.0, 0.0, 1.0
    vp = linalg.make_viewport_matrix(left, top, width, height, min_d, max_d)
    assert_vec_close(linalg.transform(Vector3(-1.0, 1.0, 0.0), vp), Vector3(left, top, min_d))
    assert_vec_close(
        linalg.transform(Vector3(1.0, -1.0, 1.0), vp),
        Vector3(left + width, top + height, max_d),
    )


def test_transform_with_zero_w_raises():
    with pytest.raises(ValueError):
        linalg.transform(A, Matrix4x4.zero())


def test_transform_normal_ignores_translation():
    assert_vec_close(linalg.transform_normal(A, linalg.make_translate_matrix(B)), A)
    m = sample_matrix()
    moved = linalg.subtract(linalg.transform(A, m), linalg.transform(Vector3(), m))
    assert_vec_close(linalg.transform_normal(A, m), moved)