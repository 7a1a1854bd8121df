import math

import numpy as np
import pytest

from segment_geometry import (
    Point,
    euclidean_distance,
    iter_segments,
    pairwise_segment_distances,
    point_to_segment_distance,
    segment_distance,
    segments_cross,
)


def test_euclidean_distance():
    assert euclidean_distance(Point(0, 0), Point(3, 4)) == pytest.approx(5.0)
    assert euclidean_distance((1, 2), (1, 2)) == 0.0


def test_point_to_segment_distance_projects_inside():
    dist, closest = point_to_segment_distance((1, 1), (0, 0), (2, 0))
    assert dist == pytest.approx(1.0)
    assert tuple(closest) == pytest.approx((1.0, 0.0))


def test_point_to_segment_distance_clamps_to_endpoint():
    dist, closest = point_to_segment_distance((5, 0), (0, 0), (2, 0))
    assert dist == pytest.approx(3.0)
    assert tuple(closest) == pytest.approx((2.0, 0.0))


def test_point_to_zero_length_segment():
    dist, _ = point_to_segment_distance((3, 4), (0, 0), (0, 0))
    assert dist == pytest.approx(5.0)


@pytest.mark.parametrize("p", [(0, 0), (1.5, -2.0), (1e6, 3.0)])
def test_degenerate_segment_against_itself(p):
    assert segment_distance(p, p, p, p) == 0.0


@pytest.mark.parametrize(
    "a1, a2, b1, b2",
    [
        ((0, 0), (2, 2), (0, 2), (2, 0)),        # crossing
        ((0, 0), (1, 0), (2, -1), (2, 1)),       # skew, no contact
        ((0, 0), (4, 0), (1, 1.5), (3, 1.5)),    # parallel
        ((0, 0), (0, 0), (1, 1), (3, 2)),        # one degenerate
        ((-1, 3), (2, 7), (5, -2), (6, 0.5)),
    ],
)
def test_segment_distance_is_symmetric(a1, a2, b1, b2):
    assert segment_distance(a1, a2, b1, b2) == pytest.approx(segment_distance(b1, b2, a1, a2))


@pytest.mark.parametrize(
    "a1, a2, b1, b2",
    [
        ((0, 0), (2, 2), (0, 2), (2, 0)),        # X crossing at (1, 1)
        ((0, 0), (2, 0), (1, 0), (1, 3)),        # T junction
        ((0, 0), (1, 1), (1, 1), (2, 0)),        # shared endpoint
        ((0, 0), (4, 0), (2, 0), (6, 0)),        # collinear overlap
    ],
)
def test_touching_segments_have_zero_distance(a1, a2, b1, b2):
    assert segment_distance(a1, a2, b1, b2) == pytest.approx(0.0)


def test_parallel_segments_offset():
    assert segment_distance((0, 0), (4, 0), (1, 1.5), (3, 1.5)) == pytest.approx(1.5)


def test_parallel_endpoints_fallback():
    dist = segment_distance((0, 0), (4, 0), (1, 1.5), (3, 1.5), fallback="endpoints")
    assert dist == pytest.approx(math.sqrt(3.25))


def test_skew_segments_use_clamped_points():
    assert segment_distance((0, 0), (1, 0), (2, -1), (2, 1)) == pytest.approx(1.0)


def test_iter_segments():
    assert list(iter_segments([])) == []
    assert list(iter_segments([(0, 0)])) == []
    assert list(iter_segments([(0, 0), (1, 0), (1, 1)])) == [((0, 0), (1, 0)), ((1, 0), (1, 1))]


def test_pairwise_shapes_for_short_paths():
    assert pairwise_segment_distances([], [(0, 0), (1, 1)]).shape == (0, 1)
    assert pairwise_segment_distances([(0, 0)], [(0, 0), (1, 1), (2, 0)]).shape == (0, 2)
    assert pairwise_segment_distances([(0, 0), (1, 1)], [(5, 5)]).shape == (1, 0)


@pytest.mark.parametrize("fallback", ["exact", "endpoints"])
def test_pairwise_matches_scalar(fallback):
    rng = np.random.default_rng(7)
    path_a = rng.uniform(-10, 10, size=(6, 2))
    path_b = rng.uniform(-10, 10, size=(5, 2))
    # Parallel pair and a zero-length segment
    path_b = np.vstack([path_b, path_b[-1] + (path_a[1] - path_a[0]), path_b[-1] + (path_a[1] - path_a[0])])

    matrix = pairwise_segment_distances(path_a, path_b, fallback)

    expected = np.array([
        [segment_distance(a1, a2, b1, b2, fallback) for b1, b2 in iter_segments(path_b)]
        for a1, a2 in iter_segments(path_a)
    ])
    np.testing.assert_allclose(matrix, expected, atol=1e-9)


def test_tiny_x_crossing_has_zero_distance():
    assert segment_distance((0, 0), (0.005, 0.005), (0, 0.005), (0.005, 0)) == 0.0


def test_shallow_crossing_has_zero_distance():
    assert segment_distance((0, 0), (10, 0), (0, -1e-6), (10, 1e-6)) == 0.0


def test_shallow_non_crossing_keeps_separation():
    dist = segment_distance((0, 0), (10, 0), (0, 1e-3), (10, 1e-3 + 1e-6))
    assert dist == pytest.approx(1e-3)


def test_segments_cross():
    assert segments_cross((0, 0), (2, 2), (0, 2), (2, 0))
    assert not segments_cross((0, 0), (1, 0), (2, -1), (2, 1))
    # collinear and touching cases are left to the distance computation
    assert not segments_cross((0, 0), (4, 0), (2, 0), (6, 0))
    assert not segments_cross((0, 0), (0, 0), (0, 0), (0, 0))


def test_pairwise_handles_shallow_and_tiny_crossings():
    matrix = pairwise_segment_distances(
        [(0, 0), (10, 0), (10.005, 0.005)],
        [(0, -1e-6), (10, 1e-6), (10, 0.005), (10.005, 0)],
    )
    assert matrix[0, 0] == 0.0
    assert matrix[1, 2] == 0.0


def test_pairwise_keeps_single_precision():
    path_a = np.array([(0, 0), (2, 2), (3, 0)], dtype=np.float32)
    path_b = np.array([(0, 2), (2, 0)], dtype=np.float32)
    matrix = pairwise_segment_distances(path_a, path_b, dtype=np.float32)
    assert matrix.dtype == np.float32
    assert pairwise_segment_distances([], path_b, dtype=np.float32).dtype == np.float32
