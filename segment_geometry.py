import numpy as np
from typing import Iterator, NamedTuple, Sequence, Tuple

# =====================================================
# ================= GLOBAL CONFIG =====================
# =====================================================

# |cross(d_A, d_B)| below this is treated as parallel / degenerate
PARALLEL_EPSILON = 1e-4

# "exact":     min of the four endpoint-to-segment distances
# "endpoints": distance between the first endpoint of each segment
FALLBACK_MODES = ("exact", "endpoints")
DEFAULT_FALLBACK = "exact"


class Point(NamedTuple):
    """2D waypoint. Coordinates keep the numeric type they were built with."""
    x: float
    y: float


# =====================================================
# ================= HELPER FUNCTIONS ==================
# =====================================================

def euclidean_distance(p: Point, q: Point) -> float:
    return float(np.linalg.norm(np.asarray(p) - np.asarray(q)))


def iter_segments(path: Sequence[Point]) -> Iterator[Tuple[Point, Point]]:
    """Yield (start, end) for every pair of adjacent waypoints."""
    for i in range(len(path) - 1):
        yield Point(*path[i]), Point(*path[i + 1])


def point_to_segment_distance(P, A, B):
    P = np.asarray(P)
    A = np.asarray(A)
    B = np.asarray(B)

    AB = B - A
    AP = P - A

    AB_len_sq = np.dot(AB, AB)

    if AB_len_sq == 0:  # A and B are the same point
        return float(np.linalg.norm(AP)), A

    t = np.dot(AP, AB) / AB_len_sq
    t = np.clip(t, 0.0, 1.0)

    closest = A + t * AB
    return float(np.linalg.norm(P - closest)), closest


def _cross(o, p, q):
    """z of (p - o) x (q - o): > 0 when q is left of o -> p, < 0 when right."""
    return (
        (p[..., 0] - o[..., 0]) * (q[..., 1] - o[..., 1])
        - (p[..., 1] - o[..., 1]) * (q[..., 0] - o[..., 0])
    )


def segments_cross(a1, a2, b1, b2):
    """True where each segment strictly straddles the other. Works elementwise on arrays."""
    a1, a2, b1, b2 = (np.asarray(p) for p in (a1, a2, b1, b2))
    return (
        (_cross(a1, a2, b1) * _cross(a1, a2, b2) < 0)
        & (_cross(b1, b2, a1) * _cross(b1, b2, a2) < 0)
    )


def parallel_fallback_distance(a1, a2, b1, b2, mode: str = DEFAULT_FALLBACK) -> float:
    """Distance used when the two direction vectors are (nearly) parallel."""
    if mode == "endpoints":
        return euclidean_distance(a1, b1)

    # Short or shallow crossings still land here
    if segments_cross(a1, a2, b1, b2):
        return 0.0

    return min(
        point_to_segment_distance(a1, b1, b2)[0],
        point_to_segment_distance(a2, b1, b2)[0],
        point_to_segment_distance(b1, a1, a2)[0],
        point_to_segment_distance(b2, a1, a2)[0],
    )


# =====================================================
# ================= CORE API FUNCTIONS ================
# =====================================================

def segment_distance(a1, a2, b1, b2, fallback: str = DEFAULT_FALLBACK) -> float:
    """
    Minimum distance between segment A (a1 -> a2) and segment B (b1 -> b2).

    The infinite lines through both segments are intersected parametrically:
    A(t1) = a1 + t1 * (a2 - a1), B(t2) = b1 + t2 * (b2 - b1).

    - Both parameters in [0, 1]: the segments themselves cross, return 0.
    - Otherwise both parameters are clamped into [0, 1] independently and the
      distance between the two clamped points is returned. This is cheaper
      than the full closest-point case analysis and can overestimate the
      true separation in some corner configurations.
    - Parallel or zero-length segments make the system singular and are
      resolved by ``parallel_fallback_distance``; a short or shallow pair
      that strictly crosses still comes back as 0.

    Never raises for finite input.
    """
    a1 = np.asarray(a1)
    a2 = np.asarray(a2)
    b1 = np.asarray(b1)
    b2 = np.asarray(b2)

    dx_a, dy_a = a2 - a1
    dx_b, dy_b = b2 - b1

    denominator = dy_a * dx_b - dx_a * dy_b
    if abs(denominator) < PARALLEL_EPSILON:
        return parallel_fallback_distance(a1, a2, b1, b2, fallback)

    wx = a1[0] - b1[0]
    wy = b1[1] - a1[1]
    t1 = (wx * dy_b + wy * dx_b) / denominator
    t2 = (wx * dy_a + wy * dx_a) / denominator

    if 0 <= t1 <= 1 and 0 <= t2 <= 1:
        return 0.0

    t1 = np.clip(t1, 0.0, 1.0)
    t2 = np.clip(t2, 0.0, 1.0)

    closest_a = a1 + t1 * (a2 - a1)
    closest_b = b1 + t2 * (b2 - b1)
    return euclidean_distance(closest_a, closest_b)


def _point_segment_distances(P, A, B):
    """Broadcasting variant of point_to_segment_distance (distances only)."""
    AB = B - A
    AP = P - A

    AB_len_sq = np.sum(AB * AB, axis=-1)
    degenerate = AB_len_sq == 0

    t = np.sum(AP * AB, axis=-1) / np.where(degenerate, 1, AB_len_sq)
    t = np.where(degenerate, 0.0, np.clip(t, 0.0, 1.0))

    closest = A + t[..., None] * AB
    return np.linalg.norm(P - closest, axis=-1)


def pairwise_segment_distances(path_a, path_b, fallback: str = DEFAULT_FALLBACK, dtype=float) -> np.ndarray:
    """
    ``segment_distance`` for every (segment of path_a, segment of path_b).

    Returns an array of shape (len(path_a) - 1, len(path_b) - 1), with empty
    axes for paths of fewer than two points.
    Computed in ``dtype``, so a float32 checker gets float32 separations.
    """
    A = np.asarray(path_a, dtype=dtype).reshape(-1, 2)
    B = np.asarray(path_b, dtype=dtype).reshape(-1, 2)

    n_a = max(len(A) - 1, 0)
    n_b = max(len(B) - 1, 0)
    if n_a == 0 or n_b == 0:
        return np.empty((n_a, n_b), dtype=dtype)

    a1, a2 = A[:-1, None, :], A[1:, None, :]
    b1, b2 = B[None, :-1, :], B[None, 1:, :]
    a1, a2, b1, b2 = np.broadcast_arrays(a1, a2, b1, b2)

    d_a = a2 - a1
    d_b = b2 - b1

    denominator = d_a[..., 1] * d_b[..., 0] - d_a[..., 0] * d_b[..., 1]
    parallel = np.abs(denominator) < PARALLEL_EPSILON
    safe_den = np.where(parallel, 1.0, denominator)

    wx = a1[..., 0] - b1[..., 0]
    wy = b1[..., 1] - a1[..., 1]
    t1 = (wx * d_b[..., 1] + wy * d_b[..., 0]) / safe_den
    t2 = (wx * d_a[..., 1] + wy * d_a[..., 0]) / safe_den

    crossing = (t1 >= 0) & (t1 <= 1) & (t2 >= 0) & (t2 <= 1)

    t1 = np.clip(t1, 0.0, 1.0)
    t2 = np.clip(t2, 0.0, 1.0)
    closest_a = a1 + t1[..., None] * d_a
    closest_b = b1 + t2[..., None] * d_b
    dist = np.linalg.norm(closest_a - closest_b, axis=-1)
    dist = np.where(crossing, 0.0, dist)

    if fallback == "endpoints":
        fallback_dist = np.linalg.norm(a1 - b1, axis=-1)
    else:
        fallback_dist = np.minimum.reduce([
            _point_segment_distances(a1, b1, b2),
            _point_segment_distances(a2, b1, b2),
            _point_segment_distances(b1, a1, a2),
            _point_segment_distances(b2, a1, a2),
        ])
        fallback_dist = np.where(segments_cross(a1, a2, b1, b2), 0.0, fallback_dist)

    return np.where(parallel, fallback_dist, dist)


# =====================================================
# ================= DIRECT EXECUTION ==================
# =====================================================

if __name__ == "__main__":

    print("Crossing:", segment_distance((0, 0), (2, 2), (0, 2), (2, 0)))
    print("Parallel:", segment_distance((0, 0), (4, 0), (1, 1.5), (3, 1.5)))
    print("Skew:    ", segment_distance((0, 0), (1, 0), (2, -1), (2, 1)))
