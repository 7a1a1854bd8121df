import logging
import math

import numpy as np
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union

from segment_geometry import (
    DEFAULT_FALLBACK,
    FALLBACK_MODES,
    Point,
    iter_segments,
    pairwise_segment_distances,
    segment_distance,
)

logger = logging.getLogger(__name__)

# =====================================================
# ================= GLOBAL CONFIG =====================
# =====================================================

# np.float32 for single precision coordinates
DEFAULT_DTYPE = np.float64

DEFAULT_EGO_RADIUS = 0.0
DEFAULT_EGO_PATH = [Point(1, 2), Point(2, 3)]

DEFAULT_SURROUNDINGS = [
    (0.0, [Point(4, 5), Point(5, 6)]),
    (0.0, [Point(6, 7), Point(7, 8)]),
]


class InvalidRadiusError(ValueError):
    """Raised when an agent is given a negative or non-finite radius."""


class Agent:
    """A radius plus the ordered waypoints of its planned or predicted path.

    The path is stored as a read-only (n, 2) array; n may be 0 or 1, in
    which case the agent has no segments.
    """
    __slots__ = ("radius", "path")

    def __init__(self, radius, path, dtype=DEFAULT_DTYPE) -> None:
        radius = dtype(radius)
        if not np.isfinite(radius) or radius < 0:
            raise InvalidRadiusError(f"radius must be a finite value >= 0, got {radius!r}")

        points = np.array(path, dtype=dtype)
        if points.size == 0:
            points = points.reshape(0, 2)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(f"path must be a sequence of (x, y) points, got shape {points.shape}")
        points.flags.writeable = False

        self.radius = radius
        self.path = points

    @property
    def segment_count(self) -> int:
        return max(len(self.path) - 1, 0)

    def __repr__(self) -> str:
        return f"Agent(radius={self.radius!r}, path={self.path.tolist()!r})"


AgentLike = Union[Agent, Tuple[float, Sequence[Point]]]


class CollisionHit(NamedTuple):
    agent_index: int
    ego_segment: int
    other_segment: int
    distance: float
    safe_distance: float


class CollisionChecker:
    """
    Spatial path deconfliction between one ego agent and its surroundings.

    Built once per planning cycle and discarded afterwards. The agents are
    never mutated, so every query is repeatable.
    """

    def __init__(
        self,
        ego_radius,
        ego_path,
        surroundings: Iterable[AgentLike] = (),
        dtype=DEFAULT_DTYPE,
        fallback: str = DEFAULT_FALLBACK,
    ) -> None:
        if fallback not in FALLBACK_MODES:
            raise ValueError(f"fallback must be one of {FALLBACK_MODES}, got {fallback!r}")

        self.fallback = fallback
        self.ego = Agent(ego_radius, ego_path, dtype)
        self.surroundings = tuple(self._as_agent(obj, dtype) for obj in surroundings)

    @staticmethod
    def _as_agent(obj: AgentLike, dtype) -> Agent:
        if isinstance(obj, Agent):
            return Agent(obj.radius, obj.path, dtype)
        radius, path = obj
        return Agent(radius, path, dtype)

    def safe_distance(self, other: Agent) -> float:
        return self.ego.radius + other.radius

    def find_collision(self) -> Optional[CollisionHit]:
        """First (agent, ego segment, other segment) closer than the safe distance."""
        if self.ego.segment_count == 0:
            logger.debug("Ego path has no segments")
            return None

        for k, other in enumerate(self.surroundings):
            if other.segment_count == 0:
                continue
            safe_dist = self.safe_distance(other)

            for i, (a1, a2) in enumerate(iter_segments(self.ego.path)):
                for j, (b1, b2) in enumerate(iter_segments(other.path)):
                    dist = segment_distance(a1, a2, b1, b2, self.fallback)
                    if dist < safe_dist:
                        logger.debug(
                            "Collision with agent %d: ego segment %d / segment %d, "
                            "distance %.3f < %.3f", k, i, j, dist, safe_dist,
                        )
                        return CollisionHit(k, i, j, dist, float(safe_dist))

        logger.debug("No collision against %d surrounding agent(s)", len(self.surroundings))
        return None

    def check_collision(self) -> bool:
        return self.find_collision() is not None

    def min_separation(self, index: int) -> float:
        """Smallest segment-pair distance between the ego path and one agent."""
        other = self.surroundings[index]
        distances = pairwise_segment_distances(
            self.ego.path, other.path, self.fallback, dtype=self.ego.path.dtype,
        )
        if distances.size == 0:
            return math.inf
        return float(distances.min())


# =====================================================
# ================= CORE API FUNCTION =================
# =====================================================

def run_collision_check(
    ego_radius: float,
    ego_path: List[Point],
    surroundings: List[AgentLike],
    fallback: str = DEFAULT_FALLBACK,
    dtype=DEFAULT_DTYPE,
) -> Dict[str, Any]:
    """
    Spatial 2D collision check between an ego path and surrounding paths.

    Args:
        ego_radius (float):
            Physical radius of the ego agent.
        ego_path (list[tuple[float, float]]):
            Planned ego waypoints.
        surroundings (list[tuple[float, list[tuple[float, float]]]]):
            (radius, predicted waypoints) for every other agent.

        fallback (str, optional):
            Distance used for parallel segments, "exact" or "endpoints".
        dtype (optional):
            Numeric type of the coordinates. Defaults to np.float64.

    Returns:
        dict:
            Collision information containing:
            - collision (bool)
            - hit (dict or None)
            - separations (list[float])
            - safe_distances (list[float])
    """
    checker = CollisionChecker(ego_radius, ego_path, surroundings, dtype=dtype, fallback=fallback)
    hit = checker.find_collision()

    return {
        "collision": hit is not None,
        "hit": hit._asdict() if hit is not None else None,
        "separations": [checker.min_separation(k) for k in range(len(checker.surroundings))],
        "safe_distances": [float(checker.safe_distance(obj)) for obj in checker.surroundings],
    }


# =====================================================
# ================= DIRECT EXECUTION ==================
# =====================================================

if __name__ == "__main__":

    result = run_collision_check(
        ego_radius=DEFAULT_EGO_RADIUS,
        ego_path=DEFAULT_EGO_PATH,
        surroundings=DEFAULT_SURROUNDINGS,
    )

    print("collision" if result["collision"] else "No collision")
    for i, (sep, safe) in enumerate(zip(result["separations"], result["safe_distances"]), 1):
        print(f"Agent {i}: separation={sep:.2f}, safe distance={safe:.2f}")
