import numpy as np
import matplotlib.pyplot as plt

from path_deconf import (
    DEFAULT_EGO_PATH,
    DEFAULT_EGO_RADIUS,
    DEFAULT_SURROUNDINGS,
    CollisionChecker,
)

# ================= PLOT STYLE =================

BUFFER_COLOR = "gray"
BUFFER_ALPHA = 0.2
HIT_COLOR = "red"

# ==============================================


def draw_buffer(ax, path, radius):
    """Shade every point within ``radius`` of the path."""
    if radius <= 0 or len(path) == 0:
        return

    for i in range(len(path) - 1):
        # Polygon around each segment
        A = np.array(path[i])
        B = np.array(path[i + 1])

        AB = B - A
        AB_len = np.linalg.norm(AB)

        if AB_len > 0:
            perp = np.array([-AB[1], AB[0]]) / AB_len * radius

            corners = [
                A + perp, B + perp, B - perp, A - perp
            ]

            poly_xs = [c[0] for c in corners] + [corners[0][0]]
            poly_ys = [c[1] for c in corners] + [corners[0][1]]
            ax.fill(poly_xs, poly_ys, color=BUFFER_COLOR, alpha=BUFFER_ALPHA)

    # Rounded caps and joints
    for point in path:
        ax.add_patch(plt.Circle(tuple(point), radius, color=BUFFER_COLOR, alpha=BUFFER_ALPHA))


def plot_scenario(checker: CollisionChecker, ax=None, title="Path Deconfliction Check", show=False):
    """Draw the ego path, the surrounding paths with their safe-distance buffers
    and, if there is one, the first colliding segment pair."""
    if ax is None:
        _, ax = plt.subplots()

    ax.set_aspect("equal")
    ax.grid(True)

    for obj in checker.surroundings:
        if len(obj.path):
            xs, ys = obj.path[:, 0], obj.path[:, 1]
            ax.plot(xs, ys, "k-", lw=2)
        draw_buffer(ax, obj.path, checker.safe_distance(obj))

    ego = checker.ego.path
    if len(ego):
        ax.plot(ego[:, 0], ego[:, 1], "bo", markersize=8, label="Waypoints", zorder=5)
        ax.plot(ego[:, 0], ego[:, 1], "b-", lw=2, label="Ego path")

    # Legend entry only
    ax.plot([], [], "k-", lw=2, label="Other agents")

    hit = checker.find_collision()
    if hit is not None:
        i, j = hit.ego_segment, hit.other_segment
        other = checker.surroundings[hit.agent_index].path
        ax.plot(ego[i:i + 2, 0], ego[i:i + 2, 1], color=HIT_COLOR, lw=3, zorder=10, label="Collision")
        ax.plot(other[j:j + 2, 0], other[j:j + 2, 1], color=HIT_COLOR, lw=3, zorder=10)

    ax.autoscale_view()
    ax.legend(loc="upper left")
    ax.set_title(title)

    if show:
        plt.show()
    return ax


if __name__ == "__main__":
    plot_scenario(
        CollisionChecker(DEFAULT_EGO_RADIUS, DEFAULT_EGO_PATH, DEFAULT_SURROUNDINGS),
        show=True,
    )
