import matplotlib.pyplot as plt

from deconf_plot import HIT_COLOR, plot_scenario
from path_deconf import CollisionChecker


def test_plot_marks_colliding_segments():
    checker = CollisionChecker(0.1, [(0, 0), (2, 2)], [(0.1, [(0, 2), (2, 0)])])
    ax = plot_scenario(checker)

    # one segment polygon plus two waypoint circles
    assert len(ax.patches) == 3
    assert len([line for line in ax.lines if line.get_color() == HIT_COLOR]) == 2
    plt.close(ax.figure)


def test_plot_without_collision_or_buffers():
    checker = CollisionChecker(0, [(1, 2), (2, 3)], [(0, [(4, 5), (5, 6)])])
    fig, ax = plt.subplots()
    assert plot_scenario(checker, ax=ax, title="demo") is ax

    assert len(ax.patches) == 0
    assert not [line for line in ax.lines if line.get_color() == HIT_COLOR]
    assert ax.get_title() == "demo"
    plt.close(fig)


def test_plot_handles_empty_paths():
    checker = CollisionChecker(0.5, [], [(0.5, [(1, 1)])])
    ax = plot_scenario(checker)
    assert len(ax.patches) == 1
    plt.close(ax.figure)
