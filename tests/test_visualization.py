import matplotlib

matplotlib.use("Agg")  # non-interactive backend
import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.patches import Ellipse

from clustering_errors import InvalidArgumentError
from kmeans import KMeans
from visualization import (
    cluster_colors,
    covariance_ellipse,
    plot_cluster_sizes,
    plot_clusters,
    plot_sse_history,
)

SSE_DATA = [[1, 1], [1, 2], [2, 1], [2, 2], [8, 8], [8, 9], [9, 8], [9, 9]]


@pytest.fixture
def ax():
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)


def test_plot_clusters_draws_points_and_centroids(ax):
    model = KMeans(centroid_indices=[0, 4]).build(SSE_DATA, 2)
    plot_clusters(ax, model)
    # one scatter for members and one for the centroid, per cluster
    assert len(ax.collections) == 4
    assert ax.get_xlabel() == "x0"
    assert "SSE=4.00" in ax.get_title()


def test_plot_clusters_uses_data_labels(ax):
    data = [[1, 1, "a"], [1, 2, "b"], [8, 8, "c"], [9, 9, "d"]]
    model = KMeans(centroid_indices=[0, 2]).build(data, 2)
    model.data_labels = ["width", "height", "name"]
    plot_clusters(ax, model, show_annotations=False)
    assert ax.get_ylabel() == "height"


def test_plot_clusters_rejects_categorical_dims(ax):
    data = [[1, "a"], [2, "b"], [8, "c"]]
    model = KMeans(centroid_indices=[0, 2]).build(data, 2)
    with pytest.raises(InvalidArgumentError):
        plot_clusters(ax, model, dims=(0, 1))


def test_plot_cluster_sizes(ax):
    model = KMeans(centroid_indices=[0, 4]).build(SSE_DATA, 2)
    plot_cluster_sizes(ax, model)
    assert len(ax.patches) == 2


def test_plot_sse_history(ax):
    model = KMeans(centroid_indices=[0, 4], track_history=True).build(SSE_DATA, 2)
    sse = plot_sse_history(ax, model)
    assert len(sse) == model.iterations
    assert len(ax.lines) == 1


def test_plot_sse_history_needs_history(ax):
    model = KMeans(centroid_indices=[0, 4]).build(SSE_DATA, 2)
    with pytest.raises(InvalidArgumentError):
        plot_sse_history(ax, model)


def test_cluster_colors_cycle_through_colormap():
    colors = cluster_colors(12)
    assert len(colors) == 12
    assert colors[0] == colors[10]
    assert colors[0] != colors[1]


def test_covariance_ellipse_follows_the_spread():
    points = np.array([[0.0, 0.0], [4.0, 0.1], [8.0, -0.1], [12.0, 0.0]])
    ellipse = covariance_ellipse(points, edgecolor="red")
    assert isinstance(ellipse, Ellipse)
    assert ellipse.width > ellipse.height
    assert tuple(ellipse.center) == pytest.approx((6.0, 0.0))
    assert covariance_ellipse(points[:2]) is None


def test_large_clusters_get_an_ellipse(ax):
    data = [[x, y] for x in range(4) for y in range(3)] + [[x + 50, y] for x in range(4) for y in range(3)]
    model = KMeans(centroid_indices=[0, 12]).build(data, 2)
    plot_clusters(ax, model)
    assert len(ax.patches) == 2
