import numpy as np
from matplotlib import colormaps
from matplotlib.patches import Ellipse

from clustering_errors import InvalidArgumentError
from distances import is_numeric
from metrics import sse_by_iteration


def cluster_colors(n_clusters, cmap="tab10"):
    """One color per cluster index, cycling through a qualitative colormap."""
    palette = colormaps[cmap]
    return [palette(i % palette.N) for i in range(n_clusters)]


def _numeric_columns(rows, dims):
    for d in dims:
        if not all(is_numeric(row[d]) for row in rows):
            raise InvalidArgumentError(f"Attribute {d} is not numeric and cannot be plotted")
    return np.array([[row[d] for d in dims] for row in rows], dtype=float)


def covariance_ellipse(points, n_std=2.0, **style):
    """Ellipse spanning ``n_std`` standard deviations of a 2-D point cloud.

    Returns None for fewer than three points, where the covariance is degenerate.
    """
    if len(points) < 3:
        return None
    eigenvalues, eigenvectors = np.linalg.eigh(np.cov(points, rowvar=False))
    major = int(np.argmax(eigenvalues))
    minor = 1 - major
    angle = np.degrees(np.arctan2(eigenvectors[1, major], eigenvectors[0, major]))
    return Ellipse(
        xy=points.mean(axis=0),
        width=2 * n_std * np.sqrt(max(eigenvalues[major], 0)),
        height=2 * n_std * np.sqrt(max(eigenvalues[minor], 0)),
        angle=angle,
        **style,
    )


def plot_clusters(ax, model, dims=(0, 1), title=None, cmap="tab10",
                  show_ellipses=True, show_annotations=True):
    """Scatter two numeric attributes of a built model, one color per cluster.

    Clusters with more than ten members also get a 2σ covariance ellipse.
    """
    names = model.data_labels or [f"x{d}" for d in range(len(model.centroids[0]))]
    colors = cluster_colors(len(model.centroids), cmap)

    for i, (members, color) in enumerate(zip(model.clusters, colors)):
        pts = _numeric_columns(members, dims)
        centroid = _numeric_columns([model.centroids[i]], dims)[0]

        if show_ellipses and len(pts) > 10:
            ellipse = covariance_ellipse(
                pts, facecolor=(*color[:3], 0.2), edgecolor=color, linewidth=2,
            )
            if ellipse is not None:
                ax.add_patch(ellipse)

        ax.scatter(pts[:, 0], pts[:, 1], s=12, alpha=0.6, color=color,
                   label=f"C{i} ({len(pts)})", zorder=2)
        ax.scatter(*centroid, s=160, color=color, marker="D",
                   edgecolors="black", zorder=4)

        if show_annotations:
            ax.annotate(f"C{i}", xy=centroid, xytext=(0, 10), textcoords="offset points",
                        ha="center", fontsize=8, fontweight="bold", zorder=5)

    if title is None:
        title = f"K-Means ({len(model.centroids)} clusters, SSE={model.sse:.2f})"
    ax.set_title(title, fontweight="bold")
    ax.set_xlabel(names[dims[0]])
    ax.set_ylabel(names[dims[1]])
    ax.legend(fontsize=7, loc="best")


def plot_cluster_sizes(ax, model, title="Cluster sizes", cmap="tab10"):
    """Bar chart of members per cluster, colored like ``plot_clusters``."""
    sizes = model.cluster_sizes()
    bars = ax.bar([f"C{i}" for i in range(len(sizes))], sizes,
                  color=cluster_colors(len(sizes), cmap))
    ax.bar_label(bars)
    ax.set_title(title, fontweight="bold")
    ax.set_ylabel("Members")


def plot_sse_history(ax, model):
    """SSE of every refinement iteration; needs a model built with track_history."""
    if model.history is None:
        raise InvalidArgumentError("Model was built without track_history=True")
    sse = sse_by_iteration(model.history, model.observations, model.distance)
    iterations = range(1, len(sse) + 1)
    ax.plot(list(iterations), sse, "bo-", linewidth=2, markersize=6)
    ax.set_xlabel("Iteration", fontsize=13)
    ax.set_ylabel("SSE", fontsize=13)
    ax.set_title("K-Means SSE per iteration", fontsize=15, fontweight="bold")
    ax.grid(True, alpha=0.3)
    return sse
