import numpy as np

from distances import DEFAULT_DISTANCE


def sum_of_squared_errors(observations, labels, centroids, distance=DEFAULT_DISTANCE):
    """Sum of distances from each observation to its assigned centroid.

    With the default metric this is the usual within-cluster sum of squares.
    """
    return float(sum(distance(obs, centroids[label]) for obs, label in zip(observations, labels)))


def cluster_sizes(labels, n_clusters):
    """Number of members per cluster index."""
    return np.bincount(np.asarray(labels, dtype=int), minlength=n_clusters).tolist()


def sse_by_iteration(history, observations, distance=DEFAULT_DISTANCE):
    """SSE of every recorded iteration, measured against that iteration's centroids."""
    return [
        sum_of_squared_errors(observations, entry.assignments, entry.centroids, distance)
        for entry in history
    ]
