import numpy as np

from kmeans_config import InitMethod


def _init_random(observations, k, rng):
    return [int(i) for i in rng.choice(len(observations), size=k, replace=False)]


def _init_plusplus(observations, k, rng, distance):
    """K-Means++ seeding: spread initial centroids apart.

    The first index is uniform; each next one is drawn with probability
    proportional to its distance to the nearest chosen centroid.
    """
    n = len(observations)
    chosen = [int(rng.integers(n))]
    nearest = np.array([distance(obs, observations[chosen[0]]) for obs in observations], dtype=float)

    for _ in range(1, k):
        weights = nearest.copy()
        weights[chosen] = 0.0
        total = weights.sum()
        if total > 0:
            idx = int(rng.choice(n, p=weights / total))
        else:
            # every remaining observation coincides with a chosen centroid
            remaining = [i for i in range(n) if i not in chosen]
            idx = int(rng.choice(remaining))
        chosen.append(idx)
        dists = np.array([distance(obs, observations[idx]) for obs in observations], dtype=float)
        nearest = np.minimum(nearest, dists)

    return chosen


def initial_indices(method, observations, k, rng, distance, centroid_indices=None):
    """Pick the k observation indices whose values seed the centroids."""
    if method is InitMethod.INDICES:
        return [int(i) for i in centroid_indices]
    if method is InitMethod.KMEANS_PLUS_PLUS:
        return _init_plusplus(observations, k, rng, distance)
    return _init_random(observations, k, rng)


def initial_centroids(method, observations, k, rng, distance, centroid_indices=None):
    indices = initial_indices(method, observations, k, rng, distance, centroid_indices)
    return [list(observations[i]) for i in indices]
