import logging

from clustering_errors import EmptyClusterError
from kmeans_config import EmptyClusterPolicy

logger = logging.getLogger(__name__)


def _cluster_sizes(labels, n_clusters):
    sizes = [0] * n_clusters
    for label in labels:
        sizes[label] += 1
    return sizes


def _eliminate(labels, centroids, empty):
    keep = [j for j in range(len(centroids)) if j not in empty]
    remap = {old: new for new, old in enumerate(keep)}
    return [remap[label] for label in labels], [centroids[j] for j in keep]


def _pick_random(observations, labels, centroids, sizes, rng, distance):
    candidates = [i for i, label in enumerate(labels) if sizes[label] > 1]
    return candidates[int(rng.integers(len(candidates)))]


def _pick_outlier(observations, labels, centroids, sizes, rng, distance):
    best, best_dist = None, -1.0
    for i, label in enumerate(labels):
        if sizes[label] < 2:
            continue
        d = distance(observations[i], centroids[label])
        if d > best_dist:
            best, best_dist = i, d
    return best


_PICKERS = {
    EmptyClusterPolicy.RANDOM: _pick_random,
    EmptyClusterPolicy.OUTLIER: _pick_outlier,
}


def handle_empty_clusters(policy, observations, labels, centroids, rng, distance):
    """Apply the empty-cluster policy to one assignment pass.

    Returns new ``(labels, centroids)``; the inputs are not modified. A
    reseeded centroid takes the value of the chosen observation and that
    observation joins the recovered cluster. Only observations whose cluster
    has other members are eligible, so recovery never empties another cluster.
    """
    sizes = _cluster_sizes(labels, len(centroids))
    empty = [j for j, size in enumerate(sizes) if size == 0]
    if not empty:
        return labels, centroids

    if policy is EmptyClusterPolicy.TERMINATE:
        raise EmptyClusterError(f"Cluster {empty[0]} has no members")

    if policy is EmptyClusterPolicy.ELIMINATE:
        logger.debug("Eliminating empty clusters %s", empty)
        return _eliminate(labels, centroids, set(empty))

    pick = _PICKERS[policy]
    labels, centroids = list(labels), list(centroids)
    for j in empty:
        i = pick(observations, labels, centroids, sizes, rng, distance)
        logger.debug("Reseeding empty cluster %d with observation %d (%s)", j, i, policy.value)
        sizes[labels[i]] -= 1
        sizes[j] = 1
        labels[i] = j
        centroids[j] = list(observations[i])
    return labels, centroids
