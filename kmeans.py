import logging
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
import pandas as pd

from clustering_errors import NotFittedError, TypeMismatchError
from kmeans_config import KMeansConfig
from distances import is_numeric
from empty_clusters import handle_empty_clusters
from history import HistoryRecorder
from initializers import initial_centroids
from metrics import cluster_sizes, sum_of_squared_errors
from observations import load_observations

logger = logging.getLogger(__name__)


def assign_clusters(observations, centroids, distance):
    """Index of the nearest centroid for every observation; ties go to the lowest index."""
    labels = []
    for obs in observations:
        dists = [distance(obs, c) for c in centroids]
        labels.append(int(np.argmin(dists)))
    return labels


def _mean_or_first(members):
    """Coordinate-wise mean of numeric columns; other columns copied from the first member."""
    first = members[0]
    centroid = []
    for i, value in enumerate(first):
        if not is_numeric(value):
            centroid.append(value)
            continue
        column = [obs[i] for obs in members]
        if not all(is_numeric(v) for v in column):
            raise TypeMismatchError(f"Column {i} mixes numeric and non-numeric values")
        centroid.append(float(np.mean(column)))
    return centroid


def update_centroids(observations, labels, centroids):
    """Recompute each non-empty cluster's centroid; empty clusters keep theirs."""
    members = [[] for _ in centroids]
    for obs, label in zip(observations, labels):
        members[label].append(obs)
    return [
        _mean_or_first(group) if group else list(centroid)
        for centroid, group in zip(centroids, members)
    ]


def _repair_empty_clusters(policy, observations, labels, centroids, rng, distance):
    """Apply the empty-cluster policy, reassigning after every reseed.

    A reseeded centroid can pull in other observations, so the pass is
    reassigned against the repaired centroids until no cluster is empty.
    """
    for _ in range(len(observations)):
        repaired_labels, repaired = handle_empty_clusters(
            policy, observations, labels, centroids, rng, distance
        )
        if repaired is centroids or len(repaired) < len(centroids):
            # nothing was empty, or the empty centroids were dropped
            return repaired_labels, repaired
        labels, centroids = assign_clusters(observations, repaired, distance), repaired
    if len(set(labels)) < len(centroids):
        logger.warning("Empty clusters persisted after reseeding; keeping forced members")
        return repaired_labels, repaired
    return labels, centroids


@dataclass
class _Attempt:
    centroids: List[list]
    labels: List[int]
    iterations: int
    sse: float
    history: Optional[tuple]


def _single_run(observations, k, config, init_method, on_empty, rng):
    distance = config.distance_function
    centroids = initial_centroids(
        init_method, observations, k, rng, distance, config.centroid_indices
    )
    recorder = HistoryRecorder(config.track_history)

    previous, previous_k = None, None
    iterations = 0
    while True:
        iterations += 1
        labels = assign_clusters(observations, centroids, distance)
        labels, centroids = _repair_empty_clusters(
            on_empty, observations, labels, centroids, rng, distance
        )
        recorder.record(labels, centroids)
        centroids = update_centroids(observations, labels, centroids)

        if labels == previous and len(centroids) == previous_k:
            logger.debug("Fixed point reached after %d iterations", iterations)
            break
        if config.max_iterations is not None and iterations >= config.max_iterations:
            logger.debug("Stopped at max_iterations=%d", config.max_iterations)
            break
        previous, previous_k = labels, len(centroids)

    sse = sum_of_squared_errors(observations, labels, centroids, distance)
    return _Attempt(centroids, labels, iterations, sse, recorder.result())


def _best_of_restarts(observations, k, config, init_method, on_empty):
    """Run the whole init/refine pipeline ``restarts`` times and keep the lowest SSE."""
    base_rng = np.random.default_rng(config.random_seed)
    best = None
    for attempt in range(config.restarts):
        # derive a deterministic sub-seed so attempt i is the same for any restart count
        rng = np.random.default_rng(base_rng.integers(0, 2**31 - 1))
        result = _single_run(observations, k, config, init_method, on_empty, rng)
        logger.debug(
            "Attempt %d/%d: %d clusters, %d iterations, SSE %.6g",
            attempt + 1, config.restarts, len(result.centroids), result.iterations, result.sse,
        )
        if best is None or result.sse < best.sse:
            best = result
    return best


class KMeans:
    """K-Means clustering over observations with numeric and categorical attributes.

    Options are the fields of ``KMeansConfig`` and may be given as keywords
    here, as a ready ``config`` object, or as overrides to ``build``.
    """

    def __init__(self, config=None, **options):
        base = config if config is not None else KMeansConfig()
        self.config = base.with_options(**options) if options else base
        self.centroids = None
        self.clusters = None
        self.cluster_indices = None
        self.labels = None
        self.iterations = 0
        self.history = None
        self.on_empty = None
        self.data_labels = None
        self.observations = None
        self._sse = None

    def distance(self, a, b):
        return self.config.distance_function(a, b)

    def build(self, data_set, k, **options):
        observations, data_labels = load_observations(data_set)
        config = self.config.with_options(**options) if options else self.config
        init_method, on_empty = config.validate(k, len(observations))

        best = _best_of_restarts(observations, k, config, init_method, on_empty)

        self.config = config
        self.on_empty = on_empty.value
        self.data_labels = data_labels
        self.observations = observations
        self.centroids = best.centroids
        self.labels = best.labels
        self.iterations = best.iterations
        self.history = best.history
        self._sse = best.sse
        self.cluster_indices = [[] for _ in best.centroids]
        for i, label in enumerate(best.labels):
            self.cluster_indices[label].append(i)
        self.clusters = [[observations[i] for i in members] for members in self.cluster_indices]

        logger.info(
            "K-Means built: k=%d -> %d clusters, %d iterations, SSE %.6g",
            k, len(self.centroids), self.iterations, self._sse,
        )
        return self

    def _check_fitted(self):
        if self.centroids is None:
            raise NotFittedError("Call build() first.")

    @property
    def sse(self):
        self._check_fitted()
        return self._sse

    def classify(self, observation):
        """Index of the trained centroid nearest to a new observation."""
        self._check_fitted()
        dists = [self.distance(observation, c) for c in self.centroids]
        return int(np.argmin(dists))

    def predict(self, observations):
        self._check_fitted()
        rows, _ = load_observations(observations)
        return [self.classify(row) for row in rows]

    def cluster_sizes(self):
        self._check_fitted()
        return cluster_sizes(self.labels, len(self.centroids))

    def to_frame(self):
        """Training observations as a DataFrame with an extra ``cluster`` column."""
        self._check_fitted()
        df = pd.DataFrame(self.observations, columns=self.data_labels)
        df["cluster"] = self.labels
        return df

    def __repr__(self):
        if self.centroids is None:
            return "KMeans(unfitted)"
        return (
            f"KMeans(n_clusters={len(self.centroids)}, iterations={self.iterations}, "
            f"sse={self._sse:.3f}, on_empty={self.on_empty})"
        )
