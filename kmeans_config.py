import numbers
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Callable, Optional, Sequence

from clustering_errors import InvalidArgumentError
from distances import DEFAULT_DISTANCE


def _is_int(value):
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class InitMethod(str, Enum):
    RANDOM = "random"
    KMEANS_PLUS_PLUS = "kmeans++"
    INDICES = "indices"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if value == "kmeans_plus_plus":
            return cls.KMEANS_PLUS_PLUS
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError("Invalid value for init_method") from None


class EmptyClusterPolicy(str, Enum):
    """What to do with a centroid that ends an assignment pass with no members."""

    ELIMINATE = "eliminate"
    TERMINATE = "terminate"
    RANDOM = "random"
    OUTLIER = "outlier"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError("Invalid value for on_empty") from None


@dataclass(frozen=True)
class KMeansConfig:
    distance_function: Callable = DEFAULT_DISTANCE
    init_method: Optional[str] = None  # None -> indices if given, else random
    centroid_indices: Optional[Sequence[int]] = None
    random_seed: Optional[int] = None
    max_iterations: Optional[int] = None  # None -> run until a fixed point
    restarts: int = 1
    on_empty: str = "eliminate"
    track_history: bool = False

    def with_options(self, **options):
        known = {f.name for f in fields(self)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvalidArgumentError(f"Unknown option(s): {', '.join(unknown)}")
        return replace(self, **options)

    def resolve_init_method(self):
        if self.init_method is None:
            if self.centroid_indices is not None:
                return InitMethod.INDICES
            return InitMethod.RANDOM
        method = InitMethod.parse(self.init_method)
        if method is InitMethod.INDICES and self.centroid_indices is None:
            raise InvalidArgumentError("init_method 'indices' requires centroid_indices")
        if method is not InitMethod.INDICES and self.centroid_indices is not None:
            raise InvalidArgumentError(
                f"centroid_indices cannot be combined with init_method '{method.value}'"
            )
        return method

    def validate(self, k, n_observations):
        """Check every option against k and the data size before any work starts.

        Returns the parsed ``(init_method, on_empty)`` pair.
        """
        if not callable(self.distance_function):
            raise InvalidArgumentError("distance_function must be callable")
        if not _is_int(k) or k < 1:
            raise InvalidArgumentError(f"Number of clusters must be a positive integer, got {k!r}")
        if k > n_observations:
            raise InvalidArgumentError(
                f"Number of clusters ({k}) exceeds number of observations ({n_observations})"
            )
        if self.max_iterations is not None and (
            not _is_int(self.max_iterations) or self.max_iterations < 1
        ):
            raise InvalidArgumentError("max_iterations must be a positive integer")
        if not _is_int(self.restarts) or self.restarts < 1:
            raise InvalidArgumentError("restarts must be a positive integer")

        on_empty = EmptyClusterPolicy.parse(self.on_empty)
        init_method = self.resolve_init_method()
        if init_method is InitMethod.INDICES:
            if len(self.centroid_indices) != k:
                raise InvalidArgumentError(
                    "Length of centroid indices array differs from the specified number of clusters"
                )
            for index in self.centroid_indices:
                if not _is_int(index) or not 0 <= index < n_observations:
                    raise InvalidArgumentError(f"Invalid centroid index {index}")
            if len(set(self.centroid_indices)) != k:
                raise InvalidArgumentError("Centroid indices must be distinct")
        return init_method, on_empty
