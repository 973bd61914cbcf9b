class ClusteringError(Exception):
    """Base class for every error raised by the clustering engine."""


class EmptyInputError(ClusteringError, ValueError):
    """The data set has no observations."""


class InvalidArgumentError(ClusteringError, ValueError):
    """A build argument or option failed validation."""


class TypeMismatchError(ClusteringError, TypeError):
    """A numeric coordinate was paired with a non-numeric one."""


class EmptyClusterError(ClusteringError, RuntimeError):
    """A cluster lost all its members under the ``terminate`` policy."""


class NotFittedError(ClusteringError, RuntimeError):
    """The model was used before ``build`` was called."""
