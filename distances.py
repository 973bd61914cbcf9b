import math
import numbers

from clustering_errors import InvalidArgumentError, TypeMismatchError


def is_numeric(value):
    """True for real numbers (NumPy scalars included); False for bools, None and NaN."""
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        return False
    return not math.isnan(value)


def _check_lengths(a, b):
    if len(a) != len(b):
        raise InvalidArgumentError(
            f"Observations differ in length ({len(a)} vs {len(b)})"
        )


def squared_euclidean(a, b):
    """Sum of squared differences over the numeric coordinates of a and b.

    Pairs of non-numeric values (labels, symbols) add nothing. A numeric value
    paired with a non-numeric one, None included, raises TypeMismatchError.
    """
    _check_lengths(a, b)
    total = 0
    for i, (x, y) in enumerate(zip(a, b)):
        x_num, y_num = is_numeric(x), is_numeric(y)
        if x_num and y_num:
            total += (x - y) ** 2
        elif x_num or y_num:
            raise TypeMismatchError(
                f"Cannot compare {x!r} with {y!r} at coordinate {i}"
            )
    return total


def manhattan(a, b):
    """Sum of absolute differences, skipping any pair that is not fully numeric."""
    _check_lengths(a, b)
    return sum(
        abs(x - y) for x, y in zip(a, b) if is_numeric(x) and is_numeric(y)
    )


DEFAULT_DISTANCE = squared_euclidean
