import numpy as np
import pandas as pd

from clustering_errors import EmptyInputError, InvalidArgumentError


def _missing_to_none(rows):
    # NaN and NaT cells are missing values, not numbers
    return [[None if pd.isna(value) else value for value in row] for row in rows]


def load_observations(data_set, data_labels=None):
    """Read rows and column labels out of whatever container the caller has.

    Accepts a pandas DataFrame (labels from its columns), a 2-D NumPy array,
    any object exposing ``data_items``/``data_labels``, or a plain sequence of
    rows. Returns ``(observations, labels)`` where observations is a list of
    lists; the caller's container is never modified.
    """
    if isinstance(data_set, pd.DataFrame):
        rows = _missing_to_none(data_set.to_numpy(dtype=object).tolist())
        if data_labels is None:
            data_labels = [str(c) for c in data_set.columns]
    elif isinstance(data_set, np.ndarray):
        if data_set.ndim != 2:
            raise InvalidArgumentError(
                f"Expected a 2-D array of observations, got shape {data_set.shape}"
            )
        rows = _missing_to_none(data_set.tolist())
    elif hasattr(data_set, "data_items"):
        rows = [list(item) for item in data_set.data_items]
        if data_labels is None:
            data_labels = getattr(data_set, "data_labels", None)
    elif data_set is None:
        rows = []
    else:
        rows = [list(item) for item in data_set]

    if not rows:
        raise EmptyInputError("Data set has no observations")

    width = len(rows[0])
    for i, row in enumerate(rows):
        if len(row) != width:
            raise InvalidArgumentError(
                f"Observation {i} has {len(row)} attributes, expected {width}"
            )

    if data_labels is not None:
        data_labels = list(data_labels)
        if len(data_labels) != width:
            raise InvalidArgumentError(
                f"Got {len(data_labels)} column labels for {width} attributes"
            )

    return rows, data_labels
