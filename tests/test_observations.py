from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

from clustering_errors import EmptyInputError, InvalidArgumentError
from observations import load_observations


def test_plain_rows():
    rows, labels = load_observations([(1, 2), (3, 4)])
    assert rows == [[1, 2], [3, 4]]
    assert labels is None


def test_numpy_array():
    rows, _ = load_observations(np.array([[1.0, 2.0], [3.0, 4.0]]))
    assert rows == [[1.0, 2.0], [3.0, 4.0]]


def test_one_dimensional_array_rejected():
    with pytest.raises(InvalidArgumentError):
        load_observations(np.array([1.0, 2.0]))


def test_dataframe_takes_column_labels():
    df = pd.DataFrame({"city": ["Paris", "Oslo"], "temp": [21.5, 12.0]})
    rows, labels = load_observations(df)
    assert labels == ["city", "temp"]
    assert rows == [["Paris", 21.5], ["Oslo", 12.0]]


def test_data_items_container():
    data_set = SimpleNamespace(data_items=[[1, 2], [3, 4]], data_labels=["X", "Y"])
    rows, labels = load_observations(data_set)
    assert rows == [[1, 2], [3, 4]]
    assert labels == ["X", "Y"]


@pytest.mark.parametrize("empty", [[], None, np.empty((0, 2)), pd.DataFrame()])
def test_empty_input(empty):
    with pytest.raises(EmptyInputError):
        load_observations(empty)


def test_ragged_rows():
    with pytest.raises(InvalidArgumentError, match="Observation 1"):
        load_observations([[1, 2], [3]])


def test_label_count_must_match():
    with pytest.raises(InvalidArgumentError):
        load_observations([[1, 2]], data_labels=["only"])


def test_rows_are_copies():
    data = [[1, 2]]
    rows, _ = load_observations(data)
    rows[0][0] = 9
    assert data == [[1, 2]]


def test_missing_cells_become_none():
    df = pd.DataFrame({"x": [1.0, np.nan], "label": ["a", None]})
    rows, _ = load_observations(df)
    assert rows == [[1.0, "a"], [None, None]]
    rows, _ = load_observations(np.array([[np.nan, 2.0]]))
    assert rows == [[None, 2.0]]
