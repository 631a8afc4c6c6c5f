import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def example_matrix():
    """3 users x 3 items, NaN = unrated."""
    return pd.DataFrame(
        [
            [5.0, 3.0, np.nan],
            [4.0, np.nan, 2.0],
            [np.nan, 4.0, 5.0],
        ]
    )


@pytest.fixture
def example_matrix_file(tmp_path):
    path = tmp_path / "utility.txt"
    path.write_text("1\n5\n5 3 -\n4 - 2\n- 4 5\n", encoding="utf-8")
    return path
