"""
User-User Similarity Functions
------------------------------
Each metric compares two rating rows (users) and returns one score where
larger means more similar. Only items rated by BOTH users (non-NaN in both
rows) take part in the computation.

Degenerate inputs are not masked: zero variance or an empty common support
yield NaN/Inf the way plain float arithmetic does (Pearson alone defines an
empty support as 0.0).
"""

import numpy as np
import pandas as pd


def _common_support(u, v):
    """Return the two rows restricted to the items both users rated."""
    u = pd.Series(u, dtype=float)
    v = pd.Series(v, dtype=float)
    both = u.dropna().index.intersection(v.dropna().index)
    return u[both].to_numpy(), v[both].to_numpy()


def pearson_similarity(u, v):
    a, b = _common_support(u, v)
    if len(a) == 0:
        return 0.0

    a_mc = a - a.mean()
    b_mc = b - b.mean()

    num = (a_mc * b_mc).sum()
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(num / np.sqrt((a_mc**2).sum() * (b_mc**2).sum()))


def cosine_similarity(u, v):
    """
    Cosine over the common support only.
    Norms ignore items the other user did not rate.
    """
    a, b = _common_support(u, v)

    num = np.float64((a * b).sum())
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(num / (np.sqrt((a**2).sum()) * np.sqrt((b**2).sum())))


def euclidean_similarity(u, v):
    """Negated Euclidean distance, so a closer user scores higher."""
    a, b = _common_support(u, v)
    return float(-np.sqrt(((a - b) ** 2).sum()))


SIMILARITY_METRICS = {
    "pearson": pearson_similarity,
    "cosine": cosine_similarity,
    "euclidean": euclidean_similarity,
}


def get_similarity_metric(name):
    """Look up a metric by name. Unknown names are a configuration error."""
    try:
        return SIMILARITY_METRICS[name]
    except KeyError:
        raise ValueError(
            f"Invalid metric '{name}' (expected one of: {', '.join(SIMILARITY_METRICS)})"
        ) from None
