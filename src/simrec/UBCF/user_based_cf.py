"""
User-Based Collaborative Filtering
----------------------------------
Predicts a missing rating from the ratings of the k most similar users.

- Similarity: pearson / cosine / euclidean  (see similarity_user)
- Prediction:
    simple : Σ s_n * r_n / Σ |s_n|
    mean   : μ_u + Σ s_n * (r_n - μ_n) / Σ |s_n|
- Output: single prediction score (NaN when no neighbor rated the item)
"""

import sys

import numpy as np

from simrec import config
from simrec.UBCF.neighbors_user import compute_all_neighbors, find_neighbors
from simrec.UBCF.similarity_user import get_similarity_metric


def predict_simple(R, uid, item, neighbors):
    """Similarity-weighted average of the neighbors' ratings for `item`."""
    num = np.float64(0.0)
    den = np.float64(0.0)

    for nid, sim in neighbors:
        r_nv = R.at[nid, item]
        if not np.isnan(r_nv):
            num += sim * r_nv
            den += abs(sim)

    with np.errstate(divide="ignore", invalid="ignore"):
        return float(num / den)


def predict_mean_centered(R, uid, item, neighbors):
    """
    Weighted average of the neighbors' deviations from their own mean,
    added back onto the query user's mean. Means skip unrated cells.
    """
    user_mean = R.loc[uid].mean()

    num = np.float64(0.0)
    den = np.float64(0.0)

    for nid, sim in neighbors:
        r_nv = R.at[nid, item]
        if not np.isnan(r_nv):
            num += sim * (r_nv - R.loc[nid].mean())
            den += abs(sim)

    with np.errstate(divide="ignore", invalid="ignore"):
        return float(user_mean + num / den)


PREDICTION_TYPES = {
    "simple": predict_simple,
    "mean": predict_mean_centered,
}


def get_predictor(name):
    """Look up a prediction strategy by name. Unknown names are a configuration error."""
    try:
        return PREDICTION_TYPES[name]
    except KeyError:
        raise ValueError(
            f"Invalid prediction type '{name}' (expected one of: {', '.join(PREDICTION_TYPES)})"
        ) from None


class UserBasedCF:
    def __init__(self, R, metric=config.DEFAULT_METRIC, k=config.DEFAULT_K,
                 prediction=config.DEFAULT_PREDICTION, verbose=None):
        """
        Args:
            R: utility matrix (users x items), NaN = unrated. Never modified.
            metric: similarity metric name
            k: maximum neighbor count
            prediction: "simple" or "mean"
        """
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 0:
            raise ValueError(f"k must be a non-negative integer, got {k!r}")

        self.R = R
        self.metric = metric
        self.sim_fn = get_similarity_metric(metric)
        self.k = int(k)
        self.prediction = prediction
        self.predict_fn = get_predictor(prediction)
        self.verbose = config.VERBOSE if verbose is None else verbose

        if self.verbose:
            print(f"[DEBUG] UserBasedCF: R shape={R.shape}, metric={metric}, "
                  f"k={self.k}, prediction={prediction}", file=sys.stderr)

    def neighbors(self, user_id, item_id):
        return find_neighbors(self.R, user_id, item_id, self.k, self.sim_fn)

    def predict(self, user_id, item_id, neighbors=None):
        if neighbors is None:
            neighbors = self.neighbors(user_id, item_id)
        return self.predict_fn(self.R, user_id, item_id, neighbors)

    def predict_missing(self):
        """
        Predict every unrated cell.

        Returns:
            dict {(user, item): (neighbors, prediction)} in row-major order
        """
        all_neighbors = compute_all_neighbors(self.R, self.k, self.sim_fn, verbose=self.verbose)
        return {
            cell: (neigh, self.predict(cell[0], cell[1], neigh))
            for cell, neigh in all_neighbors.items()
        }

    def fill_missing(self, predictions=None):
        """Copy of R with every unrated cell replaced by its prediction."""
        if predictions is None:
            predictions = self.predict_missing()

        filled = self.R.copy()
        for (uid, item), (_, pred) in predictions.items():
            filled.at[uid, item] = pred

        if self.verbose:
            still_missing = int(filled.isna().sum().sum())
            print(f"[DEBUG] Filled {len(predictions)} cells "
                  f"({still_missing} still undefined)", file=sys.stderr)
        return filled
