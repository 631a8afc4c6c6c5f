import sys
import time

import numpy as np

from simrec import config
from simrec.UBCF.similarity_user import get_similarity_metric


def _resolve_metric(metric):
    if callable(metric):
        return metric
    return get_similarity_metric(metric)


def _sort_key(pair):
    # NaN scores rank below every real score
    score = pair[1]
    return -np.inf if np.isnan(score) else score


def find_neighbors(R, uid, item, k, metric):
    """
    Top-k users most similar to `uid` among those who rated `item`.

    Args:
        R: utility matrix (users x items), NaN = unrated
        uid: query user (row label)
        item: target item (column label)
        k: maximum number of neighbors
        metric: metric name ("pearson", "cosine", "euclidean") or a callable

    Returns:
        list of (user, similarity) sorted by descending similarity.
        Equal scores keep their row order.
    """
    sim_fn = _resolve_metric(metric)
    target_row = R.loc[uid]
    sims = []

    for other_uid in R.index:
        if other_uid == uid:
            continue
        if np.isnan(R.at[other_uid, item]):
            continue

        sims.append((other_uid, sim_fn(target_row, R.loc[other_uid])))

    return sorted(sims, key=_sort_key, reverse=True)[:k]


def compute_all_neighbors(R, k, metric, verbose=None):
    """Neighbor lists for every unrated (user, item) cell of R."""
    if verbose is None:
        verbose = config.VERBOSE

    sim_fn = _resolve_metric(metric)
    missing = [
        (uid, item)
        for uid in R.index
        for item in R.columns
        if np.isnan(R.at[uid, item])
    ]
    total = len(missing)
    neighbors = {}

    start = time.time()
    last = start

    for idx, (uid, item) in enumerate(missing):
        neighbors[(uid, item)] = find_neighbors(R, uid, item, k, sim_fn)

        now = time.time()
        if verbose and (now - last >= 1 or idx == total - 1):
            progress = (idx + 1) / total
            elapsed = now - start
            eta = (elapsed / progress) - elapsed
            print(f"[USER-NEIGH] {idx+1}/{total} ({progress*100:.1f}%) | ETA={eta:.1f}s",
                  file=sys.stderr)
            last = now

    if verbose:
        print(f"[DONE] neighbors computed for {total} cells in {time.time()-start:.1f}s",
              file=sys.stderr)
    return neighbors
