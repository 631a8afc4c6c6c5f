"""
Leave-one-out evaluation for UBCF with:
- every similarity metric
- both prediction types

Each rated cell is hidden in turn, predicted from the remaining matrix,
and compared with the true rating.
"""

import math
import sys

import numpy as np
from matplotlib.figure import Figure
from sklearn.metrics import mean_absolute_error, mean_squared_error

from simrec import config
from simrec.UBCF.similarity_user import SIMILARITY_METRICS
from simrec.UBCF.user_based_cf import PREDICTION_TYPES, UserBasedCF


def leave_one_out(R, metric, k, prediction, verbose=None):
    """
    Returns:
        dict with rmse, mae, coverage, preds, trues.
        rmse/mae cover finite predictions only; coverage is their share of
        all rated cells. Both are NaN when nothing could be predicted.
    """
    if verbose is None:
        verbose = config.VERBOSE

    rated = [(uid, item) for uid in R.index for item in R.columns if not np.isnan(R.at[uid, item])]
    preds, trues = [], []

    for uid, item in rated:
        R_train = R.copy()
        true_r = R_train.at[uid, item]
        R_train.at[uid, item] = np.nan

        model = UserBasedCF(R_train, metric=metric, k=k, prediction=prediction, verbose=False)
        pred = model.predict(uid, item)
        if np.isfinite(pred):
            preds.append(pred)
            trues.append(true_r)

    if preds:
        rmse = math.sqrt(mean_squared_error(trues, preds))
        mae = mean_absolute_error(trues, preds)
    else:
        rmse = mae = float("nan")
    coverage = len(preds) / len(rated) if rated else float("nan")

    if verbose:
        print(f"[EVAL] metric={metric} k={k} prediction={prediction} | "
              f"RMSE={rmse:.4f} MAE={mae:.4f} Coverage={coverage:.2%}", file=sys.stderr)

    return {"rmse": rmse, "mae": mae, "coverage": coverage, "preds": preds, "trues": trues}


def compare_configurations(R, k, metrics=None, predictions=None, verbose=None):
    """Leave-one-out scores for every (metric, prediction) pair, keyed by that pair."""
    metrics = list(SIMILARITY_METRICS) if metrics is None else metrics
    predictions = list(PREDICTION_TYPES) if predictions is None else predictions

    return {
        (metric, prediction): leave_one_out(R, metric, k, prediction, verbose=verbose)
        for metric in metrics
        for prediction in predictions
    }


def plot_error_distribution(results, path, bins=30):
    """
    Histogram of prediction errors, one panel per configuration. Saved to `path`.
    Drawn on a standalone Figure, so the pyplot backend is left untouched.
    """
    n = max(len(results), 1)
    fig = Figure(figsize=(6 * n, 5))

    for idx, (name, res) in enumerate(results.items(), start=1):
        ax = fig.add_subplot(1, n, idx)
        errors = np.array(res["preds"]) - np.array(res["trues"])
        if len(errors):
            ax.hist(errors, bins=bins, alpha=0.7)
        label = " / ".join(name) if isinstance(name, tuple) else str(name)
        ax.set_title(f"Error Dist - {label}")

    fig.savefig(path)
    return path
