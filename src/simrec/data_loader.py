"""
Data Loading Module
-------------------
Readers and writers for the two command-line tools:

- Documents (one per line)
- Stop words and lemmatization tables (read, not applied to TF/IDF)
- Utility matrix: min rating, max rating, then one row of ratings per user
  with '-' for unrated cells

Unrated cells are held as NaN in a users x items DataFrame.
"""

import sys

import numpy as np
import pandas as pd

from simrec import config


# ------------------------------------------------------
# Content tool inputs
# ------------------------------------------------------
def read_documents(path):
    """One document per line, newline stripped."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f]


def read_stop_words(path):
    """Set of whitespace-separated stop words."""
    with open(path, "r", encoding="utf-8") as f:
        return set(f.read().split())


def read_lemmatization(path):
    """
    Term -> lemma mapping from consecutive (term, lemma) token pairs.
    A trailing unpaired token is ignored.
    """
    with open(path, "r", encoding="utf-8") as f:
        tokens = f.read().split()
    return dict(zip(tokens[0::2], tokens[1::2]))


# ------------------------------------------------------
# Utility matrix
# ------------------------------------------------------
def parse_utility_matrix(lines):
    """
    Build (R, min_rating, max_rating) from the lines of a utility matrix file.

    Raises:
        ValueError: missing header, bad number, or rows of unequal length.
    """
    lines = list(lines)
    if len(lines) < 2:
        raise ValueError("utility matrix needs min and max rating lines")

    min_rating = float(lines[0])
    max_rating = float(lines[1])

    rows = []
    for lineno, line in enumerate(lines[2:], start=3):
        tokens = line.split()
        if not tokens:
            continue
        row = [np.nan if t == config.UNRATED_TOKEN else float(t) for t in tokens]
        rated = [r for r, t in zip(row, tokens) if t != config.UNRATED_TOKEN]
        if not np.all(np.isfinite(rated)):
            raise ValueError(f"line {lineno}: ratings must be finite numbers or '{config.UNRATED_TOKEN}'")
        rows.append(row)
        if len(rows[-1]) != len(rows[0]):
            raise ValueError(
                f"line {lineno}: expected {len(rows[0])} ratings, got {len(rows[-1])}"
            )

    R = pd.DataFrame(rows, dtype=float)
    R.index.name = "user"
    R.columns.name = "item"

    out_of_range = ((R < min_rating) | (R > max_rating)).sum().sum()
    if out_of_range:
        print(f"[WARNING] {out_of_range} ratings fall outside [{min_rating}, {max_rating}]",
              file=sys.stderr)

    return R, min_rating, max_rating


def load_utility_matrix(path):
    """Read a utility matrix file. See parse_utility_matrix."""
    with open(path, "r", encoding="utf-8") as f:
        return parse_utility_matrix(f.read().splitlines())


def _format_rating(value):
    if np.isnan(value):
        return config.UNRATED_TOKEN
    return f"{value:g}"


def format_utility_matrix(R):
    """Matrix as text, one user per line, '-' for cells without a value."""
    return "".join(
        " ".join(_format_rating(v) for v in row) + "\n"
        for row in R.to_numpy(dtype=float)
    )


def write_utility_matrix(R, path):
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_utility_matrix(R))
