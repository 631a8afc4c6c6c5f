"""
Content-Based Similarity Model
------------------------------
Scores documents by term importance and compares them pairwise.

Pipeline:
- TF: term count / document token count (whitespace tokens, case kept)
- IDF: log(N / number of documents containing the term)
- TF-IDF: TF * IDF, sparse (only terms present in the document)
- Output: cosine similarity between documents, N x N, zero diagonal

Vectors are plain dicts {term: weight}. A term missing from a dict is an
implicit zero.
"""

import sys

import numpy as np
import pandas as pd
from sklearn.feature_extraction.text import CountVectorizer

from simrec import config


def _count_terms(documents):
    """
    Term counts for the corpus.

    Returns:
        (terms, counts): vocabulary array and a CSR matrix (documents x terms),
        or (empty array, None) when no document holds a single token.
    """
    if not any(doc.split() for doc in documents):
        return np.array([], dtype=object), None

    vectorizer = CountVectorizer(tokenizer=str.split, lowercase=False, token_pattern=None)
    counts = vectorizer.fit_transform(documents).tocsr()
    return vectorizer.get_feature_names_out(), counts


def _row_items(counts, terms, i):
    start, end = counts.indptr[i], counts.indptr[i + 1]
    return zip(terms[counts.indices[start:end]], counts.data[start:end])


def _tf_from_counts(terms, counts, n_docs):
    if counts is None:
        return [{} for _ in range(n_docs)]

    tf = []
    for i in range(n_docs):
        row = dict(sorted(_row_items(counts, terms, i)))
        total = sum(row.values())
        tf.append({str(term): float(c / total) for term, c in row.items()})
    return tf


def _idf_from_counts(terms, counts, n_docs):
    if counts is None:
        return {}

    doc_freq = np.asarray((counts > 0).sum(axis=0)).ravel()
    return {str(term): float(np.log(n_docs / df)) for term, df in zip(terms, doc_freq)}


def term_frequency(documents):
    """One {term: count / total tokens} dict per document. Blank documents give {}."""
    terms, counts = _count_terms(documents)
    return _tf_from_counts(terms, counts, len(documents))


def inverse_document_frequency(documents):
    """Global {term: log(N / document frequency)} over every observed term."""
    terms, counts = _count_terms(documents)
    return _idf_from_counts(terms, counts, len(documents))


def tf_idf(tf, idf):
    return [{term: value * idf[term] for term, value in doc_tf.items()} for doc_tf in tf]


def cosine_similarity(vec_a, vec_b):
    """
    Cosine similarity of two sparse vectors.

    The dot product only sees shared terms, but each norm covers the whole
    vector. An empty (or all-zero) vector gives NaN.
    """
    dot = np.float64(sum(value * vec_b[term] for term, value in vec_a.items() if term in vec_b))
    norm_a = np.sqrt((np.fromiter(vec_a.values(), dtype=float, count=len(vec_a)) ** 2).sum())
    norm_b = np.sqrt((np.fromiter(vec_b.values(), dtype=float, count=len(vec_b)) ** 2).sum())

    with np.errstate(divide="ignore", invalid="ignore"):
        return float(dot / (norm_a * norm_b))


def cosine_similarity_matrix(tfidf):
    """Symmetric N x N matrix of pairwise cosine similarities; diagonal left at 0."""
    n_docs = len(tfidf)
    similarities = np.zeros((n_docs, n_docs))

    for i in range(n_docs):
        for j in range(i + 1, n_docs):
            similarities[i, j] = similarities[j, i] = cosine_similarity(tfidf[i], tfidf[j])

    return similarities


class ContentBasedModel:
    def __init__(self, documents, verbose=None):
        """
        Run the full pipeline once over `documents` (one string per document).
        """
        self.verbose = config.VERBOSE if verbose is None else verbose
        self.documents = list(documents)

        self._debug(f"Initializing ContentBasedModel with {len(self.documents)} documents...")

        terms, counts = _count_terms(self.documents)
        self.tf = _tf_from_counts(terms, counts, len(self.documents))
        self.idf = _idf_from_counts(terms, counts, len(self.documents))
        self._debug(f"Vocabulary size: {len(self.idf)}")

        self.tfidf = tf_idf(self.tf, self.idf)

        self.similarities = cosine_similarity_matrix(self.tfidf)
        self._debug(f"Similarity matrix shape: {self.similarities.shape}")

    def _debug(self, message):
        if self.verbose:
            print(f"[DEBUG] {message}", file=sys.stderr)

    def document_table(self, doc_index):
        """TF, IDF and TF-IDF of every term in one document."""
        doc_tf = self.tf[doc_index]
        return pd.DataFrame(
            {
                "term": list(doc_tf),
                "tf": [doc_tf[t] for t in doc_tf],
                "idf": [self.idf[t] for t in doc_tf],
                "tfidf": [self.tfidf[doc_index][t] for t in doc_tf],
            },
            columns=["term", "tf", "idf", "tfidf"],
        )

    def similarity(self, i, j):
        return float(self.similarities[i, j])
