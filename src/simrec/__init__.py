"""
simrec
------
Similarity-based recommendations from two independent angles:

- content_based: TF / IDF / TF-IDF and pairwise cosine similarity of documents
- UBCF: user-based collaborative filtering over a utility matrix
"""

__version__ = "0.1.0"
