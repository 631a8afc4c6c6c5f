from simrec.UBCF.similarity_user import SIMILARITY_METRICS, get_similarity_metric
from simrec.UBCF.neighbors_user import find_neighbors, compute_all_neighbors
from simrec.UBCF.user_based_cf import PREDICTION_TYPES, get_predictor, UserBasedCF

__all__ = [
    "SIMILARITY_METRICS",
    "get_similarity_metric",
    "find_neighbors",
    "compute_all_neighbors",
    "PREDICTION_TYPES",
    "get_predictor",
    "UserBasedCF",
]
