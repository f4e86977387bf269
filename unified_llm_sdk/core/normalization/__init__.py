"""Normalization of vendor usage and embedding results into SDK models."""

from .embeddings import normalize_embeddings, sum_token_counts
from .usage import normalize_usage, usage_to_dict

__all__ = [
    "normalize_embeddings",
    "normalize_usage",
    "sum_token_counts",
    "usage_to_dict",
]
