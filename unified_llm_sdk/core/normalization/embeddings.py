"""
Embedding result normalization.

Vendors return embeddings either in request order or tagged with the index
of the input they belong to, possibly out of order. Results are always
sorted by index so the n-th embedding matches the n-th input string.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from ...models.generation import Embedding, EmbeddingResult, EmbeddingUsage

# (input index, vector, truncated flag or None when the vendor has no such concept)
IndexedVector = Tuple[int, Sequence[float], Optional[bool]]


def normalize_embeddings(
    items: Iterable[IndexedVector],
    usage: Optional[EmbeddingUsage] = None,
) -> EmbeddingResult:
    """
    Build an EmbeddingResult from indexed vendor vectors.

    Args:
        items: (index, values, truncated) records in vendor order
        usage: Aggregate token usage, if the vendor reported any

    Returns:
        EmbeddingResult ordered by input index
    """
    ordered = sorted(items, key=lambda item: item[0])
    return EmbeddingResult(
        embeddings=[
            Embedding(values=list(values), truncated=truncated)
            for _, values, truncated in ordered
        ],
        usage=usage,
    )


def sum_token_counts(counts: List[Optional[int]]) -> Optional[EmbeddingUsage]:
    """
    Aggregate per-item token counts into embedding usage.

    Returns None when no item reported a count.
    """
    reported = [count for count in counts if count is not None]
    if not reported:
        return None
    total = sum(reported)
    return EmbeddingUsage(prompt_tokens=total, total_tokens=total)
