"""
Usage normalization module.

This module converts vendor usage snapshots into the canonical Usage record.
All providers must use these functions to ensure consistent usage reporting
across the SDK.

The three vendors count tokens differently:

- openai reports prompt/completion/total directly, with reasoning and cached
  counters nested in ``*_tokens_details``.
- ollama reports ``prompt_eval_count`` and ``eval_count``; the total is
  their sum.
- genai reports ``prompt_token_count`` and ``total_token_count``; the
  completion count is derived by subtraction.
"""

from collections.abc import Mapping
from typing import Any, Dict, Optional

from ...models.generation import Usage


def usage_to_dict(usage_data: Any) -> Optional[Dict[str, Any]]:
    """
    Convert a vendor usage object into a plain dict.

    Accepts mappings, pydantic models (``model_dump``) and plain objects.
    Returns None when no usage data was supplied.
    """
    if usage_data is None:
        return None
    if isinstance(usage_data, Mapping):
        return dict(usage_data)
    if hasattr(usage_data, "model_dump"):
        return usage_data.model_dump()
    return {k: v for k, v in vars(usage_data).items() if not k.startswith("_")}


def _nested(data: Dict[str, Any], parent: str, key: str) -> Optional[int]:
    details = data.get(parent)
    if details is None:
        return None
    if not isinstance(details, Mapping):
        details = usage_to_dict(details)
    return details.get(key)


def _positive_or_none(value: Optional[int]) -> Optional[int]:
    # genai zero counts are omitted rather than recorded
    if not value or value < 0:
        return None
    return int(value)


def normalize_usage(usage_data: Any, provider: str) -> Optional[Usage]:
    """
    Normalize a vendor usage snapshot into the canonical Usage record.

    Fields the vendor does not report stay absent; they are never
    defaulted to zero. Vendor totals are trusted as provided.

    Args:
        usage_data: Raw usage snapshot (dict or SDK object), or None
        provider: Provider name for provider-specific handling

    Returns:
        Usage, or None when no usage data was supplied
    """
    data = usage_to_dict(usage_data)
    if data is None:
        return None

    if provider == "openai":
        return Usage(
            prompt_tokens=data.get("prompt_tokens"),
            completion_tokens=data.get("completion_tokens"),
            total_tokens=data.get("total_tokens"),
            reasoning_tokens=_nested(data, "completion_tokens_details", "reasoning_tokens"),
            cached_tokens=_nested(data, "prompt_tokens_details", "cached_tokens"),
        )

    elif provider == "ollama":
        prompt_tokens = data.get("prompt_eval_count")
        completion_tokens = data.get("eval_count")
        if prompt_tokens is None and completion_tokens is None:
            return None
        prompt_tokens = prompt_tokens or 0
        completion_tokens = completion_tokens or 0
        return Usage(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=prompt_tokens + completion_tokens,
        )

    elif provider == "genai":
        prompt_tokens = data.get("prompt_token_count") or 0
        total_tokens = data.get("total_token_count") or 0
        # A derived completion count of zero is omitted, not recorded as 0
        completion_tokens = total_tokens - prompt_tokens if total_tokens else 0
        return Usage(
            prompt_tokens=_positive_or_none(prompt_tokens),
            completion_tokens=_positive_or_none(completion_tokens),
            total_tokens=_positive_or_none(total_tokens),
            reasoning_tokens=data.get("thoughts_token_count"),
            cached_tokens=data.get("cached_content_token_count"),
        )

    # Generic mapping for providers registered outside the SDK
    usage = Usage()
    for prompt_field in ("prompt_tokens", "input_tokens", "prompt_token_count"):
        if data.get(prompt_field) is not None:
            usage.prompt_tokens = data[prompt_field]
            break
    for completion_field in ("completion_tokens", "output_tokens", "candidates_token_count"):
        if data.get(completion_field) is not None:
            usage.completion_tokens = data[completion_field]
            break
    usage.total_tokens = data.get("total_tokens", data.get("total_token_count"))
    return usage
