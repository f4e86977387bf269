from .adapter import GenAIProvider

__all__ = ["GenAIProvider"]
