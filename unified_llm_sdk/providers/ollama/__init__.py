from .adapter import OllamaProvider

__all__ = ["OllamaProvider"]
