from .normalize import normalize_text

__all__ = ["normalize_text"]
