from .analyzer import analyze, normalize_key, recalculate_percentages

__all__ = [
    "analyze",
    "normalize_key",
    "recalculate_percentages",
]
