from .edit_history import EditHistory

__all__ = [
    "EditHistory",
]
