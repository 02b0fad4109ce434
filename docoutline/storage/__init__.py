from .titles import SQLiteTitleStore

__all__ = ["SQLiteTitleStore"]
