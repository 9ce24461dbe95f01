from .report import FetchReport

__all__ = [
    "FetchReport",
]
