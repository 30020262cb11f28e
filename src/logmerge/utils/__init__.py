from .sentinel import is_sentinel, sentinel

__all__ = [
    "is_sentinel",
    "sentinel",
]
