from .inmemory import Window

__all__ = ["Window"]
