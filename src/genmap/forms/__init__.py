from . import coerce

__all__ = ["coerce"]
