from . import services

__all__ = ["services"]
