from .pmo_error import PmoError

__all__ = ["PmoError"]
