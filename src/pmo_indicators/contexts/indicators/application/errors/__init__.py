from .pmo_error_mapping import to_pmo_error

__all__ = ["to_pmo_error"]
