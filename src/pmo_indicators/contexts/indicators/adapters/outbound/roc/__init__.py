from .close_roc_source import CloseRocSource

__all__ = ["CloseRocSource"]
