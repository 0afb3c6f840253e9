from .indexed_bar import IndexedBar
from .pmo_point import PmoPoint
from .roc_point import RocPoint

__all__ = [
    "IndexedBar",
    "PmoPoint",
    "RocPoint",
]
