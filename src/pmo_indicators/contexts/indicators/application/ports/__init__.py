from .history_preparer import HistoryPreparer
from .roc_source import RocSource

__all__ = [
    "HistoryPreparer",
    "RocSource",
]
