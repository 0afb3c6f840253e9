from .sorted_history_preparer import SortedHistoryPreparer

__all__ = ["SortedHistoryPreparer"]
