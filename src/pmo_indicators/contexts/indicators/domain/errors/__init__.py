from .bad_history_error import BadHistoryError
from .duplicate_bar_error import DuplicateBarError
from .insufficient_history_error import InsufficientHistoryError
from .invalid_parameter_error import InvalidParameterError

__all__ = [
    "BadHistoryError",
    "DuplicateBarError",
    "InsufficientHistoryError",
    "InvalidParameterError",
]
