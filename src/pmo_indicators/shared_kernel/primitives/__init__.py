"""
Shared Kernel primitives.

This package re-exports the minimal set of domain primitives so that other
modules can import them from one place:

    from pmo_indicators.shared_kernel.primitives import Bar, UtcTimestamp
"""

from .bar import Bar
from .utc_timestamp import UtcTimestamp

__all__ = [
    "Bar",
    "UtcTimestamp",
]
