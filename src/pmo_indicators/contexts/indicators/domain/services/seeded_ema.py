"""
Seed-then-recurse exponential smoothing over optional decimal series.

Related: .pmo_cascade,
  ...adapters.outbound.compute_numba.pmo_kernels
"""

from __future__ import annotations

from collections import deque
from decimal import Decimal
from typing import Callable, Iterable, Iterator, Sequence

EmaStep = Callable[[Decimal, Decimal], Decimal]


def weighted_step(alpha: Decimal) -> EmaStep:
    """
    Build the `current * alpha + previous * (1 - alpha)` recursion.

    Args:
        alpha: Smoothing constant.
    Returns:
        EmaStep: Function `(current, previous) -> next`.
    Assumptions:
        `1 - alpha` is evaluated once in the active decimal context.
    Raises:
        None.
    Side Effects:
        None.
    """
    complement = 1 - alpha

    def step(current: Decimal, previous: Decimal) -> Decimal:
        return current * alpha + previous * complement

    return step


def delta_step(alpha: Decimal) -> EmaStep:
    """
    Build the `(current - previous) * alpha + previous` recursion.

    Args:
        alpha: Smoothing constant.
    Returns:
        EmaStep: Function `(current, previous) -> next`.
    Assumptions:
        Algebraically equal to `weighted_step`, but rounds differently under `Decimal`.
    Raises:
        None.
    Side Effects:
        None.
    """

    def step(current: Decimal, previous: Decimal) -> Decimal:
        return (current - previous) * alpha + previous

    return step


def mean_of_present(values: Iterable[Decimal | None]) -> Decimal | None:
    """
    Arithmetic mean over non-None values; None when nothing is present.

    Args:
        values: Window values.
    Returns:
        Decimal | None: Mean, or None for an all-absent window.
    Assumptions:
        None.
    Raises:
        None.
    Side Effects:
        None.
    """
    total = Decimal(0)
    count = 0
    for value in values:
        if value is None:
            continue
        total += value
        count += 1
    if count == 0:
        return None
    return total / count


def iter_seeded_ema(
    values: Iterable[Decimal | None],
    *,
    seed_position: int,
    window: int,
    step: EmaStep,
) -> Iterator[Decimal | None]:
    """
    Lazily smooth `values`, one output per input.

    Positions before `seed_position` (0-based) yield None. The seed is the mean
    of the trailing `window` inputs ending at `seed_position`. Later positions
    apply `step(current, previous)`; a None operand yields None, and that None
    is carried into the next step.

    Args:
        values: Source series.
        seed_position: 0-based position of the seed value.
        window: Width of the seed window.
        step: Recursion used after the seed.
    Returns:
        Iterator[Decimal | None]: Smoothed series, same length as `values`.
    Assumptions:
        Caller runs the iteration inside the intended decimal context.
    Raises:
        ValueError: If `seed_position` is negative or `window` is not positive.
    Side Effects:
        None.
    """
    if seed_position < 0:
        raise ValueError(f"seed_position must be >= 0, got {seed_position}")
    if window <= 0:
        raise ValueError(f"window must be > 0, got {window}")

    trailing: deque[Decimal | None] = deque(maxlen=window)
    previous: Decimal | None = None
    for position, current in enumerate(values):
        trailing.append(current)
        if position < seed_position:
            yield None
            continue
        if position == seed_position:
            previous = mean_of_present(trailing)
        elif current is None or previous is None:
            previous = None
        else:
            previous = step(current, previous)
        yield previous


def seeded_ema(
    values: Sequence[Decimal | None],
    *,
    seed_position: int,
    window: int,
    step: EmaStep,
) -> list[Decimal | None]:
    """
    Materialized form of `iter_seeded_ema`.

    Args:
        values: Source series.
        seed_position: 0-based position of the seed value.
        window: Width of the seed window.
        step: Recursion used after the seed.
    Returns:
        list[Decimal | None]: Smoothed series, same length as `values`.
    Assumptions:
        See `iter_seeded_ema`.
    Raises:
        ValueError: If `seed_position` is negative or `window` is not positive.
    Side Effects:
        None.
    """
    return list(
        iter_seeded_ema(values, seed_position=seed_position, window=window, step=step)
    )
