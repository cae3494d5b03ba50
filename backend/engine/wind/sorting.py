"""In-place quicksort and sample median for wind speed series.

The sort keeps the classic Lomuto layout (pivot parked in the last slot of
the partition) but picks the pivot at random, groups keys equal to the pivot,
and walks partitions from an explicit stack.  Measured wind speeds are
often logged at 0.1 m/s resolution, so long runs of equal values and already
ordered blocks are the normal case rather than the exception.
"""

from __future__ import annotations

import random
from collections.abc import MutableSequence, Sequence
from typing import Any

from engine.wind.errors import EmptySampleError


# ---------------------------------------------------------------------------
# Sorter
# ---------------------------------------------------------------------------

def _park_pivot(a: MutableSequence[Any], lo: int, hi: int, rng: random.Random) -> None:
    """Swap a randomly chosen element of a[lo:hi+1] into a[hi]."""
    p = rng.randint(lo, hi)
    a[p], a[hi] = a[hi], a[p]


def _partition(a: MutableSequence[Any], lo: int, hi: int) -> tuple[int, int]:
    """Partition a[lo:hi+1] around the pivot stored at a[hi].

    Returns ``(lt, gt)`` such that ``a[lo:lt] < pivot``,
    ``a[lt:gt+1] == pivot`` and ``a[gt+1:hi+1] > pivot``.
    """
    pivot = a[hi]

    # Lomuto sweep: everything strictly less than the pivot to the front.
    lt = lo
    for i in range(lo, hi):
        if a[i] < pivot:
            a[i], a[lt] = a[lt], a[i]
            lt += 1
    a[lt], a[hi] = a[hi], a[lt]

    # Second sweep over the right side gathers keys equal to the pivot.
    gt = lt
    for i in range(lt + 1, hi + 1):
        if not pivot < a[i]:
            gt += 1
            a[i], a[gt] = a[gt], a[i]

    return lt, gt


def quick_sort(a: MutableSequence[Any]) -> None:
    """Sort *a* in place into non-decreasing order.

    Works on any mutable sequence whose elements support ``<`` (lists,
    1-D numpy arrays, ...).  The larger partition is always deferred on the
    stack, so the stack never holds more than ``log2(n)`` entries.
    """
    # Seeded per call: pivots vary with the input size only, never between runs.
    rng = random.Random(len(a))
    stack: list[tuple[int, int]] = [(0, len(a) - 1)]

    while stack:
        lo, hi = stack.pop()
        while hi > lo:
            _park_pivot(a, lo, hi, rng)
            lt, gt = _partition(a, lo, hi)

            if lt - lo < hi - gt:
                stack.append((gt + 1, hi))
                hi = lt - 1
            else:
                stack.append((lo, lt - 1))
                lo = gt + 1


# ---------------------------------------------------------------------------
# Median
# ---------------------------------------------------------------------------

MEDIAN_CONVENTIONS = ("standard", "legacy")


def median(values: Sequence[float], convention: str = "standard") -> float:
    """Return the sample median of *values*.

    A private copy is sorted with :func:`quick_sort`; *values* itself is not
    touched.

    Parameters
    ----------
    values : sequence of float
        Sample to summarise.  Must not be empty.
    convention : {"standard", "legacy"}
        Indexing policy applied to the sorted copy (zero-based).

        * ``"standard"`` -- odd *n*: element ``(n - 1) // 2``; even *n*:
          mean of elements ``n // 2 - 1`` and ``n // 2``.
        * ``"legacy"`` -- the policy used by earlier versions of this tool
          and reproduced for comparing against old reports: odd *n*:
          element ``(n + 1) // 2``; even *n*: mean of elements ``n // 2``
          and ``n // 2 + 1``.  Both branches sit one place to the right of
          the true median and raise :class:`IndexError` when that runs past
          the end (``n`` of 1 or 2).

    Raises
    ------
    EmptySampleError
        If *values* is empty.
    ValueError
        If *convention* is not recognised.
    """
    if convention not in MEDIAN_CONVENTIONS:
        raise ValueError(
            f"Unsupported median convention '{convention}'. "
            f"Use one of {', '.join(MEDIAN_CONVENTIONS)}."
        )

    xs = [float(v) for v in values]
    n = len(xs)
    if n == 0:
        raise EmptySampleError("Cannot compute the median of an empty sample.")

    quick_sort(xs)

    if convention == "standard":
        if n % 2 == 1:
            return xs[(n - 1) // 2]
        return (xs[n // 2 - 1] + xs[n // 2]) / 2.0

    if n % 2 == 1:
        return xs[(n + 1) // 2]
    return (xs[n // 2] + xs[n // 2 + 1]) / 2.0
