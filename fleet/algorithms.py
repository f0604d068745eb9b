"""
Sorting and searching over vehicle snapshots.

All entry points operate on a caller-supplied list (typically
`VehicleIndex.get_all_vehicles()`), never on the tree or heap directly, and
never mutate the list they are given. Each returns the result together with
instrumentation (elapsed time and comparison count) for reporting.

Keys are selected by name ("mileage", "registration", "driver",
"fuel_usage") or by passing any callable. String keys compare
case-insensitively.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

KeyFunc = Callable[[Any], Any]

SORT_KEYS: Dict[str, KeyFunc] = {
    "mileage": lambda v: v.mileage,
    "registration": lambda v: v.registration,
    "driver": lambda v: v.driver_id,
    "fuel_usage": lambda v: v.fuel_usage,
}


class InvalidSortKeyError(ValueError):
    """Raised when a sort/search is requested on an unsupported field."""


@dataclass
class SortResult:
    """Sorted copy of the input plus instrumentation."""

    items: List[Any]
    algorithm: str
    key: str
    elapsed_ms: float
    comparisons: int


@dataclass
class SearchResult:
    """Binary search outcome plus instrumentation."""

    item: Optional[Any]
    elapsed_ms: float
    comparisons: int

    @property
    def found(self) -> bool:
        return self.item is not None


def _fold(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def resolve_key(key: Union[str, KeyFunc]) -> KeyFunc:
    """Turn a key name or callable into a case-folding key function."""
    if callable(key):
        func = key
    else:
        try:
            func = SORT_KEYS[key]
        except KeyError:
            raise InvalidSortKeyError(
                f"Invalid sort key: {key!r} (expected one of {', '.join(SORT_KEYS)})"
            ) from None
    return lambda item: _fold(func(item))


def _key_name(key: Union[str, KeyFunc]) -> str:
    return key if isinstance(key, str) else getattr(key, "__name__", "custom")


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


# =============================================================================
# Binary search
# =============================================================================


def binary_search(
    sorted_items: Sequence[Any],
    target: Any,
    key: Union[str, KeyFunc] = "registration",
) -> SearchResult:
    """
    Find the element whose key equals `target`.

    `sorted_items` must already be sorted ascending by the same key. Each
    look at the middle element counts as one comparison.
    """
    start = time.perf_counter()
    key_func = resolve_key(key)
    wanted = _fold(target)
    comparisons = 0
    found = None

    left = 0
    right = len(sorted_items) - 1
    while left <= right:
        comparisons += 1
        middle = left + (right - left) // 2
        value = key_func(sorted_items[middle])
        if value == wanted:
            found = sorted_items[middle]
            break
        elif value < wanted:
            left = middle + 1
        else:
            right = middle - 1

    return SearchResult(item=found, elapsed_ms=_elapsed_ms(start), comparisons=comparisons)


# =============================================================================
# Quicksort
# =============================================================================


class _Counter:
    def __init__(self, key_func: KeyFunc):
        self.key_func = key_func
        self.comparisons = 0

    def le(self, a: Any, b: Any) -> bool:
        self.comparisons += 1
        return self.key_func(a) <= self.key_func(b)


def _partition(items: List[Any], low: int, high: int, counter: _Counter) -> int:
    # Lomuto: last element is the pivot
    pivot = items[high]
    i = low - 1
    for j in range(low, high):
        if counter.le(items[j], pivot):
            i += 1
            items[i], items[j] = items[j], items[i]
    items[i + 1], items[high] = items[high], items[i + 1]
    return i + 1


def _quick_sort(items: List[Any], low: int, high: int, counter: _Counter) -> None:
    # Explicit stack of pending (low, high) ranges, left side popped first
    ranges = [(low, high)]
    while ranges:
        low, high = ranges.pop()
        if low < high:
            pivot_index = _partition(items, low, high, counter)
            ranges.append((pivot_index + 1, high))
            ranges.append((low, pivot_index - 1))


def quick_sort(
    items: Sequence[Any], key: Union[str, KeyFunc] = "mileage"
) -> SortResult:
    """
    Quicksort a copy of `items` ascending by `key`.

    No randomized pivot: already-sorted input degrades to O(n^2).
    """
    start = time.perf_counter()
    counter = _Counter(resolve_key(key))
    result = list(items)
    _quick_sort(result, 0, len(result) - 1, counter)
    return SortResult(
        items=result,
        algorithm="quick",
        key=_key_name(key),
        elapsed_ms=_elapsed_ms(start),
        comparisons=counter.comparisons,
    )


# =============================================================================
# Mergesort
# =============================================================================


def _merge(items: List[Any], left: int, middle: int, right: int, counter: _Counter) -> None:
    left_part = items[left:middle + 1]
    right_part = items[middle + 1:right + 1]

    i = j = 0
    k = left
    while i < len(left_part) and j < len(right_part):
        # Taking from the left on ties keeps the sort stable
        if counter.le(left_part[i], right_part[j]):
            items[k] = left_part[i]
            i += 1
        else:
            items[k] = right_part[j]
            j += 1
        k += 1

    while i < len(left_part):
        items[k] = left_part[i]
        i += 1
        k += 1

    while j < len(right_part):
        items[k] = right_part[j]
        j += 1
        k += 1


def _merge_sort(items: List[Any], left: int, right: int, counter: _Counter) -> None:
    if left < right:
        middle = left + (right - left) // 2
        _merge_sort(items, left, middle, counter)
        _merge_sort(items, middle + 1, right, counter)
        _merge(items, left, middle, right, counter)


def merge_sort(
    items: Sequence[Any], key: Union[str, KeyFunc] = "mileage"
) -> SortResult:
    """Stable O(n log n) mergesort of a copy of `items` ascending by `key`."""
    start = time.perf_counter()
    counter = _Counter(resolve_key(key))
    result = list(items)
    _merge_sort(result, 0, len(result) - 1, counter)
    return SortResult(
        items=result,
        algorithm="merge",
        key=_key_name(key),
        elapsed_ms=_elapsed_ms(start),
        comparisons=counter.comparisons,
    )


SORTERS = {
    "quick": quick_sort,
    "merge": merge_sort,
}


def sort_vehicles(
    items: Sequence[Any], algorithm: str = "merge", key: Union[str, KeyFunc] = "mileage"
) -> SortResult:
    """Dispatch to a sort algorithm by name ("quick" or "merge")."""
    try:
        sorter = SORTERS[algorithm]
    except KeyError:
        raise InvalidSortKeyError(f"Invalid sort algorithm: {algorithm!r}") from None
    return sorter(items, key)
