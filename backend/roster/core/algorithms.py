"""
Sorting and searching algorithms for student records.

The set is closed: five comparison sorts and two search strategies, picked
through the enums below and dispatched through ``SORT_STRATEGIES``. Every
sort orders records with ``compare()`` so all five agree on what "sorted"
means for a given key and order.

Sort functions take a list and return the sorted list. Bubble, selection,
insertion and shell sort work in place; merge sort builds a new list.
"""

from enum import Enum
from typing import Callable, Dict, List

from ..models import Student


class SortAlgorithm(str, Enum):
    BUBBLE = "bubble"
    SELECTION = "selection"
    INSERTION = "insertion"
    MERGE = "merge"
    SHELL = "shell"


class SearchAlgorithm(str, Enum):
    LINEAR = "linear"
    SEQUENTIAL = "sequential"  # same as linear
    BINARY = "binary"


class SortKey(str, Enum):
    NAME = "name"
    CODE = "code"
    SCORE = "score"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


COMPLEXITY_LABELS: Dict[str, str] = {
    SortAlgorithm.BUBBLE.value: "O(n²) - Quadratic",
    SortAlgorithm.SELECTION.value: "O(n²) - Quadratic",
    SortAlgorithm.INSERTION.value: "O(n²) - Quadratic",
    SortAlgorithm.MERGE.value: "O(n log n) - Logarithmic",
    SortAlgorithm.SHELL.value: "O(n log² n)",
    SearchAlgorithm.LINEAR.value: "O(n) - Linear",
    SearchAlgorithm.SEQUENTIAL.value: "O(n) - Linear",
    SearchAlgorithm.BINARY.value: "O(log n) - Logarithmic",
}


def compare(a: Student, b: Student, key: SortKey, order: SortOrder, fold_case: bool = False) -> int:
    """
    Three-way comparison of two students on one field.

    Args:
        a: Left student
        b: Right student
        key: Field to compare (strings lexicographically, score numerically)
        order: DESC negates the result
        fold_case: Compare string fields case-insensitively

    Returns:
        int: -1, 0 or 1
    """
    value_a = getattr(a, SortKey(key).value)
    value_b = getattr(b, SortKey(key).value)
    if fold_case and isinstance(value_a, str):
        value_a, value_b = value_a.lower(), value_b.lower()

    result = 0
    if value_a < value_b:
        result = -1
    elif value_a > value_b:
        result = 1

    return result if SortOrder(order) == SortOrder.ASC else -result


def bubble_sort(items: List[Student], key: SortKey, order: SortOrder) -> List[Student]:
    """Adjacent compare-and-swap passes. Stable."""
    n = len(items)
    for i in range(n - 1):
        for j in range(n - i - 1):
            if compare(items[j], items[j + 1], key, order) > 0:
                items[j], items[j + 1] = items[j + 1], items[j]
    return items


def selection_sort(items: List[Student], key: SortKey, order: SortOrder) -> List[Student]:
    """Swap the smallest remaining element to the front. Not stable."""
    n = len(items)
    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            if compare(items[j], items[min_idx], key, order) < 0:
                min_idx = j
        items[i], items[min_idx] = items[min_idx], items[i]
    return items


def insertion_sort(items: List[Student], key: SortKey, order: SortOrder) -> List[Student]:
    """Shift larger elements right and insert. Stable, linear on sorted input."""
    for i in range(1, len(items)):
        current = items[i]
        j = i - 1
        while j >= 0 and compare(items[j], current, key, order) > 0:
            items[j + 1] = items[j]
            j -= 1
        items[j + 1] = current
    return items


def merge_sort(
    items: List[Student],
    key: SortKey,
    order: SortOrder,
    fold_case: bool = False
) -> List[Student]:
    """Recursive halve-then-merge. Stable; returns a new list."""
    if len(items) <= 1:
        return list(items)
    mid = len(items) // 2
    left = merge_sort(items[:mid], key, order, fold_case)
    right = merge_sort(items[mid:], key, order, fold_case)
    return _merge(left, right, key, order, fold_case)


def _merge(
    left: List[Student],
    right: List[Student],
    key: SortKey,
    order: SortOrder,
    fold_case: bool
) -> List[Student]:
    merged = []
    i = j = 0
    while i < len(left) and j < len(right):
        # Ties take the left element
        if compare(left[i], right[j], key, order, fold_case) <= 0:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def shell_sort(items: List[Student], key: SortKey, order: SortOrder) -> List[Student]:
    """Gapped insertion sort with gaps n//2, n//4, ..., 1. Not stable."""
    n = len(items)
    gap = n // 2
    while gap > 0:
        for i in range(gap, n):
            temp = items[i]
            j = i
            while j >= gap and compare(items[j - gap], temp, key, order) > 0:
                items[j] = items[j - gap]
                j -= gap
            items[j] = temp
        gap //= 2
    return items


SORT_STRATEGIES: Dict[SortAlgorithm, Callable[[List[Student], SortKey, SortOrder], List[Student]]] = {
    SortAlgorithm.BUBBLE: bubble_sort,
    SortAlgorithm.SELECTION: selection_sort,
    SortAlgorithm.INSERTION: insertion_sort,
    SortAlgorithm.MERGE: merge_sort,
    SortAlgorithm.SHELL: shell_sort,
}


def linear_search(items: List[Student], query: str) -> List[Student]:
    """
    Scan every student once.

    Name matches are case-insensitive substring matches; code matches are
    plain substring matches. Results keep collection order.
    """
    needle = query.lower()
    return [s for s in items if needle in s.name.lower() or query in s.code]


def binary_search(items: List[Student], query: str) -> int:
    """
    Halving search for an exact case-insensitive name match.

    Args:
        items: Students sorted by name ascending, ignoring case
        query: Name to look for

    Returns:
        int: Index of the first match the halving reaches, or -1
    """
    target = query.lower()
    left, right = 0, len(items) - 1
    while left <= right:
        mid = left + (right - left) // 2
        candidate = items[mid].name.lower()
        if target == candidate:
            return mid
        if target > candidate:
            left = mid + 1
        else:
            right = mid - 1
    return -1
