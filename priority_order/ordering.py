"""Order a sequence by an explicit priority list of keys.

Items rank by the position of their key in the priority list. Items whose key
is not listed go after every listed item. Equal ranks keep their original
relative order.

    >>> order_by_priority(
    ...     ["SUPER LOW", "LOW", "HIGH", "SUPER SUPER LOW", "MEDIUM"],
    ...     lambda x: x,
    ...     ["HIGH", "MEDIUM", "LOW"],
    ... )
    ['HIGH', 'MEDIUM', 'LOW', 'SUPER LOW', 'SUPER SUPER LOW']
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable, Optional, TypeVar

from priority_order.common.deterministic import stable_sorted
from priority_order.common.errors import DuplicatePriorityError, NullArgumentError

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def build_rank_map(priorities: Iterable[K]) -> dict[K, int]:
    """Map each priority key to its 0-based position.

    Raises ``DuplicatePriorityError`` if any key appears more than once.
    """
    rank_map: dict[K, int] = {}
    duplicates: list[K] = []
    for idx, key in enumerate(priorities):
        if key in rank_map:
            if key not in duplicates:
                duplicates.append(key)
            continue
        rank_map[key] = idx
    if duplicates:
        raise DuplicatePriorityError("priorities", duplicates)
    return rank_map


def unlisted_rank(rank_map: dict) -> int:
    # One past the last rank plus a reserved slot; callers compare against it.
    return len(rank_map) + 1


def rank_of(key: Hashable, rank_map: dict) -> int:
    return rank_map.get(key, unlisted_rank(rank_map))


def order_by_priority(
    source: Iterable[T],
    key_selector: Callable[[T], K],
    priorities: Iterable[K],
    *,
    then_by: Optional[Callable[[T], object]] = None,
) -> list[T]:
    """Return the items of ``source`` ordered by ``priorities``.

    ``key_selector`` extracts the key of each item. Items whose key is not in
    ``priorities`` come last. Ties keep source order unless ``then_by`` gives a
    secondary key, in which case remaining ties still keep source order.

    Raises ``NullArgumentError`` when ``source``, ``key_selector`` or
    ``priorities`` is None, and ``DuplicatePriorityError`` when ``priorities``
    repeats a key. Both are raised before ``source`` is read.
    """
    if source is None:
        raise NullArgumentError("source")
    if key_selector is None:
        raise NullArgumentError("key_selector")
    if priorities is None:
        raise NullArgumentError("priorities")

    rank_map = build_rank_map(priorities)

    if then_by is None:
        return stable_sorted(source, key=lambda item: rank_of(key_selector(item), rank_map))
    return stable_sorted(
        source,
        key=lambda item: (rank_of(key_selector(item), rank_map), then_by(item)),
    )


def order_by_priority_values(
    source: Iterable[T],
    key_selector: Callable[[T], K],
    *priorities: K,
    then_by: Optional[Callable[[T], object]] = None,
) -> list[T]:
    """Variadic form of ``order_by_priority``.

    >>> order_by_priority_values([3, 1, 2], lambda x: x, 2, 3)
    [2, 3, 1]
    """
    return order_by_priority(source, key_selector, tuple(priorities), then_by=then_by)
