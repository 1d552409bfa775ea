"""Helpers for deterministic ordering."""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

T = TypeVar("T")


def stable_sorted(items: Iterable[T], key: Callable[[T], object]) -> list[T]:
    # Original position breaks ties, so equal keys never reorder and the
    # key function runs once per item.
    decorated = [(key(item), idx, item) for idx, item in enumerate(items)]
    decorated.sort(key=lambda entry: (entry[0], entry[1]))
    return [item for _key, _idx, item in decorated]
