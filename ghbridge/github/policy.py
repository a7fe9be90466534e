"""Pure merge policies applied to paginated GitHub results."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

from ghbridge.result import Err, Ok, Result

T = TypeVar("T")


def dedup_by(items: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """Keep the first item seen for each key, preserving order."""
    seen: set[Hashable] = set()
    kept: list[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        kept.append(item)
    return kept


def merge_partial(first: Result[list[T]], second: Result[list[T]]) -> Result[list[T]]:
    """Combine two independent list queries.

    Both ok → concatenation.  One failing → the other half alone.  Both
    failing → an error carrying both messages.
    """
    if isinstance(first, Ok) and isinstance(second, Ok):
        return Ok(first.value + second.value)
    if isinstance(first, Ok):
        return first
    if isinstance(second, Ok):
        return second
    return Err(f"{first.message}; {second.message}")
