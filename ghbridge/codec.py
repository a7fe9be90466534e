"""Encode and decode slash-separated identifiers (status contexts, ref names).

A status context such as ``ci/build/unit`` is held as the segments
``("ci", "build", "unit")``.  A missing context becomes the single segment
``("default",)`` and only that exact value turns back into ``None``, so a
context literally named ``default`` does not survive a round trip.
"""

from __future__ import annotations

from collections.abc import Sequence

SEPARATOR = "/"
DEFAULT_CONTEXT = ("default",)


def _segments(path: str) -> tuple[str, ...]:
    return tuple(part for part in path.split(SEPARATOR) if part)


def encode_context(context: str | None) -> tuple[str, ...]:
    if context is None:
        return DEFAULT_CONTEXT
    return _segments(context)


def decode_context(segments: Sequence[str]) -> str | None:
    if tuple(segments) == DEFAULT_CONTEXT:
        return None
    return SEPARATOR.join(segments)


def encode_ref(name: str) -> tuple[str, ...]:
    """Split a ref name, dropping a leading ``refs`` segment.

    ``refs/heads/foo`` and ``heads/foo`` both give ``("heads", "foo")``.
    """
    segments = _segments(name)
    if segments and segments[0] == "refs":
        return segments[1:]
    return segments


def decode_ref(segments: Sequence[str]) -> str:
    return SEPARATOR.join(segments)
