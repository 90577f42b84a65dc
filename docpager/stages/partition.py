from __future__ import annotations

import itertools
import typing as t

T = t.TypeVar("T")


def partition(source: t.Iterable[T], size: int) -> t.Iterator[t.Tuple[T, ...]]:
    """Split ``source`` into consecutive tuples of ``size`` items.

    The last chunk may be shorter. ``source`` is iterated exactly once, so
    generators and other one-shot iterables are safe to pass in. Callers are
    expected to have checked ``size > 0``.
    """
    it = iter(source)
    while True:
        chunk = tuple(itertools.islice(it, size))
        if not chunk:
            return
        yield chunk
