# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

"""
Allocator capability used by every rstr primitive that acquires storage.

An allocator hands out ``bytearray`` regions and signals failure by returning
``None``. Its ``context`` is an opaque, caller-owned resource (an arena, a
pool, a quota) that must outlive every buffer created through it. The core
never keeps an allocator around: it is passed explicitly to each call.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

Storage = bytearray

AllocateFn = Callable[[Any, int], Optional[Storage]]
ReleaseFn = Callable[[Any, Storage], None]
ReallocateFn = Callable[[Any, Storage, int, int], Optional[Storage]]


class Allocator(ABC):
    """Acquire, release and grow raw storage on behalf of a buffer."""

    def __init__(self, context: Any = None):
        self.context = context

    @abstractmethod
    def allocate(self, nbytes: int) -> Optional[Storage]:
        """Return a new region of ``nbytes`` bytes, or None on failure."""

    @abstractmethod
    def release(self, storage: Storage) -> None:
        """Return ``storage`` to the allocator. Must be called once per region."""

    @abstractmethod
    def reallocate(
        self, storage: Storage, old_nbytes: int, new_nbytes: int
    ) -> Optional[Storage]:
        """Return a region of ``new_nbytes`` bytes holding the first
        ``min(old_nbytes, new_nbytes)`` bytes of ``storage``, or None on failure.

        The returned region may or may not be ``storage`` itself.
        """


class HeapAllocator(Allocator):
    """Default allocator backed by fresh Python ``bytearray`` objects.

    ``reallocate`` always moves to a new region, so anything still pointing
    at the old one (a View, for instance) keeps seeing the old bytes.
    """

    def allocate(self, nbytes: int) -> Optional[Storage]:
        try:
            return bytearray(nbytes)
        except MemoryError:
            return None

    def release(self, storage: Storage) -> None:
        pass

    def reallocate(
        self, storage: Storage, old_nbytes: int, new_nbytes: int
    ) -> Optional[Storage]:
        try:
            grown = bytearray(new_nbytes)
        except MemoryError:
            return None
        keep = min(old_nbytes, new_nbytes)
        grown[:keep] = storage[:keep]
        return grown


class FunctionAllocator(Allocator):
    """Allocator assembled from three plain callables and a context.

    Each callable receives the context as its first argument, e.g.::

        def arena_alloc(arena, nbytes): ...
        alloc = FunctionAllocator(arena_alloc, arena_free, arena_realloc, arena)
    """

    def __init__(
        self,
        allocate: AllocateFn,
        release: ReleaseFn,
        reallocate: ReallocateFn,
        context: Any = None,
    ):
        super().__init__(context)
        self._allocate = allocate
        self._release = release
        self._reallocate = reallocate

    def allocate(self, nbytes: int) -> Optional[Storage]:
        return self._allocate(self.context, nbytes)

    def release(self, storage: Storage) -> None:
        self._release(self.context, storage)

    def reallocate(
        self, storage: Storage, old_nbytes: int, new_nbytes: int
    ) -> Optional[Storage]:
        return self._reallocate(self.context, storage, old_nbytes, new_nbytes)
