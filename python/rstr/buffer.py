# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

"""
Buffer: a growable, terminated byte sequence with tracked size and capacity.

The storage region always holds ``capacity + 1`` bytes and the byte at index
``size`` is always the terminator. Storage is acquired, grown and returned
only through the allocator passed to each call; nothing here is released
implicitly.
"""

from typing import Iterator, NamedTuple, Optional

from loguru import logger
from pydantic import ConfigDict, validate_call

from . import config
from .allocator import Allocator, Storage
from .constants import TERMINATOR
from .errors import AllocationFailure, BoundsViolation, BufferReleased, fail
from .typedefs import Byte, Capacity, Count, Size

# Buffers and allocators are plain classes, checked with isinstance only.
checked_call = validate_call(config=ConfigDict(arbitrary_types_allowed=True))


class BufferStats(NamedTuple):
    """Snapshot of a buffer's bookkeeping."""

    size: int
    capacity: int
    free: int
    terminator: int


class Buffer:
    """Owning byte buffer. Create with create() or with_capacity()."""

    __slots__ = ("_storage", "_size", "_capacity")

    def __init__(self, storage: Storage, size: Size, capacity: Capacity):
        self._storage: Optional[Storage] = storage
        self._size = size
        self._capacity = capacity
        storage[size] = TERMINATOR

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def released(self) -> bool:
        return self._storage is None

    def empty(self) -> bool:
        return self._size == 0

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, idx: int) -> int:
        storage = self.live_storage("get")
        if not (0 <= idx < self._size):
            fail(
                BoundsViolation,
                "get",
                f"index {idx} out of range for size {self._size}",
            )
        return storage[idx]

    @checked_call
    def __setitem__(self, idx: int, value: Byte) -> None:
        storage = self.live_storage("set")
        if not (0 <= idx < self._size):
            fail(
                BoundsViolation,
                "set",
                f"index {idx} out of range for size {self._size}",
            )
        storage[idx] = value

    def __iter__(self) -> Iterator[int]:
        storage = self.live_storage("iterate")
        for i in range(self._size):
            yield storage[i]

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def to_bytes(self) -> bytes:
        """Return a copy of the content bytes."""
        return bytes(self.live_storage("to_bytes")[: self._size])

    def terminated(self) -> bytes:
        """Return a copy of the content bytes followed by the terminator."""
        return bytes(self.live_storage("terminated")[: self._size + 1])

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Buffer):
            return self.to_bytes() == other.to_bytes()
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.to_bytes() == bytes(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._storage is None:
            return "Buffer(<released>)"
        return (
            f"Buffer({self.to_bytes()!r}, size={self._size}, "
            f"capacity={self._capacity})"
        )

    # ---- internal helpers shared with rstr.ops and rstr.view ----

    def live_storage(self, operation: str) -> Storage:
        """Return the current storage region, refusing released buffers."""
        if self._storage is None:
            fail(BufferReleased, operation, "buffer has been released")
        return self._storage

    def set_size(self, size: int) -> None:
        """Move the end of the content to ``size`` and re-terminate."""
        self._size = size
        self._storage[size] = TERMINATOR  # type: ignore[index]


def grown_capacity(capacity: int, size: int, count: int) -> int:
    """Capacity reached after ``count`` single-byte appends onto ``size`` bytes.

    Each append that finds ``capacity <= size + 1`` first grows capacity to
    ``growth_factor * (size + 1)``; only the appends that trigger a growth
    step are visited.
    """
    factor = config.get_growth_factor()
    end = size + count
    while True:
        trigger = max(size, capacity - 1)
        if trigger >= end:
            return capacity
        capacity = factor * (trigger + 1)
        size = trigger + 1


def acquire(allocator: Allocator, nbytes: int, operation: str) -> Storage:
    storage = allocator.allocate(nbytes)
    if not isinstance(storage, bytearray) or len(storage) != nbytes:
        fail(AllocationFailure, operation, f"allocate({nbytes}) failed")
    logger.debug("{}: allocated {} bytes", operation, nbytes)
    return storage


def regrow(buffer: Buffer, capacity: int, allocator: Allocator, operation: str) -> None:
    """Move ``buffer`` to storage for ``capacity`` content bytes, keeping content.

    Does nothing unless ``capacity`` exceeds the current capacity. On failure
    the buffer is left untouched.
    """
    storage = buffer.live_storage(operation)
    if capacity <= buffer.capacity:
        return
    old_nbytes = buffer.capacity + 1
    new_nbytes = capacity + 1
    grown = allocator.reallocate(storage, old_nbytes, new_nbytes)
    if not isinstance(grown, bytearray) or len(grown) != new_nbytes:
        fail(
            AllocationFailure,
            operation,
            f"reallocate({old_nbytes} -> {new_nbytes}) failed",
        )
    logger.debug("{}: capacity {} -> {}", operation, buffer.capacity, capacity)
    buffer._storage = grown
    buffer._capacity = capacity


@checked_call
def create(content: bytes, allocator: Allocator) -> Buffer:
    """Allocate a buffer holding a copy of ``content``.

    Capacity is ``max(default capacity, 2 * len(content))`` so that the first
    appends do not reallocate.
    """
    capacity = max(config.get_default_capacity(), 2 * len(content))
    storage = acquire(allocator, capacity + 1, "create")
    storage[: len(content)] = content
    return Buffer(storage, len(content), capacity)


@checked_call
def with_capacity(capacity: Capacity, allocator: Allocator) -> Buffer:
    """Allocate an empty buffer with room for exactly ``capacity`` bytes."""
    storage = acquire(allocator, capacity + 1, "with_capacity")
    return Buffer(storage, 0, capacity)


@checked_call
def reserve(buffer: Buffer, new_capacity: Capacity, allocator: Allocator) -> None:
    """Make room for at least ``new_capacity`` content bytes. Never shrinks."""
    regrow(buffer, new_capacity, allocator, "reserve")


@checked_call
def clear(buffer: Buffer) -> None:
    """Drop all content, keeping the storage and its capacity."""
    buffer.live_storage("clear")
    buffer.set_size(0)


@checked_call
def release(buffer: Buffer, allocator: Allocator) -> None:
    """Return the buffer's storage to ``allocator``.

    The buffer is unusable afterwards; any further call on it raises
    BufferReleased.
    """
    storage = buffer.live_storage("release")
    allocator.release(storage)
    logger.debug("release: returned {} bytes", buffer.capacity + 1)
    buffer._storage = None


@checked_call
def buffer_stats(buffer: Buffer) -> BufferStats:
    storage = buffer.live_storage("buffer_stats")
    return BufferStats(
        size=buffer.size,
        capacity=buffer.capacity,
        free=buffer.capacity - buffer.size,
        terminator=storage[buffer.size],
    )


def needed_capacity(buffer: Buffer, count: Count) -> int:
    """Capacity ``buffer`` must have before ``count`` more bytes are appended."""
    return grown_capacity(buffer.capacity, buffer.size, count)
