# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

"""
Mutation primitives for Buffer.

Semantics enforced:
- Appends grow capacity one step at a time: an append that finds
  ``capacity <= size + 1`` first grows it to ``growth_factor * (size + 1)``.
- Every primitive checks its preconditions and secures the storage it needs
  before touching the buffer, so a call that raises leaves it unchanged.
- resize() is destructive: the result is ``new_size`` copies of the fill
  byte, whatever the buffer held before.
- Sources may be byte literals, Buffers or Views; they are read once, up
  front, so a buffer can be used as its own source.
"""

from .allocator import Allocator
from .buffer import Buffer, checked_call, grown_capacity, needed_capacity, regrow
from .constants import SPACE
from .errors import (
    BoundsViolation,
    SubstringBoundsViolation,
    ZeroLengthOperation,
    fail,
)
from .typedefs import Byte, Count, Index, Size
from .view import ByteSource, fill_new


def _append(buffer: Buffer, data: bytes, allocator: Allocator, operation: str) -> None:
    regrow(buffer, needed_capacity(buffer, len(data)), allocator, operation)
    storage = buffer.live_storage(operation)
    size = buffer.size
    storage[size : size + len(data)] = data
    buffer.set_size(size + len(data))


def _open_gap(
    buffer: Buffer,
    index: int,
    count: int,
    byte: int,
    allocator: Allocator,
    operation: str,
) -> None:
    # Shift [index, size) right by count and fill the hole with byte.
    regrow(buffer, needed_capacity(buffer, count), allocator, operation)
    storage = buffer.live_storage(operation)
    size = buffer.size
    storage[index + count : size + count] = storage[index:size]
    storage[index : index + count] = bytes([byte]) * count
    buffer.set_size(size + count)


def _close_gap(buffer: Buffer, index: int, count: int, operation: str) -> None:
    # Shift [index + count, size) left by count and drop the last count bytes.
    storage = buffer.live_storage(operation)
    size = buffer.size
    storage[index : size - count] = storage[index + count : size]
    buffer.set_size(size - count)


@checked_call
def push_back(buffer: Buffer, byte: Byte, allocator: Allocator) -> None:
    """Append a single byte."""
    _append(buffer, bytes([byte]), allocator, "push_back")


@checked_call
def pop_back(buffer: Buffer) -> None:
    """Drop the last byte. Popping an empty buffer is a BoundsViolation."""
    buffer.live_storage("pop_back")
    if buffer.empty():
        fail(BoundsViolation, "pop_back", "buffer is empty")
    buffer.set_size(buffer.size - 1)


@checked_call
def append_char(buffer: Buffer, count: Count, byte: Byte, allocator: Allocator) -> None:
    """Append ``byte`` ``count`` times."""
    _append(buffer, bytes([byte]) * count, allocator, "append_char")


@checked_call
def append_string(buffer: Buffer, source: ByteSource, allocator: Allocator) -> None:
    """Append every byte of ``source``, in order."""
    _append(buffer, bytes(source), allocator, "append_string")


@checked_call
def remove_from_end(buffer: Buffer, count: Count) -> None:
    """Drop the last ``count`` bytes."""
    buffer.live_storage("remove_from_end")
    if count > buffer.size:
        fail(
            BoundsViolation,
            "remove_from_end",
            f"cannot remove {count} bytes from a buffer of size {buffer.size}",
        )
    buffer.set_size(buffer.size - count)


@checked_call
def resize(buffer: Buffer, new_size: Size, fill: Byte, allocator: Allocator) -> None:
    """Replace the whole content with ``new_size`` copies of ``fill``.

    The old content is discarded, not truncated or padded: resizing
    ``b"hello world"`` to 12 with ``b"h"`` gives twelve ``h`` bytes.
    """
    regrow(buffer, grown_capacity(buffer.capacity, 0, new_size), allocator, "resize")
    buffer.set_size(0)
    _append(buffer, bytes([fill]) * new_size, allocator, "resize")


@checked_call
def insert(
    buffer: Buffer, index: Index, count: Count, byte: Byte, allocator: Allocator
) -> None:
    """Insert ``count`` copies of ``byte`` before position ``index``.

    ``index`` may equal the size, which appends.
    """
    buffer.live_storage("insert")
    if index > buffer.size:
        fail(
            BoundsViolation,
            "insert",
            f"index {index} out of range for size {buffer.size}",
        )
    _open_gap(buffer, index, count, byte, allocator, "insert")


@checked_call
def erase(buffer: Buffer, index: Index, count: Count) -> None:
    """Remove ``count`` bytes starting at ``index``."""
    buffer.live_storage("erase")
    if index + count > buffer.size:
        fail(
            BoundsViolation,
            "erase",
            f"range [{index}, {index + count}) out of range for size {buffer.size}",
        )
    _close_gap(buffer, index, count, "erase")


@checked_call
def assign(buffer: Buffer, source: ByteSource, allocator: Allocator) -> None:
    """Replace the whole content with the bytes of ``source``."""
    data = bytes(source)
    regrow(buffer, grown_capacity(buffer.capacity, 0, len(data)), allocator, "assign")
    buffer.set_size(0)
    _append(buffer, data, allocator, "assign")


@checked_call
def copy_slice(
    destination: Buffer,
    source_start: Index,
    source_count: Count,
    source: ByteSource,
    allocator: Allocator,
) -> None:
    """Make ``destination`` a copy of a sub-range of ``source``.

    A ``source_count`` of 0 means "from ``source_start`` to the end of
    ``source``". The destination is first padded with spaces or truncated to
    the requested length, then overwritten from index 0.
    """
    destination.live_storage("copy_slice")
    data = bytes(source)
    if source_start > len(data):
        fail(
            SubstringBoundsViolation,
            "copy_slice",
            f"start {source_start} past source length {len(data)}",
        )
    if source_count == 0:
        source_count = len(data) - source_start
    if source_start + source_count > len(data):
        fail(
            SubstringBoundsViolation,
            "copy_slice",
            f"range [{source_start}, {source_start + source_count}) "
            f"past source length {len(data)}",
        )
    if destination.size < source_count:
        _append(
            destination,
            bytes([SPACE]) * (source_count - destination.size),
            allocator,
            "copy_slice",
        )
    elif destination.size > source_count:
        destination.set_size(source_count)
    storage = destination.live_storage("copy_slice")
    storage[:source_count] = data[source_start : source_start + source_count]


@checked_call
def replace(
    buffer: Buffer,
    index: Index,
    count: Count,
    replacement: ByteSource,
    allocator: Allocator,
) -> None:
    """Replace ``buffer[index:index + count]`` with ``replacement``.

    The range is widened with spaces or narrowed by erasing at ``index`` until
    it matches ``len(replacement)``, then overwritten.
    """
    buffer.live_storage("replace")
    if index > buffer.size:
        fail(
            BoundsViolation,
            "replace",
            f"index {index} out of range for size {buffer.size}",
        )
    if count == 0:
        fail(ZeroLengthOperation, "replace", "replaced range is empty")
    if index + count > buffer.size:
        fail(
            BoundsViolation,
            "replace",
            f"range [{index}, {index + count}) out of range for size {buffer.size}",
        )
    data = bytes(replacement)
    if len(data) > count:
        _open_gap(buffer, index, len(data) - count, SPACE, allocator, "replace")
    elif len(data) < count:
        _close_gap(buffer, index, count - len(data), "replace")
    storage = buffer.live_storage("replace")
    storage[index : index + len(data)] = data


@checked_call
def concat(first: ByteSource, second: ByteSource, allocator: Allocator) -> Buffer:
    """Return a new Buffer holding ``first`` followed by ``second``.

    The new buffer's capacity is exactly the combined length.
    """
    return fill_new([bytes(first), bytes(second)], allocator, "concat")
