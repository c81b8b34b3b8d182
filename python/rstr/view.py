# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

"""
View: a non-owning window onto a byte range.
"""

from typing import Annotated, Any, Iterator, List, Optional, Union

from pydantic import BeforeValidator

from .allocator import Allocator
from .buffer import Buffer, acquire, checked_call
from .errors import BoundsViolation, SubstringBoundsViolation, fail

ByteRange = Union[bytes, bytearray, memoryview]


# A view stands in for a pointer plus a length: it keeps a reference to the
# referent's bytes as they are when the view is made, and never the Buffer
# handle itself. Growing or releasing the Buffer moves its content elsewhere,
# and every view made before that keeps reading the abandoned region. Nothing
# detects this; views must not outlive the next mutating call on their Buffer.
class View:
    """A read-only, zero-copy window of ``length`` bytes starting at ``start``.

    The referent is either a fixed byte range (``bytes``, ``bytearray``,
    ``memoryview``), the current content of a Buffer, or another View.

    ``length`` defaults to the rest of the referent after ``start``.

    Example:
        greeting = View(b"Hello world", 0, 5)
        bytes(greeting)  # b"Hello"
    """

    __slots__ = ("_data", "_start", "_size", "_limit")

    # We can't @validate_call here: validate_call hands the function a
    # validated copy of a bytes-like argument, and a view must alias the
    # referent, not a copy of it.
    def __init__(
        self,
        referent: Union[ByteRange, Buffer, "View"],
        start: int = 0,
        length: Optional[int] = None,
    ):
        if isinstance(referent, Buffer):
            data = referent.live_storage("view")
            base = 0
            total = referent.size
        elif isinstance(referent, View):
            data = referent._data
            base = referent._start
            total = referent._size
        elif isinstance(referent, (bytes, bytearray, memoryview)):
            data = referent
            base = 0
            total = len(referent)
        else:
            raise TypeError(
                f"View referent must be bytes-like, a Buffer or a View, "
                f"got {type(referent).__name__}"
            )
        if length is None:
            length = max(total - start, 0)
        if start < 0 or length < 0:
            fail(
                SubstringBoundsViolation,
                "view",
                f"negative start ({start}) or length ({length})",
            )
        if length > total:
            fail(
                SubstringBoundsViolation,
                "view",
                f"length {length} exceeds referent length {total}",
            )
        self._data = data
        self._start = base + start
        self._size = length
        self._limit = base + total

    @property
    def size(self) -> int:
        return self._size

    @property
    def start(self) -> int:
        return self._start

    def __len__(self) -> int:
        return self._size

    def __getitem__(self, idx: int) -> int:
        if not (0 <= idx < self._size):
            fail(
                BoundsViolation,
                "view_get",
                f"index {idx} out of range for view of {self._size}",
            )
        pos = self._start + idx
        if pos >= self._limit:
            fail(
                BoundsViolation,
                "view_get",
                f"index {idx} resolves to {pos}, past the referent end {self._limit}",
            )
        return self._data[pos]

    def __iter__(self) -> Iterator[int]:
        for i in range(self._size):
            yield self[i]

    def to_bytes(self) -> bytes:
        """Return a copy of the viewed bytes."""
        return bytes(self)

    def __bytes__(self) -> bytes:
        return bytes(self[i] for i in range(self._size))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (View, Buffer)):
            return bytes(self) == bytes(other)
        if isinstance(other, (bytes, bytearray, memoryview)):
            return bytes(self) == bytes(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"View({bytes(self)!r}, start={self._start}, size={self._size})"

    def subview(self, start: int, length: int) -> "View":
        """Return a view of ``length`` bytes starting ``start`` bytes into this one."""
        return View(self, start, length)


def _snapshot_bytes(value: Any) -> Any:
    # bytes-like objects pydantic will not coerce to bytes on its own
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value


ByteSource = Union[
    Buffer, View, Annotated[bytes, BeforeValidator(_snapshot_bytes)]
]


def fill_new(parts: List[bytes], allocator: Allocator, operation: str) -> Buffer:
    """Allocate a buffer sized exactly for ``parts`` and copy them in, in order."""
    total = sum(len(part) for part in parts)
    storage = acquire(allocator, total + 1, operation)
    offset = 0
    for part in parts:
        storage[offset : offset + len(part)] = part
        offset += len(part)
    return Buffer(storage, total, total)


@checked_call
def concat(first: View, second: View, allocator: Allocator) -> Buffer:
    """Return a new owning Buffer holding ``first`` followed by ``second``.

    The new buffer's capacity is exactly the combined length; neither view
    is touched.
    """
    return fill_new([bytes(first), bytes(second)], allocator, "concat")
