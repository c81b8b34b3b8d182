# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

"""
rstr package: a growable, terminated byte buffer, a non-owning view over byte
ranges, and the allocator capability both are built on.
"""

from loguru import logger

from .allocator import Allocator, FunctionAllocator, HeapAllocator
from .buffer import (
    Buffer,
    BufferStats,
    buffer_stats,
    clear,
    create,
    release,
    reserve,
    with_capacity,
)
from .config import (
    get_default_capacity,
    get_fatal_errors,
    get_growth_factor,
    reset_config,
    set_default_capacity,
    set_fatal_errors,
    set_growth_factor,
)
from .constants import DEFAULT_CAPACITY, GROWTH_FACTOR, SPACE, TERMINATOR
from .errors import (
    AllocationFailure,
    BoundsViolation,
    BufferReleased,
    RStrContractError,
    RStrError,
    SubstringBoundsViolation,
    ZeroLengthOperation,
)
from .ops import (
    append_char,
    append_string,
    assign,
    concat,
    copy_slice,
    erase,
    insert,
    pop_back,
    push_back,
    remove_from_end,
    replace,
    resize,
)
from .view import View
from . import view

# Library code stays quiet unless the application opts in with
# logger.enable("rstr").
logger.disable("rstr")

__all__ = [
    "Allocator",
    "FunctionAllocator",
    "HeapAllocator",
    "Buffer",
    "BufferStats",
    "buffer_stats",
    "clear",
    "create",
    "release",
    "reserve",
    "with_capacity",
    "get_default_capacity",
    "get_fatal_errors",
    "get_growth_factor",
    "reset_config",
    "set_default_capacity",
    "set_fatal_errors",
    "set_growth_factor",
    "DEFAULT_CAPACITY",
    "GROWTH_FACTOR",
    "SPACE",
    "TERMINATOR",
    "AllocationFailure",
    "BoundsViolation",
    "BufferReleased",
    "RStrContractError",
    "RStrError",
    "SubstringBoundsViolation",
    "ZeroLengthOperation",
    "append_char",
    "append_string",
    "assign",
    "concat",
    "copy_slice",
    "erase",
    "insert",
    "pop_back",
    "push_back",
    "remove_from_end",
    "replace",
    "resize",
    "View",
    "view",
]
