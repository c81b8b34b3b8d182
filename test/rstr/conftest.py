# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

"""Pytest configuration and fixtures for rstr tests."""

from typing import Iterator, List, Optional

import pytest
from loguru import logger

from rstr import FunctionAllocator, HeapAllocator, reset_config


class Arena:
    """Bump-style arena with a fixed byte budget, used as allocator context."""

    def __init__(self, budget: int):
        self.budget = budget
        self.used = 0
        self.allocations = 0
        self.releases = 0


def arena_alloc(arena: Arena, nbytes: int) -> Optional[bytearray]:
    if arena.used + nbytes > arena.budget:
        return None
    arena.used += nbytes
    arena.allocations += 1
    return bytearray(nbytes)


def arena_free(arena: Arena, storage: bytearray) -> None:
    arena.releases += 1


def arena_realloc(
    arena: Arena, storage: bytearray, old_nbytes: int, new_nbytes: int
) -> Optional[bytearray]:
    grown = arena_alloc(arena, new_nbytes)
    if grown is None:
        return None
    keep = min(old_nbytes, new_nbytes)
    grown[:keep] = storage[:keep]
    return grown


@pytest.fixture(autouse=True)
def _default_config() -> Iterator[None]:
    """Every test starts and ends with default settings."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def heap() -> HeapAllocator:
    """Provide a fresh heap allocator for each test."""
    return HeapAllocator()


@pytest.fixture
def arena() -> Arena:
    """An arena with room for exactly one default-sized buffer."""
    return Arena(budget=16)


@pytest.fixture
def arena_allocator(arena: Arena) -> FunctionAllocator:
    return FunctionAllocator(arena_alloc, arena_free, arena_realloc, arena)


@pytest.fixture
def log_messages() -> Iterator[List[str]]:
    """Collect rstr log output for the duration of a test."""
    messages: List[str] = []
    logger.enable("rstr")
    handler_id = logger.add(
        lambda message: messages.append(str(message)), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)
    logger.disable("rstr")
