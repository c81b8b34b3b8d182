# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

"""
Module-wide settings for rstr.

The buffer primitives read these at call time, so a change applies to every
subsequent allocation or growth step but never rewrites existing buffers.
"""

from loguru import logger
from pydantic import validate_call

from .constants import DEFAULT_CAPACITY, GROWTH_FACTOR
from .typedefs import Capacity, GrowthFactor

# Capacity given to a buffer created from short (or empty) content.
_default_capacity: int = DEFAULT_CAPACITY
# Multiplier applied to `size + 1` when a push runs out of room.
_growth_factor: int = GROWTH_FACTOR
# When True, contract violations terminate the process instead of raising.
_fatal_errors: bool = False


@validate_call
def set_default_capacity(capacity: Capacity) -> None:
    """Set the minimum capacity used by rstr.buffer.create."""
    global _default_capacity
    logger.debug("default capacity {} -> {}", _default_capacity, capacity)
    _default_capacity = capacity


def get_default_capacity() -> int:
    """Return the minimum capacity used by rstr.buffer.create."""
    return _default_capacity


@validate_call
def set_growth_factor(factor: GrowthFactor) -> None:
    """Set the capacity multiplier used when appending past capacity."""
    global _growth_factor
    logger.debug("growth factor {} -> {}", _growth_factor, factor)
    _growth_factor = factor


def get_growth_factor() -> int:
    """Return the capacity multiplier used when appending past capacity."""
    return _growth_factor


@validate_call
def set_fatal_errors(enabled: bool) -> None:
    """Terminate the process on contract violations instead of raising."""
    global _fatal_errors
    _fatal_errors = enabled


def get_fatal_errors() -> bool:
    return _fatal_errors


def reset_config() -> None:
    """Restore every setting to its default."""
    global _default_capacity, _growth_factor, _fatal_errors
    _default_capacity = DEFAULT_CAPACITY
    _growth_factor = GROWTH_FACTOR
    _fatal_errors = False
