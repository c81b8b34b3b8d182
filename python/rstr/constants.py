# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

"""
Constants for the rstr package.
"""

# Defaults for the runtime-configurable settings in rstr.config
DEFAULT_CAPACITY = 15  # Content bytes; storage is one byte larger (16)
GROWTH_FACTOR = 2  # Capacity multiplier applied when a push runs out of room

TERMINATOR = 0  # Written at logical index `size` after every mutation
SPACE = 0x20  # Filler used when a primitive opens room before overwriting it
