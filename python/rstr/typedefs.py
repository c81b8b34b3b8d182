# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

"""
Type aliases with Pydantic constraints for runtime validation.
"""

from typing import Annotated, Any
from pydantic import BeforeValidator, Field


def _coerce_byte(value: Any) -> Any:
    # Accept b"x" / "x" as well as plain ints, the way a char literal reads.
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 1:
            raise ValueError(f"expected a single byte, got {len(value)} bytes")
        return value[0]
    if isinstance(value, str):
        if len(value) != 1 or ord(value) > 0xFF:
            raise ValueError(f"expected a single byte-sized character, got {value!r}")
        return ord(value)
    return value


NaturalInt = Annotated[int, Field(ge=0)]
Size = NaturalInt
Index = NaturalInt
Count = NaturalInt
Capacity = NaturalInt
Byte = Annotated[int, BeforeValidator(_coerce_byte), Field(ge=0, le=0xFF)]
GrowthFactor = Annotated[int, Field(ge=2)]
