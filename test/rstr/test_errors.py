# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0
"""
Test the error hierarchy, diagnostics and logging.
"""

import pytest

from rstr import (
    AllocationFailure,
    BoundsViolation,
    BufferReleased,
    HeapAllocator,
    RStrContractError,
    RStrError,
    SubstringBoundsViolation,
    ZeroLengthOperation,
    copy_slice,
    create,
    erase,
    push_back,
    replace,
    reserve,
)


@pytest.mark.parametrize(
    "error_type",
    [BoundsViolation, SubstringBoundsViolation, ZeroLengthOperation, BufferReleased],
)
def test_contract_errors_hierarchy(error_type) -> None:
    assert issubclass(error_type, RStrContractError)
    assert issubclass(error_type, RStrError)
    assert issubclass(error_type, RuntimeError)


def test_allocation_failure_is_not_a_contract_error() -> None:
    assert issubclass(AllocationFailure, RStrError)
    assert not issubclass(AllocationFailure, RStrContractError)


def test_bounds_errors_are_index_errors() -> None:
    assert issubclass(BoundsViolation, IndexError)
    assert issubclass(SubstringBoundsViolation, IndexError)


def test_error_names_operation_and_call_site(heap: HeapAllocator) -> None:
    buf = create(b"hello", heap)
    with pytest.raises(BoundsViolation) as excinfo:
        erase(buf, 4, 2)
    err = excinfo.value
    assert err.operation == "erase"
    assert err.call_site is not None
    assert "test_errors.py:" in err.call_site
    assert err.call_site in str(err)
    assert str(err).startswith("erase: range [4, 6) out of range for size 5")


def test_substring_error_names_operation(heap: HeapAllocator) -> None:
    buf = create(b"", heap)
    with pytest.raises(SubstringBoundsViolation) as excinfo:
        copy_slice(buf, 4, 0, b"abc", heap)
    assert excinfo.value.operation == "copy_slice"


def test_allocation_failure_names_operation(arena_allocator) -> None:
    buf = create(b"abc", arena_allocator)
    with pytest.raises(AllocationFailure) as excinfo:
        reserve(buf, 64, arena_allocator)
    assert excinfo.value.operation == "reserve"
    assert "reallocate(16 -> 65) failed" in str(excinfo.value)


def test_errors_are_logged(heap: HeapAllocator, log_messages) -> None:
    buf = create(b"hello", heap)
    with pytest.raises(ZeroLengthOperation):
        replace(buf, 0, 0, b"x", heap)
    errors = [m for m in log_messages if "ERROR" in m]
    assert len(errors) == 1
    assert "ZeroLengthOperation" in errors[0]
    assert "replace: replaced range is empty" in errors[0]


def test_growth_is_logged(heap: HeapAllocator, log_messages) -> None:
    buf = create(b"", heap)
    for i in range(15):
        push_back(buf, i, heap)
    assert any("allocated 16 bytes" in m for m in log_messages)
    assert any("push_back: capacity 15 -> 30" in m for m in log_messages)


def test_logging_disabled_by_default(heap: HeapAllocator) -> None:
    from loguru import logger

    messages = []
    handler_id = logger.add(
        lambda message: messages.append(str(message)), level="DEBUG"
    )
    try:
        buf = create(b"", heap)
        with pytest.raises(BoundsViolation):
            erase(buf, 0, 1)
    finally:
        logger.remove(handler_id)
    assert messages == []
