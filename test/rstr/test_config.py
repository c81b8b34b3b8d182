# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0
"""
Test the module-wide settings: default capacity, growth factor, fatal errors.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

from rstr import (
    DEFAULT_CAPACITY,
    GROWTH_FACTOR,
    HeapAllocator,
    create,
    erase,
    get_default_capacity,
    get_fatal_errors,
    get_growth_factor,
    pop_back,
    push_back,
    reset_config,
    set_default_capacity,
    set_fatal_errors,
    set_growth_factor,
)


def test_defaults() -> None:
    assert get_default_capacity() == DEFAULT_CAPACITY == 15
    assert get_growth_factor() == GROWTH_FACTOR == 2
    assert get_fatal_errors() is False


def test_default_capacity_applies_to_create(heap: HeapAllocator) -> None:
    set_default_capacity(4)
    assert get_default_capacity() == 4
    assert create(b"", heap).capacity == 4
    assert create(b"abc", heap).capacity == 6

    set_default_capacity(0)
    assert create(b"", heap).capacity == 0


def test_default_capacity_does_not_touch_existing_buffers(heap: HeapAllocator) -> None:
    buf = create(b"abc", heap)
    set_default_capacity(100)
    assert buf.capacity == 15


def test_growth_factor_applies_to_push_back(heap: HeapAllocator) -> None:
    set_growth_factor(3)
    buf = create(b"", heap)
    for i in range(15):
        push_back(buf, i, heap)
    assert buf.capacity == 45


@pytest.mark.parametrize("value", [-1, 1.5, "many"])
def test_default_capacity_validation(value) -> None:
    with pytest.raises(ValidationError):
        set_default_capacity(value)
    assert get_default_capacity() == 15


@pytest.mark.parametrize("value", [0, 1, -2, 2.5])
def test_growth_factor_validation(value) -> None:
    with pytest.raises(ValidationError):
        set_growth_factor(value)
    assert get_growth_factor() == 2


def test_reset_config() -> None:
    set_default_capacity(1)
    set_growth_factor(4)
    set_fatal_errors(True)
    reset_config()
    assert get_default_capacity() == 15
    assert get_growth_factor() == 2
    assert get_fatal_errors() is False


def test_fatal_errors_terminate(heap: HeapAllocator) -> None:
    set_fatal_errors(True)
    buf = create(b"", heap)
    with pytest.raises(SystemExit) as excinfo:
        pop_back(buf)
    assert "BoundsViolation" in excinfo.value.code
    assert "pop_back: buffer is empty" in excinfo.value.code
    assert buf.size == 0


def test_fatal_errors_logged_as_critical(heap: HeapAllocator, log_messages) -> None:
    set_fatal_errors(True)
    buf = create(b"hello", heap)
    with pytest.raises(SystemExit):
        erase(buf, 3, 3)
    assert any("CRITICAL" in m and "BoundsViolation" in m for m in log_messages)
    assert buf == b"hello"


def test_fatal_errors_report_on_stderr() -> None:
    # The rstr logger stays disabled; the diagnostic still reaches stderr
    script = (
        "from rstr import HeapAllocator, create, erase, set_fatal_errors\n"
        "set_fatal_errors(True)\n"
        "erase(create(b'ab', HeapAllocator()), 1, 5)\n"
    )
    env = dict(os.environ)
    env["PYTHONPATH"] = str(Path(__file__).resolve().parents[2] / "python")
    result = subprocess.run(
        [sys.executable, "-c", script], env=env, capture_output=True, text=True
    )
    assert result.returncode == 1
    assert "BoundsViolation: erase:" in result.stderr
    assert "called from <string>:3" in result.stderr
