# SPDX-FileCopyrightText: (c) 2025 Tenstorrent AI ULC
#
# SPDX-License-Identifier: Apache-2.0

"""
Custom exception classes for rstr, and the helper that raises them.
"""

import sys
from typing import NoReturn, Optional, Type

from loguru import logger

from . import config

# Frames from these modules are skipped when looking for the call site.
_INTERNAL_MODULES = ("rstr", "pydantic")


class RStrError(RuntimeError):
    """Base class for every error raised by rstr.

    Attributes:
        operation: Name of the primitive that failed (e.g. ``"erase"``)
        call_site: ``file:line`` of the first caller frame outside rstr
    """

    def __init__(
        self, message: str, operation: str = "", call_site: Optional[str] = None
    ):
        super().__init__(message)
        self.operation = operation
        self.call_site = call_site


class AllocationFailure(RStrError):
    pass


class RStrContractError(RStrError):
    pass


class BoundsViolation(RStrContractError, IndexError):
    pass


class SubstringBoundsViolation(RStrContractError, IndexError):
    pass


class ZeroLengthOperation(RStrContractError):
    pass


class BufferReleased(RStrContractError):
    pass


def _is_internal(module_name: str) -> bool:
    return any(
        module_name == name or module_name.startswith(name + ".")
        for name in _INTERNAL_MODULES
    )


def call_site() -> str:
    """Return ``file:line`` of the nearest frame outside rstr and pydantic."""
    frame = sys._getframe(1)
    while frame is not None and _is_internal(frame.f_globals.get("__name__", "")):
        frame = frame.f_back
    if frame is None:
        return "<unknown>"
    return f"{frame.f_code.co_filename}:{frame.f_lineno}"


def fail(error_type: Type[RStrError], operation: str, detail: str) -> NoReturn:
    """Report a failed operation.

    Logs a diagnostic naming the operation and its call site, then raises
    ``error_type``. With fatal errors enabled (see rstr.config) the process
    exits with status 1 instead, printing the diagnostic to stderr.
    """
    site = call_site()
    message = f"{operation}: {detail} (called from {site})"
    if config.get_fatal_errors():
        logger.critical("{}: {}", error_type.__name__, message)
        # A non-int exit code is printed to stderr and exits with status 1
        raise SystemExit(f"{error_type.__name__}: {message}")
    logger.error("{}: {}", error_type.__name__, message)
    raise error_type(message, operation=operation, call_site=site)
