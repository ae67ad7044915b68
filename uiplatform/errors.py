"""
Error taxonomy of the platform layer.

- PlatformError: base class for everything raised here.
- ContractViolation: the caller broke an API contract (programmer error).
- fatal_error(): unrecoverable platform condition, terminates the process.

Persistence faults are not represented here: they are logged and the
layer continues without persistence.
"""

from __future__ import annotations

import os
import sys

from uiplatform import log


class PlatformError(Exception):
    """Base class for platform layer errors."""


class ContractViolation(PlatformError, AssertionError):
    """Calling code violated an API contract."""


def require(condition: bool, message: str) -> None:
    """Raise ContractViolation when condition does not hold."""
    if not condition:
        raise ContractViolation(message)


def fatal_error(message: str) -> None:
    """Report an unrecoverable error and abort the process."""
    log.error(message)
    sys.stderr.write(message)
    sys.stderr.flush()
    os.abort()
