# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for bumpkit.

Every hard failure is a :class:`BumpKitError` carrying an
:class:`ErrorCode` and an optional ``hint`` telling the operator what
to do next.  "Nothing to release" is never an error: the calculator
reports the ``none`` bump instead, so callers can tell the two apart.

Usage::

    from bumpkit.errors import BumpKitError, ErrorCode

    raise BumpKitError(
        ErrorCode.NO_VERSION_TAG,
        'No tag matching prefix "v" was found.',
        hint='Create an initial tag, e.g. `git tag v0.1.0`.',
    )
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    'EXIT_UNEXPECTED_ERROR',
    'BumpKitError',
    'ErrorCode',
]


class ErrorCode(Enum):
    """Stable identifiers for every hard failure.

    Each code maps to the process exit status used by the CLI.
    """

    NOT_VERSION_TAG = 'BK-TAG-PREFIX'
    TOO_MANY_COMPONENTS = 'BK-TAG-TOO-MANY'
    TOO_FEW_COMPONENTS = 'BK-TAG-TOO-FEW'
    MUST_BE_NUMBER = 'BK-TAG-NUMBER'
    NO_VERSION_TAG = 'BK-TAG-MISSING'
    GIT_FAILED = 'BK-GIT'
    INVALID_CONFIG = 'BK-CONFIG'

    @property
    def exit_code(self) -> int:
        """Process exit status for this error."""
        return _EXIT_CODES[self]


EXIT_UNEXPECTED_ERROR = 10
_EXIT_NOT_CALCULATED = 12
_EXIT_INVALID_CONFIG = 16

_EXIT_CODES: dict[ErrorCode, int] = {
    ErrorCode.NOT_VERSION_TAG: _EXIT_NOT_CALCULATED,
    ErrorCode.TOO_MANY_COMPONENTS: _EXIT_NOT_CALCULATED,
    ErrorCode.TOO_FEW_COMPONENTS: _EXIT_NOT_CALCULATED,
    ErrorCode.MUST_BE_NUMBER: _EXIT_NOT_CALCULATED,
    ErrorCode.NO_VERSION_TAG: _EXIT_NOT_CALCULATED,
    ErrorCode.GIT_FAILED: _EXIT_NOT_CALCULATED,
    ErrorCode.INVALID_CONFIG: _EXIT_INVALID_CONFIG,
}


class BumpKitError(Exception):
    """A failure that aborts the calculation.

    Attributes:
        code: The :class:`ErrorCode` identifying the failure.
        message: Human-readable description.
        hint: Optional suggestion for fixing the problem.
    """

    def __init__(self, code: ErrorCode, message: str, *, hint: str = '') -> None:
        """Initialise the error."""
        super().__init__(message)
        self.code = code
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        """Render as ``[CODE] message``."""
        return f'[{self.code.value}] {self.message}'

    @property
    def exit_code(self) -> int:
        """Process exit status for this error."""
        return _EXIT_CODES.get(self.code, EXIT_UNEXPECTED_ERROR)
