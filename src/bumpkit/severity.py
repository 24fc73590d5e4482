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

"""Severity hierarchy of conventional commit types.

Commit types are mapped onto a totally ordered scale so the "strongest"
change in a set of commits can be found with ``max``::

    NONE < OTHER < FIX < FEATURE < BREAKING

- ``feat``            → FEATURE
- ``fix``, ``revert`` → FIX
- anything else       → OTHER
- any breaking commit → BREAKING

Pure module: no I/O, no logging.
"""

from __future__ import annotations

import enum

from bumpkit.errors import BumpKitError, ErrorCode

__all__ = [
    'Severity',
]

FEATURE_TYPES: frozenset[str] = frozenset({'feat'})
FIX_TYPES: frozenset[str] = frozenset({'fix', 'revert'})


class Severity(enum.IntEnum):
    """How significant a change is, lowest first.

    ``NONE`` only appears when no commit has been classified; the
    other members double as enforcement and reporting thresholds.
    """

    NONE = 0
    OTHER = 1
    FIX = 2
    FEATURE = 3
    BREAKING = 4

    @classmethod
    def parse(cls, commit_type: str, *, breaking: bool = False) -> Severity:
        """Map a conventional commit type to its severity.

        >>> Severity.parse('feat')
        <Severity.FEATURE: 3>
        >>> Severity.parse('docs', breaking=True)
        <Severity.BREAKING: 4>
        """
        if breaking:
            return cls.BREAKING
        normalized = commit_type.lower()
        if normalized in FEATURE_TYPES:
            return cls.FEATURE
        if normalized in FIX_TYPES:
            return cls.FIX
        return cls.OTHER

    @classmethod
    def from_name(cls, name: str) -> Severity:
        """Parse a threshold name such as ``"feature"`` (case-insensitive).

        Raises:
            BumpKitError: If *name* is not one of ``other``, ``fix``,
                ``feature`` or ``breaking``.
        """
        member = _THRESHOLD_NAMES.get(name.strip().lower())
        if member is None:
            raise BumpKitError(
                ErrorCode.INVALID_CONFIG,
                f'{name!r} is not a valid severity level.',
                hint=f'Use one of: {", ".join(_THRESHOLD_NAMES)}.',
            )
        return member

    @classmethod
    def threshold_names(cls) -> tuple[str, ...]:
        """Names accepted by :meth:`from_name`, lowest first."""
        return tuple(_THRESHOLD_NAMES)

    def __str__(self) -> str:
        """Render the threshold name, e.g. ``feature``."""
        return self.name.lower()


_THRESHOLD_NAMES: dict[str, Severity] = {
    'other': Severity.OTHER,
    'fix': Severity.FIX,
    'feature': Severity.FEATURE,
    'breaking': Severity.BREAKING,
}
