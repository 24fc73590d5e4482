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

"""Bump values and operator force levels.

A :class:`Bump` is the categorical answer of the engine: how the
version will change.  It renders as the string the CLI prints::

    none  patch  minor  major  release  alpha  beta  rc  1.0.0  <custom>

``NONE < PATCH < MINOR < MAJOR`` is a magnitude order used for
reporting; the pre-release and promotion bumps have no magnitude.

A :class:`ForceLevel` is an operator override (``--force``).  Whether
it is honoured depends on the current version's route; see
:func:`bumpkit.calculator.calculate_bump`.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import ClassVar

from bumpkit.errors import BumpKitError, ErrorCode
from bumpkit.version import PreReleaseKind

__all__ = [
    'Bump',
    'BumpKind',
    'ForceLevel',
]


class BumpKind(enum.Enum):
    """The closed set of bump categories."""

    NONE = 'none'
    PATCH = 'patch'
    MINOR = 'minor'
    MAJOR = 'major'
    RELEASE = 'release'
    ALPHA = 'alpha'
    BETA = 'beta'
    RC = 'rc'
    FIRST = '1.0.0'
    CUSTOM = 'custom'


_MAGNITUDE: dict[BumpKind, int] = {
    BumpKind.NONE: 0,
    BumpKind.PATCH: 1,
    BumpKind.MINOR: 2,
    BumpKind.MAJOR: 3,
}


@dataclass(frozen=True)
class Bump:
    """How the version changes.

    ``CUSTOM`` bumps carry a ``label``: empty while the custom
    pre-release train is being selected, then the resulting version
    string once applied.  Every other kind has an empty label.

    The common values are available as class attributes
    (``Bump.NONE``, ``Bump.MINOR``, ...).
    """

    kind: BumpKind
    label: str = ''

    NONE: ClassVar[Bump]
    PATCH: ClassVar[Bump]
    MINOR: ClassVar[Bump]
    MAJOR: ClassVar[Bump]
    RELEASE: ClassVar[Bump]
    ALPHA: ClassVar[Bump]
    BETA: ClassVar[Bump]
    RC: ClassVar[Bump]
    FIRST: ClassVar[Bump]

    @classmethod
    def custom(cls, label: str = '') -> Bump:
        """A ``CUSTOM`` bump with *label*."""
        return cls(BumpKind.CUSTOM, label)

    @classmethod
    def for_pre_release(cls, kind: PreReleaseKind) -> Bump:
        """The bump that advances a pre-release train of *kind*."""
        return _PRE_RELEASE_BUMPS.get(kind) or cls.custom()

    @property
    def magnitude(self) -> int | None:
        """Position in ``NONE < PATCH < MINOR < MAJOR``, else ``None``."""
        return _MAGNITUDE.get(self.kind)

    @property
    def pre_release_kind(self) -> PreReleaseKind | None:
        """The pre-release train this bump advances, if any."""
        return _BUMP_TRAINS.get(self.kind)

    def __str__(self) -> str:
        """Render the CLI label, e.g. ``minor`` or ``1.0.0``."""
        if self.kind is BumpKind.CUSTOM:
            return self.label
        return self.kind.value


Bump.NONE = Bump(BumpKind.NONE)
Bump.PATCH = Bump(BumpKind.PATCH)
Bump.MINOR = Bump(BumpKind.MINOR)
Bump.MAJOR = Bump(BumpKind.MAJOR)
Bump.RELEASE = Bump(BumpKind.RELEASE)
Bump.ALPHA = Bump(BumpKind.ALPHA)
Bump.BETA = Bump(BumpKind.BETA)
Bump.RC = Bump(BumpKind.RC)
Bump.FIRST = Bump(BumpKind.FIRST)

_PRE_RELEASE_BUMPS: dict[PreReleaseKind, Bump] = {
    PreReleaseKind.ALPHA: Bump.ALPHA,
    PreReleaseKind.BETA: Bump.BETA,
    PreReleaseKind.RC: Bump.RC,
}

_BUMP_TRAINS: dict[BumpKind, PreReleaseKind] = {
    BumpKind.ALPHA: PreReleaseKind.ALPHA,
    BumpKind.BETA: PreReleaseKind.BETA,
    BumpKind.RC: PreReleaseKind.RC,
    BumpKind.CUSTOM: PreReleaseKind.CUSTOM,
}


class ForceLevel(enum.Enum):
    """Operator override for the calculated bump.

    Validity depends on the current version:

    ============  ==============  ===========  ==========
    Level         Non-production  Pre-release  Production
    ============  ==============  ===========  ==========
    ``major``     yes                          yes
    ``minor``     yes                          yes
    ``patch``     yes                          yes
    ``first``     yes
    ``release``                   yes
    ``rc``        yes             same kind    yes
    ``beta``      yes             same kind    yes
    ``alpha``     yes             same kind    yes
    ============  ==============  ===========  ==========

    Where a level is not valid the bump degrades to ``none``.
    """

    MAJOR = 'major'
    MINOR = 'minor'
    PATCH = 'patch'
    FIRST = 'first'
    RELEASE = 'release'
    RC = 'rc'
    BETA = 'beta'
    ALPHA = 'alpha'

    @classmethod
    def from_name(cls, name: str) -> ForceLevel:
        """Parse a level name (case-insensitive).

        Raises:
            BumpKitError: If *name* is not a known level.
        """
        try:
            return cls(name.strip().lower())
        except ValueError:
            raise BumpKitError(
                ErrorCode.INVALID_CONFIG,
                f'{name!r} is not a valid force level.',
                hint=f'Use one of: {", ".join(level.value for level in cls)}.',
            ) from None

    @property
    def pre_release_kind(self) -> PreReleaseKind | None:
        """The pre-release train this level targets, if any."""
        return _FORCE_TRAINS.get(self)

    def __str__(self) -> str:
        """Render the CLI name, e.g. ``first``."""
        return self.value


_FORCE_TRAINS: dict[ForceLevel, PreReleaseKind] = {
    ForceLevel.ALPHA: PreReleaseKind.ALPHA,
    ForceLevel.BETA: PreReleaseKind.BETA,
    ForceLevel.RC: PreReleaseKind.RC,
}
