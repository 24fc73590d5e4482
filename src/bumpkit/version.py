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

r"""Semantic version value types and version-tag parsing.

A version tag looks like::

    refs/tags/ crate2- v 1.4.0 -rc.2 +build.7
    └─ refs ─┘ └ tag ┘ │ └ core ┘ └ pre ┘ └ build ┘
               prefix  └ version prefix

Only the version prefix is configured; anything between ``refs/tags/``
and the version prefix is accepted as a tag prefix.

Only the core is checked: it must be three ASCII-numeric components
(leading zeros are read as numbers).  Pre-release and build text are
kept as written, so an unusual suffix never fails a run.

Ordering follows SemVer §11 closely enough to pick the latest tag:
``major``, ``minor``, ``patch``, then pre-release (a version without a
pre-release outranks one with).  Build metadata is ignored for both
ordering and equality (SemVer §10).

Usage::

    from bumpkit.version import latest_version, parse_version_tag

    v = parse_version_tag('refs/tags/v0.7.9', 'v')
    assert str(v) == '0.7.9'

    latest = latest_version(['v0.1.0', 'v0.2.0-alpha.1', 'v0.1.5'], 'v')
    assert str(latest) == '0.2.0-alpha.1'
"""

from __future__ import annotations

import dataclasses
import enum
import functools
import re
from collections.abc import Iterable
from dataclasses import dataclass

from bumpkit.errors import BumpKitError, ErrorCode
from bumpkit.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    'PreRelease',
    'PreReleaseKind',
    'SemanticVersion',
    'latest_version',
    'latest_version_tag',
    'parse_version',
    'parse_version_tag',
]

_REFS_PREFIX = 'refs/tags/'

_CORE_COMPONENTS = 3


class PreReleaseKind(enum.Enum):
    """The pre-release train a version belongs to."""

    ALPHA = 'alpha'
    BETA = 'beta'
    RC = 'rc'
    CUSTOM = 'custom'

    @classmethod
    def from_label(cls, label: str) -> PreReleaseKind:
        """Derive the kind from a label, case-insensitively."""
        lowered = label.lower()
        for kind in (cls.ALPHA, cls.BETA, cls.RC):
            if lowered == kind.value:
                return kind
        return cls.CUSTOM


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class PreRelease:
    """A pre-release suffix such as ``alpha.3`` or ``pre``.

    Attributes:
        label: Everything before the trailing numeric counter.
        counter: The trailing counter, if any.
    """

    label: str
    counter: int | None = None

    @classmethod
    def parse(cls, text: str) -> PreRelease:
        """Split ``text`` into label and counter.

        The counter is the part after the last ``.`` when it is
        numeric; otherwise the whole text is the label.

        >>> PreRelease.parse('beta.11')
        PreRelease(label='beta', counter=11)
        >>> PreRelease.parse('alpha.beta')
        PreRelease(label='alpha.beta', counter=None)
        """
        label, sep, number = text.rpartition('.')
        if sep and number.isdigit():
            return cls(label=label, counter=int(number))
        return cls(label=text)

    @property
    def kind(self) -> PreReleaseKind:
        """The :class:`PreReleaseKind` derived from the label."""
        return PreReleaseKind.from_label(self.label)

    def increment(self) -> PreRelease:
        """Return a copy with the counter advanced (absent counter → 1)."""
        return dataclasses.replace(self, counter=1 if self.counter is None else self.counter + 1)

    def _key(self) -> tuple[str, int]:
        return (self.label, -1 if self.counter is None else self.counter)

    def __eq__(self, other: object) -> bool:
        """Compare label and counter."""
        if not isinstance(other, PreRelease):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: PreRelease) -> bool:
        """Order by label, then counter (no counter sorts first)."""
        return self._key() < other._key()

    def __hash__(self) -> int:
        """Hash consistently with equality."""
        return hash(self._key())

    def __str__(self) -> str:
        """Render as ``label[.counter]``."""
        if self.counter is None:
            return self.label
        return f'{self.label}.{self.counter}'


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class SemanticVersion:
    """A semantic version number.

    Instances are immutable; the ``with_*`` helpers return new values.
    Absence of a pre-release marks a released version.

    Attributes:
        major: Major component.
        minor: Minor component.
        patch: Patch component.
        pre_release: Optional pre-release suffix.
        build_metadata: Optional build metadata (ignored for ordering).
    """

    major: int = 0
    minor: int = 0
    patch: int = 0
    pre_release: PreRelease | None = None
    build_metadata: str | None = None

    def __post_init__(self) -> None:
        """Reject negative components."""
        for name in ('major', 'minor', 'patch'):
            if getattr(self, name) < 0:
                raise ValueError(f'{name} must be non-negative, got {getattr(self, name)}')

    @property
    def is_released(self) -> bool:
        """``True`` when there is no pre-release suffix."""
        return self.pre_release is None

    def bump_major(self) -> SemanticVersion:
        """Increment major, resetting minor and patch."""
        return dataclasses.replace(self, major=self.major + 1, minor=0, patch=0)

    def bump_minor(self) -> SemanticVersion:
        """Increment minor, resetting patch."""
        return dataclasses.replace(self, minor=self.minor + 1, patch=0)

    def bump_patch(self) -> SemanticVersion:
        """Increment patch."""
        return dataclasses.replace(self, patch=self.patch + 1)

    def bump_pre_release(self) -> SemanticVersion:
        """Advance the pre-release counter; a no-op on released versions."""
        if self.pre_release is None:
            return self
        return dataclasses.replace(self, pre_release=self.pre_release.increment())

    def with_pre_release(self, pre_release: PreRelease | None) -> SemanticVersion:
        """Return a copy with the pre-release replaced."""
        return dataclasses.replace(self, pre_release=pre_release)

    def _key(self) -> tuple[int, int, int, int, PreRelease | None]:
        # Released versions sort after every pre-release of the same core.
        released = 1 if self.pre_release is None else 0
        return (self.major, self.minor, self.patch, released, self.pre_release)

    def __eq__(self, other: object) -> bool:
        """Compare ignoring build metadata."""
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: SemanticVersion) -> bool:
        """SemVer precedence, build metadata ignored."""
        mine, theirs = self._key(), other._key()
        if mine[:4] != theirs[:4]:
            return mine[:4] < theirs[:4]
        if self.pre_release is None or other.pre_release is None:
            return False
        return self.pre_release < other.pre_release

    def __hash__(self) -> int:
        """Hash consistently with equality."""
        return hash(self._key())

    def __str__(self) -> str:
        """Render as ``major.minor.patch[-pre_release][+build]``."""
        version = f'{self.major}.{self.minor}.{self.patch}'
        if self.pre_release is not None:
            version = f'{version}-{self.pre_release}'
        if self.build_metadata:
            version = f'{version}+{self.build_metadata}'
        return version


def _parse(version: str, source: str) -> SemanticVersion:
    """Split *version* into core, pre-release and build; *source* names it in errors.

    Only the core is validated.  Whatever follows the first ``-`` is the
    pre-release and whatever follows the first ``+`` is build metadata,
    taken as written.
    """
    rest, _, build = version.partition('+')
    core, _, pre_release = rest.partition('-')
    components = core.split('.')
    if len(components) > _CORE_COMPONENTS:
        raise BumpKitError(
            ErrorCode.TOO_MANY_COMPONENTS,
            f'Version must have three components but {len(components)} were found in {source}',
        )
    for component in components:
        if not (component.isascii() and component.isdigit()):
            raise BumpKitError(
                ErrorCode.MUST_BE_NUMBER,
                f'Version must be a number but found {component!r} in {source}',
            )
    if len(components) < _CORE_COMPONENTS:
        raise BumpKitError(
            ErrorCode.TOO_FEW_COMPONENTS,
            f'Version must have three components but only {len(components)} found in {source}',
        )
    major, minor, patch = (int(component) for component in components)
    return SemanticVersion(
        major=major,
        minor=minor,
        patch=patch,
        pre_release=PreRelease.parse(pre_release) if pre_release else None,
        build_metadata=build or None,
    )


def parse_version(text: str) -> SemanticVersion:
    """Parse a bare version string such as ``1.0.0-rc.1+build.5``.

    Raises:
        BumpKitError: If the core is not ``major.minor.patch`` with
            numeric components.
    """
    return _parse(text, text)


def parse_version_tag(tag: str, version_prefix: str) -> SemanticVersion:
    """Parse a git tag into a :class:`SemanticVersion`.

    The tag may carry a ``refs/tags/`` prefix and any tag prefix
    before *version_prefix* (``crate2-v1.2.3`` with prefix ``v``).

    Args:
        tag: The tag name or full ref.
        version_prefix: The string immediately preceding the version.

    Raises:
        BumpKitError: ``NOT_VERSION_TAG`` when *version_prefix* is not
            found, otherwise the component error from
            :func:`parse_version`.
    """
    name = tag.removeprefix(_REFS_PREFIX)
    logger.debug('parse_version_tag', tag=tag, prefix=version_prefix)
    if version_prefix:
        # Prefer the prefix occurrence that is followed by a digit so a
        # tag prefix containing the same characters is skipped.
        found = re.search(rf'{re.escape(version_prefix)}(?=\d)', name) or re.search(
            re.escape(version_prefix), name
        )
        if found is None:
            raise BumpKitError(
                ErrorCode.NOT_VERSION_TAG,
                f'Version tags must start with "{version_prefix}" but tag is {tag}',
                hint='Check the --prefix value against `git tag --list`.',
            )
        remainder = name[found.end() :]
    else:
        remainder = name
    return _parse(remainder, tag)




def latest_version_tag(tags: Iterable[str], version_prefix: str) -> tuple[str, SemanticVersion]:
    """Return ``(tag, version)`` for the highest version carrying *version_prefix*.

    Tags without ``<prefix>N.N.N`` are ignored.  Among tags naming the
    same version the first one wins.

    Raises:
        BumpKitError: ``NO_VERSION_TAG`` when no tag qualifies.
    """
    candidate = re.compile(rf'{re.escape(version_prefix)}\d+\.\d+\.\d+')
    found = [(tag, parse_version_tag(tag, version_prefix)) for tag in tags if candidate.search(tag)]
    if not found:
        raise BumpKitError(
            ErrorCode.NO_VERSION_TAG,
            f'No version tag with prefix "{version_prefix}" found in the repository.',
            hint=f'Create a baseline tag, e.g. `git tag {version_prefix}0.1.0`.',
        )
    tag, latest = max(found, key=lambda pair: pair[1])
    logger.debug('latest_version', tag=tag, version=str(latest), candidates=len(found))
    return tag, latest


def latest_version(tags: Iterable[str], version_prefix: str) -> SemanticVersion:
    """Return the highest version among *tags* that carry *version_prefix*.

    Raises:
        BumpKitError: ``NO_VERSION_TAG`` when no tag qualifies.
    """
    return latest_version_tag(tags, version_prefix)[1]

