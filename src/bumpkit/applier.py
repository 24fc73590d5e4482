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

"""Apply a :class:`~bumpkit.bump.Bump` to a :class:`~bumpkit.version.SemanticVersion`.

State machine keyed on the bump::

    MAJOR/MINOR/PATCH  released     → increment component
                       pre-release  → increment pre-release counter
    FIRST              major == 0   → 1.0.0 (pre-release, build cleared)
    ALPHA/BETA/RC      same kind    → increment pre-release counter
    CUSTOM             custom kind  → increment counter, bump = version
    RELEASE            pre-release  → drop pre-release
    NONE                            → unchanged

Every other combination leaves the version unchanged and reports the
effective bump as ``NONE``, so the reported bump always describes the
change actually made.
"""

from __future__ import annotations

from bumpkit.bump import Bump, BumpKind
from bumpkit.logging import get_logger
from bumpkit.version import PreReleaseKind, SemanticVersion

logger = get_logger(__name__)

__all__ = [
    'apply_bump',
]


def apply_bump(current: SemanticVersion, bump: Bump) -> tuple[SemanticVersion, Bump]:
    """Return ``(next_version, effective_bump)``.

    >>> from bumpkit.version import parse_version
    >>> nxt, eff = apply_bump(parse_version('0.1.0-alpha.2'), Bump.MINOR)
    >>> str(nxt), str(eff)
    ('0.1.0-alpha.3', 'minor')
    """
    kind = bump.kind
    pre_release = current.pre_release

    if kind is BumpKind.NONE:
        return current, bump

    if kind in (BumpKind.MAJOR, BumpKind.MINOR, BumpKind.PATCH):
        if pre_release is not None:
            return current.bump_pre_release(), bump
        if kind is BumpKind.MAJOR:
            return current.bump_major(), bump
        if kind is BumpKind.MINOR:
            return current.bump_minor(), bump
        return current.bump_patch(), bump

    if kind is BumpKind.FIRST:
        if current.major != 0:
            return _unchanged(current, bump)
        return SemanticVersion(major=1, minor=0, patch=0), bump

    if kind is BumpKind.RELEASE:
        if pre_release is None:
            return _unchanged(current, bump)
        return current.with_pre_release(None), bump

    # ALPHA, BETA, RC and CUSTOM advance a running train of the same kind.
    if pre_release is None or pre_release.kind is not bump.pre_release_kind:
        return _unchanged(current, bump)
    next_version = current.bump_pre_release()
    if pre_release.kind is PreReleaseKind.CUSTOM:
        return next_version, Bump.custom(str(next_version))
    return next_version, bump


def _unchanged(current: SemanticVersion, bump: Bump) -> tuple[SemanticVersion, Bump]:
    logger.debug('bump_not_applicable', version=str(current), bump=str(bump) or bump.kind.value)
    return current, Bump.NONE
