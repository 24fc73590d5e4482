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

"""Select a :class:`~bumpkit.bump.Bump` from a route and a classification.

Natural routes::

    ┌────────────────┬───────────┬───────────────┬───────┐
    │ Route          │ breaking  │ top >= FEATURE│ else  │
    ├────────────────┼───────────┼───────────────┼───────┤
    │ NON_PRODUCTION │ MINOR     │ PATCH         │ PATCH │
    │ PRODUCTION     │ MAJOR     │ MINOR         │ PATCH │
    │ PRE_RELEASE(k) │ k         │ k             │ k     │
    └────────────────┴───────────┴───────────────┴───────┘

While the major component is 0 it never advances from commit analysis;
a breaking change surfaces as a minor bump instead.  A pre-release
advances its own train on any qualifying commit.

Forced routes are gated by the current version's natural route; a
level that makes no sense there degrades to ``NONE`` (see
:class:`~bumpkit.bump.ForceLevel`).  Forced routes apply even when no
commit was recognized.
"""

from __future__ import annotations

from bumpkit.bump import Bump, ForceLevel
from bumpkit.classifier import Classification
from bumpkit.logging import get_logger
from bumpkit.route import Route, RouteKind
from bumpkit.severity import Severity

logger = get_logger(__name__)

__all__ = [
    'calculate_bump',
]

_PRODUCTION_TRIAD: dict[ForceLevel, Bump] = {
    ForceLevel.MAJOR: Bump.MAJOR,
    ForceLevel.MINOR: Bump.MINOR,
    ForceLevel.PATCH: Bump.PATCH,
}


def calculate_bump(route: Route, classification: Classification) -> Bump:
    """Return the bump implied by *route* and *classification*.

    Args:
        route: Route from :func:`~bumpkit.route.select_route`.
        classification: Folded commits since the last release.

    Returns:
        The selected :class:`Bump`; ``Bump.NONE`` when nothing
        qualifies or a forced level is invalid for the current version.
    """
    if route.kind is RouteKind.FORCED:
        bump = _forced_bump(route)
    elif classification.recognized == 0:
        bump = Bump.NONE
    else:
        bump = _natural_bump(route, classification)
    logger.debug('bump_calculated', route=str(route), bump=str(bump))
    return bump


def _natural_bump(route: Route, classification: Classification) -> Bump:
    if route.kind is RouteKind.PRE_RELEASE:
        if route.pre_release_kind is None:
            return Bump.NONE
        return Bump.for_pre_release(route.pre_release_kind)

    if route.kind is RouteKind.NON_PRODUCTION:
        return Bump.MINOR if classification.breaking else Bump.PATCH
    if route.kind is RouteKind.PRODUCTION:
        if classification.breaking:
            return Bump.MAJOR
        if classification.top_severity >= Severity.FEATURE:
            return Bump.MINOR
        return Bump.PATCH
    return Bump.NONE


def _forced_bump(route: Route) -> Bump:
    level = route.force
    if level is None:
        return Bump.NONE
    current = route.natural

    if level in _PRODUCTION_TRIAD:
        if current.kind is RouteKind.PRE_RELEASE:
            return Bump.NONE
        return _PRODUCTION_TRIAD[level]

    if level is ForceLevel.FIRST:
        return Bump.FIRST if current.kind is RouteKind.NON_PRODUCTION else Bump.NONE

    if level is ForceLevel.RELEASE:
        return Bump.RELEASE if current.kind is RouteKind.PRE_RELEASE else Bump.NONE

    # ALPHA, BETA, RC: a running train can only advance, never switch.
    target = level.pre_release_kind
    if target is None:
        return Bump.NONE
    if current.kind is RouteKind.PRE_RELEASE and current.pre_release_kind is not target:
        logger.debug(
            'force_level_rejected',
            force=str(level),
            current=str(current),
        )
        return Bump.NONE
    return Bump.for_pre_release(target)
