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

"""Lifecycle route of the current version.

The route decides which bump table applies::

    pre-release present ──────────► PRE_RELEASE(kind)
    major == 0 ───────────────────► NON_PRODUCTION
    otherwise ────────────────────► PRODUCTION
    --force LEVEL (overrides all) ► FORCED(level)

A forced route keeps the natural route in ``base`` because the
validity of a force level depends on what the current version is.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from bumpkit.bump import ForceLevel
from bumpkit.version import PreReleaseKind, SemanticVersion

__all__ = [
    'Route',
    'RouteKind',
    'select_route',
]


class RouteKind(enum.Enum):
    """Route variants."""

    NON_PRODUCTION = 'non-production'
    PRE_RELEASE = 'pre-release'
    PRODUCTION = 'production'
    FORCED = 'forced'


@dataclass(frozen=True)
class Route:
    """The route selected for a version.

    Attributes:
        kind: The variant.
        pre_release_kind: Set for ``PRE_RELEASE`` routes.
        force: Set for ``FORCED`` routes.
        base: For ``FORCED`` routes, the natural route of the current
            version; ``None`` otherwise.
    """

    kind: RouteKind
    pre_release_kind: PreReleaseKind | None = None
    force: ForceLevel | None = None
    base: Route | None = None

    @classmethod
    def non_production(cls) -> Route:
        """A ``NON_PRODUCTION`` route."""
        return cls(RouteKind.NON_PRODUCTION)

    @classmethod
    def production(cls) -> Route:
        """A ``PRODUCTION`` route."""
        return cls(RouteKind.PRODUCTION)

    @classmethod
    def pre_release(cls, kind: PreReleaseKind) -> Route:
        """A ``PRE_RELEASE`` route for a train of *kind*."""
        return cls(RouteKind.PRE_RELEASE, pre_release_kind=kind)

    @classmethod
    def forced(cls, level: ForceLevel, base: Route) -> Route:
        """A ``FORCED`` route overriding the natural *base* route."""
        return cls(RouteKind.FORCED, force=level, base=base)

    @property
    def natural(self) -> Route:
        """The route without any operator override."""
        if self.kind is RouteKind.FORCED and self.base is not None:
            return self.base
        return self

    def __str__(self) -> str:
        """Render e.g. ``pre-release(alpha)`` or ``forced(first)``."""
        if self.kind is RouteKind.PRE_RELEASE and self.pre_release_kind is not None:
            return f'{self.kind.value}({self.pre_release_kind.value})'
        if self.kind is RouteKind.FORCED and self.force is not None:
            return f'{self.kind.value}({self.force.value})'
        return self.kind.value


def select_route(version: SemanticVersion, forced: ForceLevel | None = None) -> Route:
    """Select the route for *version*, honouring an operator override.

    >>> str(select_route(SemanticVersion(0, 3, 0)))
    'non-production'
    >>> str(select_route(SemanticVersion(1, 0, 0), ForceLevel.FIRST))
    'forced(first)'
    """
    if version.pre_release is not None:
        natural = Route.pre_release(version.pre_release.kind)
    elif version.major == 0:
        natural = Route.non_production()
    else:
        natural = Route.production()
    if forced is not None:
        return Route.forced(forced, natural)
    return natural
