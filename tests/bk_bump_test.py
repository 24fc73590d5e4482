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

"""Tests for bumpkit.bump module."""

from __future__ import annotations

import pytest
from bumpkit.bump import Bump, BumpKind, ForceLevel
from bumpkit.errors import BumpKitError, ErrorCode
from bumpkit.version import PreReleaseKind


class TestBump:
    """Tests for Bump."""

    @pytest.mark.parametrize(
        'bump,label',
        [
            (Bump.NONE, 'none'),
            (Bump.PATCH, 'patch'),
            (Bump.MINOR, 'minor'),
            (Bump.MAJOR, 'major'),
            (Bump.RELEASE, 'release'),
            (Bump.ALPHA, 'alpha'),
            (Bump.BETA, 'beta'),
            (Bump.RC, 'rc'),
            (Bump.FIRST, '1.0.0'),
            (Bump.custom('2.0.0-pre.4'), '2.0.0-pre.4'),
        ],
    )
    def test_str(self, bump: Bump, label: str) -> None:
        """Each bump renders its CLI label."""
        assert str(bump) == label

    def test_magnitude_order(self) -> None:
        """NONE < PATCH < MINOR < MAJOR."""
        magnitudes = [b.magnitude for b in (Bump.NONE, Bump.PATCH, Bump.MINOR, Bump.MAJOR)]
        assert magnitudes == sorted(magnitudes)
        assert len(set(magnitudes)) == 4

    @pytest.mark.parametrize('bump', [Bump.RELEASE, Bump.ALPHA, Bump.FIRST, Bump.custom('x')])
    def test_no_magnitude(self, bump: Bump) -> None:
        """Pre-release and promotion bumps have no magnitude."""
        assert bump.magnitude is None

    def test_equality_by_value(self) -> None:
        """Bumps compare by kind and label."""
        assert Bump(BumpKind.MINOR) == Bump.MINOR
        assert Bump.custom('a') != Bump.custom('b')

    @pytest.mark.parametrize(
        'kind,bump',
        [
            (PreReleaseKind.ALPHA, Bump.ALPHA),
            (PreReleaseKind.BETA, Bump.BETA),
            (PreReleaseKind.RC, Bump.RC),
            (PreReleaseKind.CUSTOM, Bump.custom()),
        ],
    )
    def test_for_pre_release(self, kind: PreReleaseKind, bump: Bump) -> None:
        """Each train has its own bump."""
        assert Bump.for_pre_release(kind) == bump
        assert bump.pre_release_kind is kind

    def test_production_bumps_have_no_train(self) -> None:
        """MAJOR/MINOR/PATCH do not advance a named train."""
        assert Bump.MAJOR.pre_release_kind is None


class TestForceLevel:
    """Tests for ForceLevel."""

    @pytest.mark.parametrize('name', ['major', 'minor', 'patch', 'first', 'release', 'rc', 'beta', 'alpha'])
    def test_from_name(self, name: str) -> None:
        """All levels parse from their names."""
        assert str(ForceLevel.from_name(name)) == name

    def test_from_name_case_insensitive(self) -> None:
        """Names are case-insensitive."""
        assert ForceLevel.from_name('RC') is ForceLevel.RC

    def test_unknown(self) -> None:
        """Unknown levels are configuration errors."""
        with pytest.raises(BumpKitError, match='not a valid force level') as exc_info:
            ForceLevel.from_name('huge')
        assert exc_info.value.code == ErrorCode.INVALID_CONFIG
        assert 'first' in exc_info.value.hint

    def test_pre_release_kind(self) -> None:
        """Only alpha, beta and rc target a train."""
        assert ForceLevel.ALPHA.pre_release_kind is PreReleaseKind.ALPHA
        assert ForceLevel.RC.pre_release_kind is PreReleaseKind.RC
        assert ForceLevel.RELEASE.pre_release_kind is None
