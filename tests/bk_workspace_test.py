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

"""Tests for bumpkit.workspace module."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from bumpkit.errors import BumpKitError, ErrorCode
from bumpkit.workspace import WorkspaceMember, discover_members, normalize_name, resolve_package_dir


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding='utf-8')


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A uv workspace with two members and one excluded directory."""
    _write(
        tmp_path / 'pyproject.toml',
        """        [project]
        name = "acme"

        [tool.uv.workspace]
        members = ["packages/*"]
        exclude = ["packages/scratch"]
        """,
    )
    _write(tmp_path / 'packages' / 'core' / 'pyproject.toml', '[project]\nname = "Acme_Core"\n')
    _write(tmp_path / 'packages' / 'cli' / 'pyproject.toml', '[project]\nname = "acme-cli"\n')
    _write(tmp_path / 'packages' / 'scratch' / 'pyproject.toml', '[project]\nname = "scratch"\n')
    (tmp_path / 'packages' / 'docs').mkdir()
    return tmp_path


class TestNormalizeName:
    """Tests for normalize_name()."""

    @pytest.mark.parametrize(
        'name,expected',
        [
            ('acme-core', 'acme-core'),
            ('Acme_Core', 'acme-core'),
            ('acme.core', 'acme-core'),
            ('acme--_core', 'acme-core'),
        ],
    )
    def test_pep503(self, name: str, expected: str) -> None:
        """Runs of separators collapse to a single dash."""
        assert normalize_name(name) == expected


class TestDiscoverMembers:
    """Tests for discover_members()."""

    def test_members(self, workspace: Path) -> None:
        """Root project and globbed members are found; excludes are skipped."""
        members = discover_members(workspace)
        assert members == [
            WorkspaceMember(name='acme', path='.'),
            WorkspaceMember(name='acme-cli', path='packages/cli'),
            WorkspaceMember(name='Acme_Core', path='packages/core'),
        ]

    def test_no_manifest(self, tmp_path: Path) -> None:
        """A directory without pyproject.toml has no members."""
        assert discover_members(tmp_path) == []

    def test_invalid_manifest(self, tmp_path: Path) -> None:
        """Broken TOML is a configuration error."""
        _write(tmp_path / 'pyproject.toml', '[project\n')
        with pytest.raises(BumpKitError) as exc_info:
            discover_members(tmp_path)
        assert exc_info.value.code == ErrorCode.INVALID_CONFIG


class TestResolvePackageDir:
    """Tests for resolve_package_dir()."""

    def test_normalized_match(self, workspace: Path) -> None:
        """Names match after normalization."""
        assert resolve_package_dir(workspace, 'acme-core') == 'packages/core'

    def test_root_project(self, workspace: Path) -> None:
        """The root project maps to the workspace root."""
        assert resolve_package_dir(workspace, 'acme') == '.'

    def test_unknown_package(self, workspace: Path) -> None:
        """An unknown name lists the known packages in the hint."""
        with pytest.raises(BumpKitError, match='scratch') as exc_info:
            resolve_package_dir(workspace, 'scratch')
        assert exc_info.value.code == ErrorCode.INVALID_CONFIG
        assert 'acme-cli' in exc_info.value.hint
