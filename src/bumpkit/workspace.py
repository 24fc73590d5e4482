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

"""Resolve a workspace package name to its directory.

A uv workspace lists its members in the root ``pyproject.toml``::

    py/
    ├── pyproject.toml        ← [tool.uv.workspace] members = ["packages/*"]
    └── packages/
        ├── core/
        │   └── pyproject.toml  ← [project] name = "acme-core"
        └── cli/
            └── pyproject.toml  ← [project] name = "acme-cli"

``--package acme-core`` then scopes the analysis to ``packages/core``.
Names are compared after PEP 503 normalization, so ``Acme_Core``
matches ``acme-core``.
"""

from __future__ import annotations

import fnmatch
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bumpkit.errors import BumpKitError, ErrorCode
from bumpkit.logging import get_logger

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = get_logger(__name__)

__all__ = [
    'WorkspaceMember',
    'discover_members',
    'normalize_name',
    'resolve_package_dir',
]

_PYPROJECT = 'pyproject.toml'
_NORMALIZE_RE = re.compile(r'[-_.]+')


@dataclass(frozen=True)
class WorkspaceMember:
    """A package in the workspace.

    Attributes:
        name: The ``[project].name`` as written.
        path: Member directory relative to the workspace root (POSIX).
    """

    name: str
    path: str


def normalize_name(name: str) -> str:
    """PEP 503 normalization: lowercase, runs of ``-_.`` become ``-``."""
    return _NORMALIZE_RE.sub('-', name).lower()


def _load(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding='utf-8'))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise BumpKitError(
            ErrorCode.INVALID_CONFIG,
            f'Cannot read workspace manifest {path}: {exc}',
            hint='Fix the pyproject.toml or scope with --subdir instead of --package.',
        ) from exc


def discover_members(root: Path) -> list[WorkspaceMember]:
    """List the workspace members declared by ``root/pyproject.toml``.

    Members come from the ``members`` globs of ``[tool.uv.workspace]``
    minus its ``exclude`` globs.  The root project itself is included
    when it has a ``[project]`` table.  Missing manifests yield ``[]``.
    """
    root = root.resolve()
    manifest = root / _PYPROJECT
    if not manifest.is_file():
        logger.debug('workspace_manifest_not_found', root=str(root))
        return []

    data = _load(manifest)
    members: list[WorkspaceMember] = []
    root_name = data.get('project', {}).get('name')
    if root_name:
        members.append(WorkspaceMember(name=root_name, path='.'))

    uv_workspace = data.get('tool', {}).get('uv', {}).get('workspace', {})
    excludes: list[str] = uv_workspace.get('exclude', [])
    seen: set[Path] = set()
    for pattern in uv_workspace.get('members', []):
        for directory in sorted(root.glob(pattern)):
            rel = directory.relative_to(root).as_posix()
            if directory in seen or any(fnmatch.fnmatch(rel, pat) for pat in excludes):
                continue
            seen.add(directory)
            member_manifest = directory / _PYPROJECT
            if not member_manifest.is_file():
                continue
            name = _load(member_manifest).get('project', {}).get('name')
            if name:
                members.append(WorkspaceMember(name=name, path=rel))

    logger.debug('workspace_members_discovered', count=len(members), members=[m.name for m in members])
    return members


def resolve_package_dir(root: Path, package: str) -> str:
    """Return the directory of *package* relative to *root*.

    Raises:
        BumpKitError: ``INVALID_CONFIG`` if no member has that name.
    """
    wanted = normalize_name(package)
    members = discover_members(root)
    for member in members:
        if normalize_name(member.name) == wanted:
            logger.info('package_resolved', package=package, path=member.path)
            return member.path
    known = ', '.join(sorted(m.name for m in members)) or 'none'
    raise BumpKitError(
        ErrorCode.INVALID_CONFIG,
        f'Package {package!r} is not a member of the workspace at {root}.',
        hint=f'Known packages: {known}.',
    )
