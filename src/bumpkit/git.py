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

"""Read-only repository access through the ``git`` CLI.

The engine never touches the repository itself; this module produces
its inputs::

    git tag --list              → tags() → current version
    git log <tag>..HEAD         → commits, newest first, with paths
    git ls-tree -r <oldest>     → known files

Nothing here creates tags, commits or refs.

Scoping: with a ``subdir``, a commit is kept only when it touches a
path under that directory or a file at the repository root.  Merge
commits are dropped before scoping.
"""

from __future__ import annotations

import shutil
import subprocess  # noqa: S404
from pathlib import Path

from bumpkit.classifier import CommitHistory, CommitRecord, is_merge_commit
from bumpkit.errors import BumpKitError, ErrorCode
from bumpkit.logging import get_logger
from bumpkit.version import SemanticVersion, latest_version_tag

logger = get_logger(__name__)

__all__ = [
    'GitRepository',
]

_TIMEOUT_SECONDS = 60

# Record and field separators for ``git log --format``.
_RS = '\x1e'
_FS = '\x1f'


class GitRepository:
    """A git working tree.

    Args:
        root: Any directory inside the working tree.
    """

    def __init__(self, root: Path | str = '.') -> None:
        """Bind to the working tree at *root*."""
        self.root = Path(root)

    def _git(self, *args: str) -> str:
        """Run ``git`` with *args* and return stdout.

        Raises:
            BumpKitError: ``GIT_FAILED`` when git is missing, times out
                or exits non-zero.
        """
        git = shutil.which('git')
        if git is None:
            raise BumpKitError(
                ErrorCode.GIT_FAILED,
                'git executable not found.',
                hint='Install git and make sure it is on PATH.',
            )
        cmd = [git, *args]
        logger.debug('git_command', args=list(args), cwd=str(self.root))
        try:
            proc = subprocess.run(  # noqa: S603 - fixed git argv
                cmd,
                cwd=self.root,
                capture_output=True,
                text=True,
                timeout=_TIMEOUT_SECONDS,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            raise BumpKitError(
                ErrorCode.GIT_FAILED,
                f'git {" ".join(args)} timed out after {_TIMEOUT_SECONDS} seconds.',
                hint='Check for a lock file or a very large history.',
            ) from exc
        except OSError as exc:
            raise BumpKitError(
                ErrorCode.GIT_FAILED,
                f'Failed to run git {" ".join(args)}: {exc}',
                hint=f'Check that {self.root} exists.',
            ) from exc
        if proc.returncode != 0:
            raise BumpKitError(
                ErrorCode.GIT_FAILED,
                f'git {" ".join(args)} failed: {proc.stderr.strip()}',
                hint=f'Run the command in {self.root} to investigate.',
            )
        return proc.stdout

    def tags(self) -> list[str]:
        """All tag names in the repository."""
        return [line for line in self._git('tag', '--list').splitlines() if line]

    def latest_tag(self, prefix: str) -> tuple[str, SemanticVersion]:
        """Return ``(tag, version)`` for the highest tag with *prefix*.

        Raises:
            BumpKitError: ``NO_VERSION_TAG`` or a tag parse error.
        """
        tag, version = latest_version_tag(self.tags(), prefix)
        logger.info('current_version', tag=tag, version=str(version))
        return tag, version

    def current_version(self, prefix: str) -> SemanticVersion:
        """The version of the highest tag with *prefix*."""
        return self.latest_tag(prefix)[1]

    def history(self, tag_ref: str, subdir: str | None = None) -> CommitHistory:
        """Commits reachable from HEAD but not from *tag_ref*.

        Args:
            tag_ref: Tag name (or ``refs/tags/...``) of the last release.
            subdir: Directory to scope to; ``None`` or ``.`` for the
                whole repository.

        Returns:
            The :class:`~bumpkit.classifier.CommitHistory`, newest first,
            with the paths of the tree at the oldest commit kept.
        """
        ref = tag_ref if tag_ref.startswith('refs/') else f'refs/tags/{tag_ref}'
        scope = (subdir or '').strip('/')
        if scope == '.':
            scope = ''

        out = self._git(
            'log',
            f'{ref}..HEAD',
            f'--format={_RS}%H{_FS}%s',
            '--name-only',
            '--no-renames',
        )

        commits: list[CommitRecord] = []
        for record in out.split(_RS):
            if not record.strip():
                continue
            header, _, body = record.partition('\n')
            sha, _, summary = header.partition(_FS)
            if is_merge_commit(summary):
                logger.debug('merge_commit_skipped', sha=sha, summary=summary)
                continue
            files = frozenset(line for line in body.splitlines() if line)
            if scope and not _in_scope(files, scope):
                logger.debug('commit_out_of_scope', sha=sha, subdir=scope)
                continue
            commits.append(CommitRecord(summary=summary, files=files, sha=sha))

        known: frozenset[str] = frozenset()
        if commits:
            oldest = commits[-1].sha
            known = frozenset(line for line in self._git('ls-tree', '-r', '--name-only', oldest).splitlines() if line)

        logger.debug('history_collected', tag=tag_ref, commits=len(commits), subdir=scope or None)
        return CommitHistory(commits=tuple(commits), known_files=known)


def _in_scope(files: frozenset[str], subdir: str) -> bool:
    prefix = f'{subdir}/'
    return any(path.startswith(prefix) or '/' not in path for path in files)
