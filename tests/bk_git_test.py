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

"""Tests for bumpkit.git module."""

from __future__ import annotations

import shutil
import subprocess  # noqa: S404
from pathlib import Path
from unittest.mock import patch

import pytest
from bumpkit.errors import BumpKitError, ErrorCode
from bumpkit.git import GitRepository

requires_git = pytest.mark.skipif(shutil.which('git') is None, reason='git not installed')


def _run(repo: Path, *args: str) -> None:
    subprocess.run(  # noqa: S603, S607 - test fixture
        ['git', *args],
        cwd=repo,
        check=True,
        capture_output=True,
        text=True,
    )


def _commit(repo: Path, message: str, files: dict[str, str] | None = None) -> None:
    for name, content in (files or {}).items():
        path = repo / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    _run(repo, 'add', '-A')
    _run(repo, 'commit', '--allow-empty', '-q', '-m', message)


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    """A repository with one tagged release."""
    _run(tmp_path, 'init', '-q')
    _run(tmp_path, 'config', 'user.email', 'dev@example.com')
    _run(tmp_path, 'config', 'user.name', 'Dev')
    _run(tmp_path, 'config', 'commit.gpgsign', 'false')
    _run(tmp_path, 'config', 'tag.gpgsign', 'false')
    _commit(tmp_path, 'chore: initial', {'README.md': 'hello\n'})
    _run(tmp_path, 'tag', 'v1.0.0')
    return tmp_path


@requires_git
class TestTags:
    """Tests for tag discovery."""

    def test_latest_tag(self, repo: Path) -> None:
        """The highest version tag wins, not the newest."""
        _commit(repo, 'fix: a')
        _run(repo, 'tag', 'v1.2.0')
        _commit(repo, 'fix: b')
        _run(repo, 'tag', 'v1.1.5')
        tag, version = GitRepository(repo).latest_tag('v')
        assert tag == 'v1.2.0'
        assert str(version) == '1.2.0'

    def test_other_prefixes_ignored(self, repo: Path) -> None:
        """Tags without the prefix are not considered."""
        _run(repo, 'tag', 'release-9.0.0')
        assert str(GitRepository(repo).current_version('v')) == '1.0.0'

    def test_no_tags(self, tmp_path: Path) -> None:
        """A repository without tags has no current version."""
        _run(tmp_path, 'init', '-q')
        with pytest.raises(BumpKitError) as exc_info:
            GitRepository(tmp_path).latest_tag('v')
        assert exc_info.value.code == ErrorCode.NO_VERSION_TAG


@requires_git
class TestHistory:
    """Tests for GitRepository.history()."""

    def test_commits_since_tag(self, repo: Path) -> None:
        """Only commits after the tag are returned, newest first."""
        _commit(repo, 'feat: first', {'src/a.py': 'a\n'})
        _commit(repo, 'fix: second', {'src/b.py': 'b\n'})
        history = GitRepository(repo).history('v1.0.0')
        assert [c.summary for c in history.commits] == ['fix: second', 'feat: first']
        assert history.commits[0].files == frozenset({'src/b.py'})
        assert all(c.sha for c in history.commits)

    def test_known_files_from_oldest_commit(self, repo: Path) -> None:
        """Known files are the tree at the oldest commit walked."""
        _commit(repo, 'feat: first', {'src/a.py': 'a\n'})
        _commit(repo, 'fix: second', {'src/b.py': 'b\n'})
        history = GitRepository(repo).history('v1.0.0')
        assert history.known_files == frozenset({'README.md', 'src/a.py'})

    def test_empty_history(self, repo: Path) -> None:
        """HEAD at the tag yields nothing."""
        history = GitRepository(repo).history('v1.0.0')
        assert history.commits == ()
        assert history.known_files == frozenset()

    def test_merge_commits_dropped(self, repo: Path) -> None:
        """Merge commits never reach the classifier."""
        _run(repo, 'checkout', '-q', '-b', 'topic')
        _commit(repo, 'feat: on topic', {'topic.txt': 't\n'})
        _run(repo, 'checkout', '-q', '-')
        _commit(repo, 'fix: on main', {'main.txt': 'm\n'})
        _run(repo, 'merge', '-q', '--no-ff', '-m', "Merge branch 'topic'", 'topic')
        summaries = [c.summary for c in GitRepository(repo).history('v1.0.0').commits]
        assert "Merge branch 'topic'" not in summaries
        assert set(summaries) == {'feat: on topic', 'fix: on main'}

    def test_subdir_scope(self, repo: Path) -> None:
        """Commits outside the subdir are dropped; root files count."""
        _commit(repo, 'feat: core', {'packages/core/x.py': 'x\n'})
        _commit(repo, 'feat: cli', {'packages/cli/y.py': 'y\n'})
        _commit(repo, 'docs: root', {'CHANGELOG.md': 'c\n'})
        summaries = [c.summary for c in GitRepository(repo).history('v1.0.0', subdir='packages/core/').commits]
        assert summaries == ['docs: root', 'feat: core']

    def test_unknown_tag(self, repo: Path) -> None:
        """A missing tag is a git failure."""
        with pytest.raises(BumpKitError) as exc_info:
            GitRepository(repo).history('v9.9.9')
        assert exc_info.value.code == ErrorCode.GIT_FAILED


class TestGitFailures:
    """Tests for subprocess failure handling."""

    def test_git_missing(self) -> None:
        """A missing executable is reported with a hint."""
        with patch('bumpkit.git.shutil.which', return_value=None):
            with pytest.raises(BumpKitError, match='git executable not found') as exc_info:
                GitRepository('.').tags()
        assert exc_info.value.hint

    def test_timeout(self) -> None:
        """A hung git is reported as GIT_FAILED."""
        with (
            patch('bumpkit.git.shutil.which', return_value='/usr/bin/git'),
            patch('bumpkit.git.subprocess.run', side_effect=subprocess.TimeoutExpired('git', 60)),
        ):
            with pytest.raises(BumpKitError, match='timed out') as exc_info:
                GitRepository('.').tags()
        assert exc_info.value.code == ErrorCode.GIT_FAILED

    def test_nonzero_exit(self) -> None:
        """stderr is surfaced in the message."""
        failed = subprocess.CompletedProcess(args=['git'], returncode=128, stdout='', stderr='fatal: not a git repository')
        with (
            patch('bumpkit.git.shutil.which', return_value='/usr/bin/git'),
            patch('bumpkit.git.subprocess.run', return_value=failed),
        ):
            with pytest.raises(BumpKitError, match='not a git repository'):
                GitRepository('.').tags()

    def test_parses_tag_list(self) -> None:
        """Blank lines in the tag list are ignored."""
        done = subprocess.CompletedProcess(args=['git'], returncode=0, stdout='v1.0.0\n\nv1.1.0\n', stderr='')
        with (
            patch('bumpkit.git.shutil.which', return_value='/usr/bin/git'),
            patch('bumpkit.git.subprocess.run', return_value=done),
        ):
            assert GitRepository('.').tags() == ['v1.0.0', 'v1.1.0']
