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

"""Tests for bumpkit.cli module."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from bumpkit.bump import ForceLevel
from bumpkit.classifier import CommitHistory, CommitRecord
from bumpkit.cli import build_parser, export_bump, main
from bumpkit.config import CalculatorConfig
from bumpkit.errors import EXIT_UNEXPECTED_ERROR, BumpKitError, ErrorCode
from bumpkit.logging import clear_run_context
from bumpkit.pipeline import Calculator
from bumpkit.severity import Severity
from bumpkit.version import parse_version


class _FakeRun:
    """Stands in for pipeline.run and remembers the config it saw."""

    def __init__(self, version: str, *summaries: str) -> None:
        self.version = parse_version(version)
        self.history = CommitHistory(commits=tuple(CommitRecord(summary=s) for s in summaries))
        self.config: CalculatorConfig | None = None

    def __call__(self, config: CalculatorConfig, repo: object = None) -> Calculator:
        self.config = config
        return Calculator.execute(config, self.version, self.history)


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv('GITHUB_ENV', raising=False)
    yield
    clear_run_context()


class TestParser:
    """Tests for build_parser()."""

    def test_defaults(self) -> None:
        """No flags leaves every override unset."""
        args = build_parser().parse_args([])
        assert args.prefix is None
        assert args.force is None
        assert args.require == []
        assert args.set_env is None

    def test_require_accumulates(self) -> None:
        """Repeated -r flags extend the list."""
        args = build_parser().parse_args(['-r', 'README.md', 'CHANGELOG.md', '-r', 'docs/guide.md'])
        assert args.require == ['README.md', 'CHANGELOG.md', 'docs/guide.md']

    def test_set_env_default_name(self) -> None:
        """--set-env without a value uses the default name."""
        assert build_parser().parse_args(['--set-env']).set_env == 'BUMPKIT_BUMP'
        assert build_parser().parse_args(['--set-env', 'NEXT']).set_env == 'NEXT'

    def test_choices_follow_enums(self) -> None:
        """Every force level and threshold name is accepted."""
        parser = build_parser()
        for level in ForceLevel:
            assert parser.parse_args(['--force', level.value]).force == level.value
        for name in Severity.threshold_names():
            args = parser.parse_args(['--enforce', name, '--check', name])
            assert (args.enforce, args.check) == (name, name)

    def test_invalid_force(self) -> None:
        """Unknown force levels are rejected by argparse."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(['--force', 'huge'])


class TestMain:
    """Tests for main()."""

    def test_prints_bump(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The default report is the bump on stdout."""
        with patch('bumpkit.cli.run', _FakeRun('1.1.0', 'feat: x')):
            assert main([]) == 0
        assert capsys.readouterr().out == 'minor\n'

    def test_number_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--no-bump --number prints only the version."""
        with patch('bumpkit.cli.run', _FakeRun('0.1.0', 'fix!: x')):
            assert main(['--no-bump', '--number']) == 0
        assert capsys.readouterr().out == '0.2.0\n'

    def test_overrides_reach_config(self) -> None:
        """Flags are applied on top of the file configuration."""
        fake = _FakeRun('1.1.0', 'feat: x')
        with patch('bumpkit.cli.run', fake):
            main(['-p', 'rel-', '-f', 'rc', '-c', 'fix', '--first-version', '--subdir', 'pkg/'])
        config = fake.config
        assert config is not None
        assert config.prefix == 'rel-'
        assert config.force is ForceLevel.RC
        assert config.reporting_threshold == Severity.FIX
        assert config.first_version
        assert config.subdir == 'pkg'

    def test_require_defaults_enforcement_to_feature(self) -> None:
        """-r without -e enforces from feature changes."""
        fake = _FakeRun('1.1.0', 'feat: x')
        with patch('bumpkit.cli.run', fake):
            main(['-r', 'docs/CHANGELOG.md'])
        assert fake.config.required_files == frozenset({'CHANGELOG.md'})
        assert fake.config.enforcement_threshold == Severity.FEATURE

    def test_config_file_is_read(self, tmp_path: Path) -> None:
        """bumpkit.toml in the working directory seeds the configuration."""
        (tmp_path / 'bumpkit.toml').write_text('prefix = "cli-v"\nreport_number = true\n', encoding='utf-8')
        fake = _FakeRun('1.1.0', 'feat: x')
        with patch('bumpkit.cli.run', fake):
            main(['-b'])
        assert fake.config.prefix == 'cli-v'
        assert fake.config.report_number
        assert not fake.config.report_bump

    def test_bumpkit_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Errors go to stderr with a hint and map to their exit code."""
        error = BumpKitError(ErrorCode.NO_VERSION_TAG, 'No version tag found.', hint='Create one.')
        with patch('bumpkit.cli.run', side_effect=error):
            assert main([]) == 12
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'No version tag found.' in captured.err
        assert 'Create one.' in captured.err

    def test_invalid_config_file(self, tmp_path: Path) -> None:
        """A broken config file exits with the configuration code."""
        (tmp_path / 'bumpkit.toml').write_text('colour = "blue"\n', encoding='utf-8')
        assert main([]) == 16

    def test_os_error(self) -> None:
        """Unexpected I/O failures use the generic exit code."""
        with patch('bumpkit.cli.run', side_effect=PermissionError('denied')):
            assert main([]) == EXIT_UNEXPECTED_ERROR

    def test_unexpected_exception(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Any other failure exits with the generic code instead of a traceback."""
        with patch('bumpkit.cli.run', side_effect=RuntimeError('boom')):
            assert main([]) == EXIT_UNEXPECTED_ERROR
        captured = capsys.readouterr()
        assert captured.out == ''
        assert 'boom' in captured.err


class TestSetEnv:
    """Tests for exporting the bump."""

    def test_sets_process_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """--set-env exports the bump label."""
        monkeypatch.setenv('BUMPKIT_BUMP', 'unset')
        with patch('bumpkit.cli.run', _FakeRun('1.1.0', 'fix: x')):
            assert main(['--set-env']) == 0
        assert os.environ['BUMPKIT_BUMP'] == 'patch'

    def test_appends_github_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """On GitHub Actions the variable is appended to $GITHUB_ENV."""
        env_file = tmp_path / 'github_env'
        env_file.write_text('EXISTING=1\n', encoding='utf-8')
        monkeypatch.setenv('GITHUB_ENV', str(env_file))
        monkeypatch.setenv('NEXT_BUMP', '')

        export_bump('NEXT_BUMP', 'minor')

        assert env_file.read_text(encoding='utf-8') == 'EXISTING=1\nNEXT_BUMP=minor\n'
