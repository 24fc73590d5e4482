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

"""Calculator configuration: immutable value, builder and TOML loading.

Configuration is read from ``bumpkit.toml`` or from the
``[tool.bumpkit]`` table of ``pyproject.toml``::

    [tool.bumpkit]
    prefix = "v"
    subdir = "packages/core"
    required_files = ["CHANGELOG.md"]
    enforcement = "feature"
    reporting_threshold = "fix"

Key Concepts::

    ┌──────────────────────┬──────────────────────────────────────────────┐
    │ Key                  │ Meaning                                      │
    ├──────────────────────┼──────────────────────────────────────────────┤
    │ prefix               │ String immediately preceding the version in  │
    │                      │ a tag (``v`` for ``v1.2.3``).                │
    ├──────────────────────┼──────────────────────────────────────────────┤
    │ package / subdir     │ Limit analysis to commits touching one       │
    │                      │ workspace member (plus root-level files).    │
    ├──────────────────────┼──────────────────────────────────────────────┤
    │ force                │ Operator override: major, minor, patch,      │
    │                      │ first, release, rc, beta or alpha.           │
    ├──────────────────────┼──────────────────────────────────────────────┤
    │ first_version        │ Move a 0.x result to 1.0.0.                  │
    ├──────────────────────┼──────────────────────────────────────────────┤
    │ report_bump /        │ Which lines :meth:`Calculator.report`        │
    │ report_number        │ prints.                                      │
    ├──────────────────────┼──────────────────────────────────────────────┤
    │ required_files       │ Files that must change for a release at or   │
    │ enforcement          │ above the enforcement severity.              │
    ├──────────────────────┼──────────────────────────────────────────────┤
    │ reporting_threshold  │ Changes below this severity report ``none``. │
    └──────────────────────┴──────────────────────────────────────────────┘

Usage::

    from bumpkit.config import CalculatorConfigBuilder
    from bumpkit.severity import Severity

    config = (
        CalculatorConfigBuilder()
        .set_prefix('v')
        .add_required_files(['CHANGELOG.md'])
        .set_required_enforcement(Severity.FEATURE)
        .build()
    )
"""

from __future__ import annotations

import dataclasses
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bumpkit.bump import ForceLevel
from bumpkit.errors import BumpKitError, ErrorCode
from bumpkit.logging import get_logger
from bumpkit.severity import Severity

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = get_logger(__name__)

__all__ = [
    'CONFIG_FILENAME',
    'CalculatorConfig',
    'CalculatorConfigBuilder',
    'load_config',
]

CONFIG_FILENAME = 'bumpkit.toml'
PYPROJECT_FILENAME = 'pyproject.toml'
_PYPROJECT_TABLE = ('tool', 'bumpkit')


@dataclass(frozen=True)
class CalculatorConfig:
    """Immutable configuration for one calculation.

    Attributes:
        prefix: Version prefix in tags.
        package: Workspace member name to scope the analysis to.
        subdir: Directory to scope the analysis to.
        force: Operator override, if any.
        first_version: Move a 0.x result to 1.0.0.
        report_bump: Include the bump line in the report.
        report_number: Include the version line in the report.
        required_files: Basenames that must change for a release.
        enforcement_threshold: Severity from which required files apply.
        reporting_threshold: Severity below which the bump is ``none``.
    """

    prefix: str = 'v'
    package: str | None = None
    subdir: str | None = None
    force: ForceLevel | None = None
    first_version: bool = False
    report_bump: bool = True
    report_number: bool = False
    required_files: frozenset[str] = frozenset()
    enforcement_threshold: Severity = Severity.OTHER
    reporting_threshold: Severity = Severity.OTHER


class CalculatorConfigBuilder:
    """Chained builder for :class:`CalculatorConfig`.

    Every setter returns the builder; :meth:`build` freezes the result.
    """

    def __init__(self, base: CalculatorConfig | None = None) -> None:
        """Start from *base* (defaults when ``None``)."""
        base = base or CalculatorConfig()
        self._values: dict[str, Any] = {f.name: getattr(base, f.name) for f in dataclasses.fields(base)}

    def set_prefix(self, prefix: str) -> CalculatorConfigBuilder:
        """Set the version prefix (``v`` for ``v1.2.3``)."""
        self._values['prefix'] = prefix
        return self

    def set_package(self, package: str | None) -> CalculatorConfigBuilder:
        """Scope the analysis to a workspace member by name."""
        self._values['package'] = package or None
        return self

    def set_subdir(self, subdir: str | None) -> CalculatorConfigBuilder:
        """Scope the analysis to a directory."""
        self._values['subdir'] = subdir.strip('/') if subdir else None
        return self

    def set_force_bump(self, force: ForceLevel | str | None) -> CalculatorConfigBuilder:
        """Force a bump level (name or :class:`ForceLevel`)."""
        if isinstance(force, str):
            force = ForceLevel.from_name(force)
        self._values['force'] = force
        return self

    def set_first_version(self, enabled: bool = True) -> CalculatorConfigBuilder:
        """Move a 0.x result to 1.0.0."""
        self._values['first_version'] = enabled
        return self

    def set_bump_report(self, enabled: bool) -> CalculatorConfigBuilder:
        """Include the bump line in the report."""
        self._values['report_bump'] = enabled
        return self

    def set_version_report(self, enabled: bool) -> CalculatorConfigBuilder:
        """Include the next version line in the report."""
        self._values['report_number'] = enabled
        return self

    def add_required_files(self, files: Iterable[str]) -> CalculatorConfigBuilder:
        """Add files that must change for a qualifying release.

        Only basenames are compared, so ``docs/CHANGELOG.md`` and
        ``CHANGELOG.md`` are the same requirement.
        """
        names = {Path(f).name for f in files if f}
        self._values['required_files'] = frozenset(self._values['required_files'] | names)
        return self

    def set_required_enforcement(self, threshold: Severity | str) -> CalculatorConfigBuilder:
        """Set the severity from which required files are enforced."""
        if isinstance(threshold, str):
            threshold = Severity.from_name(threshold)
        self._values['enforcement_threshold'] = threshold
        return self

    def set_reporting_threshold(self, threshold: Severity | str) -> CalculatorConfigBuilder:
        """Set the severity below which the bump is reported as ``none``."""
        if isinstance(threshold, str):
            threshold = Severity.from_name(threshold)
        self._values['reporting_threshold'] = threshold
        return self

    def build(self) -> CalculatorConfig:
        """Return the frozen configuration."""
        config = CalculatorConfig(**self._values)
        logger.debug('config_built', config=config)
        return config


def _expect(key: str, value: object, expected: type | tuple[type, ...], type_name: str) -> None:
    if not isinstance(value, expected):
        raise BumpKitError(
            ErrorCode.INVALID_CONFIG,
            f"'{key}' must be {type_name}, got {type(value).__name__}: {value!r}",
            hint=f"Change '{key}' in {CONFIG_FILENAME} or [tool.bumpkit].",
        )


def _apply_table(builder: CalculatorConfigBuilder, table: Mapping[str, Any]) -> None:
    for key, value in table.items():
        if key == 'prefix':
            _expect(key, value, str, 'a string')
            builder.set_prefix(value)
        elif key == 'package':
            _expect(key, value, str, 'a string')
            builder.set_package(value)
        elif key == 'subdir':
            _expect(key, value, str, 'a string')
            builder.set_subdir(value)
        elif key == 'force':
            _expect(key, value, str, 'a string')
            builder.set_force_bump(value)
        elif key == 'first_version':
            _expect(key, value, bool, 'a boolean')
            builder.set_first_version(value)
        elif key == 'report_bump':
            _expect(key, value, bool, 'a boolean')
            builder.set_bump_report(value)
        elif key == 'report_number':
            _expect(key, value, bool, 'a boolean')
            builder.set_version_report(value)
        elif key == 'required_files':
            _expect(key, value, list, 'a list of strings')
            for item in value:
                _expect(key, item, str, 'a list of strings')
            builder.add_required_files(value)
        elif key == 'enforcement':
            _expect(key, value, str, 'a string')
            builder.set_required_enforcement(value)
        elif key == 'reporting_threshold':
            _expect(key, value, str, 'a string')
            builder.set_reporting_threshold(value)
        else:
            raise BumpKitError(
                ErrorCode.INVALID_CONFIG,
                f'Unknown configuration key {key!r}.',
                hint=(
                    'Valid keys: prefix, package, subdir, force, first_version, report_bump, '
                    'report_number, required_files, enforcement, reporting_threshold.'
                ),
            )


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding='utf-8'))
    except OSError as exc:
        raise BumpKitError(
            ErrorCode.INVALID_CONFIG,
            f'Cannot read {path}: {exc}',
            hint='Check the --config path.',
        ) from exc
    except tomllib.TOMLDecodeError as exc:
        raise BumpKitError(
            ErrorCode.INVALID_CONFIG,
            f'Invalid TOML in {path}: {exc}',
            hint='Fix the syntax error and try again.',
        ) from exc


def _table_from_pyproject(data: Mapping[str, Any]) -> Mapping[str, Any]:
    table: Any = data
    for key in _PYPROJECT_TABLE:
        table = table.get(key, {}) if isinstance(table, Mapping) else {}
    if not isinstance(table, Mapping):
        raise BumpKitError(
            ErrorCode.INVALID_CONFIG,
            '[tool.bumpkit] must be a table.',
        )
    return table


def load_config(path: Path | str = '.') -> CalculatorConfig:
    """Load configuration from a file or directory.

    A directory is searched for ``bumpkit.toml``, then for the
    ``[tool.bumpkit]`` table of ``pyproject.toml``; when neither exists
    the defaults are returned.  A ``pyproject.toml`` path is read from
    its ``[tool.bumpkit]`` table; any other file is read whole.

    Args:
        path: Config file, or the directory holding it.

    Returns:
        The loaded :class:`CalculatorConfig`.

    Raises:
        BumpKitError: ``INVALID_CONFIG`` for unreadable files, bad TOML,
            unknown keys or values of the wrong type.
    """
    path = Path(path)
    if path.is_dir():
        candidates = [path / CONFIG_FILENAME, path / PYPROJECT_FILENAME]
        found = next((c for c in candidates if c.is_file()), None)
        if found is None:
            logger.debug('config_not_found', directory=str(path))
            return CalculatorConfig()
        path = found

    data = _read_toml(path)
    table = _table_from_pyproject(data) if path.name == PYPROJECT_FILENAME else data

    builder = CalculatorConfigBuilder()
    _apply_table(builder, table)
    config = builder.build()
    logger.debug('config_loaded', path=str(path), keys=sorted(table))
    return config
