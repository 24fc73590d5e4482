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

"""Run the bump decision once and report the result.

Pipeline::

    CommitHistory ──► classify ──► required-files gate ──┐
                                                         │ blocked → none
    current version ──► select_route ◄───────────────────┘
                             │
                             ▼
                   reporting threshold ──► below → none
                             │
                             ▼
                      calculate_bump
                             │
                             ▼
              start pre-release train (forced alpha/beta/rc
              on a released version)
                             │
                             ▼
                        apply_bump
                             │
                             ▼
                first-version flag (0.x → 1.0.0)

Both gates apply to forced levels as well.  A run stopped by a gate is
*held*: it reports ``none`` even when the bump line is switched off.

Every stage is pure; :func:`run` is the only place that talks to git.

Usage::

    from bumpkit.config import CalculatorConfigBuilder
    from bumpkit.git import GitRepository
    from bumpkit.pipeline import run

    calculator = run(CalculatorConfigBuilder().set_prefix('v').build(), GitRepository('.'))
    print(calculator.report(), end='')
"""

from __future__ import annotations

import dataclasses
from pathlib import Path

from bumpkit.applier import apply_bump
from bumpkit.bump import Bump, BumpKind
from bumpkit.calculator import calculate_bump
from bumpkit.classifier import Classification, CommitHistory, classify
from bumpkit.config import CalculatorConfig
from bumpkit.gate import check_required_files, meets_reporting_threshold
from bumpkit.git import GitRepository
from bumpkit.logging import get_logger
from bumpkit.route import Route, RouteKind, select_route
from bumpkit.severity import Severity
from bumpkit.version import PreRelease, SemanticVersion
from bumpkit.workspace import resolve_package_dir

logger = get_logger(__name__)

__all__ = [
    'Calculator',
    'run',
]


class Calculator:
    """The outcome of one calculation.

    Build it with :meth:`execute` (pure) or :func:`run` (reads git).

    Attributes:
        config: The configuration used.
        current_version: The version of the last release.
        classification: The folded commits.
        route: The route used to select the bump.
        next_version: The version after applying the bump.
        effective_bump: The bump actually applied.
        held: ``True`` when a gate stopped the run before a bump was
            selected (required files missing, or the change is below the
            reporting threshold).
    """

    def __init__(
        self,
        config: CalculatorConfig,
        current_version: SemanticVersion,
        classification: Classification,
        route: Route,
        next_version: SemanticVersion,
        effective_bump: Bump,
        held: bool = False,
    ) -> None:
        """Store a finished calculation; see :meth:`execute`."""
        self.config = config
        self.current_version = current_version
        self.classification = classification
        self.route = route
        self.next_version = next_version
        self.effective_bump = effective_bump
        self.held = held

    @classmethod
    def execute(
        cls,
        config: CalculatorConfig,
        current_version: SemanticVersion,
        history: CommitHistory,
    ) -> Calculator:
        """Run the pipeline over *history*.

        Args:
            config: Frozen configuration.
            current_version: Version parsed from the last release tag.
            history: Commits since that tag.

        Returns:
            The finished :class:`Calculator`.
        """
        classification = classify(history.commits, history.known_files)
        route = select_route(current_version, config.force)

        def finish(next_version: SemanticVersion, bump: Bump, *, held: bool = False) -> Calculator:
            logger.info(
                'bump_decided',
                current=str(current_version),
                route=str(route),
                bump=str(bump),
                next=str(next_version),
                held=held,
            )
            return cls(config, current_version, classification, route, next_version, bump, held)

        gate = check_required_files(classification, config)
        if not gate.ok:
            logger.warning(
                'release_blocked',
                missing_files=list(gate.missing_files),
                hint='Update the required files in this release.',
            )
            return finish(current_version, Bump.NONE, held=True)

        if not meets_reporting_threshold(classification, config):
            logger.info(
                'below_reporting_threshold',
                top_severity=str(classification.top_severity),
                threshold=str(config.reporting_threshold),
            )
            return finish(current_version, Bump.NONE, held=True)

        bump = calculate_bump(route, classification)
        start = _start_pre_release_train(current_version, route, classification)
        if start is not None:
            next_version, bump = start
        else:
            next_version, bump = apply_bump(current_version, bump)

        if config.first_version and bump.kind is not BumpKind.NONE and next_version.major == 0:
            next_version = dataclasses.replace(next_version, major=1, minor=0, patch=0)
            bump = Bump.custom(str(next_version))
            logger.debug('first_version_forced', version=str(next_version))

        return finish(next_version, bump)

    def bump(self) -> str:
        """The bump label, e.g. ``minor`` or ``1.0.0``."""
        return str(self.effective_bump)

    def next_version_number(self) -> str:
        """The next version, e.g. ``0.8.0`` (the current one when unchanged)."""
        return str(self.next_version)

    def change_level(self) -> Severity:
        """The highest severity among the commits analysed."""
        return self.classification.top_severity

    def report(self) -> str:
        """The report selected by the configuration.

        One of ``"{bump}\\n{version}\\n"``, ``"{version}\\n"``,
        ``"{bump}\\n"`` or ``""``.  When the bump is ``none`` there is
        no new version, so the version line is omitted.  A held run
        always reports ``"none\\n"`` so callers can act on the label
        whatever the report flags say.
        """
        if self.held:
            return f'{Bump.NONE}\n'
        lines: list[str] = []
        if self.config.report_bump:
            lines.append(self.bump())
        if self.config.report_number and self.effective_bump.kind is not BumpKind.NONE:
            lines.append(self.next_version_number())
        return ''.join(f'{line}\n' for line in lines)

    def __repr__(self) -> str:
        """Summarise the outcome."""
        return (
            f'Calculator(current={self.current_version}, route={self.route}, '
            f'bump={self.bump()!r}, next={self.next_version})'
        )


def _start_pre_release_train(
    current: SemanticVersion,
    route: Route,
    classification: Classification,
) -> tuple[SemanticVersion, Bump] | None:
    """Attach ``<label>.1`` when alpha/beta/rc is forced on a released version.

    The core first moves the way the commits ask for (patch when there
    are none), so ``0.3.0`` with a breaking change and ``--force alpha``
    becomes ``0.4.0-alpha.1``.
    """
    if route.kind is not RouteKind.FORCED or route.force is None or not current.is_released:
        return None
    kind = route.force.pre_release_kind
    if kind is None:
        return None

    natural = calculate_bump(route.natural, classification)
    if natural.kind is BumpKind.NONE:
        natural = Bump.PATCH
    released, _ = apply_bump(current, natural)
    next_version = released.with_pre_release(PreRelease(label=kind.value, counter=1))
    logger.debug('pre_release_train_started', base=str(released), version=str(next_version))
    return next_version, Bump.for_pre_release(kind)


def run(config: CalculatorConfig, repo: GitRepository | None = None) -> Calculator:
    """Read the last release and its history from git, then execute.

    Args:
        config: Frozen configuration.
        repo: Repository to read; the current directory by default.

    Raises:
        BumpKitError: For tag, git or workspace errors.
    """
    repo = repo or GitRepository(Path.cwd())
    subdir = config.subdir
    if config.package:
        subdir = resolve_package_dir(repo.root, config.package)
    tag, current_version = repo.latest_tag(config.prefix)
    history = repo.history(tag, subdir=subdir)
    return Calculator.execute(config, current_version, history)
