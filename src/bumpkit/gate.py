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

"""Gates that turn a classification into "no qualifying change".

Two independent checks run before a bump is selected:

- **Required files** (:func:`check_required_files`): once the change is
  at least as severe as the enforcement threshold, every required file
  that exists in the tree must have been touched.  A required file that
  does not exist anywhere only produces a warning.
- **Reporting threshold** (:func:`meets_reporting_threshold`): changes
  below the threshold are not worth a release.

Neither gate raises; a failing gate makes the caller report ``none``.
Both read only ``top_severity`` and the file sets, never the bump.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from bumpkit.classifier import Classification
from bumpkit.config import CalculatorConfig
from bumpkit.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    'GateResult',
    'GateStatus',
    'check_required_files',
    'meets_reporting_threshold',
]


class GateStatus(enum.Enum):
    """Outcome of the required-files gate."""

    PROCEED = 'proceed'
    BLOCKED = 'blocked'


@dataclass(frozen=True)
class GateResult:
    """Result of :func:`check_required_files`.

    Attributes:
        status: Whether the calculation may proceed.
        missing_files: Required files that exist but were not changed,
            sorted. Empty unless ``status`` is ``BLOCKED``.
    """

    status: GateStatus
    missing_files: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        """``True`` when the calculation may proceed."""
        return self.status is GateStatus.PROCEED


_PROCEED = GateResult(GateStatus.PROCEED)


def check_required_files(classification: Classification, config: CalculatorConfig) -> GateResult:
    """Check that required files were updated for a qualifying change.

    Args:
        classification: The folded commits.
        config: Supplies ``required_files`` and ``enforcement_threshold``.

    Returns:
        ``PROCEED``, or ``BLOCKED`` with the missing files.
    """
    if not config.required_files:
        return _PROCEED
    if classification.top_severity < config.enforcement_threshold:
        logger.debug(
            'enforcement_not_applicable',
            top_severity=str(classification.top_severity),
            threshold=str(config.enforcement_threshold),
        )
        return _PROCEED

    missing: list[str] = []
    for name in sorted(config.required_files):
        if name in classification.changed_file_names:
            continue
        if name in classification.known_file_names:
            missing.append(name)
        else:
            logger.warning(
                'required_file_not_found',
                file=name,
                hint='The file does not exist in the repository, so it cannot be required.',
            )

    if missing:
        logger.info('required_files_missing', files=missing)
        return GateResult(GateStatus.BLOCKED, tuple(missing))
    return _PROCEED


def meets_reporting_threshold(classification: Classification, config: CalculatorConfig) -> bool:
    """``True`` when the change is at least ``reporting_threshold``."""
    return classification.top_severity >= config.reporting_threshold
