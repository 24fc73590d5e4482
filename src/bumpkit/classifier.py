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

"""Fold a sequence of commit summaries into a :class:`Classification`.

Key Concepts::

    ┌─────────────────────────┬────────────────────────────────────────────┐
    │ Concept                 │ Meaning                                    │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ Recognized commit       │ A summary that parses as a conventional    │
    │                         │ commit. Only these count towards a bump.   │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ Top severity            │ The highest Severity seen so far. Never    │
    │                         │ goes down while folding.                   │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ Breaking latch          │ One breaking commit pins the result to     │
    │                         │ BREAKING for the whole classification.     │
    ├─────────────────────────┼────────────────────────────────────────────┤
    │ Changed / known files   │ Basenames touched by classified commits vs │
    │                         │ basenames present anywhere in the tree.    │
    └─────────────────────────┴────────────────────────────────────────────┘

Merge commits (summaries starting with ``Merge``) are skipped entirely.
Malformed messages are tallied in ``unclassified`` and otherwise
ignored; classification never fails.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from bumpkit.commit_parsing import CommitParser, ConventionalCommitParser
from bumpkit.logging import get_logger
from bumpkit.severity import Severity

logger = get_logger(__name__)

__all__ = [
    'Classification',
    'CommitHistory',
    'CommitRecord',
    'classify',
    'is_merge_commit',
]

_MERGE_PREFIX = 'Merge'


@dataclass(frozen=True)
class CommitRecord:
    """A commit summary paired with the paths it touched.

    Attributes:
        summary: The commit summary (first line) or full message.
        files: Paths changed by the commit, relative to the repo root.
        sha: The commit SHA, for diagnostics only.
    """

    summary: str
    files: frozenset[str] = frozenset()
    sha: str = ''


@dataclass(frozen=True)
class CommitHistory:
    """Commits since the last release, as handed over by repository access.

    Attributes:
        commits: Records ordered newest first (HEAD back to the tag,
            tag commit excluded).
        known_files: Paths present in the tree at the oldest commit
            walked.
    """

    commits: tuple[CommitRecord, ...] = ()
    known_files: frozenset[str] = frozenset()


@dataclass(frozen=True)
class Classification:
    """Aggregate view of the commits since the last release.

    Attributes:
        per_type_counts: Number of recognized commits per type.
        breaking: Whether any folded commit was breaking.
        top_severity: Highest :class:`Severity` seen.
        changed_file_names: Basenames touched by folded commits.
        known_file_names: Basenames present in the tree at the oldest
            commit walked.
        commits: Summaries folded, in input order.
        unclassified: Number of summaries that did not parse.
    """

    per_type_counts: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    breaking: bool = False
    top_severity: Severity = Severity.NONE
    changed_file_names: frozenset[str] = frozenset()
    known_file_names: frozenset[str] = frozenset()
    commits: tuple[str, ...] = ()
    unclassified: int = 0

    @property
    def recognized(self) -> int:
        """Number of commits that parsed as conventional commits."""
        return sum(self.per_type_counts.values())

    def count(self, commit_type: str) -> int:
        """Number of recognized commits of *commit_type* (0 if none)."""
        return self.per_type_counts.get(commit_type, 0)


def is_merge_commit(summary: str) -> bool:
    """``True`` for summaries git generates for merges."""
    return summary.startswith(_MERGE_PREFIX)


def classify(
    commits: Iterable[str | CommitRecord],
    known_files: Iterable[str] = (),
    *,
    parser: CommitParser | None = None,
) -> Classification:
    """Classify commit summaries into a :class:`Classification`.

    Args:
        commits: Summaries (or :class:`CommitRecord` values) ordered
            newest first, as walked from HEAD back to the last tag.
        known_files: Paths present in the tree at the oldest commit
            walked. Only their basenames are kept.
        parser: Commit parser; defaults to
            :class:`~bumpkit.commit_parsing.ConventionalCommitParser`.

    Returns:
        The folded :class:`Classification`.
    """
    parser = parser or ConventionalCommitParser()
    counts: dict[str, int] = {}
    breaking = False
    top = Severity.NONE
    changed: set[str] = set()
    folded: list[str] = []
    unclassified = 0

    for item in commits:
        record = item if isinstance(item, CommitRecord) else CommitRecord(summary=item)
        if is_merge_commit(record.summary):
            logger.debug('merge_commit_skipped', summary=record.summary)
            continue

        folded.append(record.summary)
        changed.update(_basenames(record.files))

        parsed = parser.parse(record.summary)
        if parsed is None:
            unclassified += 1
            logger.debug('commit_unclassified', summary=record.summary)
            continue

        counts[parsed.type] = counts.get(parsed.type, 0) + 1
        if breaking:
            continue
        if parsed.breaking:
            breaking = True
            top = Severity.BREAKING
            logger.debug('breaking_change_found', summary=record.summary)
        elif parsed.severity > top:
            top = parsed.severity
            logger.debug('top_severity_raised', severity=str(top), commit_type=parsed.type)

    classification = Classification(
        per_type_counts=MappingProxyType(counts),
        breaking=breaking,
        top_severity=top,
        changed_file_names=frozenset(changed),
        known_file_names=frozenset(_basenames(known_files)),
        commits=tuple(folded),
        unclassified=unclassified,
    )
    logger.debug(
        'commits_classified',
        recognized=classification.recognized,
        unclassified=unclassified,
        breaking=breaking,
        top_severity=str(top),
    )
    return classification


def _basenames(paths: Iterable[str]) -> set[str]:
    return {posixpath.basename(p.rstrip('/')) for p in paths if p}
