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

"""Pure types for commit message parsing.

This module has **zero** runtime dependencies beyond the standard library
and :mod:`bumpkit.severity`.  Everything here is a frozen dataclass or
protocol: no I/O, no logging, no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from bumpkit.severity import Severity


@dataclass(frozen=True)
class ParsedCommit:
    """A commit message that follows the conventional grammar.

    Attributes:
        type: The commit type, lowercased (e.g. ``"feat"``).
        description: The text after ``type(scope)!:``.
        scope: The optional scope (e.g. ``"auth"``).
        emoji: A leading emoji or ``:shortcode:``, if present.
        body: Free-form text between subject and footers.
        footers: Parsed git trailers as ``(token, value)`` tuples.
        breaking: ``!`` was used or a ``BREAKING CHANGE`` footer exists.
        breaking_description: The footer value, or the description when
            only ``!`` marked the change.
        raw: The original unparsed message.
    """

    type: str
    description: str
    scope: str = ''
    emoji: str = ''
    body: str = ''
    footers: tuple[tuple[str, str], ...] = ()
    breaking: bool = False
    breaking_description: str = ''
    raw: str = ''

    @property
    def severity(self) -> Severity:
        """The :class:`Severity` this commit contributes."""
        return Severity.parse(self.type, breaking=self.breaking)


@runtime_checkable
class CommitParser(Protocol):
    """Protocol for commit message parsers.

    A parser receives a commit summary (or full message) and returns a
    :class:`ParsedCommit`, or ``None`` when the message does not follow
    its format.  Unparsed messages are counted but never raise the
    severity of a release.
    """

    def parse(self, message: str) -> ParsedCommit | None:
        """Parse a commit message.

        Args:
            message: The commit subject line or full message.

        Returns:
            A :class:`ParsedCommit` if the message matches, else ``None``.
        """
        ...
