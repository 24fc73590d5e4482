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

r"""Conventional Commits parser.

**Subject line** (required)::

    [emoji ]type[(scope)][!]: description

The optional leading emoji may be a literal glyph (``✨ feat: ...``) or
a gitmoji shortcode (``:sparkles: feat: ...``).

**Body** (optional): free-form text separated from the subject by one
blank line.

**Footers** (optional): git trailers at the end of the message.  Each
footer is ``token: value`` or ``token #value``.  ``BREAKING CHANGE``
(with space) and ``BREAKING-CHANGE`` mark a breaking change and must be
uppercase.

Reverts are recognised in two forms, both yielding type ``revert``:

- GitHub default: ``Revert "feat: add X"``
- Conventional: ``revert: feat: add X``

Pure implementation: depends only on ``re`` and :mod:`._types`.
"""

from __future__ import annotations

import re

from bumpkit.commit_parsing._types import ParsedCommit

# Subject line: [emoji ]type(scope)!: description
SUBJECT_PATTERN: re.Pattern[str] = re.compile(
    r'^(?:(?P<emoji>:[\w+-]+:|[^\w\s(]+)\s+)?'  # optional emoji or :shortcode:
    r'(?P<type>[a-zA-Z]+)'  # type (e.g. feat, fix, chore)
    r'(?:\((?P<scope>[^)]*)\))?'  # optional scope in parens
    r'(?P<breaking>!)?'  # optional breaking change indicator
    r':\s*'  # colon + space
    r'(?P<description>.+)$',  # description
)

# Git trailer: "token: value" or "token #value"
_FOOTER_PATTERN: re.Pattern[str] = re.compile(
    r'^(?P<token>BREAKING[- ]CHANGE|[A-Za-z][\w-]*)'
    r'(?:'
    r':\s*'  # ": " separator
    r'|'
    r'\s+#'  # " #" separator
    r')'
    r'(?P<value>.*)$',
)

# GitHub's default revert format: Revert "feat: add X"
REVERT_PATTERN: re.Pattern[str] = re.compile(
    r'^[Rr]evert\s+"(?P<inner>.+)"',
)

_BREAKING_TOKENS = ('BREAKING CHANGE', 'BREAKING-CHANGE')


def _parse_body_and_footers(
    lines: list[str],
) -> tuple[str, tuple[tuple[str, str], ...]]:
    """Split the post-subject portion into body and footers.

    Footers are the trailing block of lines that each start with a
    trailer token; a footer value may continue onto following lines.

    Args:
        lines: Lines after the blank line following the subject.

    Returns:
        ``(body, footers)``.
    """
    if not lines:
        return '', ()

    # The footer block starts after the last blank line, and only if its
    # first line is a trailer.
    start = len(lines)
    for i in range(len(lines) - 1, -1, -1):
        if lines[i].strip() == '':
            start = i + 1
            break
    else:
        start = 0
    if start >= len(lines) or not _FOOTER_PATTERN.match(lines[start]):
        return '\n'.join(lines).strip(), ()

    footers: list[tuple[str, str]] = []
    token = ''
    value_lines: list[str] = []
    for line in lines[start:]:
        m = _FOOTER_PATTERN.match(line)
        if m:
            if token:
                footers.append((token, '\n'.join(value_lines).strip()))
            token = m.group('token')
            value_lines = [m.group('value')]
        else:
            value_lines.append(line)
    if token:
        footers.append((token, '\n'.join(value_lines).strip()))

    return '\n'.join(lines[:start]).strip(), tuple(footers)


def _breaking_footer(footers: tuple[tuple[str, str], ...]) -> str | None:
    """Return the value of the first breaking-change footer, if any."""
    for token, value in footers:
        if token in _BREAKING_TOKENS:
            return value
    return None


class ConventionalCommitParser:
    r"""Parser for conventional commit messages.

    Accepts either a single subject line or a full multi-line message.
    Types are case-insensitive and normalised to lowercase.

    Example::

        parser = ConventionalCommitParser()

        cc = parser.parse('✨ feat(auth): add OAuth2')
        assert cc.type == 'feat'
        assert cc.scope == 'auth'
        assert cc.emoji == '✨'

        cc = parser.parse('feat: new API\n\nBREAKING CHANGE: removed v1 endpoints')
        assert cc.breaking is True
        assert cc.breaking_description == 'removed v1 endpoints'

        assert parser.parse('Update README') is None
    """

    def parse(self, message: str) -> ParsedCommit | None:
        """Parse a commit message.

        Args:
            message: Subject line, or full message with body and footers.

        Returns:
            A :class:`ParsedCommit`, or ``None`` if the subject does not
            follow the grammar.
        """
        all_lines = message.strip('\n').split('\n')
        subject = all_lines[0].strip()

        revert_match = REVERT_PATTERN.match(subject)
        if revert_match:
            inner = self.parse(revert_match.group('inner'))
            return ParsedCommit(
                type='revert',
                scope=inner.scope if inner else '',
                description=revert_match.group('inner'),
                raw=message,
            )

        match = SUBJECT_PATTERN.match(subject)
        if not match:
            return None

        body_start = 1
        while body_start < len(all_lines) and all_lines[body_start].strip() == '':
            body_start += 1
        body, footers = _parse_body_and_footers(all_lines[body_start:])

        description = match.group('description')
        breaking = bool(match.group('breaking'))
        footer_value = _breaking_footer(footers)
        if footer_value is not None:
            breaking = True
        breaking_description = footer_value or (description if breaking else '')

        return ParsedCommit(
            type=match.group('type').lower(),
            scope=match.group('scope') or '',
            emoji=match.group('emoji') or '',
            description=description,
            body=body,
            footers=footers,
            breaking=breaking,
            breaking_description=breaking_description,
            raw=message,
        )
