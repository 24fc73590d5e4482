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

r"""Commit message parsing.

The :class:`CommitParser` protocol lets the classifier accept any commit
convention; :class:`ConventionalCommitParser` is the built-in one.

Usage::

    from bumpkit.commit_parsing import parse_conventional_commit
    from bumpkit.severity import Severity

    cc = parse_conventional_commit('feat(auth): add OAuth2')
    assert cc.type == 'feat'
    assert cc.severity == Severity.FEATURE

    cc = parse_conventional_commit('fix!: drop py3.8')
    assert cc.severity == Severity.BREAKING
"""

from bumpkit.commit_parsing._conventional import ConventionalCommitParser
from bumpkit.commit_parsing._types import CommitParser, ParsedCommit

# Module-level singleton for convenience.
_DEFAULT_PARSER = ConventionalCommitParser()


def parse_conventional_commit(message: str) -> ParsedCommit | None:
    """Parse a single commit message as a conventional commit.

    Convenience wrapper around :meth:`ConventionalCommitParser.parse`.

    Returns:
        A :class:`ParsedCommit`, or ``None`` if the message does not
        follow the convention.
    """
    return _DEFAULT_PARSER.parse(message)


__all__ = [
    'CommitParser',
    'ConventionalCommitParser',
    'ParsedCommit',
    'parse_conventional_commit',
]
