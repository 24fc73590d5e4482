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

"""Command-line interface.

Prints the report on stdout and everything else on stderr, so the
output can be captured directly::

    BUMP=$(bumpkit)                       # e.g. "minor"
    NEXT=$(bumpkit --no-bump --number)    # e.g. "1.3.0"

Exit codes::

    0   calculated (including "none")
    10  unexpected failure
    12  no usable version tag, or git failed
    16  invalid configuration
"""

from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from bumpkit import __version__
from bumpkit.bump import ForceLevel
from bumpkit.config import CalculatorConfig, CalculatorConfigBuilder, load_config
from bumpkit.errors import EXIT_UNEXPECTED_ERROR, BumpKitError
from bumpkit.git import GitRepository
from bumpkit.logging import bind_run_context, configure_logging, get_logger
from bumpkit.pipeline import run
from bumpkit.severity import Severity

logger = get_logger(__name__)

__all__ = [
    'build_parser',
    'export_bump',
    'main',
]

DEFAULT_ENV_NAME = 'BUMPKIT_BUMP'
GITHUB_ENV = 'GITHUB_ENV'

_FORCE_LEVELS = tuple(level.value for level in ForceLevel)
_SEVERITY_LEVELS = Severity.threshold_names()


# ── Parser ──────────────────────────────────────────────────────────────


def build_parser() -> argparse.ArgumentParser:
    """Build the ``bumpkit`` argument parser."""
    parser = argparse.ArgumentParser(
        prog='bumpkit',
        description='Calculate the next semantic version from conventional commits.',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument(
        '-p',
        '--prefix',
        help='String preceding the version in release tags (default: v).',
    )
    parser.add_argument(
        '-f',
        '--force',
        choices=_FORCE_LEVELS,
        help='Force the bump level.',
    )
    parser.add_argument(
        '-b',
        '--no-bump',
        action='store_true',
        help='Do not report the bump level.',
    )
    parser.add_argument(
        '-n',
        '--number',
        action='store_true',
        help='Report the next version number.',
    )
    parser.add_argument(
        '-r',
        '--require',
        action='extend',
        nargs='+',
        default=[],
        metavar='FILE',
        help='Files that must change before a release (see --enforce).',
    )
    parser.add_argument(
        '-e',
        '--enforce',
        choices=_SEVERITY_LEVELS,
        help='Change level from which --require applies (default: feature).',
    )
    parser.add_argument(
        '-c',
        '--check',
        choices=_SEVERITY_LEVELS,
        help='Report "none" unless the change reaches this level.',
    )
    parser.add_argument(
        '--first-version',
        action='store_true',
        help='Move a 0.x result to 1.0.0.',
    )
    parser.add_argument('--package', help='Workspace package to calculate for.')
    parser.add_argument('--subdir', help='Directory to calculate for.')
    parser.add_argument(
        '--set-env',
        nargs='?',
        const=DEFAULT_ENV_NAME,
        metavar='NAME',
        help=f'Export the bump to this environment variable (default name: {DEFAULT_ENV_NAME}).',
    )
    parser.add_argument(
        '--config',
        type=Path,
        help='bumpkit.toml or pyproject.toml to read (default: search the current directory).',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug output.')
    parser.add_argument('-q', '--quiet', action='store_true', help='Warnings and errors only.')
    parser.add_argument('--json-log', action='store_true', help='Log as JSON lines.')
    return parser


def _config_from_args(args: argparse.Namespace) -> CalculatorConfig:
    """Load the file configuration and apply command-line overrides."""
    base = load_config(args.config) if args.config else load_config(Path.cwd())
    builder = CalculatorConfigBuilder(base)
    if args.prefix is not None:
        builder.set_prefix(args.prefix)
    if args.force:
        builder.set_force_bump(args.force)
    if args.no_bump:
        builder.set_bump_report(False)
    if args.number:
        builder.set_version_report(True)
    if args.require:
        builder.add_required_files(args.require)
        builder.set_required_enforcement(args.enforce or 'feature')
    elif args.enforce:
        builder.set_required_enforcement(args.enforce)
    if args.check:
        builder.set_reporting_threshold(args.check)
    if args.first_version:
        builder.set_first_version()
    if args.package:
        builder.set_package(args.package)
    if args.subdir:
        builder.set_subdir(args.subdir)
    return builder.build()


# ── Side effects ────────────────────────────────────────────────────────


def export_bump(name: str, value: str) -> None:
    """Set *name* in this process and, on GitHub Actions, for later steps.

    When ``$GITHUB_ENV`` points at a file, ``NAME=value`` is appended
    to it so subsequent workflow steps see the variable.
    """
    os.environ[name] = value
    github_env = os.environ.get(GITHUB_ENV)
    if github_env:
        with Path(github_env).open('a', encoding='utf-8') as fh:
            fh.write(f'{name}={value}\n')
    logger.debug('bump_exported', name=name, value=value, github_env=bool(github_env))


# ── Main ────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)
    console = Console(stderr=True)

    try:
        config = _config_from_args(args)
        bind_run_context(prefix=config.prefix, package=config.package, subdir=config.subdir)
        calculator = run(config, GitRepository(Path.cwd()))
        if args.set_env:
            export_bump(args.set_env, calculator.bump())
    except BumpKitError as exc:
        console.print(f'[bold red]error:[/] {escape(str(exc))}')
        if exc.hint:
            console.print(f'[dim]hint:[/] {escape(exc.hint)}')
        return exc.exit_code
    except Exception as exc:  # noqa: BLE001 - mapped to the documented exit code
        logger.exception('unexpected_error', error=str(exc))
        console.print(f'[bold red]error:[/] {escape(str(exc) or type(exc).__name__)}')
        return EXIT_UNEXPECTED_ERROR

    sys.stdout.write(calculator.report())
    return 0


if __name__ == '__main__':
    sys.exit(main())
