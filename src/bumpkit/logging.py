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

"""Structured logging for bumpkit.

bumpkit logs through `structlog <https://www.structlog.org/>`_ onto the
standard library root logger, always on **stderr**: stdout is reserved
for the report so ``NEXT=$(bumpkit --number --no-bump)`` captures
nothing else.

Two renderers:

- **Console** (default): key/value lines, colored only on a TTY.
- **JSON** (``--json-log``): one object per line, for CI log parsers.

Level selection::

    ┌────────────────┬─────────┐
    │ flags          │ level   │
    ├────────────────┼─────────┤
    │ (none)         │ INFO    │
    │ -v             │ DEBUG   │
    │ -q, or -q -v   │ WARNING │
    └────────────────┴─────────┘

In a workspace several bumpkit runs often share one CI log, so the CLI
binds the run scope (tag prefix, package, subdirectory) once with
:func:`bind_run_context` and every later event carries it.

Usage::

    from bumpkit.logging import bind_run_context, configure_logging, get_logger

    configure_logging(verbose=True)
    bind_run_context(prefix='v', package='acme-core')
    get_logger(__name__).info('bump_decided', bump='minor')
"""

from __future__ import annotations

import logging
import sys

import structlog


def _level(*, verbose: bool, quiet: bool) -> int:
    if quiet:
        return logging.WARNING
    if verbose:
        return logging.DEBUG
    return logging.INFO


def _renderer(json_log: bool) -> structlog.types.Processor:
    if json_log:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
) -> None:
    """Route bumpkit's structlog events to stderr.

    Library modules only call :func:`get_logger`; this is for the CLI
    (or an embedding tool) to call once at startup.  Calling it again
    replaces the previous setup.

    Args:
        verbose: Emit debug events (git commands, per-commit decisions).
        quiet: Only warnings and errors.  Wins over *verbose*.
        json_log: Render JSON lines instead of console lines.
    """
    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=_level(verbose=verbose, quiet=quiet),
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt='iso', utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    tail: list[structlog.types.Processor] = [structlog.stdlib.ProcessorFormatter.remove_processors_meta]
    if json_log:
        # JSON lines carry tracebacks as a string field.
        tail.append(structlog.processors.format_exc_info)
    tail.append(_renderer(json_log))
    formatter = structlog.stdlib.ProcessorFormatter(processors=tail)
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def bind_run_context(**context: object) -> None:
    """Attach *context* to every event logged from now on.

    ``None`` values are skipped so unset options do not clutter lines.
    """
    structlog.contextvars.bind_contextvars(**{k: v for k, v in context.items() if v is not None})


def clear_run_context() -> None:
    """Drop everything bound by :func:`bind_run_context`."""
    structlog.contextvars.clear_contextvars()


def get_logger(name: str = 'bumpkit') -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named *name* (usually ``__name__``)."""
    return structlog.get_logger(name)


__all__ = [
    'bind_run_context',
    'clear_run_context',
    'configure_logging',
    'get_logger',
]
