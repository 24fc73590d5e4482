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

"""Calculate the next semantic version from conventional commits.

Usage::

    from bumpkit import CalculatorConfigBuilder, run

    config = CalculatorConfigBuilder().set_prefix('v').set_version_report(True).build()
    calculator = run(config)
    print(calculator.bump(), calculator.next_version_number())
"""

from bumpkit.applier import apply_bump
from bumpkit.bump import Bump, BumpKind, ForceLevel
from bumpkit.calculator import calculate_bump
from bumpkit.classifier import Classification, CommitHistory, CommitRecord, classify
from bumpkit.config import CalculatorConfig, CalculatorConfigBuilder, load_config
from bumpkit.errors import BumpKitError, ErrorCode
from bumpkit.gate import GateResult, GateStatus, check_required_files, meets_reporting_threshold
from bumpkit.git import GitRepository
from bumpkit.pipeline import Calculator, run
from bumpkit.route import Route, RouteKind, select_route
from bumpkit.severity import Severity
from bumpkit.version import PreRelease, PreReleaseKind, SemanticVersion, parse_version, parse_version_tag

__version__ = '0.1.0'

__all__ = [
    'Bump',
    'BumpKind',
    'BumpKitError',
    'Calculator',
    'CalculatorConfig',
    'CalculatorConfigBuilder',
    'Classification',
    'CommitHistory',
    'CommitRecord',
    'ErrorCode',
    'ForceLevel',
    'GateResult',
    'GateStatus',
    'GitRepository',
    'PreRelease',
    'PreReleaseKind',
    'Route',
    'RouteKind',
    'SemanticVersion',
    'Severity',
    '__version__',
    'apply_bump',
    'calculate_bump',
    'check_required_files',
    'classify',
    'load_config',
    'meets_reporting_threshold',
    'parse_version',
    'parse_version_tag',
    'run',
    'select_route',
]
