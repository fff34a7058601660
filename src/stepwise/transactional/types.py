# Copyright 2026 Firefly Software Solutions Inc.
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
"""Shared types for the stepwise.transactional package."""

from __future__ import annotations

from enum import StrEnum


class ScopeOutcome(StrEnum):
    """What a block run inside a transactional scope asks the scope to do."""

    COMMIT = "COMMIT"
    ROLLBACK = "ROLLBACK"


class ScopeStatus(StrEnum):
    """Lifecycle status of a transactional scope."""

    ACTIVE = "ACTIVE"
    COMMITTED = "COMMITTED"
    ROLLED_BACK = "ROLLED_BACK"


class Propagation(StrEnum):
    """How a scope opened while another one is active behaves."""

    REQUIRED = "REQUIRED"
    REQUIRES_NEW = "REQUIRES_NEW"


class Isolation(StrEnum):
    """Transaction isolation level."""

    DEFAULT = "DEFAULT"
    READ_UNCOMMITTED = "READ UNCOMMITTED"
    READ_COMMITTED = "READ COMMITTED"
    REPEATABLE_READ = "REPEATABLE READ"
    SERIALIZABLE = "SERIALIZABLE"
