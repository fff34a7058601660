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
"""Outbound port for the transactional collaborator.

The runner only needs one capability from a transaction store: run a block
inside a scope, then commit or roll back according to what the block asks
for. Adapters (in-memory, SQLAlchemy) satisfy the structural contract
defined here.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, TypeVar, runtime_checkable

from stepwise.transactional.types import ScopeOutcome

T = TypeVar("T")


@runtime_checkable
class TransactionManagerPort(Protocol):
    """Port for executing a block inside a transactional scope."""

    def run(self, block: Callable[[], tuple[ScopeOutcome, T]]) -> T:
        """Run *block* in a scope and return the value it produced.

        The block returns ``(outcome, value)``. ``ScopeOutcome.COMMIT``
        commits the scope, ``ScopeOutcome.ROLLBACK`` discards every write
        made in it without raising. An exception raised by the block rolls
        the scope back and propagates unchanged. The scope is closed before
        ``run`` returns or raises.
        """
        ...
