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
"""In-memory implementation of :class:`TransactionManagerPort`.

Writes are staged in a plain Python ``dict`` per open scope and merged into
the enclosing scope (or the committed store, for the outermost scope) on
commit. This makes it the zero-dependency default when no database is
configured. **All state is lost on process restart**, and an instance must
not be shared between threads.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from stepwise.kernel.exceptions import TransactionException
from stepwise.transactional.types import ScopeOutcome, ScopeStatus

T = TypeVar("T")

_MISSING = object()


@dataclass
class ScopeRecord:
    """History entry for one scope opened by the manager."""

    scope_id: int
    depth: int
    status: ScopeStatus = ScopeStatus.ACTIVE
    writes: dict[str, Any] = field(default_factory=dict)


class InMemoryTransactionManager:
    """In-memory :class:`TransactionManagerPort` with nested scopes.

    A scope opened while another is active behaves like a savepoint: its
    writes become visible to the parent on commit and are discarded on
    rollback, and they only reach :attr:`store` once the outermost scope
    commits.
    """

    def __init__(self) -> None:
        self._store: dict[str, Any] = {}
        self._history: list[ScopeRecord] = []
        self._stack: list[ScopeRecord] = []
        self._ids = itertools.count(1)

    # -- scope execution ----------------------------------------------------

    def run(self, block: Callable[[], tuple[ScopeOutcome, T]]) -> T:
        record = ScopeRecord(scope_id=next(self._ids), depth=len(self._stack))
        self._history.append(record)
        self._stack.append(record)
        try:
            outcome, value = block()
        except BaseException:
            self._stack.pop()
            record.status = ScopeStatus.ROLLED_BACK
            raise

        self._stack.pop()
        if outcome is ScopeOutcome.ROLLBACK:
            record.status = ScopeStatus.ROLLED_BACK
        else:
            target = self._stack[-1].writes if self._stack else self._store
            target.update(record.writes)
            record.status = ScopeStatus.COMMITTED
        return value

    # -- data access --------------------------------------------------------

    def put(self, key: str, value: Any) -> None:
        """Stage a write in the innermost active scope."""
        if not self._stack:
            raise TransactionException(
                "Cannot write outside of a transactional scope",
                code="NO_ACTIVE_SCOPE",
                context={"key": key},
            )
        self._stack[-1].writes[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Read *key* as seen from the innermost active scope."""
        for record in reversed(self._stack):
            value = record.writes.get(key, _MISSING)
            if value is not _MISSING:
                return value
        return self._store.get(key, default)

    # -- introspection ------------------------------------------------------

    @property
    def store(self) -> dict[str, Any]:
        """Committed data, as a copy."""
        return dict(self._store)

    @property
    def history(self) -> list[ScopeRecord]:
        """Every scope opened so far, in the order they were opened."""
        return list(self._history)

    @property
    def in_scope(self) -> bool:
        return bool(self._stack)
