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
"""Tests for the in-memory transaction manager."""

import pytest

from stepwise.kernel.exceptions import TransactionException
from stepwise.transactional.memory import InMemoryTransactionManager
from stepwise.transactional.port import TransactionManagerPort
from stepwise.transactional.types import ScopeOutcome, ScopeStatus


@pytest.fixture
def manager() -> InMemoryTransactionManager:
    return InMemoryTransactionManager()


def _writing(manager: InMemoryTransactionManager, key: str, outcome: ScopeOutcome):
    def block():
        manager.put(key, "value")
        return outcome, key

    return block


class TestInMemoryTransactionManager:
    def test_implements_port(self, manager):
        assert isinstance(manager, TransactionManagerPort)

    def test_commit_publishes_writes(self, manager):
        assert manager.run(_writing(manager, "a", ScopeOutcome.COMMIT)) == "a"
        assert manager.store == {"a": "value"}
        assert manager.history[0].status is ScopeStatus.COMMITTED

    def test_rollback_discards_writes_without_raising(self, manager):
        assert manager.run(_writing(manager, "a", ScopeOutcome.ROLLBACK)) == "a"
        assert manager.store == {}
        assert manager.history[0].status is ScopeStatus.ROLLED_BACK

    def test_exception_rolls_back_and_propagates(self, manager):
        def block():
            manager.put("a", 1)
            raise ValueError("bad")

        with pytest.raises(ValueError, match="bad"):
            manager.run(block)
        assert manager.store == {}
        assert manager.history[0].status is ScopeStatus.ROLLED_BACK
        assert not manager.in_scope

    def test_scope_is_closed_after_run(self, manager):
        seen = []
        manager.run(lambda: (seen.append(manager.in_scope), (ScopeOutcome.COMMIT, None))[1])
        assert seen == [True]
        assert not manager.in_scope

    def test_put_outside_scope_raises(self, manager):
        with pytest.raises(TransactionException) as exc_info:
            manager.put("a", 1)
        assert exc_info.value.code == "NO_ACTIVE_SCOPE"

    def test_reads_see_uncommitted_writes_of_open_scope(self, manager):
        def block():
            manager.put("a", 1)
            return ScopeOutcome.ROLLBACK, manager.get("a")

        assert manager.run(block) == 1
        assert manager.get("a") is None
        assert manager.get("a", "missing") == "missing"


class TestNestedScopes:
    def test_inner_commit_is_discarded_by_outer_rollback(self, manager):
        def outer():
            manager.run(_writing(manager, "inner", ScopeOutcome.COMMIT))
            assert manager.get("inner") == "value"
            return ScopeOutcome.ROLLBACK, None

        manager.run(outer)
        assert manager.store == {}

    def test_inner_rollback_keeps_outer_writes(self, manager):
        def outer():
            manager.put("outer", 1)
            manager.run(_writing(manager, "inner", ScopeOutcome.ROLLBACK))
            return ScopeOutcome.COMMIT, None

        manager.run(outer)
        assert manager.store == {"outer": 1}

    def test_history_records_depth(self, manager):
        def outer():
            manager.run(lambda: (ScopeOutcome.COMMIT, None))
            return ScopeOutcome.COMMIT, None

        manager.run(outer)
        assert [(r.scope_id, r.depth) for r in manager.history] == [(1, 0), (2, 1)]
