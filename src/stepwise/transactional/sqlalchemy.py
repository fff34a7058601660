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
"""SQLAlchemy implementation of :class:`TransactionManagerPort`.

Each outermost scope opens a ``Session`` from the configured
``sessionmaker`` and runs the block in ``session.begin()``. A ``ContextVar``
tracks the active session so steps can reach it through
:func:`current_session`, and so a runner invoked from inside a step can
join the open transaction (``Propagation.REQUIRED``, using a SAVEPOINT) or
open an independent one (``Propagation.REQUIRES_NEW``).
"""

from __future__ import annotations

from collections.abc import Callable
from contextvars import ContextVar
from typing import Any, TypeVar

from sqlalchemy.orm import Session, SessionTransaction, sessionmaker

from stepwise.kernel.exceptions import TransactionException
from stepwise.transactional.types import Isolation, Propagation, ScopeOutcome

T = TypeVar("T")

_active_session_var: ContextVar[Session | None] = ContextVar(
    "_active_session_var",
    default=None,
)


def current_session() -> Session:
    """Return the session of the innermost active scope."""
    session = _active_session_var.get()
    if session is None:
        raise TransactionException("No active transactional scope", code="NO_ACTIVE_SCOPE")
    return session


class SqlAlchemyTransactionManager:
    """Runs blocks inside SQLAlchemy transactions."""

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        propagation: Propagation = Propagation.REQUIRED,
        isolation: Isolation = Isolation.DEFAULT,
    ) -> None:
        self._session_factory = session_factory
        self._propagation = propagation
        self._isolation = isolation

    def run(self, block: Callable[[], tuple[ScopeOutcome, T]]) -> T:
        existing = _active_session_var.get()
        if existing is not None and self._propagation is Propagation.REQUIRED:
            return self._resolve(existing.begin_nested(), block)

        with self._session_factory() as session:
            transaction = session.begin()
            if self._isolation is not Isolation.DEFAULT:
                session.connection(execution_options={"isolation_level": self._isolation.value})

            token = _active_session_var.set(session)
            try:
                return self._resolve(transaction, block)
            finally:
                _active_session_var.reset(token)

    @staticmethod
    def _resolve(transaction: SessionTransaction, block: Callable[[], tuple[ScopeOutcome, Any]]) -> Any:
        try:
            outcome, value = block()
        except BaseException:
            transaction.rollback()
            raise

        if outcome is ScopeOutcome.ROLLBACK:
            transaction.rollback()
        else:
            transaction.commit()
        return value
