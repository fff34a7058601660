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
"""Default runner — executes a pipeline inside a transactional scope.

Rough types::

    fn      :: () -> ReturnValue
    failure :: value -> None
    success :: value -> None  |  () -> None

If ``fn`` returns a :class:`~stepwise.result.Failure`, the scope is rolled
back and ``failure`` is called with the unwrapped payload. Otherwise the
scope commits and ``success`` is called, with the result when it accepts
one argument. Callbacks always run after the scope has closed.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

import structlog

from stepwise.composers.default import compose
from stepwise.core.properties import RunnerProperties
from stepwise.kernel.exceptions import CallbackArityError
from stepwise.result import is_failure
from stepwise.transactional.memory import InMemoryTransactionManager
from stepwise.transactional.port import TransactionManagerPort
from stepwise.transactional.types import ScopeOutcome

logger = structlog.get_logger("stepwise.runners")

_SENTINEL = object()

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def _accepts_one_argument(fn: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return True
    try:
        signature.bind(_SENTINEL)
    except TypeError:
        return False
    return True


def _takes_exactly_one_argument(fn: Callable[..., Any]) -> bool:
    """One required positional parameter, no optional positionals, no ``*args``."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return True

    required = 0
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return False
        if param.kind in _POSITIONAL:
            if param.default is not inspect.Parameter.empty:
                return False
            required += 1
        elif param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is inspect.Parameter.empty:
            return False
    return required == 1


def _callable_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or type(fn).__qualname__


class DefaultRunner:
    """Runs pipelines through a :class:`TransactionManagerPort`."""

    def __init__(
        self,
        transaction_manager: TransactionManagerPort | None = None,
        properties: RunnerProperties | None = None,
    ) -> None:
        self.transaction_manager: TransactionManagerPort = transaction_manager or InMemoryTransactionManager()
        self.properties = properties or RunnerProperties()

    def call(
        self,
        fn: Callable[[], Any],
        *,
        failure: Callable[[Any], Any],
        success: Callable[..., Any],
    ) -> None:
        """Execute *fn* in a transaction and report through one callback."""
        if not _takes_exactly_one_argument(failure):
            raise CallbackArityError(
                "failure callback requires an error value argument.",
                code="FAILURE_CALLBACK_ARITY",
                context={"callback": _callable_name(failure)},
            )

        def block() -> tuple[ScopeOutcome, Any]:
            result = fn()
            if is_failure(result):
                return ScopeOutcome.ROLLBACK, result
            return ScopeOutcome.COMMIT, result

        if self.properties.trace:
            logger.debug("workflow_started", fn=_callable_name(fn))

        result = self.transaction_manager.run(block)

        if is_failure(result):
            logger.info("workflow_rolled_back", error=result.value)
            failure(result.value)
            return

        if self.properties.trace:
            logger.debug("workflow_committed", fn=_callable_name(fn))
        if _accepts_one_argument(success):
            success(result)
        else:
            success()

    def call_each(
        self,
        *steps: Any,
        failure: Callable[[Any], Any],
        success: Callable[..., Any],
    ) -> None:
        """Compose *steps* and :meth:`call` the resulting pipeline."""
        self.call(compose(*steps), failure=failure, success=success)


_default_runner = DefaultRunner()


def default_runner() -> DefaultRunner:
    """Return the process-wide runner used by :func:`call` and :func:`call_each`."""
    return _default_runner


def set_transaction_manager(transaction_manager: TransactionManagerPort) -> None:
    """Replace the transaction manager of the process-wide runner."""
    _default_runner.transaction_manager = transaction_manager


def call(fn: Callable[[], Any], *, failure: Callable[[Any], Any], success: Callable[..., Any]) -> None:
    _default_runner.call(fn, failure=failure, success=success)


def call_each(*steps: Any, failure: Callable[[Any], Any], success: Callable[..., Any]) -> None:
    _default_runner.call_each(*steps, failure=failure, success=success)
