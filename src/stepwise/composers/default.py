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
"""Default step composer — folds a list of steps into one callable.

This is not general purpose function composition. A step is any callable;
the composed pipeline calls each step in order and stops at the first one
that returns a :class:`~stepwise.result.Failure`, returning that failure
unchanged.

How a step receives data depends on its signature:

* no positional parameters: the step is called with no arguments and the
  previous step's return value is discarded (a pure side effect such as
  "send an email")
* one or more positional parameters (or ``*args``): the previous step's
  return value is passed as the first argument. A step needing more
  positional arguments than that is curried and returned as a
  :class:`Curried` callable waiting for the rest.

The arguments given to the composed pipeline go to its first step only.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import structlog

from stepwise.kernel.exceptions import ContractViolationException
from stepwise.result import is_failure
from stepwise.step import success

logger = structlog.get_logger("stepwise.composers")

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


class StepKind(StrEnum):
    """How a step takes part in value threading."""

    NULLARY = "NULLARY"
    CONSUMER = "CONSUMER"


@dataclass(frozen=True)
class StepShape:
    """Arity of a step, read once from its signature at composition time."""

    kind: StepKind
    required: int = 0

    @classmethod
    def of(cls, fn: Callable[..., Any]) -> StepShape:
        try:
            signature = inspect.signature(fn)
        except (TypeError, ValueError):
            # Builtins without introspectable signatures take the value.
            return cls(StepKind.CONSUMER, 1)

        params = signature.parameters.values()
        positional = [p for p in params if p.kind in _POSITIONAL]
        variadic = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params)
        if not positional and not variadic:
            return cls(StepKind.NULLARY)

        required = sum(1 for p in positional if p.default is inspect.Parameter.empty)
        return cls(StepKind.CONSUMER, max(required, 1))

    def apply(self, fn: Callable[..., Any], value: Any) -> Any:
        """Invoke *fn* with the threaded *value* according to this shape."""
        if self.kind is StepKind.NULLARY:
            return fn()
        return Curried(fn, (), self.required)(value)


class Curried:
    """Partial application of a step that collects positional arguments.

    Each call appends its arguments; once ``arity`` arguments have been
    collected the step runs and its result is returned. Until then each
    call returns a new :class:`Curried` holding the longer argument list.
    """

    __slots__ = ("_fn", "_args", "_arity")

    def __init__(self, fn: Callable[..., Any], args: tuple[Any, ...], arity: int) -> None:
        self._fn = fn
        self._args = args
        self._arity = arity

    @property
    def remaining(self) -> int:
        return max(self._arity - len(self._args), 0)

    def __call__(self, *args: Any) -> Any:
        collected = self._args + args
        if len(collected) >= self._arity:
            return self._fn(*collected)
        return Curried(self._fn, collected, self._arity)

    def __repr__(self) -> str:
        return f"Curried({_step_name(self._fn)}, args={self._args!r}, remaining={self.remaining})"


def _step_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or type(fn).__qualname__


def _flatten(steps: Iterable[Any]) -> list[Callable[..., Any]]:
    """Flatten nested lists/tuples of steps, dropping ``None`` placeholders."""
    flat: list[Callable[..., Any]] = []
    for entry in steps:
        if entry is None:
            continue
        if isinstance(entry, (list, tuple)):
            flat.extend(_flatten(entry))
            continue
        if not callable(entry):
            raise ContractViolationException(
                f"Pipeline step {entry!r} is not callable",
                code="STEP_NOT_CALLABLE",
                context={"position": len(flat)},
            )
        flat.append(entry)
    return flat


def _succeed() -> Any:
    return success()


def _chain(composed: Callable[..., Any], fn: Callable[..., Any], position: int, total: int) -> Callable[..., Any]:
    """Append the step at *position* to *composed*.

    The short-circuit is logged once, by the link that sees the failure
    first: the link after the failing step, or the first link when the
    head step fails.
    """
    shape = StepShape.of(fn)

    def chained(*args: Any) -> Any:
        last_return = composed(*args)
        if is_failure(last_return):
            if position == 1:
                _log_short_circuit(composed, 0, total)
            return last_return

        result = shape.apply(fn, last_return)
        if is_failure(result) and position < total - 1:
            _log_short_circuit(fn, position, total)
        return result

    return chained


def _log_short_circuit(fn: Callable[..., Any], position: int, total: int) -> None:
    logger.debug(
        "pipeline_short_circuited",
        step=_step_name(fn),
        position=position,
        skipped=total - position - 1,
    )


def compose(*steps: Any) -> Callable[..., Any]:
    """Compose *steps* into a single callable.

    *steps* may contain nested lists or tuples of steps and ``None``
    placeholders. Nesting is flattened to any depth (``[a, [b, [c]]]``
    runs ``a``, ``b``, ``c``), and ``None`` entries and empty groups are
    dropped, so related steps can be grouped and optional steps written
    inline::

        compose(
            validate,
            [create_record, attach_owner],
            notify if send_email else None,
        )

    When nothing is left after flattening, the result is a zero-argument
    callable returning ``success()``.
    """
    flat = _flatten(steps)
    if not flat:
        return _succeed

    logger.debug("pipeline_composed", steps=len(flat))
    composed = flat[0]
    for position, fn in enumerate(flat[1:], start=1):
        composed = _chain(composed, fn, position, len(flat))
    return composed


def call_each(*steps: Any) -> Any:
    """Compose *steps* and call the result with no arguments."""
    return compose(*steps)()
