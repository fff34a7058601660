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
"""Helpers for marking what a step returns."""

from __future__ import annotations

from typing import Any

from stepwise.result import Failure, to_failure


def success(value: Any = True) -> Any:
    """Return *value* unchanged; reads as "this step succeeded"."""
    return value


def failure(value: Any = False) -> Failure:
    """Return *value* tagged as a :class:`Failure`."""
    return to_failure(value)


class Step:
    """Base class for steps written as callable objects.

    Subclasses implement ``__call__``; its signature decides how the
    step takes part in composition, exactly like a plain function::

        class CreateOrder(Step):
            def __init__(self, repository):
                self._repository = repository

            def __call__(self, payload):
                if not payload:
                    return self.failure("empty payload")
                return self.success(self._repository.add(payload))
    """

    def success(self, value: Any = True) -> Any:
        return success(value)

    def failure(self, value: Any = False) -> Failure:
        return failure(value)
