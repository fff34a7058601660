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
"""Step return values — ``Failure`` and the success-by-default convention.

A step's return value is interpreted as::

    ReturnValue = Failure(value) | value

- a value represents a failure iff it is a :class:`Failure`
- every other value, including ``None`` and ``False``, represents success
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Failure:
    """Immutable tag marking *value* as the payload of a failed step."""

    value: Any = False


def is_failure(value: Any) -> bool:
    """Return ``True`` if *value* is a :class:`Failure`."""
    return isinstance(value, Failure)


def is_success(value: Any) -> bool:
    """Return ``False`` if *value* is a :class:`Failure`."""
    return not is_failure(value)


def to_failure(value: Any) -> Failure:
    """Wrap *value* in a :class:`Failure` unless it already is one."""
    if isinstance(value, Failure):
        return value
    return Failure(value)
