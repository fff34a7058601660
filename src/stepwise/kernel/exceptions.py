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
"""Exception hierarchy for stepwise.

Domain failures are never exceptions: a step signals failure by returning a
:class:`~stepwise.result.Failure` value. The exceptions below cover the
remaining categories:

- ContractViolationException: programming errors in how the API is called
- InfrastructureException: problems in the transactional collaborator
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class StepwiseException(Exception):
    """Base exception for all stepwise errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CONTRACT_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Contract Violations
# =============================================================================


class ContractViolationException(StepwiseException):
    """The caller broke a precondition of the public API."""


class CallbackArityError(ContractViolationException, TypeError):
    """A runner callback does not accept the number of arguments it is given."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(StepwiseException):
    """Transaction store and other infrastructure failures."""


class TransactionException(InfrastructureException):
    """A transactional scope was used in a way its lifecycle does not allow."""
