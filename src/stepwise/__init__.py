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
"""stepwise — compose side-effecting steps into transactional pipelines.

Usage::

    from stepwise import Runner, failure, success

    def create_order(payload):
        if not payload.get("items"):
            return failure("order has no items")
        return success(orders.add(payload))

    Runner.call_each(
        lambda: request.json,
        create_order,
        send_confirmation,
        failure=lambda error: print("rejected:", error),
        success=lambda: print("done"),
    )
"""

from __future__ import annotations

from stepwise import composers, runners
from stepwise.core.config import Config
from stepwise.core.properties import RunnerProperties
from stepwise.logging.structlog_adapter import StructlogAdapter
from stepwise.result import Failure, is_failure, is_success, to_failure
from stepwise.step import Step, failure, success
from stepwise.transactional.auto_configuration import transaction_manager_from_config

__version__ = "0.1.0"


class Runner:
    """Runs pipelines with the process-wide :class:`~stepwise.runners.DefaultRunner`."""

    call = staticmethod(runners.call)
    call_each = staticmethod(runners.call_each)


class StepComposer:
    """Composes steps without running them in a transaction."""

    compose = staticmethod(composers.compose)
    call_each = staticmethod(composers.call_each)


def configure(config: Config) -> None:
    """Apply *config* to logging and to the process-wide runner."""
    StructlogAdapter().configure(config)
    runner = runners.default_runner()
    runner.transaction_manager = transaction_manager_from_config(config)
    runner.properties = config.bind(RunnerProperties)


compose = composers.compose
call_each = composers.call_each

__all__ = [
    "Config",
    "Failure",
    "Runner",
    "Step",
    "StepComposer",
    "call_each",
    "compose",
    "configure",
    "failure",
    "is_failure",
    "is_success",
    "success",
    "to_failure",
]
