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
"""Tests for the top-level stepwise API."""

import logging

import pytest

import stepwise
from stepwise import Failure, Runner, StepComposer, failure, success
from stepwise.runners import default as runners
from stepwise.runners.default import DefaultRunner
from stepwise.transactional.memory import InMemoryTransactionManager
from stepwise.transactional.sqlalchemy import SqlAlchemyTransactionManager


@pytest.fixture
def fresh_default_runner(monkeypatch) -> DefaultRunner:
    runner = DefaultRunner()
    monkeypatch.setattr(runners, "_default_runner", runner)
    return runner


class TestStepComposerFacade:
    def test_call_each(self):
        assert StepComposer.call_each(lambda: 2, lambda n: n * 21) == 42

    def test_compose(self):
        assert StepComposer.compose(lambda n: failure(n))(3) == Failure(3)

    def test_top_level_compose(self):
        assert stepwise.compose()() is success()

    def test_top_level_call_each(self):
        assert "call_each" in stepwise.__all__
        assert stepwise.call_each(lambda: 1, lambda n: n + 1) == 2
        assert stepwise.call_each(lambda: failure("no"), lambda: "never") == Failure("no")


class TestRunnerFacade:
    def test_call_each(self, fresh_default_runner):
        messages = []
        Runner.call_each(
            lambda: success("created"),
            lambda value: value.upper(),
            success=messages.append,
            failure=messages.append,
        )
        assert messages == ["CREATED"]

    def test_call(self, fresh_default_runner):
        messages = []
        Runner.call(lambda: failure("rejected"), success=messages.append, failure=messages.append)
        assert messages == ["rejected"]


class TestConfigure:
    def test_configure_defaults(self, fresh_default_runner):
        stepwise.configure(stepwise.Config({}))
        assert isinstance(fresh_default_runner.transaction_manager, InMemoryTransactionManager)
        assert fresh_default_runner.properties.trace is False

    def test_configure_from_config(self, fresh_default_runner, tmp_path):
        stepwise.configure(
            stepwise.Config(
                {
                    "stepwise": {
                        "runner": {"trace": True},
                        "transaction": {"url": f"sqlite:///{tmp_path / 'app.db'}"},
                    }
                }
            )
        )
        assert isinstance(fresh_default_runner.transaction_manager, SqlAlchemyTransactionManager)
        assert fresh_default_runner.properties.trace is True
        assert logging.getLogger("stepwise.runners").level == logging.DEBUG
