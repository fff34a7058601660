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
"""Tests for StructlogAdapter."""

import logging

import pytest

from stepwise.core.config import Config
from stepwise.logging import LIBRARY_LOGGERS, StructlogAdapter


@pytest.fixture(autouse=True)
def _restore_levels():
    names = [*LIBRARY_LOGGERS, "stepwise.other"]
    saved = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def _level(name):
    return logging.getLogger(name).level


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter.root_level == "INFO"
        assert adapter.format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"stepwise": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter.root_level == "DEBUG"
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"stepwise": {"logging": {"format": "JSON"}}}))
        assert adapter.format == "json"


class TestLibraryLoggerLevels:
    def test_library_defaults_are_applied(self):
        StructlogAdapter().configure(Config({}))
        assert _level("stepwise.composers") == logging.WARNING
        assert _level("stepwise.runners") == logging.INFO
        assert _level("stepwise.transactional") == logging.INFO

    def test_defaults_replace_previous_levels(self):
        logging.getLogger("stepwise.transactional").setLevel(logging.DEBUG)
        StructlogAdapter().configure(Config({}))
        assert _level("stepwise.transactional") == logging.INFO

    def test_runner_trace_lowers_runner_logger_to_debug(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"stepwise": {"runner": {"trace": True}}}))
        assert adapter.levels["stepwise.runners"] == "DEBUG"
        assert _level("stepwise.runners") == logging.DEBUG
        assert _level("stepwise.composers") == logging.WARNING

    def test_runner_trace_off_keeps_runner_default(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"stepwise": {"runner": {"trace": False}}}))
        assert _level("stepwise.runners") == logging.INFO

    def test_explicit_level_overrides_default(self):
        config = Config({"stepwise": {"logging": {"level": {"root": "INFO", "stepwise.composers": "debug"}}}})
        StructlogAdapter().configure(config)
        assert _level("stepwise.composers") == logging.DEBUG

    def test_explicit_level_overrides_trace(self):
        config = Config(
            {
                "stepwise": {
                    "logging": {"level": {"stepwise.runners": "ERROR"}},
                    "runner": {"trace": True},
                }
            }
        )
        StructlogAdapter().configure(config)
        assert _level("stepwise.runners") == logging.ERROR

    def test_explicit_level_for_other_logger(self):
        config = Config({"stepwise": {"logging": {"level": {"stepwise.other": "ERROR"}}}})
        adapter = StructlogAdapter()
        adapter.configure(config)
        assert adapter.levels["stepwise.other"] == "ERROR"
        assert _level("stepwise.other") == logging.ERROR


class TestResolveLevels:
    def test_defaults(self):
        assert StructlogAdapter.resolve_levels({}) == LIBRARY_LOGGERS

    def test_trace(self):
        assert StructlogAdapter.resolve_levels({}, trace=True)["stepwise.runners"] == "DEBUG"

    def test_unknown_override_keeps_default(self):
        levels = StructlogAdapter.resolve_levels({"stepwise.composers": "chatty"})
        assert levels["stepwise.composers"] == "WARNING"


class TestStructlogAdapterSetLevel:
    def test_set_level_updates_logger(self):
        StructlogAdapter.set_level("stepwise.composers", "ERROR")
        assert _level("stepwise.composers") == logging.ERROR

    def test_unknown_level_falls_back_to_info(self):
        StructlogAdapter.set_level("stepwise.other", "chatty")
        assert _level("stepwise.other") == logging.INFO
