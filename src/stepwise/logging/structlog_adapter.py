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
"""StructlogAdapter — wires structlog and the levels of the stepwise loggers.

Configuration keys::

    stepwise:
      logging:
        format: console            # or json
        level:
          root: INFO
          stepwise.composers: DEBUG  # explicit per-logger levels win
      runner:
        trace: true                # stepwise.runners drops to DEBUG

The library loggers (:data:`LIBRARY_LOGGERS`) always get a level, so
``stepwise.configure`` leaves them in a known state even when the
application configures nothing.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

import structlog

from stepwise.core.config import Config
from stepwise.core.properties import RunnerProperties

COMPOSER_LOGGER = "stepwise.composers"
RUNNER_LOGGER = "stepwise.runners"
TRANSACTION_LOGGER = "stepwise.transactional"

LIBRARY_LOGGERS: dict[str, str] = {
    COMPOSER_LOGGER: "WARNING",
    RUNNER_LOGGER: "INFO",
    TRANSACTION_LOGGER: "INFO",
}


def _level_name(value: object, default: str) -> str:
    name = str(value).upper()
    return name if isinstance(logging.getLevelName(name), int) else default


class StructlogAdapter:
    """Configures structlog output and the stdlib levels of stepwise loggers."""

    def __init__(self) -> None:
        self.root_level = "INFO"
        self.format = "console"
        self.levels: dict[str, str] = dict(LIBRARY_LOGGERS)

    def configure(self, config: Config) -> None:
        """Read the logging and runner sections of *config* and apply them."""
        level_section = dict(config.get_section("stepwise.logging.level"))
        self.root_level = _level_name(level_section.pop("root", "INFO"), "INFO")
        self.format = str(config.get("stepwise.logging.format", "console")).lower()

        trace = config.bind(RunnerProperties).trace
        self.levels = self.resolve_levels(level_section, trace=trace)

        self._setup_structlog()
        for name, level in self.levels.items():
            self.set_level(name, level)

    @staticmethod
    def resolve_levels(overrides: Mapping[str, object], *, trace: bool = False) -> dict[str, str]:
        """Library defaults, then runner tracing, then explicit *overrides*."""
        levels = dict(LIBRARY_LOGGERS)
        if trace:
            levels[RUNNER_LOGGER] = "DEBUG"
        for name, level in overrides.items():
            levels[name] = _level_name(level, levels.get(name, "INFO"))
        return levels

    @staticmethod
    def set_level(name: str, level: str) -> None:
        """Set the stdlib level of logger *name*; unknown names fall back to INFO."""
        logging.getLogger(name).setLevel(_level_name(level, "INFO"))

    def _setup_structlog(self) -> None:
        renderer: structlog.types.Processor
        if self.format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer()

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.format_exc_info,
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", stream=sys.stdout, level=self.root_level, force=True)
