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
"""Runner and transaction configuration properties.

YAML structure::

    stepwise:
      logging:
        format: console
        level:
          root: INFO
          stepwise.runners: DEBUG
      runner:
        trace: false
      transaction:
        url: sqlite:///app.db
        propagation: REQUIRED
        echo: false
"""

from __future__ import annotations

from dataclasses import dataclass

from stepwise.core.config import config_properties


@config_properties(prefix="stepwise.runner")
@dataclass
class RunnerProperties:
    """Configuration for the default runner."""

    trace: bool = False


@config_properties(prefix="stepwise.transaction")
@dataclass
class TransactionProperties:
    """Configuration for the transaction manager built from config."""

    url: str | None = None
    propagation: str = "REQUIRED"
    echo: bool = False
