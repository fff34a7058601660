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
"""Builds the transaction manager described by configuration.

* ``stepwise.transaction.url`` set: :class:`SqlAlchemyTransactionManager`
  over a new engine for that URL
* otherwise: :class:`InMemoryTransactionManager`
"""

from __future__ import annotations

import structlog
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from stepwise.core.config import Config
from stepwise.core.properties import TransactionProperties
from stepwise.transactional.memory import InMemoryTransactionManager
from stepwise.transactional.port import TransactionManagerPort
from stepwise.transactional.sqlalchemy import SqlAlchemyTransactionManager
from stepwise.transactional.types import Propagation

logger = structlog.get_logger("stepwise.transactional")


def transaction_manager_from_config(config: Config) -> TransactionManagerPort:
    properties = config.bind(TransactionProperties)
    if not properties.url:
        logger.debug("transaction_manager_selected", kind="memory")
        return InMemoryTransactionManager()

    engine = create_engine(properties.url, echo=properties.echo)
    logger.debug("transaction_manager_selected", kind="sqlalchemy", dialect=engine.dialect.name)
    return SqlAlchemyTransactionManager(
        sessionmaker(engine),
        propagation=Propagation(properties.propagation.upper()),
    )
