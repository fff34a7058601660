"""stepwise transactional — the scope the runner executes pipelines in."""

from stepwise.transactional.auto_configuration import transaction_manager_from_config
from stepwise.transactional.memory import InMemoryTransactionManager, ScopeRecord
from stepwise.transactional.port import TransactionManagerPort
from stepwise.transactional.sqlalchemy import SqlAlchemyTransactionManager, current_session
from stepwise.transactional.types import Isolation, Propagation, ScopeOutcome, ScopeStatus

__all__ = [
    "InMemoryTransactionManager",
    "Isolation",
    "Propagation",
    "ScopeOutcome",
    "ScopeRecord",
    "ScopeStatus",
    "SqlAlchemyTransactionManager",
    "TransactionManagerPort",
    "current_session",
    "transaction_manager_from_config",
]
