"""Runners — execute pipelines inside a transactional scope."""

from stepwise.runners.default import (
    DefaultRunner,
    call,
    call_each,
    default_runner,
    set_transaction_manager,
)

__all__ = ["DefaultRunner", "call", "call_each", "default_runner", "set_transaction_manager"]
