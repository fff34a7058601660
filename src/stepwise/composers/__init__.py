"""Step composers — turn a list of steps into one pipeline callable."""

from stepwise.composers.default import Curried, StepKind, StepShape, call_each, compose

__all__ = ["Curried", "StepKind", "StepShape", "call_each", "compose"]
