"""Test helpers package"""

from .steps import (
    JOURNAL,
    AbstractStep,
    ExplodingConstructorStep,
    NotAStep,
    SlowStep,
    StepA,
    StepB,
    StepC,
    reset_journal,
)


__all__ = [
    "JOURNAL",
    "AbstractStep",
    "ExplodingConstructorStep",
    "NotAStep",
    "SlowStep",
    "StepA",
    "StepB",
    "StepC",
    "reset_journal",
]
