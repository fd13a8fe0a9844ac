"""
Step Base Class
===============

Abstract base class that every startup step must inherit from, plus the value
types the pipeline reports about individual steps.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from .notifications import Notifier


if TYPE_CHECKING:
    from .errors import StepExecutionError


class StepStatus(Enum):
    """Result status for a single step execution."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class StepCompletionEvent:
    """Published once for every step whose internal work finished without error."""

    index: int
    name: str


@dataclass
class StepOutcome:
    """
    Outcome of one step execution.

    Returned by the step runner. Purely informational: a failed outcome does
    not stop the pipeline.
    """

    index: int
    step_id: str
    status: StepStatus
    error: StepExecutionError | None = None

    @property
    def success(self) -> bool:
        return self.status == StepStatus.SUCCEEDED

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "step_id": self.step_id,
            "status": self.status.value,
            "error": str(self.error.cause) if self.error else None,
        }


class StepBase(ABC):
    """
    Abstract base class for all startup steps.

    Steps must implement:
    - run_internal() - the asynchronous initialization work

    Steps may set:
    - step_id - stable identifier used in events and log lines
      (defaults to the class name)

    The pipeline constructs a fresh instance for every run, so steps must be
    constructible without arguments and should not rely on state surviving
    between runs.
    """

    step_id: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if not cls.__dict__.get("step_id"):
            cls.step_id = cls.__name__

    def __init__(self) -> None:
        self.completed = Notifier(f"step:{self.step_id}")

    @abstractmethod
    async def run_internal(self) -> None:
        """
        Perform the step's initialization work.

        Raise any exception to signal failure. The pipeline logs it and moves
        on to the next step.
        """
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.step_id!r})>"
