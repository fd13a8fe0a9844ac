"""
Test fixtures for the startup pipeline test suite.

Provides a factory without built-in steps, a controller wired to it, and a
recorder that collects step and pipeline completion notifications.
"""

from dataclasses import dataclass, field

import pytest

from startup.runtime.pipeline import PipelineController
from startup.runtime.step_base import StepCompletionEvent
from startup.runtime.step_factory import StepFactory


@dataclass
class EventRecorder:
    """Collects notifications published by a PipelineController."""

    step_events: list[StepCompletionEvent] = field(default_factory=list)
    completions: int = 0

    def on_step(self, event: StepCompletionEvent) -> None:
        self.step_events.append(event)

    def on_completed(self) -> None:
        self.completions += 1

    @property
    def step_pairs(self) -> list[tuple[int, str]]:
        return [(e.index, e.name) for e in self.step_events]

    def attach(self, controller: PipelineController) -> "EventRecorder":
        controller.on_step_completed(self.on_step, source="recorder")
        controller.on_initialization_completed(self.on_completed, source="recorder")
        return self


@pytest.fixture
def factory():
    """Empty step factory (no built-in steps)."""
    return StepFactory()


@pytest.fixture
def controller(factory):
    return PipelineController(factory)


@pytest.fixture
def recorder(controller):
    return EventRecorder().attach(controller)
