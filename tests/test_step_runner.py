"""
Tests for the step runner: containment and per-step completion events.
"""

from __future__ import annotations

import asyncio
import logging

import pytest

from startup.runtime import step_runner
from startup.runtime.errors import StepExecutionError
from startup.runtime.step_base import StepBase, StepCompletionEvent, StepStatus
from tests.helpers.steps import StepA, StepB


class TestExecute:
    """Tests for step_runner.execute()."""

    @pytest.mark.asyncio
    async def test_success_emits_event(self, step_journal):
        step = StepA()
        events = []
        step.completed.subscribe(events.append)

        outcome = await step_runner.execute(step, 3)

        assert outcome.status == StepStatus.SUCCEEDED
        assert outcome.success
        assert outcome.index == 3
        assert outcome.step_id == "StepA"
        assert outcome.error is None
        assert events == [StepCompletionEvent(index=3, name="StepA")]
        assert step_journal == ["StepA:start", "StepA:end"]

    @pytest.mark.asyncio
    async def test_failure_is_contained(self, caplog):
        step = StepB()
        events = []
        step.completed.subscribe(events.append)

        with caplog.at_level(logging.ERROR):
            outcome = await step_runner.execute(step, 1)

        assert outcome.status == StepStatus.FAILED
        assert not outcome.success
        assert isinstance(outcome.error, StepExecutionError)
        assert outcome.error.step_id == "StepB"
        assert isinstance(outcome.error.cause, RuntimeError)
        assert events == []
        assert "[StepB::execute] Step initialization failed: StepB exploded" in caplog.text

    @pytest.mark.asyncio
    async def test_listener_error_does_not_fail_step(self, caplog):
        step = StepA()
        received = []

        def broken(event):
            raise RuntimeError("listener broke")

        step.completed.subscribe(broken, source="broken")
        step.completed.subscribe(received.append)

        outcome = await step_runner.execute(step, 0)

        assert outcome.success
        assert len(received) == 1
        assert "Listener broken on step:StepA raised" in caplog.text

    @pytest.mark.asyncio
    async def test_cancellation_is_not_contained(self):
        class CancelledStep(StepBase):
            async def run_internal(self) -> None:
                raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await step_runner.execute(CancelledStep(), 0)

    @pytest.mark.asyncio
    async def test_outcome_to_dict(self):
        outcome = await step_runner.execute(StepB(), 2)
        assert outcome.to_dict() == {
            "index": 2,
            "step_id": "StepB",
            "status": "failed",
            "error": "StepB exploded",
        }
