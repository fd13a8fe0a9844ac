"""
Step runner: executes one step with failure containment.
"""

from __future__ import annotations

import logging

from .errors import StepExecutionError
from .step_base import StepBase, StepCompletionEvent, StepOutcome, StepStatus


logger = logging.getLogger(__name__)


async def execute(instance: StepBase, index: int) -> StepOutcome:
    """
    Run a step and report how it went.

    A failure inside run_internal() is logged and returned as a FAILED
    outcome; it is never raised to the caller. On success the step's
    completion listeners receive a StepCompletionEvent.

    Args:
        instance: Freshly constructed step
        index: Position of the step in the pipeline

    Returns:
        StepOutcome for this execution
    """
    try:
        await instance.run_internal()
    except Exception as e:
        logger.error(
            "[%s::execute] Step initialization failed: %s",
            instance.step_id,
            e,
        )
        return StepOutcome(
            index=index,
            step_id=instance.step_id,
            status=StepStatus.FAILED,
            error=StepExecutionError(instance.step_id, e),
        )

    instance.completed.publish(StepCompletionEvent(index=index, name=instance.step_id))
    return StepOutcome(index=index, step_id=instance.step_id, status=StepStatus.SUCCEEDED)
