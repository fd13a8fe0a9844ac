"""
Pipeline Controller
===================

Owns the ordered step registry and the "application initialized" state, and
drives the sequential execution loop.

Lifecycle: IDLE -> RUNNING -> COMPLETED. A fault in the loop itself (as opposed
to a failing step, which is contained by the step runner) moves the controller
to FAULTED, from which run() may be attempted again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from . import step_runner
from .errors import ConfigurationError, PipelineFault, PipelineStateError
from .notifications import Notifier
from .step_base import StepCompletionEvent, StepOutcome
from .step_factory import StepFactory, default_factory, describe


logger = logging.getLogger(__name__)


class PipelinePhase(Enum):
    """Lifecycle phase of a PipelineController."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAULTED = "faulted"


@dataclass
class PipelineReport:
    """
    Result of a call to PipelineController.run().

    Informational only: step failures are already contained and logged, and
    a fault never escapes run().
    """

    outcomes: list[StepOutcome] = field(default_factory=list)
    completed: bool = False
    skipped: bool = False
    fault: PipelineFault | None = None

    @property
    def succeeded(self) -> list[str]:
        return [o.step_id for o in self.outcomes if o.success]

    @property
    def failed(self) -> list[str]:
        return [o.step_id for o in self.outcomes if not o.success]

    def to_dict(self) -> dict[str, Any]:
        return {
            "completed": self.completed,
            "skipped": self.skipped,
            "fault": str(self.fault) if self.fault else None,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }


class PipelineController:
    """
    Sequential startup pipeline.

    Handles:
    - Ordered registration of step descriptors
    - Running steps one at a time, in registration order
    - The initialized flag and its reset
    - Step and pipeline completion notifications
    """

    def __init__(self, factory: StepFactory | None = None) -> None:
        """
        Initialize the controller.

        Args:
            factory: Step factory used to validate and construct steps
                (defaults to one knowing the built-in steps)
        """
        self._factory = factory or default_factory()
        self._steps: list[Any] = []
        self._phase = PipelinePhase.IDLE
        self._initialized = False

        # Receives StepCompletionEvent for every step that succeeds
        self.step_completed = Notifier("step_completed")

        # Receives no arguments, once per full traversal
        self.initialization_completed = Notifier("initialization_completed")

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def factory(self) -> StepFactory:
        return self._factory

    @property
    def phase(self) -> PipelinePhase:
        return self._phase

    @property
    def steps(self) -> tuple[Any, ...]:
        """Registered descriptors in execution order."""
        return tuple(self._steps)

    @property
    def initialized(self) -> bool:
        return self._initialized

    def is_initialized(self) -> bool:
        """Return whether the last run traversed every registered step."""
        return self._initialized

    def reset(self) -> None:
        """
        Clear the initialized flag and detach all completion listeners.

        The step registry is kept, so a following run() executes every
        registered step again from index 0.

        Raises:
            PipelineStateError: If the pipeline is currently running
        """
        if self._phase is PipelinePhase.RUNNING:
            raise PipelineStateError("Cannot reset while the pipeline is running")

        self._initialized = False
        self._phase = PipelinePhase.IDLE
        self.step_completed.clear()
        self.initialization_completed.clear()
        logger.debug("Pipeline state reset")

    def _set_phase(self, phase: PipelinePhase) -> None:
        old_phase = self._phase
        self._phase = phase
        logger.debug("Pipeline phase: %s -> %s", old_phase.value, phase.value)

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(self, *descriptors: Any) -> list[Any]:
        """
        Append step descriptors to the registry, preserving their order.

        Accepts descriptors as positional arguments or as a single list/tuple.
        Descriptors that do not resolve to a step are logged and dropped; the
        rest are still registered.

        Returns:
            The descriptors that were accepted

        Raises:
            PipelineStateError: If the controller is not IDLE
        """
        if self._phase is not PipelinePhase.IDLE:
            raise PipelineStateError(
                f"Steps can only be registered while idle (phase: {self._phase.value})",
            )

        if len(descriptors) == 1 and isinstance(descriptors[0], (list, tuple)):
            descriptors = tuple(descriptors[0])

        accepted = []
        for descriptor in descriptors:
            try:
                self._factory.resolve(descriptor)
            except ConfigurationError as e:
                logger.error("Rejected step %s: %s", describe(descriptor), e)
                continue
            self._steps.append(descriptor)
            accepted.append(descriptor)

        return accepted

    # -------------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------------

    def on_step_completed(
        self,
        callback: Callable[[StepCompletionEvent], Any],
        source: str = "anonymous",
    ) -> str:
        """Attach a per-step completion listener. Returns a subscription ID."""
        return self.step_completed.subscribe(callback, source=source)

    def on_initialization_completed(
        self,
        callback: Callable[[], Any],
        source: str = "anonymous",
    ) -> str:
        """Attach a whole-pipeline completion listener. Returns a subscription ID."""
        return self.initialization_completed.subscribe(callback, source=source)

    def unsubscribe(self, subscription_id: str) -> bool:
        """Detach a listener from either channel."""
        return self.step_completed.unsubscribe(
            subscription_id,
        ) or self.initialization_completed.unsubscribe(subscription_id)

    def log_step_completion(self, index: int, step_id: str) -> None:
        logger.info("Step %d completed: %s", index, step_id)

    def _forward_step_completion(self, event: StepCompletionEvent) -> None:
        self.log_step_completion(event.index, event.name)
        self.step_completed.publish(event)

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    async def run(self) -> PipelineReport:
        """
        Run every registered step in order, then mark the application initialized.

        Calling run() again after a completed run does nothing until reset()
        is called. Errors from the loop itself are logged as fatal and leave
        the controller FAULTED; they are reported, not raised.

        Returns:
            PipelineReport describing this call
        """
        if self._initialized:
            logger.debug("Pipeline already initialized, skipping run")
            return PipelineReport(completed=True, skipped=True)

        if self._phase is PipelinePhase.RUNNING:
            logger.warning("Pipeline is already running, ignoring run()")
            return PipelineReport(skipped=True)

        report = PipelineReport()
        self._set_phase(PipelinePhase.RUNNING)

        try:
            await self._run_steps(report)
        except Exception as e:
            fault = PipelineFault(f"Initialization failed, with error: {e}")
            fault.__cause__ = e
            report.fault = fault
            self._set_phase(PipelinePhase.FAULTED)
            logger.critical(
                "[PipelineController::run] Initialization failed, with error: %s",
                e,
                exc_info=True,
            )
            return report
        except BaseException:
            # Cancellation propagates, but must not leave the controller RUNNING
            self._set_phase(PipelinePhase.FAULTED)
            logger.warning("[PipelineController::run] Initialization interrupted")
            raise

        self._initialized = True
        self._set_phase(PipelinePhase.COMPLETED)
        report.completed = True
        logger.info(
            "Initialization completed (%d/%d steps succeeded)",
            len(report.succeeded),
            len(report.outcomes),
        )
        self.initialization_completed.publish()
        return report

    async def _run_steps(self, report: PipelineReport) -> None:
        for index, descriptor in enumerate(self.steps):
            instance = self._factory.create(descriptor)
            instance.completed.subscribe(
                self._forward_step_completion,
                source="pipeline_controller",
            )
            try:
                outcome = await step_runner.execute(instance, index)
            finally:
                instance.completed.clear()
            report.outcomes.append(outcome)
