"""
Startup Host
============

Owns a PipelineController and decides when it first runs.

Subclass and declare the step list:

    class AppStartup(StartupHost):
        steps = (LoadSettingsStep, "app.steps:ConnectDatabaseStep")

    host = AppStartup()
    task = host.activate()   # auto-start on the running loop
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar

from .pipeline import PipelineController, PipelineReport
from .step_factory import StepFactory


if TYPE_CHECKING:
    from .config import StartupConfig

logger = logging.getLogger(__name__)


class StartupHost:
    """
    Activation wrapper around a pipeline.

    With auto_initialize enabled, activate() schedules the pipeline on the
    running event loop. Otherwise the application calls
    initialize_application() itself.
    """

    steps: ClassVar[Sequence[Any]] = ()

    def __init__(
        self,
        controller: PipelineController | None = None,
        *,
        auto_initialize: bool = True,
        factory: StepFactory | None = None,
        steps: Sequence[Any] | None = None,
    ) -> None:
        """
        Initialize the host and register its steps.

        Args:
            controller: Existing controller to drive (must be idle)
            auto_initialize: Start the pipeline from activate()
            factory: Step factory for a newly created controller
            steps: Step descriptors, overriding the class-level list
        """
        self.controller = controller or PipelineController(factory)
        self.auto_initialize = auto_initialize
        self._task: asyncio.Task[PipelineReport] | None = None

        declared = list(steps) if steps is not None else list(self.steps)
        if declared:
            self.controller.register(declared)

    @classmethod
    def from_config(
        cls,
        config: StartupConfig,
        factory: StepFactory | None = None,
    ) -> StartupHost:
        """Build a host from a loaded StartupConfig."""
        return cls(
            auto_initialize=config.auto_initialize,
            factory=factory,
            steps=config.steps,
        )

    @property
    def task(self) -> asyncio.Task[PipelineReport] | None:
        """Task scheduled by the last auto-start, if any."""
        return self._task

    def activate(self) -> asyncio.Task[PipelineReport] | None:
        """
        Host activation hook.

        Must be called from inside a running event loop when auto-start is
        enabled.

        Returns:
            The scheduled pipeline task, or None when auto-start is disabled
        """
        if not self.auto_initialize:
            logger.debug("Auto-initialize disabled, waiting for manual start")
            return None

        self._task = asyncio.get_running_loop().create_task(
            self.initialize_application(),
        )
        return self._task

    async def initialize_application(self) -> PipelineReport:
        """Run the pipeline (no-op once the application is initialized)."""
        return await self.controller.run()

    def reset_process_state(self) -> None:
        """Clear the initialized flag and all listeners on the controller."""
        self.controller.reset()

    def destroy(self) -> None:
        """Host teardown: detach whole-pipeline completion listeners."""
        self.controller.initialization_completed.clear()
