"""
Event Loop Probe Step
=====================

Measures how long the running event loop takes to resume a yielded task.
A slow resume at startup usually means something is blocking the loop.
"""

from __future__ import annotations

import asyncio
import logging

from startup.runtime.step_base import StepBase


logger = logging.getLogger(__name__)


class EventLoopProbeStep(StepBase):
    """Fail startup when the event loop is unresponsive."""

    step_id = "event_loop_probe"

    # Resume latency above this many seconds fails the step
    max_latency_s = 0.5
    samples = 5

    def __init__(self) -> None:
        super().__init__()
        self.latencies: list[float] = []

    async def run_internal(self) -> None:
        loop = asyncio.get_running_loop()

        for _ in range(self.samples):
            started = loop.time()
            await asyncio.sleep(0)
            self.latencies.append(loop.time() - started)

        worst = max(self.latencies)
        logger.debug(
            "Event loop %s resume latency: worst %.6fs over %d samples",
            type(loop).__name__,
            worst,
            self.samples,
        )
        if worst > self.max_latency_s:
            raise RuntimeError(
                f"Event loop resume latency {worst:.3f}s exceeds {self.max_latency_s}s",
            )
