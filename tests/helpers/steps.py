"""
Fake steps for pipeline tests.

Every step writes to JOURNAL so tests can check ordering and whether steps
overlapped. INSTANCES counts constructions per step id.
"""

import asyncio
from collections import Counter

from startup.runtime.step_base import StepBase


JOURNAL: list[str] = []
INSTANCES: Counter = Counter()


def reset_journal() -> None:
    JOURNAL.clear()
    INSTANCES.clear()


class RecordingStep(StepBase):
    """Base for helper steps: records start/end around a suspension point."""

    delay_s = 0.0

    def __init__(self) -> None:
        super().__init__()
        INSTANCES[self.step_id] += 1

    async def run_internal(self) -> None:
        JOURNAL.append(f"{self.step_id}:start")
        await asyncio.sleep(self.delay_s)
        await self.work()
        JOURNAL.append(f"{self.step_id}:end")

    async def work(self) -> None:
        pass


class StepA(RecordingStep):
    pass


class StepB(RecordingStep):
    """Always fails."""

    async def work(self) -> None:
        raise RuntimeError("StepB exploded")


class StepC(RecordingStep):
    pass


class SlowStep(RecordingStep):
    step_id = "slow"
    delay_s = 0.02


class ExplodingConstructorStep(StepBase):
    def __init__(self) -> None:
        raise ValueError("cannot build this step")

    async def run_internal(self) -> None:  # pragma: no cover
        pass


class AbstractStep(StepBase):
    """Does not implement run_internal, so it cannot be constructed."""

    pass


class NotAStep:
    async def run_internal(self) -> None:  # pragma: no cover
        pass
