"""
Platform Info Step
==================

Logs interpreter and operating system details at startup.
"""

from __future__ import annotations

import asyncio
import logging
import platform
import sys
from typing import Any

from startup.runtime.step_base import StepBase


logger = logging.getLogger(__name__)


def collect_platform_info() -> dict[str, Any]:
    """Gather interpreter and OS details."""
    return {
        "python": platform.python_version(),
        "implementation": platform.python_implementation(),
        "platform": platform.platform(),
        "machine": platform.machine(),
        "executable": sys.executable,
    }


class PlatformInfoStep(StepBase):
    """Record where the application is running."""

    step_id = "platform_info"

    def __init__(self) -> None:
        super().__init__()
        self.info: dict[str, Any] = {}

    async def run_internal(self) -> None:
        # platform.platform() may shell out on some systems
        self.info = await asyncio.to_thread(collect_platform_info)
        logger.info(
            "Running %s %s on %s",
            self.info["implementation"],
            self.info["python"],
            self.info["platform"],
        )
