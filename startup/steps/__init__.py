"""
Built-in Steps
==============

Steps shipped with the package and registered on the default factory.

Steps:
- platform_info: Log interpreter and operating system details
- event_loop_probe: Check the event loop is responsive before real work starts
"""

from __future__ import annotations

from .event_loop_probe import EventLoopProbeStep
from .platform_info import PlatformInfoStep


BUILTIN_STEPS = (
    PlatformInfoStep,
    EventLoopProbeStep,
)

__all__ = [
    "BUILTIN_STEPS",
    "PlatformInfoStep",
    "EventLoopProbeStep",
]
