"""
Startup Pipeline
Runs ordered, asynchronous application initialization steps
"""

__version__ = "0.1.0"

from .runtime import (
    PipelineController,
    PipelineReport,
    StartupHost,
    StepBase,
    StepCompletionEvent,
    StepFactory,
)


__all__ = [
    "PipelineController",
    "PipelineReport",
    "StartupHost",
    "StepBase",
    "StepCompletionEvent",
    "StepFactory",
]
