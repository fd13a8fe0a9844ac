"""
Startup Errors
==============

Exception hierarchy for the startup pipeline.
"""

from __future__ import annotations

from typing import Any


class StartupError(Exception):
    """Base class for all startup pipeline errors."""

    pass


class ConfigurationError(StartupError):
    """Raised when a step descriptor does not resolve to a StepBase subclass."""

    def __init__(self, message: str, descriptor: Any = None) -> None:
        super().__init__(message)
        self.descriptor = descriptor


class StepExecutionError(StartupError):
    """
    Failure raised by a step's internal work.

    Never propagated past the step runner; carried on StepOutcome instead.
    """

    def __init__(self, step_id: str, cause: BaseException) -> None:
        super().__init__(f"Step {step_id} failed: {cause}")
        self.step_id = step_id
        self.cause = cause


class PipelineFault(StartupError):
    """Error that escaped the execution loop itself."""

    pass


class PipelineStateError(StartupError):
    """Raised when an operation is not valid in the controller's current phase."""

    pass


class StartupConfigError(StartupError):
    """Raised when loading or validating startup configuration fails"""

    pass
