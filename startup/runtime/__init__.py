"""
Startup Runtime
---------------
Step contract, step factory, step runner, pipeline controller and host:
register steps -> run them in order -> report completion.
"""

from .config import StartupConfig, load_config
from .errors import (
    ConfigurationError,
    PipelineFault,
    PipelineStateError,
    StartupConfigError,
    StartupError,
    StepExecutionError,
)
from .host import StartupHost
from .notifications import Notifier
from .pipeline import PipelineController, PipelinePhase, PipelineReport
from .step_base import StepBase, StepCompletionEvent, StepOutcome, StepStatus
from .step_factory import StepFactory, default_factory


__all__ = [
    "ConfigurationError",
    "Notifier",
    "PipelineController",
    "PipelineFault",
    "PipelinePhase",
    "PipelineReport",
    "PipelineStateError",
    "StartupConfig",
    "StartupConfigError",
    "StartupError",
    "StartupHost",
    "StepBase",
    "StepCompletionEvent",
    "StepExecutionError",
    "StepFactory",
    "StepOutcome",
    "StepStatus",
    "default_factory",
    "load_config",
]
