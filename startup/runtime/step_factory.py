"""
Step Factory
============

Turns step descriptors into live step instances.

A descriptor is one of:
- a StepBase subclass
- a step id registered on the factory (e.g. "platform_info")
- an import path, "package.module:ClassName" or "package.module.ClassName"

Descriptors coming from configuration are plain strings, so every descriptor
is checked again here even when the controller already validated it.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from collections.abc import Callable, Mapping
from typing import Any, Union

from .errors import ConfigurationError
from .step_base import StepBase


logger = logging.getLogger(__name__)

StepDescriptor = Union[type[StepBase], str]
StepConstructor = Callable[[], StepBase]


def describe(descriptor: Any) -> str:
    """Human-readable name for a descriptor, used in log lines and errors."""
    if inspect.isclass(descriptor):
        return f"{descriptor.__module__}.{descriptor.__qualname__}"
    if isinstance(descriptor, str):
        return descriptor
    return repr(descriptor)


class StepFactory:
    """
    Resolves descriptors and constructs fresh step instances.

    Holds a map of stable step ids to constructors. Strings that are not
    registered ids are treated as import paths.
    """

    def __init__(self, constructors: Mapping[str, StepConstructor] | None = None) -> None:
        self._constructors: dict[str, StepConstructor] = {}
        for step_id, constructor in (constructors or {}).items():
            self.register(step_id, constructor)

    # -------------------------------------------------------------------------
    # Id registry
    # -------------------------------------------------------------------------

    def register(self, step_id: str, constructor: StepConstructor) -> None:
        """
        Map a stable step id to a constructor.

        Args:
            step_id: Identifier used as a descriptor in configuration
            constructor: StepBase subclass or zero-argument callable returning a step

        Raises:
            ConfigurationError: If the id is empty, already taken, or the
                constructor is not callable
        """
        if not step_id:
            raise ConfigurationError("step_id is required", descriptor=step_id)
        if step_id in self._constructors:
            raise ConfigurationError(f"Duplicate step id: {step_id}", descriptor=step_id)
        if not callable(constructor):
            raise ConfigurationError(
                f"Constructor for {step_id} is not callable",
                descriptor=constructor,
            )
        if inspect.isclass(constructor):
            self._check_step_class(constructor, step_id)

        self._constructors[step_id] = constructor
        logger.debug("Registered step constructor: %s", step_id)

    def unregister(self, step_id: str) -> bool:
        """Remove a step id. Returns True if it was registered."""
        return self._constructors.pop(step_id, None) is not None

    def available(self) -> list[str]:
        """List registered step ids in registration order."""
        return list(self._constructors.keys())

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve(self, descriptor: Any) -> StepConstructor:
        """
        Resolve a descriptor to a constructor without instantiating it.

        Raises:
            ConfigurationError: If the descriptor does not denote a step
        """
        if inspect.isclass(descriptor):
            return self._check_step_class(descriptor, descriptor)

        if isinstance(descriptor, str):
            constructor = self._constructors.get(descriptor)
            if constructor is not None:
                return constructor
            if ":" in descriptor or "." in descriptor:
                return self._check_step_class(self._import(descriptor), descriptor)
            raise ConfigurationError(
                f"Unknown step id: {descriptor}",
                descriptor=descriptor,
            )

        raise ConfigurationError(
            f"{describe(descriptor)} is not a step descriptor",
            descriptor=descriptor,
        )

    def is_valid(self, descriptor: Any) -> bool:
        """Check whether a descriptor resolves to a step."""
        try:
            self.resolve(descriptor)
        except ConfigurationError:
            return False
        return True

    def create(self, descriptor: Any) -> StepBase:
        """
        Construct a fresh step instance for a descriptor.

        Errors raised by the step's own constructor propagate unchanged.

        Raises:
            ConfigurationError: If the descriptor does not denote a step, or a
                registered constructor returned something that is not a step
        """
        constructor = self.resolve(descriptor)
        instance = constructor()
        if not isinstance(instance, StepBase):
            raise ConfigurationError(
                f"Constructor for {describe(descriptor)} returned "
                f"{type(instance).__name__}, not a StepBase",
                descriptor=descriptor,
            )
        return instance

    def _import(self, path: str) -> Any:
        """Import "module:attr" or "module.attr"."""
        if ":" in path:
            module_name, _, attr = path.partition(":")
        else:
            module_name, _, attr = path.rpartition(".")

        if not module_name or not attr:
            raise ConfigurationError(f"Malformed import path: {path}", descriptor=path)

        try:
            module = importlib.import_module(module_name)
        except ImportError as e:
            raise ConfigurationError(
                f"Failed to import {module_name}: {e}",
                descriptor=path,
            ) from e

        try:
            return getattr(module, attr)
        except AttributeError as e:
            raise ConfigurationError(
                f"Class {attr} not found in {module_name}",
                descriptor=path,
            ) from e

    @staticmethod
    def _check_step_class(cls: Any, descriptor: Any) -> type[StepBase]:
        if not inspect.isclass(cls) or not issubclass(cls, StepBase):
            raise ConfigurationError(
                f"{describe(cls)} does not derive from StepBase",
                descriptor=descriptor,
            )
        if inspect.isabstract(cls):
            raise ConfigurationError(
                f"{describe(cls)} is abstract and cannot be constructed",
                descriptor=descriptor,
            )
        return cls


def default_factory() -> StepFactory:
    """Create a factory pre-populated with the built-in steps."""
    from startup.steps import BUILTIN_STEPS

    return StepFactory({step.step_id: step for step in BUILTIN_STEPS})
