"""Observability probes for pipeline stages.

Following Domain Oriented Observability, probes capture domain-significant
events without cluttering stage logic with logging concerns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class ServiceTaskProbe(Protocol):
    """Protocol for pipeline stage observability.

    Implementations can log, emit metrics, or send traces.
    """

    def task_invoked(self, task: str, payload_type: str) -> None:
        """Called when a stage receives its input."""
        ...

    def task_completed(self, task: str) -> None:
        """Called when a stage produced its output."""
        ...

    def task_failed(self, task: str, error: str, error_type: str) -> None:
        """Called when a stage reports an error to the callback."""
        ...

    def result_forwarded(self, task: str, next_task: str) -> None:
        """Called when a stage hands its output to the next stage."""
        ...

    def chain_completed(self, task: str) -> None:
        """Called when the last stage delivers its output to the callback."""
        ...

    def chain_assembled(self, tasks: list[str]) -> None:
        """Called when an ordered chain of stages is linked together."""
        ...

    def with_context(self, context: ObservationContext) -> ServiceTaskProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultServiceTaskProbe:
    """Default implementation using structlog.

    Logs all stage events with appropriate log levels.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        """Initialize the probe with a logger."""
        self._logger = logger or structlog.get_logger()
        self._log = self._logger.bind(component="pipeline")

    def with_context(self, context: ObservationContext) -> DefaultServiceTaskProbe:
        """Create a new probe whose events carry the context metadata."""
        return DefaultServiceTaskProbe(logger=self._logger.bind(**context.as_dict()))

    def task_invoked(self, task: str, payload_type: str) -> None:
        """Log stage invocation."""
        self._log.debug("pipeline_task_invoked", task=task, payload_type=payload_type)

    def task_completed(self, task: str) -> None:
        """Log stage completion."""
        self._log.debug("pipeline_task_completed", task=task)

    def task_failed(self, task: str, error: str, error_type: str) -> None:
        """Log a reported stage failure."""
        self._log.error(
            "pipeline_task_failed",
            task=task,
            error=error,
            error_type=error_type,
        )

    def result_forwarded(self, task: str, next_task: str) -> None:
        """Log hand-off to the next stage."""
        self._log.debug("pipeline_result_forwarded", task=task, next_task=next_task)

    def chain_completed(self, task: str) -> None:
        """Log delivery of the final output."""
        self._log.info("pipeline_chain_completed", task=task)

    def chain_assembled(self, tasks: list[str]) -> None:
        """Log the stage order of an assembled chain."""
        self._log.info("pipeline_chain_assembled", tasks=tasks, task_count=len(tasks))
