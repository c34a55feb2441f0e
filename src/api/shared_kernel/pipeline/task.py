"""Base class for pipeline stages.

A ServiceTask turns ``process`` (which raises on failure) into ``invoke``
(which reports failures instead of raising them). The outcome of every
invocation is delivered exactly once: to the next stage, to the callback's
``on_completed`` when the stage is last, or to the callback's ``on_error``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from shared_kernel.pipeline.exceptions import ServiceError
from shared_kernel.pipeline.observability import (
    DefaultServiceTaskProbe,
    ServiceTaskProbe,
)

if TYPE_CHECKING:
    from shared_kernel.pipeline.ports import PipelineStage, ServiceCallback


class ServiceTask(ABC):
    """Pipeline stage with a single typed ``process`` step.

    Subclasses implement ``process`` against their concrete input and output
    types and may override ``wrap_error`` to choose how unexpected exceptions
    are reported.
    """

    def __init__(self, probe: ServiceTaskProbe | None = None) -> None:
        """Initialize the stage without successor or callback.

        Args:
            probe: Optional stage probe for observability
        """
        self._next: PipelineStage | None = None
        self._callback: ServiceCallback | None = None
        self._stage_probe = probe or DefaultServiceTaskProbe()

    @property
    def name(self) -> str:
        """Stage name used for observability."""
        return type(self).__name__

    @property
    def next_task(self) -> PipelineStage | None:
        """The stage this one forwards to, if any."""
        return self._next

    def set_next(self, task: PipelineStage) -> PipelineStage:
        """Link the stage that receives this stage's output.

        Returns:
            The linked stage, so links can be chained
        """
        self._next = task
        return task

    def set_callback(self, callback: ServiceCallback) -> None:
        """Set the sink that receives errors and the final output."""
        self._callback = callback

    @abstractmethod
    async def process(self, data: object) -> object:
        """Run the stage on its input.

        Args:
            data: Output of the previous stage, or the pipeline input

        Returns:
            The output to forward

        Raises:
            ServiceError: For failures the stage reports as-is
            Exception: Anything else is converted by ``wrap_error``
        """
        ...

    def wrap_error(self, error: Exception) -> ServiceError:
        """Convert an unexpected exception into a reportable error.

        The returned error must have ``error`` as its cause.
        """
        wrapped = ServiceError(f"Error occurred in {self.name}: {error}")
        wrapped.__cause__ = error
        return wrapped

    async def invoke(self, data: object) -> None:
        """Process the input and forward or report the outcome.

        Failures of ``process`` are reported, never raised. Exceptions raised
        by the callback itself propagate to the caller.

        Raises:
            RuntimeError: If no callback has been set
        """
        if self._callback is None:
            raise RuntimeError(
                f"{self.name} has no callback; set one or run it in a ServiceChain"
            )

        self._stage_probe.task_invoked(self.name, type(data).__name__)
        try:
            result = await self.process(data)
        except ServiceError as e:
            self.report_error(e)
            return
        except Exception as e:
            self.report_error(self.wrap_error(e))
            return

        self._stage_probe.task_completed(self.name)
        await self.invoke_next(result)

    async def invoke_next(self, result: object) -> None:
        """Hand the output to the next stage, or complete the chain."""
        if self._next is not None:
            self._stage_probe.result_forwarded(self.name, self._next.name)
            await self._next.invoke(result)
            return

        self._stage_probe.chain_completed(self.name)
        if self._callback is not None:
            self._callback.on_completed(result)

    def report_error(self, error: ServiceError) -> None:
        """Deliver an error to the callback."""
        self._stage_probe.task_failed(
            self.name,
            error=error.message,
            error_type=type(error).__name__,
        )
        if self._callback is not None:
            self._callback.on_error(error)
