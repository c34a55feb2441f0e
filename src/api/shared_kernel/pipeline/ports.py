"""Protocols (ports) for pipeline stages.

A pipeline is an ordered chain of stages. Each stage consumes the output of
the previous one and either forwards its own output or reports a failure
through a callback shared by every stage of the chain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from shared_kernel.pipeline.exceptions import ServiceError


@runtime_checkable
class ServiceCallback(Protocol):
    """Sink for the outcome of a pipeline run.

    Implementations are supplied by whoever starts the pipeline (an API
    handler, a message consumer) and translate the outcome for their caller.
    """

    def on_error(self, error: ServiceError) -> None:
        """Receive the single error produced by a failed run.

        Args:
            error: The reported error; ``error.cause`` holds the originating
                exception when there is one
        """
        ...

    def on_completed(self, result: object) -> None:
        """Receive the output of the last stage of a successful run.

        Args:
            result: Output of the final stage
        """
        ...


@runtime_checkable
class PipelineStage(Protocol):
    """A single link in a pipeline.

    ``invoke`` must never raise: failures go to the callback.
    """

    @property
    def name(self) -> str:
        """Stage name used for observability."""
        ...

    async def invoke(self, data: object) -> None:
        """Process the input and forward or report the outcome.

        Args:
            data: Output of the previous stage, or the pipeline input
        """
        ...
