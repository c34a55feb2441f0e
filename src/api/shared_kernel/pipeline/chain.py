"""Ordered composition of pipeline stages."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from shared_kernel.pipeline.observability import (
    DefaultServiceTaskProbe,
    ServiceTaskProbe,
)

if TYPE_CHECKING:
    from shared_kernel.pipeline.ports import ServiceCallback
    from shared_kernel.pipeline.task import ServiceTask


class ServiceChain:
    """Links an ordered list of stages and runs them.

    Every stage shares the same callback, so a run produces exactly one
    outcome: the final stage's output or the first reported error.
    """

    def __init__(
        self,
        tasks: Sequence[ServiceTask],
        callback: ServiceCallback,
        probe: ServiceTaskProbe | None = None,
    ) -> None:
        """Link the stages in order.

        Args:
            tasks: Stages in execution order
            callback: Sink shared by all stages
            probe: Optional probe for observability

        Raises:
            ValueError: If no stages are given
        """
        if not tasks:
            raise ValueError("A service chain needs at least one task")

        self._tasks = list(tasks)
        self._callback = callback
        self._probe = probe or DefaultServiceTaskProbe()

        for task in self._tasks:
            task.set_callback(callback)
        for current, following in zip(self._tasks, self._tasks[1:]):
            current.set_next(following)

        self._probe.chain_assembled([task.name for task in self._tasks])

    @property
    def tasks(self) -> list[ServiceTask]:
        """The stages in execution order."""
        return list(self._tasks)

    async def run(self, data: object) -> None:
        """Start the chain with the given input. Never raises."""
        await self._tasks[0].invoke(data)
