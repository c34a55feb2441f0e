"""Pipeline stage contract shared by bounded contexts.

Stages implement ``ServiceTask.process`` against concrete domain types and
are composed into a ``ServiceChain`` with a single ``ServiceCallback``.
"""

from shared_kernel.pipeline.chain import ServiceChain
from shared_kernel.pipeline.exceptions import ServiceError
from shared_kernel.pipeline.observability import (
    DefaultServiceTaskProbe,
    ServiceTaskProbe,
)
from shared_kernel.pipeline.ports import PipelineStage, ServiceCallback
from shared_kernel.pipeline.task import ServiceTask

__all__ = [
    "DefaultServiceTaskProbe",
    "PipelineStage",
    "ServiceCallback",
    "ServiceChain",
    "ServiceError",
    "ServiceTask",
    "ServiceTaskProbe",
]
