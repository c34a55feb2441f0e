"""Shared Kernel module.

Components every bounded context may depend on: the pipeline stage contract
(``shared_kernel.pipeline``) and the observation context passed to probes.
Nothing here may import a bounded context.
"""
