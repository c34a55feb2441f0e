"""Exceptions for pipeline stage processing."""

from __future__ import annotations


class ServiceError(Exception):
    """Base exception reported through a pipeline's error callback.

    Carries a human-readable message. The exception that caused the failure,
    if any, is chained as ``__cause__`` (``raise ... from exc``) and exposed
    through :attr:`cause`.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def cause(self) -> BaseException | None:
        """The originating exception, if this error wraps one."""
        return self.__cause__
