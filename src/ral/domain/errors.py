"""Error taxonomy for resource operations.

Expected failures are plain values (``Error``) carried inside a ``Result``.
Caller bugs raise ``ContractViolationError`` and are never part of the
result discipline.
"""

from dataclasses import dataclass


@dataclass(slots=True)
class Error:
    """An expected failure with a human-readable detail."""

    detail: str

    @property
    def is_unimplemented(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.detail


@dataclass(slots=True)
class UnimplementedError(Error):
    """Marks a capability a provider intentionally does not offer."""

    detail: str = "not implemented"

    @property
    def is_unimplemented(self) -> bool:
        return True


class ContractViolationError(Exception):
    """Raised when a caller breaks an API contract (a bug, not an operating condition)."""


@dataclass(slots=True)
class BackendError(Error):
    """A failure reported by the provider itself through its error envelope."""

    kind: str = "failed"
