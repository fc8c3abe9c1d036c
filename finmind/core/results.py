"""
Explicit outcome type for collaborator calls.

Lets callers decide per call whether a failure skips one item (ingestion)
or aborts the whole request (chat) instead of relying on exceptions.

Dependencies: finmind.core.exceptions
System role: Result type shared by gateway and index adapters
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from finmind.core.exceptions import FinMindError

T = TypeVar("T")


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """
    Outcome of a single collaborator call.

    Exactly one of value and error is meaningful: ok results carry a value,
    failed results carry the error that would otherwise have been raised.
    """

    value: T | None = None
    error: FinMindError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "CallResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: FinMindError) -> "CallResult[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """
        Return the value or raise the carried error.

        Raises:
            FinMindError: The failure recorded for this call
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]
