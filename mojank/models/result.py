"""Tri-state result wrapper for identity API calls."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from mojank.exceptions import InvalidStateError

T = TypeVar("T")
S = TypeVar("S")


class ResultKind(str, Enum):
    """Which variant a result holds."""
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


@dataclass(frozen=True, eq=True, repr=False)
class MojankResult(Generic[T]):
    """
    Outcome of an identity API call.

    A result is in exactly one of three states:

    - success: the call fully succeeded and holds a value.
    - partial: some of the requested data resolved; holds the partial value
      and a reason describing what failed.
    - failure: nothing usable came back; holds a reason and possibly the
      exception that caused it.

    Failures carry a ``conclusive`` flag. A conclusive failure is definitive
    (unknown username, invalid uuid) and not worth retrying; an inconclusive
    one came from a transient condition such as the service being down.

    Build results with the ``success``, ``partial``, ``failure`` and
    ``success_or_partial`` constructors rather than directly.

    Example:
        result = await mojank.username_to_uuid("Notch")
        if result.is_success:
            print(result.get())
        else:
            print(result.get_reason())
    """

    kind: ResultKind
    value: Any = None
    reason: str | None = None
    conclusive: bool = True
    cause: BaseException | None = None

    @classmethod
    def success(cls, value: T) -> "MojankResult[T]":
        """Create a successful result."""
        return cls(ResultKind.SUCCESS, value=value)

    @classmethod
    def partial(cls, value: T, reason: str, conclusive: bool = True) -> "MojankResult[T]":
        """
        Create a partial result.

        Args:
            value: The data that did resolve
            reason: Why the rest did not
            conclusive: False when the missing part failed transiently

        Returns:
            The partial result
        """
        return cls(ResultKind.PARTIAL, value=value, reason=reason, conclusive=conclusive)

    @classmethod
    def failure(
        cls,
        reason: str,
        conclusive: bool = False,
        cause: BaseException | None = None,
    ) -> "MojankResult[T]":
        """
        Create a failed result.

        Args:
            reason: The reason for the failure
            conclusive: True if retrying cannot change the outcome
            cause: The exception that occurred, if any

        Returns:
            The failed result
        """
        return cls(ResultKind.FAILURE, reason=reason, conclusive=conclusive, cause=cause)

    @classmethod
    def success_or_partial(
        cls,
        value: T,
        reason: str | None,
        conclusive: bool = True,
    ) -> "MojankResult[T]":
        """Create a success when ``reason`` is None, otherwise a partial."""
        if reason is None:
            return cls.success(value)
        return cls.partial(value, reason, conclusive)

    @property
    def is_success(self) -> bool:
        return self.kind is ResultKind.SUCCESS

    @property
    def is_partial(self) -> bool:
        return self.kind is ResultKind.PARTIAL

    @property
    def is_failure(self) -> bool:
        return self.kind is ResultKind.FAILURE

    @property
    def is_success_or_partial(self) -> bool:
        """Whether ``get`` can be called without raising."""
        return not self.is_failure

    @property
    def is_conclusive(self) -> bool:
        """Whether retrying the call is pointless. Always True for success."""
        return self.is_success or self.conclusive

    def get(self) -> T:
        """
        Get the wrapped value.

        Raises:
            InvalidStateError: If this is a failure
        """
        if self.is_failure:
            raise InvalidStateError(f"Tried to get value of failed result: {self.reason}")
        return self.value

    def get_or_none(self) -> T | None:
        return None if self.is_failure else self.value

    def get_reason(self) -> str:
        """
        Get the reason for a partial or failed result.

        Raises:
            InvalidStateError: If this is a success
        """
        if self.is_success:
            raise InvalidStateError("Tried to get reason for success")
        return self.reason

    def get_exception(self) -> BaseException | None:
        return self.cause if self.is_failure else None

    def get_or_else(self, supplier: Callable[[], T]) -> T:
        """Get the value, or ``supplier()`` if this is a failure."""
        if self.is_failure:
            return supplier()
        return self.value

    def map(self, mapper: Callable[[T], S]) -> "MojankResult[S]":
        """
        Map the wrapped value, keeping state, reason and conclusiveness.

        Failures are returned unchanged and ``mapper`` is not called.
        """
        if self.is_failure:
            return self
        return MojankResult(self.kind, mapper(self.value), self.reason, self.conclusive)

    def if_success(self, body: Callable[[T], Any]) -> None:
        if self.is_success:
            body(self.value)

    def if_partial(self, body: Callable[[T, str], Any]) -> None:
        if self.is_partial:
            body(self.value, self.reason)

    def if_failure(self, body: Callable[[str, BaseException | None], Any]) -> None:
        if self.is_failure:
            body(self.reason, self.cause)

    def __repr__(self) -> str:
        if self.is_success:
            return f"MojankResult.success(value={self.value!r})"
        if self.is_partial:
            return f"MojankResult.partial(value={self.value!r}, reason={self.reason!r}, conclusive={self.conclusive})"
        cause = f", cause={self.cause!r}" if self.cause is not None else ""
        return f"MojankResult.failure(reason={self.reason!r}, conclusive={self.conclusive}{cause})"
