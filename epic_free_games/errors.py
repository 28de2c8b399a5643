"""Error taxonomy and the result type passed between pipeline stages."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, Optional, TypeVar, Union

T = TypeVar("T")


class ScrapeError(Exception):
    """Base class for every failure a scrape can report."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class TransportError(ScrapeError):
    """The feed request failed at the network or HTTP-status level."""


class ParseError(ScrapeError):
    """The response body is not a well-formed catalog document."""


class EmptyDocumentError(ScrapeError):
    """The response body is well-formed but carries no document at all."""


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: ScrapeError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Re-raise the carried error, chained to its cause."""
        raise self.error from self.error.cause


Result = Union[Ok[T], Err]
