"""Result containers returned by the client."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageInfo:
    """Opaque cursors recovered from a response's Link header.

    A missing cursor means there is no page in that direction.
    """

    max_id: str | None = None
    min_id: str | None = None
    since_id: str | None = None


@dataclass(frozen=True)
class PagedResult(Generic[T]):
    """Decoded body of a list endpoint plus its pagination cursors."""

    result: T
    info: PageInfo
