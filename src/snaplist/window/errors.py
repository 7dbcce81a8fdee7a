from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from snaplist.window.events import FetchRequest


class FetchError(Exception):
    """An :class:`ItemSource` failed to produce items around a pivot."""

    def __init__(self, message: str, *, request: FetchRequest, cause: BaseException) -> None:
        super().__init__(message)
        self.request = request
        self.cause = cause

    @property
    def direction(self) -> Any:
        return self.request.direction

    @property
    def offset(self) -> Any:
        return self.request.offset

    @classmethod
    def wrap(cls, cause: BaseException, request: FetchRequest) -> FetchError:
        error = cls(
            f"Fetching {request.direction} items around {request.offset!r} failed: {cause}",
            request=request,
            cause=cause,
        )
        error.__cause__ = cause
        return error
