from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .enums import OperationStatus

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a service call handed to the presentation layer.

    Replaces shared loading/error UI state: callers render ``data`` on success
    and show ``message`` as a single banner on error.
    """

    status: OperationStatus
    data: Optional[T] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, data: T) -> "OperationResult[T]":
        return cls(status=OperationStatus.SUCCESS, data=data)

    @classmethod
    def failed(cls, message: str) -> "OperationResult[T]":
        return cls(status=OperationStatus.ERROR, message=message)

    @classmethod
    def pending(cls) -> "OperationResult[T]":
        return cls(status=OperationStatus.PENDING)

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        data = self.data
        if data is not None and hasattr(data, "to_dict"):
            data = data.to_dict()
        return {"status": self.status.value, "data": data, "message": self.message}
