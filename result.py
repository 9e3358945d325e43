# result.py

# Uniform response envelope: a success holding a payload, or a failure holding
# a BizError and, for validation failures, the per-field messages.

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Literal, Optional, TypeVar

from fastapi.encoders import jsonable_encoder

from errors import BizError

T = TypeVar("T")

SUCCESS = "success"
FAILURE = "failure"


@dataclass(frozen=True)
class Result(Generic[T]):
    kind: Literal["success", "failure"]
    _data: Optional[T] = None
    _error: Optional[BizError] = None
    _field_errors: Optional[Dict[str, str]] = field(default=None)

    @classmethod
    def success(cls, data: T) -> "Result[T]":
        return cls(kind=SUCCESS, _data=data)

    @classmethod
    def failure(cls, error: BizError, field_errors: Optional[Dict[str, str]] = None) -> "Result[T]":
        return cls(kind=FAILURE, _error=error, _field_errors=dict(field_errors) if field_errors else None)

    @property
    def is_success(self) -> bool:
        return self.kind == SUCCESS

    @property
    def data(self) -> T:
        if not self.is_success:
            raise ValueError("failure result has no data")
        return self._data

    @property
    def error(self) -> BizError:
        if self.is_success:
            raise ValueError("success result has no error")
        return self._error

    @property
    def field_errors(self) -> Optional[Dict[str, str]]:
        return self._field_errors

    def to_payload(self, request_id: str, time_stamp: int) -> Dict[str, Any]:
        if self.is_success:
            return {
                "data": jsonable_encoder(self._data),
                "request_id": request_id,
                "time_stamp": time_stamp,
            }
        return {
            "code": int(self._error.code),
            "msg": self._error.message,
            "errors": self._field_errors,
            "request_id": request_id,
            "time_stamp": time_stamp,
        }
