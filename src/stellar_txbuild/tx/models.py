"""
Draft and result models.

Drafts mirror the transaction build form: loosely typed, accepting both the
snake_case XDR-JSON names and the form's camelCase names. Kind-specific
operation parameters stay an untyped bag until a builder compiles them.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field
import base64
import re

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..enums import MemoType
from ..runtime.errors import HashFailure, InvalidDraft

_UNSIGNED_RE = re.compile(r"^\d+$")


def _parse_uint(value: Any, name: str) -> int:
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, str):
        if not _UNSIGNED_RE.match(value.strip()):
            raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
        return int(value.strip())
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"{name} must be a non-negative integer, got {value}")
        return value
    raise ValueError(f"{name} must be an integer, got {value!r}")


def _coerce(model_cls, value: Any):
    if isinstance(value, model_cls):
        return value
    try:
        return model_cls.model_validate(value)
    except ValidationError as e:
        first = e.errors(include_url=False)[0]
        location = ".".join(str(part) for part in first["loc"])
        message = f"Invalid {model_cls.__name__}: {location}: {first['msg']}" if location else \
            f"Invalid {model_cls.__name__}: {first['msg']}"
        raise InvalidDraft(message, details={"field": location} if location else None, cause=e)


class TimeBounds(BaseModel):
    """Validity window; absent bounds compile to 0 (unbounded)."""

    min_time: Optional[int] = Field(None, alias="minTime")
    max_time: Optional[int] = Field(None, alias="maxTime")

    model_config = {"populate_by_name": True}

    @field_validator("min_time", "max_time", mode="before")
    @classmethod
    def parse_time(cls, v: Any) -> Optional[int]:
        if v is None or v == "":
            return None
        return _parse_uint(v, "time bound")


class Memo(BaseModel):
    """
    Transaction memo.

    Accepts ``{"type": "text", "value": "hi"}`` as well as the form shorthand
    ``{"text": "hi"}`` and ``{}`` / ``None`` for no memo. An empty text memo
    is kept as text; every other memo type needs a value.
    """

    type: MemoType = MemoType.NONE
    value: Optional[Union[int, str]] = None

    @model_validator(mode="before")
    @classmethod
    def expand_shorthand(cls, data: Any) -> Any:
        if data is None or data == {} or data == "none":
            return {"type": MemoType.NONE}
        if isinstance(data, dict) and "type" not in data and len(data) == 1:
            (tag, value), = data.items()
            if tag == "returnHash":
                tag = MemoType.RETURN.value
            return {"type": tag, "value": value}
        if isinstance(data, dict) and data.get("type") == "returnHash":
            return {**data, "type": MemoType.RETURN}
        return data

    @model_validator(mode="after")
    def check_value(self) -> Memo:
        # empty text is a valid string<28>
        if self.type is MemoType.TEXT and self.value == "":
            return self
        if self.type is not MemoType.NONE and (self.value is None or self.value == ""):
            raise ValueError(f"memo value is required for memo type '{self.type.value}'")
        if self.type is MemoType.ID:
            self.value = _parse_uint(self.value, "memo id")
        return self


class OperationDraft(BaseModel):
    """One operation: kind, optional source account and its parameter bag."""

    kind: str = Field(..., alias="operation_type")
    source_account: Optional[str] = Field(None, alias="sourceAccount")
    params: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"populate_by_name": True}

    @classmethod
    def coerce(cls, value: Any) -> OperationDraft:
        """Validate a mapping into a draft, raising ``InvalidDraft`` on failure."""
        return _coerce(cls, value)


class TransactionDraft(BaseModel):
    """
    Transaction under construction.

    ``fee`` is the base fee per operation; the compiled fee is this value
    multiplied by the number of operations.
    """

    source_account: str = Field(..., alias="sourceAccount")
    seq_num: int = Field(..., alias="sequenceNumber")
    fee: int = Field(..., alias="baseFeePerOperation")
    time_bounds: TimeBounds = Field(default_factory=TimeBounds, alias="timeBounds")
    memo: Memo = Field(default_factory=Memo)
    operations: List[OperationDraft] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @field_validator("seq_num", "fee", mode="before")
    @classmethod
    def parse_integer(cls, v: Any) -> int:
        return _parse_uint(v, "value")

    @field_validator("time_bounds", "memo", mode="before")
    @classmethod
    def default_when_null(cls, v: Any) -> Any:
        return {} if v is None else v

    @classmethod
    def coerce(cls, value: Any) -> TransactionDraft:
        """Validate a mapping into a draft, raising ``InvalidDraft`` on failure."""
        return _coerce(cls, value)


@dataclass(frozen=True)
class CompiledTransaction:
    """
    Result of a successful compilation.

    ``hash`` is None when the hash could not be derived; ``hash_error`` then
    carries the failure while ``xdr`` stays valid.
    """

    xdr: str
    envelope: Dict[str, Any] = field(repr=False)
    json_text: str = field(repr=False)
    hash: Optional[str] = None
    hash_error: Optional[HashFailure] = None

    @property
    def wire_bytes(self) -> bytes:
        return base64.b64decode(self.xdr)

    @property
    def fee(self) -> int:
        return self.envelope["tx"]["tx"]["fee"]

    def to_dict(self) -> Dict[str, Any]:
        result = {"xdr": self.xdr, "hash": self.hash}
        if self.hash_error is not None:
            result["hash_error"] = self.hash_error.to_dict()
        return result


__all__ = [
    "TimeBounds",
    "Memo",
    "OperationDraft",
    "TransactionDraft",
    "CompiledTransaction",
]
