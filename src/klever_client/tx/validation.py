"""
Input validation for transaction operations.

Normalizes amounts to ``int`` and turns pydantic model errors into the
library's own error types.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Type, TypeVar

import pydantic

from ..runtime.address import decode_address
from ..runtime.errors import (
    ErrorCode,
    InvalidAddressError,
    InvalidAmountError,
    KleverError,
    ValidationError,
)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def normalize_amount(value: Any, field: str = "amount") -> int:
    """
    Normalize an amount to an arbitrary-precision ``int``.

    Accepts ints, decimal strings and ``Decimal`` values with no fractional
    part. Floats and bools are rejected outright.

    Raises:
        InvalidAmountError: If the value is not an exact integer
    """
    if isinstance(value, bool) or isinstance(value, float):
        raise InvalidAmountError(
            f"{field} must be an integer or decimal string, got {type(value).__name__}",
            {"field": field, "value": repr(value)},
        )
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise InvalidAmountError(f"{field} is not a number: {text!r}", {"field": field, "value": text})
    if isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            raise InvalidAmountError(
                f"{field} must be a whole number of base units: {value}",
                {"field": field, "value": str(value)},
            )
        return int(value)
    raise InvalidAmountError(
        f"{field} has unsupported type {type(value).__name__}",
        {"field": field, "type": type(value).__name__},
    )


def require_positive(value: Any, field: str = "amount") -> int:
    """Normalize and require ``value > 0``."""
    amount = normalize_amount(value, field)
    if amount <= 0:
        raise InvalidAmountError(f"{field} must be greater than zero", {"field": field, "value": amount})
    return amount


def require_non_negative(value: Any, field: str = "amount") -> int:
    """Normalize and require ``value >= 0``."""
    amount = normalize_amount(value, field)
    if amount < 0:
        raise InvalidAmountError(f"{field} must not be negative", {"field": field, "value": amount})
    return amount


def require_address(address: Any, field: str = "address") -> str:
    """Require a decodable bech32 address; returns it unchanged."""
    try:
        decode_address(address)
    except InvalidAddressError as e:
        raise InvalidAddressError(f"Invalid {field}: {address!r}", {"field": field, "address": address}, e)
    return address


def require_text(value: Any, field: str) -> str:
    """Require a non-empty string."""
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{field} is required", ErrorCode.MISSING_FIELD, {"field": field})
    return value


def _issues(exc: pydantic.ValidationError) -> List[Dict[str, Any]]:
    return [
        {"loc": ".".join(str(p) for p in err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def from_pydantic_error(exc: pydantic.ValidationError, model: str) -> KleverError:
    """
    Convert a pydantic error into a library error.

    A library error raised inside a field validator is returned as is;
    missing fields map to ``MISSING_FIELD``.
    """
    for err in exc.errors():
        inner = (err.get("ctx") or {}).get("error")
        if isinstance(inner, KleverError):
            return inner

    issues = _issues(exc)
    code = ErrorCode.VALIDATION_ERROR
    if issues and all(i["type"] == "missing" for i in issues):
        code = ErrorCode.MISSING_FIELD
    summary = "; ".join(f"{i['loc']}: {i['msg']}" for i in issues)
    return ValidationError(f"Invalid {model}: {summary}", code, {"model": model, "issues": issues}, exc)


def validate_model(model_cls: Type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Validate ``data`` into ``model_cls``, raising library errors."""
    try:
        return model_cls.model_validate(dict(data))
    except pydantic.ValidationError as e:
        raise from_pydantic_error(e, model_cls.__name__) from None


__all__ = [
    "normalize_amount",
    "require_positive",
    "require_non_negative",
    "require_address",
    "require_text",
    "from_pydantic_error",
    "validate_model",
]
