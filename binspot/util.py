"""Query-string building and value conversion helpers."""

from __future__ import annotations

import time
from collections.abc import Iterable, Iterator, Mapping
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any
from urllib.parse import quote

TRUE = "TRUE"
FALSE = "FALSE"


class BinanceError(Exception):
    """Error raised by the client library."""


def _pairs(parameters: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> Iterable[tuple[str, Any]]:
    if isinstance(parameters, Mapping):
        return parameters.items()
    return parameters


def build_request(parameters: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> str:
    """Join key/value pairs into ``k=v&k=v`` form, in the order given."""
    return "&".join(f"{key}={value}" for key, value in _pairs(parameters))


def _format_float(value: float) -> str:
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_scalar(value: Any) -> str:
    if isinstance(value, Enum):
        return _format_scalar(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    return str(value)


def _flatten(key: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _flatten(f"{key}[{sub_key}]", sub_value)
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            yield from _flatten(f"{key}[{index}]", item)
    else:
        yield key, quote(_format_scalar(value), safe="")


def _payload_mapping(payload: Any) -> Mapping[str, Any]:
    if payload is None:
        return {}
    if isinstance(payload, Mapping):
        return payload
    to_params = getattr(payload, "to_params", None)
    if callable(to_params):
        return to_params()
    raise BinanceError(f"cannot serialize payload of type {type(payload).__name__}")


def build_request_p(payload: Any) -> str:
    """Serialize a payload (mapping or object with ``to_params``) to a query string.

    Missing (``None``) values are left out; sequences and nested mappings use
    bracketed keys.
    """
    pairs = (
        pair for key, value in _payload_mapping(payload).items() for pair in _flatten(str(key), value)
    )
    return build_request(pairs)


def _signature_prefix(recv_window: int) -> list[str]:
    parts = []
    if recv_window > 0:
        parts.append(f"recvWindow={recv_window}")
    parts.append(f"timestamp={get_timestamp()}")
    return parts


def build_signed_request(
    parameters: Mapping[str, Any] | Iterable[tuple[str, Any]], recv_window: int
) -> str:
    """Build a query string prefixed with ``recvWindow`` (if positive) and ``timestamp``.

    Pairs with an empty key are dropped.
    """
    parts = _signature_prefix(recv_window)
    parts.extend(f"{key}={value}" for key, value in _pairs(parameters) if key)
    return "&".join(parts)


def build_signed_request_p(payload: Any, recv_window: int) -> str:
    """Like :func:`build_signed_request`, with the payload serialized as by :func:`build_request_p`."""
    query_string = build_request_p(payload)
    prefix = "&".join(_signature_prefix(recv_window))
    return f"{prefix}&{query_string}" if query_string else prefix


def to_i64(v: Any) -> int:
    """Return a JSON integer value, or raise :class:`BinanceError`."""
    if isinstance(v, bool) or not isinstance(v, int):
        raise BinanceError(f"expected an integer, got {v!r}")
    return v


def to_f64(v: Any) -> float:
    """Parse a JSON string holding a number into a float."""
    if not isinstance(v, str):
        raise BinanceError(f"expected a numeric string, got {v!r}")
    try:
        return float(v)
    except ValueError as exc:
        raise BinanceError(f"invalid number {v!r}") from exc


def get_timestamp() -> int:
    """Current UTC time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def days_millis(days: int) -> int:
    """Duration of ``days`` days in milliseconds."""
    return timedelta(days=days) // timedelta(milliseconds=1)


def bool_to_string(b: bool) -> str:
    return TRUE if b else FALSE


def bool_to_string_some(b: bool) -> str | None:
    return bool_to_string(b)


def string_to_decimal(value: Any) -> Decimal:
    """Parse a decimal number sent as a JSON string."""
    if not isinstance(value, str):
        raise BinanceError(f"expected a decimal string, got {value!r}")
    try:
        result = Decimal(value)
    except InvalidOperation as exc:
        raise BinanceError(f"invalid decimal {value!r}") from exc
    if not result.is_finite():
        raise BinanceError(f"invalid decimal {value!r}")
    return result


def decimal_to_string(value: Any) -> str:
    """Render a decimal (or any displayable value) as text."""
    return str(value)


def u64_or_string(value: Any) -> str:
    """Accept either a string or a non-negative integer and return it as text."""
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < 2**64:
        return str(value)
    raise BinanceError(f"expected a string or unsigned integer, got {value!r}")