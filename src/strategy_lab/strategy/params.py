"""Strategy parameter records and the caller-override merge."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, fields, is_dataclass, replace
from enum import Enum
from typing import Any, Mapping, TypeVar

from strategy_lab.risk.discipline import DisciplineParams

logger = logging.getLogger(__name__)

P = TypeVar("P")

_INVALID = object()
_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}
_WINDOW_SUFFIXES = ("_period", "_roc", "smooth_k", "smooth_d", "displacement")


@dataclass(frozen=True)
class StrategyParams:
    """Fields shared by every strategy's parameter record."""

    reverse: bool = False
    discipline: DisciplineParams = DisciplineParams()

    def accepts(self, name: str, value: Any) -> bool:
        """Whether ``value`` is usable for field ``name``; window lengths must be positive."""
        if name == "period" or name.endswith(_WINDOW_SUFFIXES):
            return value > 0
        return True


def _normalize_key(key: str) -> str:
    return str(key).replace("_", "").replace("-", "").lower()


def _coerce_bool(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    return _INVALID


def _coerce_enum(enum_type: type[Enum], value: Any) -> Any:
    if isinstance(value, enum_type):
        return value
    for candidate in (value, str(value).strip().lower()):
        try:
            return enum_type(candidate)
        except ValueError:
            continue
    return _INVALID


def _coerce_int(value: Any) -> Any:
    if isinstance(value, bool):
        return _INVALID
    try:
        number = float(value)
    except (TypeError, ValueError):
        return _INVALID
    if not number.is_integer():
        return _INVALID
    return int(number)


def _coerce_float(value: Any) -> Any:
    if isinstance(value, bool):
        return _INVALID
    try:
        number = float(value)
    except (TypeError, ValueError):
        return _INVALID
    if math.isnan(number):
        return _INVALID
    return number


def _coerce(default: Any, value: Any) -> Any:
    if isinstance(default, bool):
        return _coerce_bool(value)
    if isinstance(default, Enum):
        return _coerce_enum(type(default), value)
    if isinstance(default, int):
        return _coerce_int(value)
    if isinstance(default, float):
        return _coerce_float(value)
    if isinstance(default, tuple):
        if isinstance(value, (list, tuple)):
            return tuple(value)
        return _INVALID
    if isinstance(default, str):
        return value if isinstance(value, str) else _INVALID
    if is_dataclass(default):
        if isinstance(value, type(default)):
            return value
        if isinstance(value, Mapping):
            return merge_params(default, value)
        return _INVALID
    return value


def merge_params(defaults: P, overrides: Any) -> P:
    """Overlay caller overrides on a frozen parameter record.

    Keys may be snake_case or camelCase. Unknown keys are ignored, a value
    that cannot be coerced to the field's type, or that the record's
    ``accepts`` hook rejects, keeps the default, and anything other than a
    mapping yields the defaults unchanged.
    """
    if overrides is None:
        return defaults
    if isinstance(overrides, type(defaults)):
        return overrides
    if not isinstance(overrides, Mapping):
        logger.warning("Ignoring non-mapping parameters of type %s", type(overrides).__name__)
        return defaults

    supplied = {_normalize_key(key): value for key, value in overrides.items()}
    changes: dict[str, Any] = {}
    for item in fields(defaults):
        key = _normalize_key(item.name)
        if key not in supplied:
            continue
        current = getattr(defaults, item.name)
        coerced = _coerce(current, supplied[key])
        if coerced is _INVALID:
            logger.warning("Invalid value %r for parameter %s; keeping %r", supplied[key], item.name, current)
            continue
        accepts = getattr(defaults, "accepts", None)
        if accepts is not None and not accepts(item.name, coerced):
            logger.warning("Out-of-range value %r for parameter %s; keeping %r", coerced, item.name, current)
            continue
        changes[item.name] = coerced
    return replace(defaults, **changes)


def params_to_dict(params: Any) -> dict:
    """Plain-dict view of a parameter record, with enums as their values."""
    payload: dict[str, Any] = {}
    for item in fields(params):
        value = getattr(params, item.name)
        if is_dataclass(value):
            value = params_to_dict(value)
        elif isinstance(value, Enum):
            value = value.value
        elif isinstance(value, tuple):
            value = list(value)
        payload[item.name] = value
    return payload
