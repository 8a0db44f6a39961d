from __future__ import annotations

import math
from typing import Any, Iterable, Optional


def _is_nil(v: Any) -> bool:
    return v is None


def coerce_string(v: Any, default: str = "") -> str:
    return str(default if _is_nil(v) else v)


def coerce_number(v: Any, default: float = 0) -> float:
    if _is_nil(v) or v == "":
        return default
    try:
        return float(v) if not isinstance(v, (int, float)) else v
    except (TypeError, ValueError):
        return math.nan


def coerce_bool(v: Any, default: bool = False) -> bool:
    return bool(default if _is_nil(v) else v)


def ensure_select_value(
    v: Any,
    options: Optional[Iterable[Any]] = None,
    default_value: Any = None,
) -> str:
    """Keep ``v`` if it is one of the options, else fall back to the default, then the first option."""
    opts = list(options or [])
    if not opts:
        return coerce_string(default_value if _is_nil(v) else v, "")
    values = {str(o.value) for o in opts}
    candidate = coerce_string(default_value if _is_nil(v) else v, str(opts[0].value))
    return candidate if candidate in values else str(opts[0].value)


def find_closest_valid_number(value: float) -> int:
    """Nearest multiple of 32; ties go to the lower multiple."""
    lower = math.floor(value / 32) * 32
    upper = math.ceil(value / 32) * 32
    return lower if abs(value - lower) <= abs(value - upper) else upper
