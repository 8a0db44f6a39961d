from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

from .load import build_condition
from .paths import MISSING, get_by_path
from .types import Condition, Equals, Exists, Not


def is_blank(v: Any) -> bool:
    """MISSING, None and whitespace-only strings count as "no value"."""
    return v is MISSING or v is None or (isinstance(v, str) and v.strip() == "")


def strict_equals(a: Any, b: Any) -> bool:
    # no bool/int crossover: True does not equal 1, "1" does not equal 1
    if isinstance(a, bool) or isinstance(b, bool):
        return a is b
    if a is MISSING or b is MISSING:
        return a is b
    if isinstance(a, (int, float)) and isinstance(b, (int, float)):
        return a == b
    return type(a) is type(b) and a == b


def eval_condition(cond: Union[Condition, Mapping, None], data: Any) -> bool:
    if cond is None:
        return True
    if isinstance(cond, Mapping):
        cond = build_condition(cond)
    if isinstance(cond, Not):
        return not eval_condition(cond.cond, data)
    if isinstance(cond, Exists):
        return not is_blank(get_by_path(data, cond.path))
    if isinstance(cond, Equals):
        return strict_equals(get_by_path(data, cond.path), cond.value)
    raise TypeError(f"Unsupported condition: {cond!r}")
