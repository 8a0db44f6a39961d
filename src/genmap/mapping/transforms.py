from __future__ import annotations

import json
import logging
import math
import random
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, Iterable, Optional, Union

from genmap.forms.coerce import find_closest_valid_number

from .conditions import is_blank
from .load import build_transform
from .paths import MISSING
from .types import CustomFn, Transform, TransformOp

logger = logging.getLogger(__name__)

RANDOM_INT_MIN = 1
RANDOM_INT_MAX = 2**31 - 1

# Number() literal syntax: no underscores, no sign on radix prefixes
_RADIX_RE = re.compile(r"0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?P<exp>[eE][+-]?[0-9]+)?")

ASPECT_RATIO_SIZES_1024: Dict[str, Dict[str, int]] = {
    "1:1": {"width": 1024, "height": 1024},
    "16:9": {"width": 1024, "height": 576},
    "9:16": {"width": 576, "height": 1024},
    "3:2": {"width": 1024, "height": 683},
    "2:3": {"width": 683, "height": 1024},
    "4:5": {"width": 819, "height": 1024},
    "5:4": {"width": 1024, "height": 819},
    "3:4": {"width": 768, "height": 1024},
    "4:3": {"width": 1024, "height": 768},
}


# ---------------------------------------------------------------------------
# Named custom functions
# ---------------------------------------------------------------------------

def multiple_of_32(v: Any) -> Any:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return v
    return find_closest_valid_number(v)


def aspect_ratio_to_size(v: Any) -> Any:
    if isinstance(v, str) and v in ASPECT_RATIO_SIZES_1024:
        return dict(ASPECT_RATIO_SIZES_1024[v])
    return v


CUSTOM_FUNCTIONS: Dict[str, CustomFn] = {
    "multiple_of_32": multiple_of_32,
    "aspect_ratio_to_size": aspect_ratio_to_size,
}


def register_custom_fn(name: str) -> Callable[[CustomFn], CustomFn]:
    """Decorator: make ``fn`` available to ``{op: customFn, fn: <name>}``."""
    def deco(fn: CustomFn) -> CustomFn:
        CUSTOM_FUNCTIONS[name] = fn
        return fn
    return deco


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def stringify(v: Any) -> str:
    """String form as it would appear in a JSON payload (true, null, 1 not 1.0)."""
    if v is MISSING:
        return "undefined"
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    if isinstance(v, (list, tuple)):
        return ",".join("" if x is None or x is MISSING else stringify(x) for x in v)
    if isinstance(v, Mapping):
        return json.dumps(v, default=str)
    return str(v)


def to_number(v: Any) -> Any:
    """
    Numeric value of ``v`` following JavaScript ``Number()`` string syntax.

    Blank, unparsable and non-finite results (NaN, Infinity) become MISSING,
    since none of them can be sent in a JSON payload.
    """
    if isinstance(v, bool):
        return int(v)
    if isinstance(v, (int, float)):
        return v if math.isfinite(v) else MISSING
    if is_blank(v) or not isinstance(v, str):
        return MISSING
    s = v.strip()
    if _RADIX_RE.fullmatch(s):
        return int(s, 0)
    m = _DECIMAL_RE.fullmatch(s)
    if m is None:
        return MISSING
    if "." not in s and m.group("exp") is None:
        return int(s)
    n = float(s)
    return n if math.isfinite(n) else MISSING


def first_non_blank(values: Iterable[Any]) -> Any:
    for v in values:
        if not is_blank(v):
            return v
    return MISSING


def _is_empty(v: Any) -> bool:
    return is_blank(v) or (isinstance(v, (list, tuple)) and len(v) == 0)


# ---------------------------------------------------------------------------
# Operations: (value, transform) -> value
# ---------------------------------------------------------------------------

def is_truthy(v: Any) -> bool:
    """JavaScript truthiness: containers are always truthy, NaN is falsy."""
    if v is MISSING or v is None:
        return False
    if isinstance(v, (bool, str)):
        return bool(v)
    if isinstance(v, (int, float)):
        return v != 0 and not math.isnan(v)
    return True


def _not(v, t):
    return not is_truthy(v)


def _enum_map(v, t):
    table = {stringify(k): val for k, val in t.params["map"].items()}
    hit = table.get(stringify(v))
    return t.params.get("default", MISSING) if hit is None else hit


def _coalesce(v, t):
    return first_non_blank(v) if isinstance(v, (list, tuple)) else v


def _random_int(v, t):
    lo, hi = int(t.get("min", RANDOM_INT_MIN)), int(t.get("max", RANDOM_INT_MAX))
    return random.randint(min(lo, hi), max(lo, hi))


def _array(v, t):
    if isinstance(v, list):
        return v
    if isinstance(v, tuple):
        return list(v)
    return [] if v is MISSING else [v]


def _to_number(v, t):
    return to_number(v)


def _to_string(v, t):
    return MISSING if v is MISSING or v is None else stringify(v)


def _pick(v, t):
    if not isinstance(v, (list, tuple)):
        return v
    idx = t.get("index", 0)
    return v[idx] if 0 <= idx < len(v) else MISSING


def _trim(v, t):
    return v.strip() if isinstance(v, str) else v


def _lowercase(v, t):
    return v.lower() if isinstance(v, str) else v


def _uppercase(v, t):
    return v.upper() if isinstance(v, str) else v


def _slice(v, t):
    if not isinstance(v, (list, tuple)):
        return v
    return list(v[t.get("start", 0):t.get("end")])


def _default(v, t):
    return t.params["value"] if _is_empty(v) else v


def _custom_fn(v, t):
    fn = t.params.get("fn")
    name = fn if isinstance(fn, str) else getattr(fn, "__name__", repr(fn))
    if isinstance(fn, str):
        fn = CUSTOM_FUNCTIONS.get(fn)
        if fn is None:
            logger.warning("Unknown customFn identifier: %s", name)
            return v
    try:
        return fn(v)
    except Exception as e:
        logger.warning("customFn %s failed: %s", name, e)
        return v


TRANSFORMS: Dict[TransformOp, Callable[[Any, Transform], Any]] = {
    TransformOp.NOT: _not,
    TransformOp.ENUM_MAP: _enum_map,
    TransformOp.COALESCE: _coalesce,
    TransformOp.RANDOM_INT: _random_int,
    TransformOp.ARRAY: _array,
    TransformOp.TO_NUMBER: _to_number,
    TransformOp.TO_STRING: _to_string,
    TransformOp.PICK: _pick,
    TransformOp.TRIM: _trim,
    TransformOp.LOWERCASE: _lowercase,
    TransformOp.UPPERCASE: _uppercase,
    TransformOp.SLICE: _slice,
    TransformOp.DEFAULT: _default,
    TransformOp.CUSTOM_FN: _custom_fn,
}


def apply_transforms(value: Any, transforms: Optional[Iterable[Union[Transform, Mapping]]] = None) -> Any:
    """Fold ``transforms`` left to right over ``value``."""
    v = value
    for t in transforms or ():
        t = build_transform(t)
        v = TRANSFORMS[t.op](v, t)
    return v
