from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any, List

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for "no value at all", as opposed to an explicit ``None``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


MISSING: Any = _Missing()

_INDEX_RE = re.compile(r"\[([0-9]+)\]")
_QUOTED_RE = re.compile(r"\[[\"']([^\"']+)[\"']\]")
_DOT_TOKEN = "__DOT__TOKEN__"
_DIGITS_RE = re.compile(r"[0-9]+")


def split_path(path: str) -> List[str]:
    """
    Split a locator into segments.

      a[0].b       -> ["a", "0", "b"]
      a["b"].c     -> ["a", "b", "c"]
      meta\\.data.x -> ["meta.data", "x"]
    """
    p = _INDEX_RE.sub(r".\1", path)
    p = _QUOTED_RE.sub(r".\1", p)
    p = p.replace("\\.", _DOT_TOKEN)
    return [s.replace(_DOT_TOKEN, ".") for s in p.split(".") if s]


def _is_index(key: str) -> bool:
    # ASCII digits only; str.isdigit() also accepts "²" which int() rejects
    return _DIGITS_RE.fullmatch(key) is not None


def _step(cur: Any, key: str) -> Any:
    if isinstance(cur, Mapping):
        if key in cur:
            return cur[key]
        if _is_index(key) and int(key) in cur:
            return cur[int(key)]
        return MISSING
    if isinstance(cur, (list, tuple)) and _is_index(key):
        idx = int(key)
        return cur[idx] if idx < len(cur) else MISSING
    return MISSING


def get_by_path(src: Any, path: str, default: Any = MISSING) -> Any:
    """
    Read the value at ``path``.

    A flat key equal to the whole path wins (``{"meta_data.maxDuration": 5}``);
    otherwise the parsed segments are walked one level at a time.
    """
    if not path or src is None or src is MISSING:
        return default

    if isinstance(src, Mapping) and path in src:
        return src[path]

    cur = src
    for key in split_path(path):
        if cur is None or cur is MISSING:
            return default
        cur = _step(cur, key)
    return default if cur is MISSING else cur


def _child(obj: Any, key: str) -> Any:
    if isinstance(obj, list):
        if _is_index(key) and int(key) < len(obj):
            return obj[int(key)]
        return None
    return obj.get(key)


def _assign(obj: Any, key: str, value: Any) -> None:
    if isinstance(obj, list) and _is_index(key):
        idx = int(key)
        if idx >= len(obj):
            obj.extend([None] * (idx + 1 - len(obj)))
        obj[idx] = value
    else:
        obj[key] = value


def set_by_path(target: dict, path: str, value: Any) -> None:
    """Write ``value`` at ``path``, creating dict intermediates as needed."""
    parts = split_path(path)
    if not parts:
        logger.debug("set_by_path: empty path %r ignored", path)
        return

    obj: Any = target
    last = len(parts) - 1
    for i, key in enumerate(parts):
        if isinstance(obj, list) and not _is_index(key):
            logger.debug("set_by_path: cannot set key %r on a list (%r)", key, path)
            return
        if i == last:
            break
        nxt = _child(obj, key)
        if not isinstance(nxt, (dict, list)):
            nxt = {}
            _assign(obj, key, nxt)
        obj = nxt
    _assign(obj, parts[-1], value)
