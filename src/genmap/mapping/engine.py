from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, Union

from .conditions import eval_condition
from .load import build_schema
from .paths import MISSING, get_by_path, set_by_path
from .transforms import apply_transforms
from .types import ApiInputSchema, FileRef, MappingRule

logger = logging.getLogger(__name__)


def _resolve_file(ref: FileRef, data: Any) -> Any:
    v = get_by_path(data, ref.name)
    if ref.index is not None and isinstance(v, (list, tuple)):
        v = v[ref.index] if 0 <= ref.index < len(v) else MISSING
    if ref.use == "url" and isinstance(v, Mapping):
        v = v.get("url", MISSING)
    return v


def resolve_raw(rule: MappingRule, data: Any) -> Any:
    """const > from (list -> parallel list of values) > fromFile."""
    if rule.const is not MISSING:
        return rule.const
    if isinstance(rule.source, (list, tuple)):
        return [get_by_path(data, p) for p in rule.source]
    if isinstance(rule.source, str):
        return get_by_path(data, rule.source)
    if rule.from_file is not None:
        return _resolve_file(rule.from_file, data)
    return MISSING


def _writable(v: Any) -> bool:
    # "" is written; only MISSING and [] count as absent
    return v is not MISSING and not (isinstance(v, (list, tuple)) and len(v) == 0)


def _scrub(v: Any) -> Any:
    """Copy containers; MISSING becomes None in lists and is dropped from dicts."""
    if isinstance(v, (list, tuple)):
        return [None if x is MISSING else _scrub(x) for x in v]
    if isinstance(v, Mapping):
        return {k: _scrub(x) for k, x in v.items() if x is not MISSING}
    return v


def build_api_input(schema: Union[ApiInputSchema, Dict[str, Any]], data: Any) -> Dict[str, Any]:
    """
    Assemble the request payload for one model endpoint.

    Rules run in order; each one that passes its ``when`` gate resolves a raw
    value, runs its transform chain and writes the result to ``to``. Later
    rules may add siblings under, or overwrite, what earlier rules wrote.
    """
    schema = build_schema(schema)
    out: Dict[str, Any] = {}
    for rule in schema.rules:
        if not eval_condition(rule.when, data):
            logger.debug("rule %s skipped: condition not met", rule.to)
            continue
        v = apply_transforms(resolve_raw(rule, data), rule.transform)
        if _writable(v):
            set_by_path(out, rule.to, _scrub(v))
    return out
