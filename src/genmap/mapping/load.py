from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .paths import MISSING
from .types import (
    ApiInputSchema, Condition, Equals, Exists, FileRef, MappingRule, Not,
    Transform, TransformOp,
)

_OPS = {op.value: op for op in TransformOp}

_INT_PARAMS = {
    TransformOp.PICK: ("index",),
    TransformOp.SLICE: ("start", "end"),
    TransformOp.RANDOM_INT: ("min", "max"),
}


def _as_int(v: Any, name: str) -> int:
    # JSON/YAML numbers may arrive as floats (1.0)
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ValueError(f"{name} must be an integer, got {v!r}")
    if isinstance(v, float):
        if not v.is_integer():
            raise ValueError(f"{name} must be an integer, got {v!r}")
        return int(v)
    return v


def build_transform(t: Union[Transform, Mapping]) -> Transform:
    if isinstance(t, Transform):
        return t
    if not isinstance(t, Mapping) or "op" not in t:
        raise ValueError(f"transform must be a mapping with an 'op' key, got {t!r}")
    op = _OPS.get(t["op"]) if isinstance(t["op"], str) else t["op"]
    if not isinstance(op, TransformOp):
        raise ValueError(f"unknown transform op {t['op']!r}; expected one of {sorted(_OPS)}")
    params = {k: v for k, v in t.items() if k != "op"}
    if op is TransformOp.ENUM_MAP and not isinstance(params.get("map"), Mapping):
        raise ValueError("enumMap transform requires a 'map' mapping")
    if op is TransformOp.DEFAULT and "value" not in params:
        raise ValueError("default transform requires a 'value'")
    if op is TransformOp.CUSTOM_FN and not (callable(params.get("fn")) or isinstance(params.get("fn"), str)):
        raise ValueError("customFn transform requires 'fn' (a name or a callable)")
    for key in _INT_PARAMS.get(op, ()):
        if params.get(key) is not None:
            params[key] = _as_int(params[key], f"{op.value}.{key}")
    return Transform(op=op, params=params)


def build_condition(c: Union[Condition, Mapping, None]) -> Condition | None:
    """
    {exists: path} | {equals: [path, value]} | {not: <condition>}
    """
    if c is None or isinstance(c, (Exists, Equals, Not)):
        return c
    if not isinstance(c, Mapping) or len(c) != 1:
        raise ValueError(f"condition must be a single-key mapping, got {c!r}")
    (key, arg), = c.items()
    if key == "exists":
        return Exists(path=str(arg))
    if key == "equals":
        if not isinstance(arg, (list, tuple)) or len(arg) != 2:
            raise ValueError(f"equals expects [path, value], got {arg!r}")
        return Equals(path=str(arg[0]), value=arg[1])
    if key == "not":
        return Not(cond=build_condition(arg))
    raise ValueError(f"unknown condition {key!r}; expected exists|equals|not")


def build_file_ref(f: Union[FileRef, Mapping, None]) -> FileRef | None:
    if f is None or isinstance(f, FileRef):
        return f
    use = f.get("use", "file")
    if use not in ("file", "url"):
        raise ValueError(f"fromFile.use must be 'file' or 'url', got {use!r}")
    index = f.get("index")
    return FileRef(name=f["name"], index=None if index is None else int(index), use=use)


def build_rule(r: Union[MappingRule, Mapping]) -> MappingRule:
    if isinstance(r, MappingRule):
        return r
    if not r.get("to"):
        raise ValueError(f"rule is missing 'to': {dict(r)!r}")
    source = r.get("from")
    if source is not None and not isinstance(source, str):
        source = [str(s) for s in source]
    return MappingRule(
        to=str(r["to"]),
        source=source,
        from_file=build_file_ref(r.get("fromFile")),
        const=r.get("const", MISSING),
        when=build_condition(r.get("when")),
        transform=[build_transform(t) for t in (r.get("transform") or [])],
    )


def build_rules(rules: List[Any]) -> List[MappingRule]:
    out: List[MappingRule] = []
    for i, r in enumerate(rules or []):
        try:
            out.append(build_rule(r))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ValueError(f"rule {i}: {e}") from e
    return out


def build_schema(doc: Union[ApiInputSchema, Dict[str, Any]]) -> ApiInputSchema:
    if isinstance(doc, ApiInputSchema):
        return doc
    return ApiInputSchema(
        provider=str(doc.get("provider", "fal")),
        endpoint=doc.get("endpoint"),
        variant_endpoint=doc.get("variant_endpoint"),
        options=dict(doc.get("options") or {}),
        rules=build_rules(doc.get("rules", [])),
    )


def load_schema_yaml(path: Path) -> ApiInputSchema:
    path = Path(path).expanduser().resolve()
    if not path.is_file():
        raise FileNotFoundError(path)
    doc = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(doc, dict):
        raise ValueError(f"{path}: schema document must be a mapping")
    # allow either a bare schema or a model entry carrying apiInput
    return build_schema(doc.get("apiInput", doc))
