from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import jsonschema


def _load_schema(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def validate_payload(payload: Dict[str, Any], schema: Union[str, Path, Dict[str, Any]]) -> None:
    """Raise ``jsonschema.ValidationError`` if ``payload`` does not match."""
    if not isinstance(schema, dict):
        schema = _load_schema(schema)
    jsonschema.validate(instance=payload, schema=schema)


def payload_errors(payload: Dict[str, Any], schema: Union[str, Path, Dict[str, Any]]) -> List[str]:
    if not isinstance(schema, dict):
        schema = _load_schema(schema)
    validator = jsonschema.Draft7Validator(schema)
    return [
        f"{'.'.join(str(p) for p in e.absolute_path) or '<root>'}: {e.message}"
        for e in sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.absolute_path])
    ]
