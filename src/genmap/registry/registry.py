from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from genmap.mapping.load import build_schema
from genmap.registry.catalog import CATALOG, HOT_MODEL_IDS
from genmap.registry.types import (
    CustomParameter, CustomParameterOption, ModelSetting, SupportFileSetting,
)


# ---------------------------------------------------------------------------
# Document -> dataclass
# ---------------------------------------------------------------------------

def build_custom_parameter(d: Dict[str, Any]) -> CustomParameter:
    return CustomParameter(
        name=d["name"],
        label=d.get("label", d["name"]),
        type=d.get("type", "input"),
        default_value=d.get("defaultValue", ""),
        description=d.get("description"),
        options=[CustomParameterOption(value=o["value"], label=o.get("label", str(o["value"])))
                 for o in d.get("options", [])],
        min=d.get("min"),
        max=d.get("max"),
        step=d.get("step"),
    )


def build_support_file(d: Dict[str, Any]) -> SupportFileSetting:
    return SupportFileSetting(
        name=d["name"],
        label=d.get("label", d["name"]),
        type=d.get("type", "image"),
        is_support=int(d.get("isSupport", 0)),
        is_required=bool(d.get("isRequired", False)),
        options=dict(d.get("options") or {}),
    )


def build_model_setting(d: Dict[str, Any]) -> ModelSetting:
    if not d.get("id"):
        raise ValueError(f"model entry is missing 'id': {d!r}")
    try:
        api_input = build_schema(d["apiInput"]) if d.get("apiInput") else None
    except ValueError as e:
        raise ValueError(f"model {d['id']}: {e}") from e
    return ModelSetting(
        id=d["id"],
        label=d.get("label", d["id"]),
        description=d.get("description", ""),
        badge=list(d.get("badge", [])),
        tag=list(d.get("tag", [])),
        type=d.get("type", "image"),
        provider=list(d.get("provider", [])),
        supported_aspect_ratios=list(d.get("supportedAspectRatios", [])),
        custom_parameters=[build_custom_parameter(p) for p in d.get("customParameters", [])],
        support_add_files=[build_support_file(f) for f in d.get("supportAddFiles", [])],
        prompt_ignore=bool(d.get("promptIgnore", False)),
        use_credits=d.get("useCredits"),
        options=dict(d.get("options") or {}),
        api_input=api_input,
    )


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class ModelRegistry:
    """Model id -> ModelSetting lookup, grouped into named series."""

    def __init__(self, series: Dict[str, List[ModelSetting]], hot_ids: Optional[Iterable[str]] = None):
        self._series: Dict[str, List[ModelSetting]] = {k: list(v) for k, v in series.items()}
        self._hot_ids: List[str] = list(hot_ids or [])

    @classmethod
    def from_documents(cls, series: Dict[str, List[Dict[str, Any]]],
                       hot_ids: Optional[Iterable[str]] = None) -> "ModelRegistry":
        return cls({name: [build_model_setting(d) for d in docs] for name, docs in series.items()}, hot_ids)

    # ------------------------------------------------------------------
    def all_models(self) -> List[ModelSetting]:
        seen: Dict[str, ModelSetting] = {}
        for models in self._series.values():
            for m in models:
                seen.setdefault(m.id, m)
        return list(seen.values())

    @property
    def series(self) -> Dict[str, List[ModelSetting]]:
        out: Dict[str, List[ModelSetting]] = {}
        hot = [m for m in (self.find_setting(i) for i in self._hot_ids) if m is not None]
        if hot:
            out["hot"] = hot
        out.update(self._series)
        return out

    def find_setting(self, model_id: str) -> Optional[ModelSetting]:
        if not model_id:
            return None
        for models in self._series.values():
            for m in models:
                if m.id == model_id:
                    return m
        return None

    def find_endpoint(self, model_id: str) -> str:
        setting = self.find_setting(model_id)
        return setting.endpoint if setting else ""

    def find_label(self, model_id: str) -> str:
        setting = self.find_setting(model_id)
        return setting.label if setting else ""

    def find_by_tag(self, tag: str) -> List[ModelSetting]:
        if not tag:
            return []
        needle = tag.lower()
        return [m for m in self.all_models() if any(needle in t.lower() for t in m.tag)]

    def first_free_model_id(self) -> Optional[str]:
        for m in self.all_models():
            if any("free to try" in b.lower() for b in m.badge):
                return m.id
        return None

    def merged(self, other: "ModelRegistry") -> "ModelRegistry":
        """New registry with ``other``'s series added; same-name series are replaced."""
        series = dict(self._series)
        series.update(other._series)
        return ModelRegistry(series, self._hot_ids + [i for i in other._hot_ids if i not in self._hot_ids])


def default_registry() -> ModelRegistry:
    return ModelRegistry.from_documents(CATALOG, HOT_MODEL_IDS)


def load_registry_yaml(path: Path) -> ModelRegistry:
    """
    Load a catalog file:

      hot: [model-id, ...]          # optional
      series:
        my series:
          - id: my-model
            label: My model
            apiInput: {provider: fal, endpoint: ..., rules: [...]}
    """
    path = Path(path).expanduser().resolve()
    if not path.is_file():
        raise FileNotFoundError(path)
    doc = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(doc, dict) or not isinstance(doc.get("series", {}), dict):
        raise ValueError(f"{path}: catalog must be a mapping with a 'series' mapping")
    return ModelRegistry.from_documents(doc.get("series", {}), doc.get("hot"))
