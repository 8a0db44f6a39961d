from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from genmap.registry.registry import ModelRegistry, default_registry, load_registry_yaml


@dataclass
class GenmapConfig:
    """
    Runtime settings, usually read from genmap.yaml:

      log_level: INFO
      catalog: models.yaml       # merged over the built-in catalog
      validate_requests: true
      max_in_flight: 4           # simultaneous jobs per user
      webhook_url: null
    """

    log_level: str = "INFO"
    catalog: Optional[Path] = None
    validate_requests: bool = True
    max_in_flight: int = 4
    webhook_url: Optional[str] = None

    # ------------------------------------------------------------------
    @classmethod
    def from_config(cls, cfg: Dict[str, Any] | None, base: Optional[Path] = None) -> "GenmapConfig":
        if cfg is None:
            return cls()

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(cfg) - known)
        if unknown:
            raise ValueError(f"Unknown config key(s): {unknown}")

        merged = dict(cfg)
        level = str(merged.get("log_level", "INFO")).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log_level '{level}'")
        merged["log_level"] = level

        catalog = merged.get("catalog")
        if catalog:
            catalog = Path(catalog).expanduser()
            if base is not None and not catalog.is_absolute():
                catalog = base / catalog
            merged["catalog"] = catalog

        max_in_flight = int(merged.get("max_in_flight", 4))
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be >= 1")
        merged["max_in_flight"] = max_in_flight
        merged["validate_requests"] = bool(merged.get("validate_requests", True))

        return cls(**merged)

    # ------------------------------------------------------------------
    def registry(self) -> ModelRegistry:
        reg = default_registry()
        if self.catalog:
            reg = reg.merged(load_registry_yaml(self.catalog))
        return reg


def load_config(path: Optional[Path]) -> GenmapConfig:
    """Read a YAML config; a missing path (or None) yields the defaults."""
    if path is None:
        return GenmapConfig()
    path = Path(path).expanduser().resolve()
    if not path.is_file():
        return GenmapConfig()
    doc = yaml.safe_load(path.read_text(encoding="utf-8"))
    if doc is not None and not isinstance(doc, dict):
        raise ValueError(f"{path}: config must be a mapping")
    return GenmapConfig.from_config(doc, base=path.parent)
