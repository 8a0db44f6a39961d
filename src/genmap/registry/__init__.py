from . import types
from . import catalog
from . import registry

from .registry import ModelRegistry, default_registry, load_registry_yaml

__all__ = [
    "types",
    "catalog",
    "registry",
    "ModelRegistry",
    "default_registry",
    "load_registry_yaml",
]
