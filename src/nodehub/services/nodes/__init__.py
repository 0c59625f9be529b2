from .reconciler import Reconciler, merge_probe
from .registry import NodeRegistry
from .validation import validate_fields

__all__ = ["Reconciler", "merge_probe", "NodeRegistry", "validate_fields"]
