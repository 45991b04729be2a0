"""Validation rules for view models.

- **Models**: ValidationEntry, PropertyResult, ValidationReport
- **Registry**: ValidationRegistry - per-instance validators and the completeness check
- **Config**: Constants and the YAML values loader (import from .config)

Usage:
    >>> from input_validation.validation import ValidationRegistry
    >>> registry = ValidationRegistry(TextViewModel)
    >>> registry.register("text", lambda: len(vm.text) > 0)
    >>> registry.check_complete()
"""

from __future__ import annotations

from .models import PropertyResult, ValidationEntry, ValidationReport
from .registry import ValidationRegistry

__all__ = [
    # Data models
    "PropertyResult",
    "ValidationEntry",
    "ValidationReport",
    # Registry
    "ValidationRegistry",
]
