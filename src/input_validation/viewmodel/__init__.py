"""View model base class and change notification."""

from __future__ import annotations

from .base import BaseViewModel
from .events import PropertyChangedEvent

__all__ = ["BaseViewModel", "PropertyChangedEvent"]
