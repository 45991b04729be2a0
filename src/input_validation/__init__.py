"""Input Validation: validated, change-notifying view models.

A view model declares validated properties with ``validated()``, registers one
validator per property in ``declare_validators`` and is queried by a
data-binding layer through ``validity_of`` (or ``vm[name]``). Every accepted
property change is announced through ``property_changed``.
"""

__all__ = [
    "__version__",
    "BaseViewModel",
    "ConfigurationError",
    "observable",
    "validated",
]

__version__ = "0.1.0"

from .core.errors import ConfigurationError  # noqa: E402
from .core.properties import observable, validated  # noqa: E402
from .viewmodel import BaseViewModel  # noqa: E402
