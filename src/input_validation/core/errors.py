"""Exception types raised while declaring and wiring up validated view models.

Only configuration mistakes are exceptions. A property that fails its
validator is a normal query result (see ``BaseViewModel.validity_of``) and is
never raised.
"""

from __future__ import annotations

from typing import Sequence


class InputValidationError(Exception):
    """Base exception for the package."""


class ConfigurationError(InputValidationError):
    """A view model's declarations and registered validators disagree.

    Raised during construction. The object is never returned to the caller;
    the declarations must be fixed.
    """


class InvalidValidatorArgumentError(ConfigurationError, ValueError):
    """``register`` was called with a missing property name or validator."""


class DeclarationNotFoundError(ConfigurationError, LookupError):
    """No validated property with the given name is declared on the type."""

    def __init__(self, property_name: str, owner: str) -> None:
        super().__init__(f"Property with name \"{property_name}\" wasn't found on {owner}.")
        self.property_name = property_name
        self.owner = owner


class DuplicateValidatorError(ConfigurationError, KeyError):
    """A validator was registered twice for the same property."""

    def __init__(self, property_name: str) -> None:
        super().__init__(f"A validator is already registered for property \"{property_name}\".")
        self.property_name = property_name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class ValidatorCountMismatchError(ConfigurationError):
    """Registered validators don't match the validated properties declared on the type."""

    def __init__(self, expected: int, actual: int, missing: Sequence[str] = ()) -> None:
        message = (
            f"Number of validators ({actual}) must match the number of properties "
            f"declared with validated() ({expected})"
        )
        if missing:
            message += f". Missing validators for: {', '.join(missing)}"
        super().__init__(message)
        self.expected = expected
        self.actual = actual
        self.missing = list(missing)


__all__ = [
    "InputValidationError",
    "ConfigurationError",
    "InvalidValidatorArgumentError",
    "DeclarationNotFoundError",
    "DuplicateValidatorError",
    "ValidatorCountMismatchError",
]
