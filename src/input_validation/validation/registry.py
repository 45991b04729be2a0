"""Per-instance validator registry.

This module holds the mapping from property name to validation rule for one
view model:
- register(): Pairs a validator with the property's declared error message
- query(): Looks a rule up (absence means "always valid")
- check_complete(): Construction-time guard that every declared property has a validator
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterator, List, Optional

from input_validation.core.errors import (
    DeclarationNotFoundError,
    DuplicateValidatorError,
    InvalidValidatorArgumentError,
    ValidatorCountMismatchError,
)
from input_validation.core.properties import declared_properties, find_declaration
from .models import ValidationEntry

logger = logging.getLogger(__name__)


class ValidationRegistry:
    """Validation rules for one view model, keyed by property name.

    The registry reads PropertyDeclarations from ``owner_type`` to find the
    error message for each property. Entries are never replaced or removed.

    Examples:
        >>> registry = ValidationRegistry(LoginViewModel)
        >>> registry.register("user_name", lambda: bool(vm.user_name))
        >>> registry.query("user_name").error_message
        'You have to enter something'
    """

    def __init__(self, owner_type: type) -> None:
        self.owner_type = owner_type
        self._entries: Dict[str, ValidationEntry] = {}

    def register(self, property_name: str, validator: Callable[[], bool]) -> None:
        """Register the validator for a declared property.

        Args:
            property_name: Name of a property declared with ``validated()``.
            validator: Zero-argument predicate, truthy when the property is valid.

        Raises:
            InvalidValidatorArgumentError: If either argument is None or the
                validator is not callable.
            DeclarationNotFoundError: If the owner type declares no validated
                property with that name.
            DuplicateValidatorError: If the property already has a validator.
        """
        if property_name is None or validator is None:
            raise InvalidValidatorArgumentError("property_name and validator are required")
        if not callable(validator):
            raise InvalidValidatorArgumentError(
                f"Validator for \"{property_name}\" must be callable, got {type(validator).__name__}"
            )

        declaration = find_declaration(self.owner_type, property_name)
        if declaration is None:
            raise DeclarationNotFoundError(property_name, self.owner_type.__name__)

        if property_name in self._entries:
            raise DuplicateValidatorError(property_name)

        self._entries[property_name] = ValidationEntry(validator, declaration.error_message)
        logger.debug("Registered validator for %s.%s", self.owner_type.__name__, property_name)

    def query(self, property_name: str) -> Optional[ValidationEntry]:
        """Return the rule for ``property_name``, or None if it has none."""
        return self._entries.get(property_name)

    def check_complete(self, declared_count: Optional[int] = None) -> None:
        """Verify that every declared validated property has a validator.

        Args:
            declared_count: Number of validated properties the owner type
                declares. Computed from the owner type when omitted.

        Raises:
            ValidatorCountMismatchError: If the registered count differs.
        """
        declared = [d.name for d in declared_properties(self.owner_type)]
        expected = len(declared) if declared_count is None else declared_count

        if len(self._entries) != expected:
            missing = [name for name in declared if name not in self._entries]
            raise ValidatorCountMismatchError(expected, len(self._entries), missing)

        logger.debug(
            "All %d validated properties of %s have validators",
            expected,
            self.owner_type.__name__,
        )

    def names(self) -> List[str]:
        """Return registered property names in registration order."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, property_name: object) -> bool:
        return property_name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
