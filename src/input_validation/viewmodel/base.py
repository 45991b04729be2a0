"""Base class for validated, change-notifying view models.

A concrete view model declares its properties with ``observable()`` and
``validated()`` and registers one validator per validated property in
``declare_validators``:

    >>> class TextViewModel(BaseViewModel):
    ...     text = validated("You have to enter something", default="", value_type=str)
    ...
    ...     def declare_validators(self, register):
    ...         register("text", lambda: len(self.text) > 0)

Construction runs ``declare_validators`` and then checks that every validated
property got exactly one validator; a mismatch raises ConfigurationError and
no object is returned.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from input_validation.core.properties import (
    ObservableProperty,
    declared_properties,
    observable,
    observable_properties,
)
from input_validation.validation.config import (
    DEFAULT_LAST_ERROR,
    LAST_ERROR_PROPERTY,
    NO_ERROR,
)
from input_validation.validation.models import PropertyResult, ValidationReport
from input_validation.validation.registry import ValidationRegistry
from .events import PropertyChangedCallback, PropertyChangedEvent

logger = logging.getLogger(__name__)

RegisterFunc = Callable[[str, Callable[[], bool]], None]
DeclareValidatorsFunc = Callable[["BaseViewModel", RegisterFunc], None]


class BaseViewModel:
    """Base class for view models with validated, change-notifying properties.

    Subclasses that define ``__init__`` must call ``super().__init__()`` before
    assigning any property.

    Args:
        declare_validators: Optional function ``(view_model, register)`` used
            instead of the ``declare_validators`` method for this instance.

    Raises:
        ConfigurationError: If the registered validators don't match the
            validated properties declared on the class.
    """

    last_error = observable(default=DEFAULT_LAST_ERROR, value_type=str, readonly=True)

    def __init__(self, declare_validators: Optional[DeclareValidatorsFunc] = None) -> None:
        self._properties: Dict[str, ObservableProperty] = observable_properties(type(self))
        self._property_changed = PropertyChangedEvent()
        self._registry = ValidationRegistry(type(self))

        if declare_validators is not None:
            declare_validators(self, self._registry.register)
        else:
            self.declare_validators(self._registry.register)

        self._registry.check_complete(len(declared_properties(type(self))))
        logger.debug(
            "%s ready with %d validated properties", type(self).__name__, len(self._registry)
        )

    def declare_validators(self, register: RegisterFunc) -> None:
        """Register one validator per validated property.

        Override in subclasses and call ``register(name, predicate)`` for every
        property declared with ``validated()``. The default registers nothing.
        """

    # ------------------------------------------------------------------
    # Validation queries
    # ------------------------------------------------------------------

    def validity_of(self, property_name: str) -> Optional[str]:
        """Run validation for a property.

        The property's validator is called on every query. A validator that
        raises counts as failing.

        Args:
            property_name: Name of the property to validate.

        Returns:
            The property's error message if its validator fails, None if it
            passes or the property has no validator.

        Side effects:
            ``last_error`` is set to "" on success and to the error message
            on failure. Unvalidated properties leave it untouched.
        """
        entry = self._registry.query(property_name)
        if entry is None:
            return NO_ERROR

        try:
            valid = bool(entry.validator())
        except Exception:  # pylint: disable=broad-exception-caught
            logger.debug(
                "Validator for %s.%s raised; treating as invalid",
                type(self).__name__,
                property_name,
                exc_info=True,
            )
            valid = False

        if valid:
            self._set_value(LAST_ERROR_PROPERTY, "")
            return NO_ERROR

        self._set_value(LAST_ERROR_PROPERTY, entry.error_message)
        return entry.error_message

    def __getitem__(self, property_name: str) -> Optional[str]:
        """Binding-layer form of ``validity_of``: ``vm["text"]``."""
        return self.validity_of(property_name)

    # indexing is by property name only; not a sequence
    __iter__ = None

    def validate_all(self) -> ValidationReport:
        """Validate every property that has a validator.

        Properties are queried through ``validity_of`` in registration order,
        so ``last_error`` ends up reflecting the last registered property.
        """
        results = []
        for name in self._registry.names():
            message = self.validity_of(name)
            results.append(PropertyResult(name=name, passed=message is None, message=message))
        return ValidationReport(model_name=type(self).__name__, results=results)

    @property
    def is_valid(self) -> bool:
        """True if every validated property currently passes."""
        return not self.validate_all().has_errors()

    @property
    def validated_properties(self) -> Tuple[str, ...]:
        """Names of the properties with a validator, in registration order."""
        return tuple(self._registry.names())

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    @property
    def property_changed(self) -> PropertyChangedEvent:
        """Event fired with the property name after every accepted change."""
        return self._property_changed

    def subscribe(self, callback: PropertyChangedCallback) -> Callable[[], None]:
        """Shortcut for ``property_changed.subscribe``."""
        return self._property_changed.subscribe(callback)

    def unsubscribe(self, callback: PropertyChangedCallback) -> None:
        """Shortcut for ``property_changed.unsubscribe``."""
        self._property_changed.unsubscribe(callback)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _set_value(self, property_name: str, new_value: Any) -> bool:
        """Set a property's value and fire ``property_changed``.

        The value is accepted only if it has the property's declared type and
        differs from the current value. Nothing else writes property values
        or fires ``property_changed``.

        Args:
            property_name: Name of an observable property of this class.
            new_value: Proposed value.

        Returns:
            True if the value was stored and subscribers notified.

        Raises:
            AttributeError: If the class has no observable property by that name.
        """
        prop = self._properties.get(property_name)
        if prop is None:
            raise AttributeError(
                f"'{type(self).__name__}' object has no observable property '{property_name}'"
            )

        if not prop.accepts(new_value):
            logger.debug(
                "Ignoring %s for %s.%s: not a %s",
                type(new_value).__name__,
                type(self).__name__,
                property_name,
                prop.value_type,
            )
            return False

        current = prop.__get__(self, type(self))
        if current is new_value or current == new_value:
            return False

        self.__dict__[property_name] = new_value
        self._property_changed.fire(property_name)
        return True
