"""Property descriptors for view models.

Two kinds of class-level property declarations are provided:

- ``observable(...)``: a settable property whose changes are announced through
  the owning view model's change notification.
- ``validated(error_message, ...)``: an observable property that additionally
  carries a PropertyDeclaration, i.e. must have exactly one validator
  registered for it.

Every assignment goes through the owning view model's ``_set_value`` mutation
primitive, so a descriptor never writes the value slot itself.

Usage:
    >>> class LoginViewModel(BaseViewModel):
    ...     user_name = validated("You have to enter something", default="", value_type=str)
    ...     remember_me = observable(default=False, value_type=bool)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Type, Union

ValueType = Union[Type[Any], Tuple[Type[Any], ...]]


@dataclass(frozen=True)
class PropertyDeclaration:
    """Declares that a property is validated and what to show when it isn't.

    Attributes:
        name: Property name the declaration is attached to.
        error_message: Message reported when the property's validator fails.

    Examples:
        >>> PropertyDeclaration(name="text", error_message="You have to enter something")
    """

    name: str
    error_message: str


class ObservableProperty:
    """Descriptor for a change-notifying property.

    Attributes:
        default: Value returned before the first accepted assignment.
        value_type: Type (or tuple of types) an assigned value must be an
            instance of. None accepts any value.
        readonly: If True, public assignment raises AttributeError; only the
            owning view model can change the value through ``_set_value``.
        name: Attribute name, filled in when the owning class is created.
    """

    def __init__(
        self,
        default: Any = None,
        value_type: Optional[ValueType] = None,
        *,
        readonly: bool = False,
    ) -> None:
        self.default = default
        self.value_type = value_type
        self.readonly = readonly
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return instance.__dict__.get(self.name, self.default)

    def __set__(self, instance: Any, value: Any) -> None:
        if self.readonly:
            raise AttributeError(
                f"property '{self.name}' of '{type(instance).__name__}' object is read-only"
            )
        instance._set_value(self.name, value)

    def accepts(self, value: Any) -> bool:
        """Return True if ``value`` has this property's declared type.

        ``bool`` values are only accepted where ``bool`` itself is declared,
        not for ``int`` properties.
        """
        if self.value_type is None:
            return True
        types = self.value_type if isinstance(self.value_type, tuple) else (self.value_type,)
        if isinstance(value, bool) and int in types and bool not in types:
            return False
        return isinstance(value, types)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, default={self.default!r})"


class ValidatedProperty(ObservableProperty):
    """Observable property that must have a validator registered for it."""

    def __init__(
        self,
        error_message: str,
        default: Any = None,
        value_type: Optional[ValueType] = None,
    ) -> None:
        if not isinstance(error_message, str) or not error_message:
            raise ValueError("error_message must be a non-empty string")
        super().__init__(default=default, value_type=value_type)
        self.error_message = error_message

    @property
    def declaration(self) -> PropertyDeclaration:
        """The PropertyDeclaration carried by this property."""
        if self.name is None:
            raise AttributeError("validated() property is not attached to a class")
        return PropertyDeclaration(name=self.name, error_message=self.error_message)


def observable(
    default: Any = None,
    value_type: Optional[ValueType] = None,
    *,
    readonly: bool = False,
) -> ObservableProperty:
    """Declare a change-notifying property."""
    return ObservableProperty(default=default, value_type=value_type, readonly=readonly)


def validated(
    error_message: str,
    default: Any = None,
    value_type: Optional[ValueType] = None,
) -> ValidatedProperty:
    """Declare a validated, change-notifying property.

    Args:
        error_message: Message reported when the property's validator fails.
        default: Value returned before the first accepted assignment.
        value_type: Type an assigned value must be an instance of (None = any).

    Raises:
        ValueError: If ``error_message`` is empty or not a string.
    """
    return ValidatedProperty(error_message, default=default, value_type=value_type)


def observable_properties(cls: type) -> Dict[str, ObservableProperty]:
    """Return the observable properties of ``cls`` keyed by name.

    Base class properties come first, each class's properties in definition
    order. A subclass that redefines a name replaces the base descriptor; a
    subclass that shadows it with a plain attribute removes it.
    """
    found: Dict[str, ObservableProperty] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, ObservableProperty):
                found[name] = attr
            elif name in found:
                del found[name]
    return found


def declared_properties(cls: type) -> List[PropertyDeclaration]:
    """Return the PropertyDeclarations of ``cls`` in definition order."""
    return [
        prop.declaration
        for prop in observable_properties(cls).values()
        if isinstance(prop, ValidatedProperty)
    ]


def find_declaration(cls: type, property_name: str) -> Optional[PropertyDeclaration]:
    """Return the PropertyDeclaration for ``property_name``, or None if not validated."""
    prop = observable_properties(cls).get(property_name)
    if isinstance(prop, ValidatedProperty):
        return prop.declaration
    return None


__all__ = [
    "PropertyDeclaration",
    "ObservableProperty",
    "ValidatedProperty",
    "observable",
    "validated",
    "observable_properties",
    "declared_properties",
    "find_declaration",
]
