"""Shared pytest configuration, fixtures and sample view models."""

from typing import List

import pytest

from input_validation import BaseViewModel, observable, validated


class TextViewModel(BaseViewModel):
    """Single validated text property that starts out empty."""

    text = validated("You have to enter something", default="", value_type=str)

    def declare_validators(self, register):
        register("text", lambda: len(self.text) > 0)


class NullableTextViewModel(BaseViewModel):
    """Same as TextViewModel but the text starts out as None."""

    text = validated("You have to enter something", value_type=str)

    def declare_validators(self, register):
        register("text", lambda: self.text is not None and len(self.text) > 0)


class LoginViewModel(BaseViewModel):
    """Two validated properties and one plain observable property."""

    user_name = validated("User name is required", default="", value_type=str)
    age = validated("Age must be between 0 and 150", default=0, value_type=int)
    remember_me = observable(default=False, value_type=bool)

    def declare_validators(self, register):
        register("user_name", lambda: bool(self.user_name.strip()))
        register("age", lambda: 0 <= self.age <= 150)


class ChangeRecorder:
    """Subscriber that records every property name it is notified about."""

    def __init__(self) -> None:
        self.names: List[str] = []

    def __call__(self, property_name: str) -> None:
        self.names.append(property_name)

    def count(self, property_name: str) -> int:
        return self.names.count(property_name)


@pytest.fixture
def text_vm() -> TextViewModel:
    return TextViewModel()


@pytest.fixture
def login_vm() -> LoginViewModel:
    return LoginViewModel()


@pytest.fixture
def recorder() -> ChangeRecorder:
    return ChangeRecorder()
