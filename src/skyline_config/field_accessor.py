"""Symbolic lookup of validation patterns and UI text.

Every identifier below maps onto a required schema entry, so lookups are
total: a decoded configuration always has an answer. Passing anything
outside these enumerations is a caller bug and raises.
"""

from __future__ import annotations

import re
from enum import Enum

from .core.ports import ConfigurationProvider


class ValidationField(Enum):
    FLIGHT_NUMBER = "flight_number"
    AIRPORT_CODE = "airport_code"
    SEAT_NUMBER = "seat_number"
    GATE = "gate"


class ValidationErrorKind(Enum):
    FLIGHT_NUMBER_INVALID = "flight_number_invalid"
    AIRPORT_CODE_INVALID = "airport_code_invalid"
    AIRPORT_CODE_REQUIRED = "airport_code_required"
    AIRPORT_CODE_SAME_AS_OTHER = "airport_code_same_as_other"
    CONFIRMATION_CODE_INVALID = "confirmation_code_invalid"
    SEAT_NUMBER_INVALID = "seat_number_invalid"
    GATE_INVALID = "gate_invalid"
    TERMINAL_INVALID = "terminal_invalid"
    ARRIVAL_BEFORE_DEPARTURE = "arrival_before_departure"
    FLIGHT_TOO_LONG = "flight_too_long"
    DEPARTURE_TOO_OLD = "departure_too_old"


class PlaceholderField(Enum):
    FLIGHT_NUMBER = "flight_number"
    CONFIRMATION_CODE = "confirmation_code"
    AIRLINE = "airline"
    DEPARTURE_AIRPORT = "departure_airport"
    ARRIVAL_AIRPORT = "arrival_airport"
    DEPARTURE_CITY = "departure_city"
    ARRIVAL_CITY = "arrival_city"
    SEAT = "seat"
    GATE = "gate"
    TERMINAL = "terminal"
    PASSENGER_NAME = "passenger_name"


class ButtonType(Enum):
    SAVE_FLIGHT_BUTTON = "save_flight_button"
    CANCEL_BUTTON = "cancel_button"
    RESET_BUTTON = "reset_button"
    ADD_DATE_BUTTON = "add_date_button"
    ADD_TIME_BUTTON = "add_time_button"


Identifier = ValidationField | ValidationErrorKind | PlaceholderField | ButtonType


class FieldAccessor:
    """Reads the provider's current configuration on every call.

    Never hold on to a returned string across an await or a UI refresh;
    ask again and the newest reconciled value comes back.
    """

    def __init__(self, provider: ConfigurationProvider):
        self._provider = provider

    def validation_pattern(self, field: ValidationField | str) -> str:
        field = ValidationField(field)
        rules = self._provider.current.validation_rules
        return getattr(rules, f"{field.value}_pattern")

    def error_message(self, error: ValidationErrorKind | str) -> str:
        error = ValidationErrorKind(error)
        return getattr(self._provider.current.ui_config.error_messages, error.value)

    def placeholder(self, field: PlaceholderField | str) -> str:
        field = PlaceholderField(field)
        return getattr(self._provider.current.ui_config.placeholders, field.value)

    def button_text(self, button: ButtonType | str) -> str:
        button = ButtonType(button)
        return getattr(self._provider.current.ui_config.button_text, button.value)

    def resolve(self, identifier: Identifier) -> str:
        if isinstance(identifier, ValidationField):
            return self.validation_pattern(identifier)
        if isinstance(identifier, ValidationErrorKind):
            return self.error_message(identifier)
        if isinstance(identifier, PlaceholderField):
            return self.placeholder(identifier)
        if isinstance(identifier, ButtonType):
            return self.button_text(identifier)
        raise TypeError(f"Unsupported configuration identifier: {identifier!r}")

    def matches(self, field: ValidationField | str, value: str) -> bool:
        """True if value satisfies the current pattern for field."""
        return re.match(self.validation_pattern(field), value) is not None
