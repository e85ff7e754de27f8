"""Boarding pass configuration schema.

The JSON form uses camelCase keys; the Python side uses snake_case
attributes. Every key is required when decoding and unknown keys are
ignored. Models are frozen, so a configuration can only be replaced as a
whole, never edited in place.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .errors import DecodeError, SchemaInvariantViolation


class ConfigurationSource(Enum):
    """Which loading stage produced the current configuration."""

    BASELINE = "baseline"
    CACHE = "cache"
    REMOTE = "remote"


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ConfirmationCodeRange(_Frozen):
    min: int
    max: int

    @model_validator(mode="after")
    def _check_bounds(self) -> "ConfirmationCodeRange":
        if self.min > self.max:
            raise ValueError(f"min ({self.min}) greater than max ({self.max})")
        return self


class ValidationRules(_Frozen):
    flight_number_pattern: str
    airport_code_pattern: str
    seat_number_pattern: str
    gate_pattern: str
    confirmation_code_length_range: ConfirmationCodeRange
    terminal_max_length: int

    @field_validator(
        "flight_number_pattern",
        "airport_code_pattern",
        "seat_number_pattern",
        "gate_pattern",
    )
    @classmethod
    def _compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"invalid regular expression {value!r}: {exc}") from exc
        return value


class TimeFormats(_Frozen):
    supported_input_formats: tuple[str, ...]
    output_format: str
    locale: str


class BusinessRules(_Frozen):
    max_flight_duration_hours: int
    allow_past_dates_hours: int
    min_flight_duration_minutes: int
    auto_suggestion_enabled: bool
    real_time_validation_enabled: bool


class Placeholders(_Frozen):
    flight_number: str
    confirmation_code: str
    airline: str
    departure_airport: str
    arrival_airport: str
    departure_city: str
    arrival_city: str
    seat: str
    gate: str
    terminal: str
    passenger_name: str


class ButtonText(_Frozen):
    save_flight_button: str
    cancel_button: str
    reset_button: str
    add_date_button: str
    add_time_button: str


class ErrorMessages(_Frozen):
    flight_number_invalid: str
    airport_code_invalid: str
    airport_code_required: str
    airport_code_same_as_other: str
    confirmation_code_invalid: str
    seat_number_invalid: str
    gate_invalid: str
    terminal_invalid: str
    arrival_before_departure: str
    flight_too_long: str
    departure_too_old: str


class UIConfig(_Frozen):
    placeholders: Placeholders
    button_text: ButtonText
    error_messages: ErrorMessages
    haptic_feedback_enabled: bool


class ParsingMethod(str, Enum):
    OPEN_ROUTER = "openrouter"
    APPLE_INTELLIGENCE = "apple_intelligence"
    VISION_FRAMEWORK = "vision_framework"


class OpenRouterParsingConfig(_Frozen):
    preferred_model: str
    max_tokens: int
    temperature: float
    max_cost_per_request: float


class ParsingConfig(_Frozen):
    parsing_method: ParsingMethod
    open_router_config: OpenRouterParsingConfig
    enable_fallbacks: bool
    fallback_order: tuple[ParsingMethod, ...]


class BoardingPassConfig(_Frozen):
    """Complete configuration for boarding pass validation and UI text."""

    validation_rules: ValidationRules
    time_formats: TimeFormats
    business_rules: BusinessRules
    ui_config: UIConfig
    parsing_config: ParsingConfig


# Built-in fallback used when even the bundled resource cannot be read.
DEFAULT_PAYLOAD: dict = {
    "validationRules": {
        "flightNumberPattern": "^[A-Z]{2,3}[0-9]{1,4}$",
        "airportCodePattern": "^[A-Z]{3}$",
        "seatNumberPattern": "^[0-9]{1,3}[A-Z]$",
        "gatePattern": "^[A-Z]?[0-9]{1,3}[A-Z]?$",
        "confirmationCodeLengthRange": {"min": 4, "max": 8},
        "terminalMaxLength": 20,
    },
    "timeFormats": {
        "supportedInputFormats": ["HH:mm", "H:mm", "h:mm a", "hh:mm a"],
        "outputFormat": "HH:mm",
        "locale": "en_US_POSIX",
    },
    "businessRules": {
        "maxFlightDurationHours": 24,
        "allowPastDatesHours": 24,
        "minFlightDurationMinutes": 30,
        "autoSuggestionEnabled": True,
        "realTimeValidationEnabled": True,
    },
    "uiConfig": {
        "placeholders": {
            "flightNumber": "WY0153",
            "confirmationCode": "ABC123",
            "airline": "OMAN AIR",
            "departureAirport": "MCT",
            "arrivalAirport": "ZRH",
            "departureCity": "Muscat",
            "arrivalCity": "Zurich",
            "seat": "12A",
            "gate": "A12",
            "terminal": "3",
            "passengerName": "JOHN DOE",
        },
        "buttonText": {
            "saveFlightButton": "SAVE FLIGHT",
            "cancelButton": "CANCEL",
            "resetButton": "Reset to Original",
            "addDateButton": "N/A",
            "addTimeButton": "N/A",
        },
        "errorMessages": {
            "flightNumberInvalid": "Invalid format (e.g., AA123, WY0153)",
            "airportCodeInvalid": "Must be 3 letters (e.g., LAX, JFK)",
            "airportCodeRequired": "Airport code is required",
            "airportCodeSameAsOther": "Cannot be same as departure",
            "confirmationCodeInvalid": "Usually 6 alphanumeric characters",
            "seatNumberInvalid": "Invalid format (e.g., 12A, 3F)",
            "gateInvalid": "Invalid format (e.g., A12, C3)",
            "terminalInvalid": "Invalid format (e.g., 1, T2, North)",
            "arrivalBeforeDeparture": "Arrival must be after departure",
            "flightTooLong": "Flight duration seems unusually long",
            "departureTooOld": "Departure date seems too far in the past",
        },
        "hapticFeedbackEnabled": True,
    },
    "parsingConfig": {
        "parsingMethod": "openrouter",
        "openRouterConfig": {
            "preferredModel": "openai/gpt-4o",
            "maxTokens": 2000,
            "temperature": 0.1,
            "maxCostPerRequest": 0.05,
        },
        "enableFallbacks": True,
        "fallbackOrder": ["openrouter", "apple_intelligence", "vision_framework"],
    },
}

DEFAULT_CONFIG = BoardingPassConfig.model_validate(DEFAULT_PAYLOAD)


def decode_configuration(payload: bytes | str) -> BoardingPassConfig:
    """Decode JSON bytes into a configuration.

    Raises:
        DecodeError: payload is not valid JSON
        SchemaInvariantViolation: JSON is valid but breaks the schema
    """
    try:
        return BoardingPassConfig.model_validate_json(payload)
    except ValidationError as exc:
        if any(error["type"] == "json_invalid" for error in exc.errors()):
            raise DecodeError(f"Malformed configuration payload: {exc}") from exc
        raise SchemaInvariantViolation(f"Configuration violates schema: {exc}") from exc


def encode_configuration(config: BoardingPassConfig, pretty: bool = False) -> bytes:
    return config.model_dump_json(by_alias=True, indent=2 if pretty else None).encode("utf-8")
