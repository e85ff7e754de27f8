import pytest

from skyline_config.core.schema import DEFAULT_CONFIG
from skyline_config.field_accessor import (
    ButtonType,
    FieldAccessor,
    PlaceholderField,
    ValidationErrorKind,
    ValidationField,
)


class _Provider:
    def __init__(self, config):
        self.current = config


def test_every_identifier_resolves_to_text():
    fields = FieldAccessor(_Provider(DEFAULT_CONFIG))
    for enum_cls in (ValidationField, ValidationErrorKind, PlaceholderField, ButtonType):
        for identifier in enum_cls:
            value = fields.resolve(identifier)
            assert isinstance(value, str) and value


def test_lookups_map_to_configured_values():
    fields = FieldAccessor(_Provider(DEFAULT_CONFIG))
    assert fields.validation_pattern(ValidationField.AIRPORT_CODE) == "^[A-Z]{3}$"
    assert fields.error_message(ValidationErrorKind.ARRIVAL_BEFORE_DEPARTURE) == (
        "Arrival must be after departure"
    )
    assert fields.placeholder(PlaceholderField.PASSENGER_NAME) == "JOHN DOE"
    assert fields.button_text(ButtonType.RESET_BUTTON) == "Reset to Original"


def test_string_identifiers_are_accepted():
    fields = FieldAccessor(_Provider(DEFAULT_CONFIG))
    assert fields.placeholder("seat") == "12A"
    assert fields.button_text("cancel_button") == "CANCEL"


def test_unknown_identifiers_raise():
    fields = FieldAccessor(_Provider(DEFAULT_CONFIG))
    with pytest.raises(ValueError):
        fields.validation_pattern("boarding_group")
    with pytest.raises(TypeError):
        fields.resolve("flight_number")


def test_reads_provider_on_every_call():
    provider = _Provider(DEFAULT_CONFIG)
    fields = FieldAccessor(provider)
    assert fields.placeholder(PlaceholderField.AIRLINE) == "OMAN AIR"

    placeholders = DEFAULT_CONFIG.ui_config.placeholders.model_copy(update={"airline": "SWISS"})
    ui = DEFAULT_CONFIG.ui_config.model_copy(update={"placeholders": placeholders})
    provider.current = DEFAULT_CONFIG.model_copy(update={"ui_config": ui})

    assert fields.placeholder(PlaceholderField.AIRLINE) == "SWISS"


@pytest.mark.parametrize(
    "field, value, expected",
    [
        (ValidationField.FLIGHT_NUMBER, "WY0153", True),
        (ValidationField.FLIGHT_NUMBER, "wy0153", False),
        (ValidationField.AIRPORT_CODE, "ZRH", True),
        (ValidationField.AIRPORT_CODE, "ZURICH", False),
        (ValidationField.SEAT_NUMBER, "12A", True),
        (ValidationField.GATE, "A12", True),
        (ValidationField.GATE, "A-12", False),
    ],
)
def test_matches_uses_current_pattern(field, value, expected):
    assert FieldAccessor(_Provider(DEFAULT_CONFIG)).matches(field, value) is expected
