from datetime import date

import pytest

from doglicense.api.schemas.application import CertificateFile, DraftApplication
from doglicense.api.services.validation import (
    coerce_date,
    fields_for_step,
    parse_number_safe,
    sanitize_us_phone,
    validate_all,
    validate_fields,
    validate_step,
    years_before,
)


def field_error(name: str, value, today: date, certificate=None):
    draft = DraftApplication(**{name: value}) if name != "vaccination_certificate" else DraftApplication()
    return validate_fields(draft, certificate, [name], today=today).get(name)


@pytest.mark.parametrize("value", ["5551234567", "(555) 123-4567", "555.123.4567", "+1 555 123 4567"])
def test_phone_numbers_that_normalize(value):
    result = sanitize_us_phone(value)
    assert result.ok
    assert result.digits == "5551234567"
    assert result.formatted == "(555) 123-4567"


@pytest.mark.parametrize("value", ["123", "", "555123456789", "0551234567", "1551234567"])
def test_phone_numbers_rejected(value, today):
    assert not sanitize_us_phone(value).ok
    assert field_error("owner_phone", value, today) == "Please enter a valid US phone number"


@pytest.mark.parametrize(
    "value, message",
    [
        ("J", "Owner name must be at least 2 characters"),
        ("x" * 101, "Owner name must be less than 100 characters"),
    ],
)
def test_owner_name_length(value, message, today):
    assert field_error("owner_name", value, today) == message


def test_owner_address_bounds(today):
    assert field_error("owner_address", "1 Main", today) == "Please provide a complete address"
    assert field_error("owner_address", "a" * 201, today) == "Address must be less than 200 characters"
    assert field_error("owner_address", "123 Main St, Springfield", today) is None


@pytest.mark.parametrize(
    "name, limit, label",
    [("dog_name", 50, "Dog name"), ("dog_breed", 50, "Dog breed"), ("dog_color", 30, "Dog color")],
)
def test_dog_text_fields(name, limit, label, today):
    assert field_error(name, "", today) == f"{label} is required"
    assert field_error(name, "x" * (limit + 1), today) == f"{label} must be less than {limit} characters"
    assert field_error(name, "x" * limit, today) is None


@pytest.mark.parametrize("value", ["3", "30", "0.5", " 4 "])
def test_dog_age_accepted(value, today):
    assert field_error("dog_age", value, today) is None


@pytest.mark.parametrize("value", ["31", "0", "-2", "abc", "", "nan", "inf"])
def test_dog_age_rejected(value, today):
    assert field_error("dog_age", value, today) == "Dog age must be a positive number (max 30 years)"


def test_parse_number_safe():
    assert parse_number_safe("4") == 4.0
    assert parse_number_safe("four") is None
    assert parse_number_safe("   ") is None


def test_rabies_date_window(today):
    assert field_error("last_rabies_shot_date", "2024-10-19", today) is None  # 2 years ago
    assert field_error("last_rabies_shot_date", "2023-10-19", today) is None  # exactly 3 years ago
    expired = "Rabies vaccination must be within the last 3 years"
    assert field_error("last_rabies_shot_date", "2023-10-18", today) == expired  # 3 years and 1 day ago
    assert field_error("last_rabies_shot_date", "2026-10-20", today) == expired  # tomorrow


@pytest.mark.parametrize("value", ["", "not-a-date", "2025-02-30", "10/19/2025"])
def test_rabies_date_must_parse(value, today):
    assert field_error("last_rabies_shot_date", value, today) == "Please enter a valid date"


def test_coerce_date_accepts_iso_datetimes():
    assert coerce_date("2025-05-01T10:00:00Z") == date(2025, 5, 1)
    assert coerce_date("2025-05-01") == date(2025, 5, 1)


def test_years_before_leap_day():
    assert years_before(date(2028, 2, 29), 3) == date(2025, 2, 28)
    assert years_before(date(2026, 10, 19), 3) == date(2023, 10, 19)


def test_certificate_rules(today, pdf_certificate):
    assert field_error("vaccination_certificate", None, today) == "Vaccination certificate is required"
    assert field_error("vaccination_certificate", None, today, pdf_certificate) is None

    big = CertificateFile(name="scan.png", content_type="image/png", size=5 * 1024 * 1024 + 1)
    assert field_error("vaccination_certificate", None, today, big) == "File size must be less than 5MB"

    text = CertificateFile(name="notes.txt", content_type="text/plain", size=100)
    assert field_error("vaccination_certificate", None, today, text) == "File must be PDF, JPEG, or PNG format"


def test_step_validation_only_reports_its_own_fields(today):
    errors = validate_step(1, DraftApplication(), None, today=today)
    assert set(errors) == {"owner_name", "owner_address", "owner_phone"}
    assert validate_step(4, DraftApplication(), None, today=today) == {}


def test_validate_all_passes_for_complete_form(today, owner_values, dog_values, pdf_certificate):
    draft = DraftApplication(**owner_values, **dog_values, last_rabies_shot_date="2025-03-01")
    assert validate_all(draft, pdf_certificate, today=today) == {}


def test_step_field_groups_are_disjoint():
    groups = [set(fields_for_step(step)) for step in range(1, 5)]
    assert sum(len(group) for group in groups) == len(set().union(*groups))
    assert fields_for_step(0) == [] and fields_for_step(5) == []
