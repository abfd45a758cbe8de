from __future__ import annotations

import re
from datetime import UTC, datetime

from bulkplan.domain.parsing import evaluate_field, parse_date
from bulkplan.domain.schema import FieldRule, FieldType


def test_required_empty_value_is_an_error() -> None:
    outcome = evaluate_field("   ", FieldRule(field="email", required=True, type=FieldType.EMAIL))

    assert outcome.error == "Required field is empty"


def test_optional_empty_value_is_none() -> None:
    outcome = evaluate_field("", FieldRule(field="phone", type=FieldType.NUMBER, min=5))

    assert outcome.ok
    assert outcome.value is None


def test_optional_empty_value_goes_through_transform() -> None:
    rule = FieldRule(field="status", choices=("active",), transform=lambda v: v or "active")

    assert evaluate_field(None, rule).value == "active"


def test_email_format_is_checked() -> None:
    rule = FieldRule(field="email", type=FieldType.EMAIL)

    assert evaluate_field("not-an-email", rule).error == "Invalid email format"
    assert evaluate_field(" a@b.co ", rule).value == "a@b.co"


def test_number_is_coerced_and_bounded() -> None:
    rule = FieldRule(field="budget", type=FieldType.NUMBER, min=0, max=100)

    assert evaluate_field("42.5", rule).value == 42.5
    assert evaluate_field("abc", rule).error == "Must be a valid number"
    assert evaluate_field("nan", rule).error == "Must be a valid number"
    assert evaluate_field("-1", rule).error == "Must be at least 0"
    assert evaluate_field("1000", rule).error == "Must be at most 100"


def test_number_bounds_are_not_applied_as_lengths() -> None:
    rule = FieldRule(field="budget", type=FieldType.NUMBER, min=0, max=10)

    assert evaluate_field("5.000000001", rule).ok


def test_date_is_returned_as_utc_datetime() -> None:
    rule = FieldRule(field="start_date", type=FieldType.DATE)

    assert evaluate_field("2024-01-15", rule).value == datetime(2024, 1, 15, tzinfo=UTC)
    assert evaluate_field("01/15/2024", rule).value == datetime(2024, 1, 15, tzinfo=UTC)
    assert evaluate_field("2024-01-15T10:00:00+02:00", rule).value == datetime(
        2024, 1, 15, 8, tzinfo=UTC
    )
    assert evaluate_field("someday", rule).error == "Invalid date format"


def test_parse_date_accepts_zulu_suffix() -> None:
    assert parse_date("2024-03-01T12:30:00Z") == datetime(2024, 3, 1, 12, 30, tzinfo=UTC)
    assert parse_date("2024-02-30") is None


def test_boolean_tokens() -> None:
    rule = FieldRule(field="active", type=FieldType.BOOLEAN)

    assert evaluate_field("YES", rule).value is True
    assert evaluate_field("0", rule).value is False
    assert evaluate_field("maybe", rule).error == "Must be true/false, yes/no, or 1/0"


def test_pattern_is_checked() -> None:
    rule = FieldRule(field="zip", pattern=re.compile(r"^\d{5}$"))

    assert evaluate_field("1234", rule).error == "Invalid format"
    assert evaluate_field("12345", rule).value == "12345"


def test_choices_are_checked() -> None:
    rule = FieldRule(field="role", choices=("admin", "client"))

    assert evaluate_field("boss", rule).error == "Must be one of: admin, client"


def test_length_bounds_apply_to_strings() -> None:
    rule = FieldRule(field="first_name", min=2, max=4)

    assert evaluate_field("A", rule).error == "Must be at least 2 characters"
    assert evaluate_field("Alexander", rule).error == "Must be at most 4 characters"
    assert evaluate_field("Alex", rule).value == "Alex"


def test_pattern_is_checked_before_choices() -> None:
    rule = FieldRule(field="code", pattern=re.compile(r"^[a-z]+$"), choices=("abc",))

    assert evaluate_field("ABC", rule).error == "Invalid format"


def test_transform_receives_trimmed_value() -> None:
    rule = FieldRule(field="name", transform=str.upper)

    assert evaluate_field("  acme ", rule).value == "ACME"
