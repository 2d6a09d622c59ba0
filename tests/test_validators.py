from datetime import date

import pytest

from core.errors import ValidationError
from services import validators
from services.patient_service import create_patient
from services.staff_service import create_staff
from services.validators import (
    raise_for_errors,
    validate_credentials,
    validate_invoice,
    validate_medical_record,
    validate_patient,
    validate_registration,
    validate_shift,
    validate_staff,
)
from tests.helpers import JANE

STAFF = {"name": "Dr. House", "role": "Doctor", "phone_number": "+1 555 0100 22", "address": "221B Baker St"}
INVOICE = {"patient_id": "1", "item": "X-Ray", "quantity": "2", "cost": "49.50"}
RECORD = {"patient_id": "1", "doctor_notes": "Stable", "diagnosis": "Flu"}


@pytest.fixture
def jane(db):
    return create_patient(db, **{**JANE, "date_of_birth": date(1990, 1, 1)})


def test_valid_patient_has_no_errors():
    assert validate_patient(JANE) == {}


@pytest.mark.parametrize(
    "field", ["first_name", "last_name", "date_of_birth", "gender", "address", "phone_number"]
)
def test_missing_required_patient_field_is_reported(field):
    errors = validate_patient({**JANE, field: ""})
    assert field in errors


def test_whitespace_only_counts_as_missing():
    assert "first_name" in validate_patient({**JANE, "first_name": "   "})


def test_optional_patient_fields_may_be_blank():
    fields = {**JANE, "email": "", "medical_history": "", "allergies": "", "current_medications": ""}
    assert validate_patient(fields) == {}


def test_date_of_birth_must_parse():
    assert "date_of_birth" in validate_patient({**JANE, "date_of_birth": "1990-13-01"})
    assert "date_of_birth" in validate_patient({**JANE, "date_of_birth": "01/01/1990"})


def test_date_of_birth_cannot_be_in_the_future(monkeypatch):
    monkeypatch.setattr(validators, "today", lambda: date(2024, 6, 1))
    assert validate_patient({**JANE, "date_of_birth": "2024-06-01"}) == {}
    errors = validate_patient({**JANE, "date_of_birth": "2024-06-02"})
    assert errors["date_of_birth"] == "Date of Birth cannot be in the future"


def test_gender_phone_and_email_formats():
    errors = validate_patient({**JANE, "gender": "Unknown", "phone_number": "call me", "email": "jane@"})
    assert set(errors) == {"gender", "phone_number", "email"}
    assert "phone_number" in validate_patient({**JANE, "phone_number": "12345"})


def test_staff_rules():
    assert validate_staff(STAFF) == {}
    assert "role" in validate_staff({**STAFF, "role": "Janitor"})
    assert set(validate_staff({})) == {"name", "role", "phone_number", "address"}


def test_credentials_and_registration():
    assert validate_credentials({"username": "alice", "password": "pw"}) == {}
    assert set(validate_credentials({"username": " ", "password": ""})) == {"username", "password"}

    fields = {"username": "alice", "password": "pw123", "confirm_password": "pw124"}
    assert validate_registration(fields) == {"confirm_password": "Passwords do not match"}
    assert validate_registration({**fields, "confirm_password": "pw123"}) == {}


def test_invoice_numbers(db, jane):
    assert validate_invoice(INVOICE, db) == {}
    assert validate_invoice({**INVOICE, "cost": "0"}, db) == {}
    assert "quantity" in validate_invoice({**INVOICE, "quantity": "0"}, db)
    assert "quantity" in validate_invoice({**INVOICE, "quantity": "-1"}, db)
    assert "quantity" in validate_invoice({**INVOICE, "quantity": "1.5"}, db)
    assert "cost" in validate_invoice({**INVOICE, "cost": "-0.01"}, db)
    assert "cost" in validate_invoice({**INVOICE, "cost": "abc"}, db)
    assert "cost" in validate_invoice({**INVOICE, "cost": "nan"}, db)


def test_references_are_checked_in_the_store(db, jane):
    assert validate_medical_record(RECORD, db) == {}

    errors = validate_medical_record({**RECORD, "patient_id": "99"}, db)
    assert errors == {"patient_id": "Patient with ID 99 doesn't exist"}

    assert validate_invoice({**INVOICE, "patient_id": "abc"}, db)["patient_id"] == "Invalid Patient ID format"


def test_shift_requires_existing_staff(db):
    fields = {"staff_id": "1", "date": "2025-03-01", "shift": "Night"}
    assert "staff_id" in validate_shift(fields, db)

    create_staff(db, **STAFF)
    assert validate_shift(fields, db) == {}
    assert "shift" in validate_shift({**fields, "shift": "Evening"}, db)
    assert "date" in validate_shift({**fields, "date": "tomorrow"}, db)


def test_raise_for_errors():
    raise_for_errors({})
    with pytest.raises(ValidationError) as excinfo:
        raise_for_errors({"item": "Item cannot be empty"})
    assert excinfo.value.errors == {"item": "Item cannot be empty"}


@pytest.mark.parametrize("text, expected", [
    ("7", 7),
    (" 12 ", 12),
    (str(2**63 - 1), 2**63 - 1),
    (str(2**63), None),
    ("99999999999999999999", None),
    ("0", None),
    ("-3", None),
    ("1e3", None),
])
def test_parse_id_stays_within_integer_column_range(text, expected):
    assert validators.parse_id(text) == expected


def test_oversized_reference_id_is_a_format_error(db, jane):
    errors = validate_medical_record({**RECORD, "patient_id": "99999999999999999999"}, db)
    assert errors == {"patient_id": "Invalid Patient ID format"}
    fields = {"staff_id": str(2**64), "date": "2025-03-01", "shift": "Night"}
    assert validate_shift(fields, db) == {"staff_id": "Invalid Staff ID format"}


def test_quantity_must_fit_the_integer_column(db, jane):
    assert validate_invoice({**INVOICE, "quantity": str(2**63 - 1)}, db) == {}
    errors = validate_invoice({**INVOICE, "quantity": "99999999999999999999"}, db)
    assert errors == {"quantity": "Quantity is too large"}


def test_password_limited_to_72_bytes():
    assert validate_credentials({"username": "alice", "password": "a" * 72}) == {}
    assert validate_credentials({"username": "alice", "password": "a" * 73}) == {
        "password": "Password must be at most 72 bytes"
    }
    # multi-byte characters count by their encoded length
    assert "password" in validate_credentials({"username": "alice", "password": "é" * 37})

    fields = {"username": "alice", "password": "a" * 80, "confirm_password": "a" * 80}
    assert validate_registration(fields) == {"password": "Password must be at most 72 bytes"}
