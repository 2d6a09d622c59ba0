"""Field-level checks run before any store write.

Every validator takes the raw form buffers (strings) and returns a mapping of
field name to message; an empty mapping means the fields may be written.
References to other rows are looked up in the store here, so a bad id never
reaches the write path.
"""
import math
import re
from datetime import date, datetime

from sqlalchemy.orm import Session

from core.errors import ValidationError
from core.time_utils import today
from models.patient import Patient
from models.staff import Staff
from services import crud
from services.staff_service import SHIFTS, STAFF_ROLES

DATE_FORMAT = "%Y-%m-%d"
GENDERS = ("Male", "Female", "Other")

PHONE_RE = re.compile(r"^\+?[0-9][0-9 \-]*$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# SQLite INTEGER is a signed 64-bit value
MAX_INTEGER = 2**63 - 1
# bcrypt only hashes the first 72 bytes
MAX_PASSWORD_BYTES = 72


def _value(fields: dict, name: str) -> str:
    return (fields.get(name) or "").strip()


def _require(fields: dict, errors: dict, labels: dict) -> None:
    for name, label in labels.items():
        if not _value(fields, name):
            errors[name] = f"{label} cannot be empty"


def parse_date(text: str) -> date:
    return datetime.strptime(text.strip(), DATE_FORMAT).date()


def parse_id(text) -> int | None:
    try:
        value = int(str(text).strip())
    except (TypeError, ValueError):
        return None
    return value if 0 < value <= MAX_INTEGER else None


def raise_for_errors(errors: dict) -> None:
    if errors:
        raise ValidationError(errors)


def _check_phone(fields, errors, name="phone_number"):
    phone = _value(fields, name)
    if name in errors or not phone:
        return
    digits = re.sub(r"\D", "", phone)
    if not PHONE_RE.match(phone) or not 7 <= len(digits) <= 15:
        errors[name] = "Phone Number must have 7-15 digits"


def _check_email(fields, errors, name="email"):
    email = _value(fields, name)
    if email and not EMAIL_RE.match(email):
        errors[name] = "Email address is not valid"


def _check_choice(fields, errors, name, label, choices):
    value = _value(fields, name)
    if name not in errors and value not in choices:
        errors[name] = f"{label} must be one of {', '.join(choices)}"


def _check_reference(fields, errors, name, label, model, db):
    if name in errors:
        return
    ref_id = parse_id(_value(fields, name))
    if ref_id is None:
        errors[name] = f"Invalid {label} ID format"
    elif db is not None and not crud.exists(db, model, ref_id):
        errors[name] = f"{label} with ID {ref_id} doesn't exist"


# ------------------------------------------
# Credentials
# ------------------------------------------
def validate_credentials(fields: dict, db: Session | None = None) -> dict:
    errors = {}
    _require(fields, errors, {"username": "Username", "password": "Password"})
    if "password" not in errors and len(fields["password"].encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors["password"] = f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
    return errors


def validate_registration(fields: dict, db: Session | None = None) -> dict:
    errors = validate_credentials(fields)
    if "password" not in errors and fields.get("password") != fields.get("confirm_password"):
        errors["confirm_password"] = "Passwords do not match"
    return errors


# ------------------------------------------
# Patients
# ------------------------------------------
def validate_patient(fields: dict, db: Session | None = None) -> dict:
    errors = {}
    _require(fields, errors, {
        "first_name": "First Name",
        "last_name": "Last Name",
        "date_of_birth": "Date of Birth",
        "gender": "Gender",
        "address": "Address",
        "phone_number": "Phone Number",
    })

    if "date_of_birth" not in errors:
        try:
            dob = parse_date(_value(fields, "date_of_birth"))
        except ValueError:
            errors["date_of_birth"] = "Date of Birth must be a date in YYYY-MM-DD format"
        else:
            if dob > today():
                errors["date_of_birth"] = "Date of Birth cannot be in the future"

    _check_choice(fields, errors, "gender", "Gender", GENDERS)
    _check_phone(fields, errors)
    _check_email(fields, errors)
    return errors


# ------------------------------------------
# Staff and shifts
# ------------------------------------------
def validate_staff(fields: dict, db: Session | None = None) -> dict:
    errors = {}
    _require(fields, errors, {
        "name": "Name",
        "role": "Role",
        "phone_number": "Phone Number",
        "address": "Address",
    })
    _check_choice(fields, errors, "role", "Role", STAFF_ROLES)
    _check_phone(fields, errors)
    _check_email(fields, errors)
    return errors


def validate_shift(fields: dict, db: Session | None = None) -> dict:
    errors = {}
    _require(fields, errors, {"staff_id": "Staff ID", "date": "Date", "shift": "Shift"})
    _check_reference(fields, errors, "staff_id", "Staff", Staff, db)

    if "date" not in errors:
        try:
            parse_date(_value(fields, "date"))
        except ValueError:
            errors["date"] = "Date must be in YYYY-MM-DD format"

    _check_choice(fields, errors, "shift", "Shift", SHIFTS)
    return errors


# ------------------------------------------
# Medical records
# ------------------------------------------
def validate_medical_record(fields: dict, db: Session | None = None) -> dict:
    errors = {}
    _require(fields, errors, {
        "patient_id": "Patient ID",
        "doctor_notes": "Doctor Notes",
        "diagnosis": "Diagnosis",
    })
    _check_reference(fields, errors, "patient_id", "Patient", Patient, db)
    return errors


# ------------------------------------------
# Invoices
# ------------------------------------------
def validate_invoice(fields: dict, db: Session | None = None) -> dict:
    errors = {}
    _require(fields, errors, {
        "patient_id": "Patient ID",
        "item": "Item",
        "quantity": "Quantity",
        "cost": "Cost",
    })
    _check_reference(fields, errors, "patient_id", "Patient", Patient, db)

    if "quantity" not in errors:
        try:
            quantity = int(_value(fields, "quantity"))
        except ValueError:
            errors["quantity"] = "Quantity must be a whole number"
        else:
            if quantity <= 0:
                errors["quantity"] = "Quantity must be greater than zero"
            elif quantity > MAX_INTEGER:
                errors["quantity"] = "Quantity is too large"

    if "cost" not in errors:
        try:
            cost = float(_value(fields, "cost"))
        except ValueError:
            errors["cost"] = "Cost must be a number"
        else:
            if not math.isfinite(cost):
                errors["cost"] = "Cost must be a number"
            elif cost < 0:
                errors["cost"] = "Cost cannot be negative"
    return errors
