from sqlalchemy.orm import Session

from core.errors import StoreError
from models.invoice import Invoice
from models.medical_record import MedicalRecord
from models.patient import Patient
from services import crud


PATIENT_FIELDS = (
    "first_name",
    "last_name",
    "date_of_birth",
    "gender",
    "address",
    "phone_number",
    "email",
    "medical_history",
    "allergies",
    "current_medications",
)

OPTIONAL_PATIENT_FIELDS = {"email", "medical_history", "allergies", "current_medications"}


# ------------------------------------------
# Create a new patient
# ------------------------------------------
def create_patient(db: Session, **fields) -> Patient:
    return crud.create(db, Patient, **_patient_fields(fields))


# ------------------------------------------
# Fetch patients
# ------------------------------------------
def get_patient(db: Session, patient_id: int) -> Patient:
    return crud.get_by_id(db, Patient, patient_id)


def find_patient(db: Session, patient_id: int) -> Patient | None:
    return crud.find(db, Patient, patient_id)


def list_patients(db: Session) -> list[Patient]:
    return crud.list_all(db, Patient)


# ------------------------------------------
# Update patient info
# ------------------------------------------
def update_patient(db: Session, patient_id: int, **fields) -> Patient:
    return crud.update(db, Patient, patient_id, **_patient_fields(fields))


# ------------------------------------------
# Delete a patient with no dependent rows
# ------------------------------------------
def delete_patient(db: Session, patient_id: int) -> None:
    patient = get_patient(db, patient_id)

    records = db.query(MedicalRecord).filter(MedicalRecord.patient_id == patient.id).count()
    invoices = db.query(Invoice).filter(Invoice.patient_id == patient.id).count()
    if records or invoices:
        raise StoreError(
            StoreError.CONSTRAINT,
            f"Patient {patient.id} still has {records} medical record(s) and "
            f"{invoices} invoice(s); delete those first.",
        )

    crud.delete(db, Patient, patient.id)


def _patient_fields(fields: dict) -> dict:
    unknown = set(fields) - set(PATIENT_FIELDS)
    if unknown:
        raise TypeError(f"Unknown patient field(s): {', '.join(sorted(unknown))}")
    return {name: (value or None) if name in OPTIONAL_PATIENT_FIELDS else value for name, value in fields.items()}
