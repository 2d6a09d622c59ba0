from sqlalchemy.orm import Session

from models.medical_record import MedicalRecord
from services import crud


def create_medical_record(
    db: Session,
    *,
    patient_id: int,
    doctor_notes: str,
    diagnosis: str,
    nurse_notes: str | None = None,
    prescription: str | None = None,
) -> MedicalRecord:
    return crud.create(
        db, MedicalRecord,
        patient_id=patient_id,
        doctor_notes=doctor_notes,
        nurse_notes=nurse_notes or None,
        diagnosis=diagnosis,
        prescription=prescription or None,
    )


def get_medical_record(db: Session, record_id: int) -> MedicalRecord:
    return crud.get_by_id(db, MedicalRecord, record_id)


def list_medical_records(db: Session) -> list[MedicalRecord]:
    return crud.list_all(db, MedicalRecord)


def list_records_for_patient(db: Session, patient_id: int) -> list[MedicalRecord]:
    return (
        db.query(MedicalRecord)
        .filter(MedicalRecord.patient_id == patient_id)
        .order_by(MedicalRecord.id.asc())
        .all()
    )


def update_medical_record(db: Session, record_id: int, **fields) -> MedicalRecord:
    for optional in ("nurse_notes", "prescription"):
        if optional in fields:
            fields[optional] = fields[optional] or None
    return crud.update(db, MedicalRecord, record_id, **fields)


def delete_medical_record(db: Session, record_id: int) -> None:
    crud.delete(db, MedicalRecord, record_id)
