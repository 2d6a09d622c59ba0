from core.outcomes import STAY
from screens.base import EntityDeleteScreen, EntityEditScreen, Field, FormScreen, PickerScreen, Row
from services.patient_service import find_patient
from services.record_service import (
    create_medical_record,
    delete_medical_record,
    get_medical_record,
    list_medical_records,
    update_medical_record,
)
from services.validators import parse_id, validate_medical_record

RECORD_COLUMNS = ("ID", "Patient", "Diagnosis", "Prescription")


def record_fields():
    return [
        Field("patient_id", "Patient ID", required=True),
        Field("doctor_notes", "Doctor Notes", required=True),
        Field("nurse_notes", "Nurse Notes"),
        Field("diagnosis", "Diagnosis", required=True),
        Field("prescription", "Prescription"),
    ]


def record_payload(values: dict) -> dict:
    payload = {name: value.strip() for name, value in values.items()}
    payload["patient_id"] = parse_id(payload["patient_id"])
    return payload


def _patient_name(db, patient_id: int) -> str:
    patient = find_patient(db, patient_id)
    return patient.full_name if patient else f"#{patient_id}"


def record_rows(db):
    rows = []
    for r in list_medical_records(db):
        name = _patient_name(db, r.patient_id)
        rows.append(Row(
            r.id,
            (str(r.id), f"{name} (#{r.patient_id})", r.diagnosis, r.prescription or "-"),
        ))
    return rows


class RecordStoreScreen(FormScreen):
    title = "Store Medical Record"
    submit_label = "Save Record"
    validator = staticmethod(validate_medical_record)

    def make_fields(self):
        return record_fields()

    def commit(self, values, ctx):
        record = create_medical_record(ctx.db, **record_payload(values))
        self.reset()
        self.show_success(f"Medical record {record.id} stored for patient {record.patient_id}.")
        return STAY


class RecordRetrieveScreen(PickerScreen):
    title = "Retrieve Medical Records"
    columns = RECORD_COLUMNS
    empty_message = "No medical records found."

    def load_rows(self, db):
        return record_rows(db)

    def describe(self, row_id, db):
        r = get_medical_record(db, row_id)
        return [
            f"Record #{r.id} - Patient: {_patient_name(db, r.patient_id)} (#{r.patient_id})",
            f"Diagnosis: {r.diagnosis}",
            f"Doctor Notes: {r.doctor_notes}",
            f"Nurse Notes: {r.nurse_notes or '-'}",
            f"Prescription: {r.prescription or '-'}",
        ]


class RecordUpdateScreen(EntityEditScreen):
    title = "Update Medical Record"
    entity_label = "Medical record"
    columns = RECORD_COLUMNS
    empty_message = "No medical records found."
    validator = staticmethod(validate_medical_record)

    def load_rows(self, db):
        return record_rows(db)

    def make_fields(self):
        return record_fields()

    def fetch_values(self, db, row_id):
        r = get_medical_record(db, row_id)
        return {
            "patient_id": r.patient_id,
            "doctor_notes": r.doctor_notes,
            "nurse_notes": r.nurse_notes,
            "diagnosis": r.diagnosis,
            "prescription": r.prescription,
        }

    def save(self, db, row_id, values):
        update_medical_record(db, row_id, **record_payload(values))


class RecordDeleteScreen(EntityDeleteScreen):
    title = "Delete Medical Record"
    help_text = "Type: Search | Up/Down: Select | Enter: Delete | Esc: Back"
    entity_label = "Medical record"
    columns = RECORD_COLUMNS
    empty_message = "No medical records found."

    def load_rows(self, db):
        return record_rows(db)

    def remove(self, db, row_id):
        delete_medical_record(db, row_id)
