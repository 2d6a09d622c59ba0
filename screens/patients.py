from core.outcomes import Replace
from screens.base import EntityDeleteScreen, EntityEditScreen, Field, FormScreen, PickerScreen, Row
from services.invoice_service import list_invoices_for_patient
from services.patient_service import (
    create_patient,
    delete_patient,
    get_patient,
    list_patients,
    update_patient,
)
from services.record_service import list_records_for_patient
from services.validators import GENDERS, parse_date, validate_patient

PATIENT_HELP = (
    "Tab/Arrows: Switch Fields | Enter: Submit | Esc: Back\n"
    "For Gender: Type 'M' for Male, 'F' for Female, 'O' for Other"
)


def patient_fields():
    return [
        Field("first_name", "First Name", required=True),
        Field("last_name", "Last Name", required=True),
        Field("date_of_birth", "Date of Birth (YYYY-MM-DD)", required=True),
        Field("gender", "Gender", required=True, choices=GENDERS),
        Field("address", "Address", required=True),
        Field("phone_number", "Phone Number", required=True),
        Field("email", "Email"),
        Field("medical_history", "Medical History"),
        Field("allergies", "Allergies"),
        Field("current_medications", "Current Medications"),
    ]


def patient_payload(values: dict) -> dict:
    """Convert validated form buffers into column values."""
    payload = {name: value.strip() for name, value in values.items()}
    payload["date_of_birth"] = parse_date(payload["date_of_birth"])
    return payload


def patient_values(patient) -> dict:
    return {
        "first_name": patient.first_name,
        "last_name": patient.last_name,
        "date_of_birth": patient.date_of_birth.isoformat(),
        "gender": patient.gender,
        "address": patient.address,
        "phone_number": patient.phone_number,
        "email": patient.email,
        "medical_history": patient.medical_history,
        "allergies": patient.allergies,
        "current_medications": patient.current_medications,
    }


def patient_rows(db):
    return [
        Row(p.id, (str(p.id), p.full_name, p.date_of_birth.isoformat(), p.gender, p.phone_number))
        for p in list_patients(db)
    ]


PATIENT_COLUMNS = ("ID", "Name", "Date of Birth", "Gender", "Phone")


class PatientAddScreen(FormScreen):
    title = "Add New Patient"
    help_text = PATIENT_HELP
    validator = staticmethod(validate_patient)

    def make_fields(self):
        return patient_fields()

    def commit(self, values, ctx):
        patient = create_patient(ctx.db, **patient_payload(values))
        listing = PatientListScreen()
        listing.show_success(f"Patient {patient.full_name} added with ID {patient.id}.")
        return Replace(listing)


class PatientListScreen(PickerScreen):
    title = "Patient List"
    columns = PATIENT_COLUMNS
    empty_message = "No patients found."

    def load_rows(self, db):
        return patient_rows(db)

    def describe(self, row_id, db):
        p = get_patient(db, row_id)
        records = list_records_for_patient(db, p.id)
        invoices = list_invoices_for_patient(db, p.id)
        return [
            f"Patient #{p.id}: {p.full_name}",
            f"Date of Birth: {p.date_of_birth.isoformat()}    Gender: {p.gender}",
            f"Address: {p.address}",
            f"Phone: {p.phone_number}    Email: {p.email or '-'}",
            f"Medical History: {p.medical_history or '-'}",
            f"Allergies: {p.allergies or '-'}",
            f"Current Medications: {p.current_medications or '-'}",
            f"Medical Records: {len(records)}    Invoices: {len(invoices)}",
        ]


class PatientUpdateScreen(EntityEditScreen):
    title = "Update Patient"
    entity_label = "Patient"
    columns = PATIENT_COLUMNS
    empty_message = "No patients found."
    validator = staticmethod(validate_patient)

    def load_rows(self, db):
        return patient_rows(db)

    def make_fields(self):
        return patient_fields()

    def fetch_values(self, db, row_id):
        return patient_values(get_patient(db, row_id))

    def save(self, db, row_id, values):
        update_patient(db, row_id, **patient_payload(values))


class PatientDeleteScreen(EntityDeleteScreen):
    title = "Delete Patient"
    help_text = "Type: Search | Up/Down: Select | Enter: Delete | Esc: Back"
    entity_label = "Patient"
    columns = PATIENT_COLUMNS
    empty_message = "No patients found."

    def load_rows(self, db):
        return patient_rows(db)

    def remove(self, db, row_id):
        delete_patient(db, row_id)
