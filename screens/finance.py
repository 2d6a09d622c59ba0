from dataclasses import replace

from core.outcomes import STAY
from screens.base import EntityEditScreen, Field, FormScreen, PickerScreen, Row
from services.invoice_service import (
    create_invoice,
    get_invoice,
    grand_total,
    invoice_total,
    list_invoices,
    update_invoice,
)
from services.patient_service import find_patient
from services.validators import parse_id, validate_invoice

INVOICE_COLUMNS = ("ID", "Patient", "Item", "Qty", "Cost", "Total")


def invoice_fields():
    return [
        Field("patient_id", "Patient ID", required=True),
        Field("item", "Item", required=True),
        Field("quantity", "Quantity", required=True),
        Field("cost", "Unit Cost", required=True),
    ]


def invoice_payload(values: dict) -> dict:
    return {
        "patient_id": parse_id(values["patient_id"]),
        "item": values["item"].strip(),
        "quantity": int(values["quantity"].strip()),
        "cost": float(values["cost"].strip()),
    }


def money(amount: float) -> str:
    return f"{amount:.2f}"


def invoice_rows(db):
    rows = []
    for i in list_invoices(db):
        patient = find_patient(db, i.patient_id)
        name = patient.full_name if patient else f"#{i.patient_id}"
        rows.append(Row(
            i.id,
            (str(i.id), f"{name} (#{i.patient_id})", i.item, str(i.quantity), money(i.cost), money(invoice_total(i))),
        ))
    return rows


class InvoiceCreateScreen(FormScreen):
    title = "Generate Invoice"
    submit_label = "Create Invoice"
    validator = staticmethod(validate_invoice)

    def make_fields(self):
        return invoice_fields()

    def commit(self, values, ctx):
        invoice = create_invoice(ctx.db, **invoice_payload(values))
        self.reset()
        self.show_success(
            f"Invoice {invoice.id} created for patient {invoice.patient_id}. Total: {money(invoice_total(invoice))}"
        )
        return STAY


class InvoiceViewScreen(PickerScreen):
    title = "View Invoices"
    columns = INVOICE_COLUMNS
    empty_message = "No invoices found."

    def __init__(self):
        super().__init__()
        self.total = 0.0

    def load_rows(self, db):
        self.total = grand_total(list_invoices(db))
        return invoice_rows(db)

    def describe(self, row_id, db):
        i = get_invoice(db, row_id)
        patient = find_patient(db, i.patient_id)
        return [
            f"Invoice #{i.id} - Patient: {patient.full_name if patient else '-'} (#{i.patient_id})",
            f"Item: {i.item}",
            f"Quantity: {i.quantity}    Unit Cost: {money(i.cost)}",
            f"Total: {money(invoice_total(i))}",
        ]

    def render_model(self):
        layout = super().render_model()
        detail = layout.detail or (f"Grand Total: {money(self.total)}",)
        return replace(layout, detail=detail)


class InvoiceUpdateScreen(EntityEditScreen):
    title = "Update Invoice"
    entity_label = "Invoice"
    columns = INVOICE_COLUMNS
    empty_message = "No invoices found."
    validator = staticmethod(validate_invoice)

    def load_rows(self, db):
        return invoice_rows(db)

    def make_fields(self):
        return invoice_fields()

    def fetch_values(self, db, row_id):
        i = get_invoice(db, row_id)
        return {"patient_id": i.patient_id, "item": i.item, "quantity": i.quantity, "cost": i.cost}

    def save(self, db, row_id, values):
        update_invoice(db, row_id, **invoice_payload(values))
