from sqlalchemy.orm import Session

from models.invoice import Invoice
from services import crud


def create_invoice(db: Session, *, patient_id: int, item: str, quantity: int, cost: float) -> Invoice:
    return crud.create(db, Invoice, patient_id=patient_id, item=item, quantity=quantity, cost=cost)


def get_invoice(db: Session, invoice_id: int) -> Invoice:
    return crud.get_by_id(db, Invoice, invoice_id)


def list_invoices(db: Session) -> list[Invoice]:
    return crud.list_all(db, Invoice)


def list_invoices_for_patient(db: Session, patient_id: int) -> list[Invoice]:
    return (
        db.query(Invoice)
        .filter(Invoice.patient_id == patient_id)
        .order_by(Invoice.id.asc())
        .all()
    )


def update_invoice(db: Session, invoice_id: int, **fields) -> Invoice:
    return crud.update(db, Invoice, invoice_id, **fields)


def invoice_total(invoice: Invoice) -> float:
    return round(invoice.quantity * invoice.cost, 2)


def grand_total(invoices: list[Invoice]) -> float:
    return round(sum(invoice_total(i) for i in invoices), 2)
