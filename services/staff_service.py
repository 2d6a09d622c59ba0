from datetime import date

from sqlalchemy.orm import Session

from core.errors import StoreError
from models.shift import Shift
from models.staff import Staff
from services import crud

STAFF_ROLES = ("Doctor", "Nurse", "Admin", "Technician")
SHIFTS = ("Morning", "Afternoon", "Night")

SHIFT_HOURS = {
    "Morning": "6am - 2pm",
    "Afternoon": "2pm - 10pm",
    "Night": "10pm - 6am",
}


# ------------------------------------------
# Staff members
# ------------------------------------------
def create_staff(db: Session, *, name: str, role: str, phone_number: str, address: str, email: str | None = None) -> Staff:
    return crud.create(
        db, Staff,
        name=name, role=role, phone_number=phone_number, address=address, email=email or None,
    )


def get_staff(db: Session, staff_id: int) -> Staff:
    return crud.get_by_id(db, Staff, staff_id)


def list_staff(db: Session) -> list[Staff]:
    return crud.list_all(db, Staff)


def update_staff(db: Session, staff_id: int, **fields) -> Staff:
    if "email" in fields:
        fields["email"] = fields["email"] or None
    return crud.update(db, Staff, staff_id, **fields)


def delete_staff(db: Session, staff_id: int) -> None:
    """Remove a staff member; refused while any shift still references them."""
    staff = get_staff(db, staff_id)

    shifts = db.query(Shift).filter(Shift.staff_id == staff.id).count()
    if shifts:
        raise StoreError(
            StoreError.CONSTRAINT,
            f"{staff.name} still has {shifts} assigned shift(s); staff with shifts cannot be removed.",
        )

    crud.delete(db, Staff, staff.id)


# ------------------------------------------
# Shift assignment
# ------------------------------------------
def assign_shift(db: Session, staff_id: int, shift_date: date, shift: str) -> Shift:
    return crud.create(db, Shift, staff_id=staff_id, date=shift_date, shift=shift)


def list_shifts_for_staff(db: Session, staff_id: int) -> list[Shift]:
    return (
        db.query(Shift)
        .filter(Shift.staff_id == staff_id)
        .order_by(Shift.date.asc(), Shift.id.asc())
        .all()
    )
