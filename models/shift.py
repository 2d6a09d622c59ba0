# models/shift.py

from sqlalchemy import Column, Integer, String, Date, ForeignKey
from core.database import Base

class Shift(Base):
    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, index=True)

    # No cascade: staff with shifts cannot be deleted
    staff_id = Column(Integer, ForeignKey("staff.id"), nullable=False, index=True)

    date = Column(Date, nullable=False)
    shift = Column(String, nullable=False)  # Morning, Afternoon, Night

    def __repr__(self):
        return f"<Shift {self.shift} on {self.date} for Staff {self.staff_id}>"
