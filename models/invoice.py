from sqlalchemy import Column, Integer, String, Float, ForeignKey
from core.database import Base

class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True, index=True)

    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)

    item = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    cost = Column(Float, nullable=False)  # unit cost

    def __repr__(self):
        return f"<Invoice {self.id} for Patient {self.patient_id}: {self.item}>"
