from sqlalchemy import Column, Integer, ForeignKey, Text
from core.database import Base

class MedicalRecord(Base):
    __tablename__ = "medical_records"
    __label__ = "Medical record"

    id = Column(Integer, primary_key=True, index=True)

    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)

    doctor_notes = Column(Text, nullable=False)
    nurse_notes = Column(Text, nullable=True)
    diagnosis = Column(Text, nullable=False)
    prescription = Column(Text, nullable=True)

    def __repr__(self):
        return f"<MedicalRecord {self.id} for Patient {self.patient_id}>"
