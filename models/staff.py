from sqlalchemy import Column, Integer, String
from core.database import Base

class Staff(Base):
    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String, nullable=False)
    role = Column(String, nullable=False)  # Doctor, Nurse, Admin, Technician

    phone_number = Column(String, nullable=False)
    email = Column(String, nullable=True)
    address = Column(String, nullable=False)

    def __repr__(self):
        return f"<Staff {self.id} - {self.name} ({self.role})>"
