from .user import User
from .patient import Patient
from .staff import Staff
from .shift import Shift
from .medical_record import MedicalRecord
from .invoice import Invoice

__all__ = ["User", "Patient", "Staff", "Shift", "MedicalRecord", "Invoice"]
