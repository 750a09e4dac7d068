# garage/schemas/user.py
from datetime import date
from typing import Optional
from garage.schemas.common import CamelModel


class UserUpdates(CamelModel):
    """Editable profile fields. Anything omitted is left unchanged."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    garage_name: Optional[str] = None
    user_role: Optional[str] = None
    email: Optional[str] = None
    alternate_email: Optional[str] = None
    phone_number: Optional[str] = None
    alternate_phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    date_of_birth: Optional[date] = None
    blood_group: Optional[str] = None
    employee_id: Optional[str] = None
    department: Optional[str] = None
    date_of_joining: Optional[date] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    emergency_contact_relation: Optional[str] = None
    id_proof_type: Optional[str] = None
    id_proof_number: Optional[str] = None
    profile_picture: Optional[str] = None


class UserUpdateRequest(CamelModel):
    user_uid: str
    updates: UserUpdates


class EmployeeCreate(CamelModel):
    parent_user_uid: str
    first_name: str
    last_name: str
    user_role: str
    email: str
    phone_number: str
    employee_id: Optional[str] = None
