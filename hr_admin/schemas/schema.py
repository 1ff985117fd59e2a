# hr_admin/schemas/schema.py
import uuid
from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic.alias_generators import to_camel

# Date fields stay loosely typed: the service normalizes them and turns
# unparseable input into "absent" rather than a validation error.
DateLike = Union[datetime, date, str, None]


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys while using snake_case attributes"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EducationBase(CamelModel):
    """Schema for one education record"""
    institution: Optional[str] = Field(None, description="School or college", examples=["St. Xavier's"])
    university: Optional[str] = Field(None, description="University or board", examples=["Mumbai University"])
    qualification: Optional[str] = Field(None, description="Qualification", examples=["BSc"])
    year_completed: Optional[Union[int, str]] = Field(None, description="Year completed", examples=["2019"])


class EducationResponse(EducationBase):
    """Schema for education response"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: uuid.UUID
    employee_id: uuid.UUID
    year_completed: Optional[str] = None


class EmployeeFields(CamelModel):
    """Employee attributes shared by create and update payloads"""
    first_name: Optional[str] = Field(None, examples=["Asha"])
    last_name: Optional[str] = Field(None, examples=["Rao"])
    date_of_birth: DateLike = Field(None, examples=["1994-05-17"])
    gender: Optional[str] = None
    aadhaar_number: Optional[str] = None
    pan_number: Optional[str] = None
    email: Optional[str] = Field(None, examples=["asha.rao@example.com"])
    phone_number: Optional[str] = None
    emergency_contact: Optional[str] = None
    photo: Optional[str] = None
    blood_group: Optional[str] = None
    present_address: Optional[str] = None
    permanent_address: Optional[str] = None
    designation: Optional[str] = Field(None, examples=["Accountant"])
    department: Optional[str] = Field(None, examples=["Finance"])
    date_of_joining: DateLike = Field(None, examples=["2024-01-15"])
    work_location: Optional[str] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None

    # Either key carries the education list; educationDetails is the legacy name
    education: Optional[List[Optional[EducationBase]]] = None
    education_details: Optional[List[Optional[EducationBase]]] = None


class EmployeeCreate(EmployeeFields):
    """Schema for creating an employee"""
    generate_temp: bool = Field(False, description="Whether the operator generated a temporary password")
    temp_password: Optional[SecretStr] = Field(None, description="Temporary password, hashed server-side")


class EmployeeUpdate(EmployeeFields):
    """Schema for partially updating an employee

    Only keys sent by the client are applied (see ``model_fields_set``).
    """


class EmployeeResponse(CamelModel):
    """Schema for employee response"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: uuid.UUID
    emp_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    gender: Optional[str] = None
    aadhaar_number: Optional[str] = None
    pan_number: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    emergency_contact: Optional[str] = None
    photo: Optional[str] = None
    blood_group: Optional[str] = None
    present_address: Optional[str] = None
    permanent_address: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    date_of_joining: Optional[datetime] = None
    work_location: Optional[str] = None
    bank_name: Optional[str] = None
    account_number: Optional[str] = None
    ifsc_code: Optional[str] = None
    password: Optional[str] = None
    changed_temp_password: bool = False
    temp_password_hash: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    education_details: List[EducationResponse] = []


class SuccessResponse(BaseModel):
    """Schema for delete responses"""
    success: bool = True


class ErrorResponse(BaseModel):
    """Schema for error responses"""
    error: str
