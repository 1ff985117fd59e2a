# hr_admin/models/model.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Sequence,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# Feeds the numeric part of Employee.emp_id
employee_number_seq = Sequence("employee_number_seq", start=1, metadata=Base.metadata)


def utcnow():
    return datetime.now(timezone.utc)


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    emp_id = Column(String(20), nullable=False, unique=True, index=True)

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    date_of_birth = Column(DateTime(timezone=True), nullable=True)
    gender = Column(String(20), nullable=True)
    aadhaar_number = Column(String(20), nullable=True)
    pan_number = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    phone_number = Column(String(30), nullable=True)
    emergency_contact = Column(String(100), nullable=True)
    photo = Column(Text, nullable=True)
    blood_group = Column(String(5), nullable=True)
    present_address = Column(Text, nullable=True)
    permanent_address = Column(Text, nullable=True)

    designation = Column(String(100), nullable=True)
    department = Column(String(100), nullable=True, index=True)
    date_of_joining = Column(DateTime(timezone=True), nullable=True)
    work_location = Column(String(100), nullable=True)

    bank_name = Column(String(100), nullable=True)
    account_number = Column(String(50), nullable=True)
    ifsc_code = Column(String(20), nullable=True)

    # Credential hashes only; plaintext never reaches this table
    password = Column(String(255), nullable=True)
    changed_temp_password = Column(Boolean, nullable=False, default=False)
    temp_password_hash = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    education_details = relationship(
        "Education",
        back_populates="employee",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Education.created_at",
    )

    def __repr__(self):
        return f"<Employee(id={self.id}, emp_id='{self.emp_id}')>"


class Education(Base):
    __tablename__ = "education"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    employee_id = Column(
        Uuid,
        ForeignKey("employees.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    institution = Column(String(255), nullable=True)
    university = Column(String(255), nullable=True)
    qualification = Column(String(100), nullable=True)
    year_completed = Column(String(10), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    employee = relationship("Employee", back_populates="education_details")

    def __repr__(self):
        return f"<Education(id={self.id}, qualification='{self.qualification}')>"
